# utils/logging_config.py
import logging
from typing import List, Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None,
                  capture_warnings: bool = True) -> None:
    """
    Route cache and solver diagnostics to the console and optionally a file.

    Args:
        level: Root logging level (e.g., logging.INFO shows cache hits and misses).
        log_file: Optional path to a file for logging output.
        capture_warnings: Send numeric warnings (e.g. scipy's LinAlgWarning for
            ill-conditioned input) through the 'py.warnings' logger.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Replace rather than stack handlers on repeated calls
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in _build_handlers(log_file):
        root.addHandler(handler)

    logging.captureWarnings(capture_warnings)

def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Retrieve a logger with the given name.

    Args:
        name: The name of the logger.
        level: Optional logging level; left unset so the logger inherits from root.

    Returns:
        A named logger.
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger

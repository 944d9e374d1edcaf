# inout/yaml_parser.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
import yaml
from cerberus import Validator

from core.exceptions import ConfigError
from utils.linops import DEFAULT_TOL
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}

# Schema for the solver configuration file.
SOLVER_SCHEMA: Dict[str, Any] = {
    'solver': {
        'type': 'dict',
        'required': False,
        'default': {},
        'schema': {
            'assume_posdef': {'type': 'boolean', 'default': False},
            'tol': {'type': 'number', 'nullable': True, 'min': 0, 'default': DEFAULT_TOL},
            'check_finite': {'type': 'boolean', 'default': True},
        },
    },
    'logging': {
        'type': 'dict',
        'required': False,
        'default': {},
        'schema': {
            'level': {
                'type': 'string',
                'allowed': list(LOG_LEVELS),
                'default': 'INFO',
                'coerce': str.upper,
            },
            'file': {'type': 'string', 'nullable': True, 'default': None},
        },
    },
}


@dataclass
class SolverSettings:
    """
    Numeric and logging defaults for the inversion routine.

    Attributes:
        assume_posdef: Use Cholesky instead of LU for dense input.
        tol: Reciprocal-condition threshold below which input is rejected; None disables it.
        check_finite: Reject input containing infs or NaNs.
        log_level: Name of the logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path for a file log handler.
    """
    assume_posdef: bool = False
    tol: Optional[float] = DEFAULT_TOL
    check_finite: bool = True
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    @property
    def level(self) -> int:
        return LOG_LEVELS[self.log_level]


def validate_schema(data: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate YAML data against a given schema.

    Args:
        data: The YAML data as a dictionary.
        schema: The Cerberus schema definition.

    Returns:
        The validated and normalized document.

    Raises:
        ConfigError: If validation fails.
    """
    validator = Validator(schema)
    if not validator.validate(data):
        errors = validator.errors
        logger.error("YAML schema validation errors: %s", errors)
        raise ConfigError("YAML schema validation failed: " + str(errors))
    return validator.document


def settings_from_dict(data: Optional[Dict[str, Any]]) -> SolverSettings:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Solver configuration must be a mapping, got {type(data).__name__}")
    doc = validate_schema(data, SOLVER_SCHEMA)
    solver = doc.get('solver') or {}
    log_cfg = doc.get('logging') or {}
    tol = solver.get('tol', DEFAULT_TOL)
    return SolverSettings(
        assume_posdef=solver.get('assume_posdef', False),
        tol=None if tol is None else float(tol),
        check_finite=solver.get('check_finite', True),
        log_level=log_cfg.get('level', 'INFO'),
        log_file=log_cfg.get('file'),
    )


def parse_solver_config(yaml_file: str) -> SolverSettings:
    """
    Parse and validate a solver configuration YAML file.

    An empty file yields the default settings.
    """
    with open(yaml_file, 'r') as f:
        data = yaml.safe_load(f)
    settings = settings_from_dict(data)
    logger.debug("Loaded solver settings from %s: %s", yaml_file, settings)
    return settings


def configure_logging(settings: SolverSettings) -> None:
    setup_logging(level=settings.level, log_file=settings.log_file)

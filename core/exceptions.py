# core/exceptions.py

class CacheMatrixError(Exception):
    """Base exception for cachematrix errors."""
    pass

class ComputationFailure(CacheMatrixError):
    """Raised when the inversion routine rejects its input (singular, non-square, non-finite)."""
    pass

class InputNotSetError(CacheMatrixError):
    """Raised when solving a slot whose input has never been set."""
    pass

class ConfigError(CacheMatrixError):
    """Raised when a solver configuration file fails validation."""
    pass

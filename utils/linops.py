# utils/linops.py
from __future__ import annotations
import functools
import warnings
from typing import Callable, Optional
import numpy as np
import scipy.linalg as la
import scipy.sparse as sp
import scipy.sparse.linalg as sla

from core.exceptions import ComputationFailure
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TOL = float(np.finfo(np.float64).eps)

class LinearOperator:
    """
    Wraps either a dense or sparse factorisation and exposes a .solve(b) method.
    """
    __slots__ = ("_solve", "shape", "dtype")

    def __init__(self, A: "sp.spmatrix|np.ndarray", assume_posdef=False, check_finite=True):
        if sp.issparse(A):
            A = A.tocsc(copy=True)
            if A.dtype.kind in "biu":
                A = A.astype(np.float64)
            _require_square(A.shape)
            if check_finite and not np.all(np.isfinite(A.data)):
                raise ValueError("array must not contain infs or NaNs")
            fac = sla.splu(A)                              # raises RuntimeError if singular
            self._solve = fac.solve                        # SuperLU solve
        else:
            A = np.asarray(A)
            if A.dtype.kind in "biu":
                A = A.astype(np.float64)
            _require_square(A.shape)
            if assume_posdef:
                c, lower = la.cho_factor(A, lower=True, check_finite=check_finite)  # dense Cholesky
                self._solve = lambda b: la.cho_solve((c, lower), b, check_finite=False)
            else:
                with warnings.catch_warnings():
                    # exact singularity is reported below as an error instead
                    warnings.simplefilter("ignore", la.LinAlgWarning)
                    lu, piv = la.lu_factor(A, check_finite=check_finite)  # dense LU
                if np.any(np.diag(lu) == 0):
                    raise np.linalg.LinAlgError("singular matrix")
                self._solve = lambda b: la.lu_solve((lu, piv), b, check_finite=False)
        self.shape = A.shape
        self.dtype = np.result_type(A.dtype, np.float64)

    def __call__(self, rhs):
        return self._solve(rhs)

    def solve(self, rhs: "np.ndarray") -> "np.ndarray":
        return self._solve(rhs)

    def inverse(self) -> "np.ndarray":
        return self._solve(np.eye(self.shape[0], dtype=self.dtype))


def _require_square(shape) -> None:
    if len(shape) != 2 or shape[0] != shape[1]:
        raise ValueError(f"expected square matrix, got shape {shape}")


def reciprocal_condition(A: "sp.spmatrix|np.ndarray") -> float:
    """1-norm reciprocal condition number; 0.0 for singular input."""
    dense = A.toarray() if sp.issparse(A) else np.asarray(A)
    cond = np.linalg.cond(dense, 1)
    if not np.isfinite(cond):
        return 0.0
    return 1.0 / cond


def solve(a, b=None, *, assume_posdef: bool = False, tol: Optional[float] = DEFAULT_TOL,
          check_finite: bool = True) -> np.ndarray:
    """
    Solve ``a @ x = b`` for ``x``, or return the inverse of ``a`` when ``b`` is omitted.

    Args:
        a: Square dense array or scipy sparse matrix.
        b: Optional right-hand side (vector or matrix).
        assume_posdef: Use a Cholesky factorisation instead of LU (dense only).
        tol: Reject ``a`` as computationally singular when its reciprocal
            condition number falls below this value. Defaults to machine
            epsilon; ``None`` disables the check.
        check_finite: Reject inputs containing infs or NaNs.

    Raises:
        ComputationFailure: On any numeric failure, chained from the underlying error.
    """
    try:
        op = LinearOperator(a, assume_posdef=assume_posdef, check_finite=check_finite)
        if tol is not None:
            rcond = reciprocal_condition(a)
            if rcond < tol:
                raise np.linalg.LinAlgError(
                    f"system is computationally singular: reciprocal condition number = {rcond:g}")
        if b is None:
            return op.inverse()
        rhs = b.toarray() if sp.issparse(b) else np.asarray(b)
        return op.solve(rhs)
    except (np.linalg.LinAlgError, ValueError, TypeError, RuntimeError) as exc:
        logger.debug("Inversion failed for input of shape %s: %s", getattr(a, "shape", None), exc)
        raise ComputationFailure(f"Matrix inversion failed: {exc}") from exc


def make_inverter(settings) -> Callable[..., np.ndarray]:
    """
    Bind the numeric defaults of a SolverSettings instance to ``solve``.
    Keywords given at call time still override the bound defaults.
    """
    return functools.partial(solve,
                             assume_posdef=settings.assume_posdef,
                             tol=settings.tol,
                             check_finite=settings.check_finite)

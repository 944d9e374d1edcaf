# core/cached_solver.py
"""
Read-through inversion over a CacheSlot.

cache_solve(slot, ...) returns the slot's cached solution when there is one;
otherwise it inverts the slot's input, stores the result in the slot and
returns it. Extra arguments go to the inversion routine untouched and are
not part of the cache key: a cached result is returned whatever options a
later call passes.
"""
from __future__ import annotations
import time
from typing import Any, Callable

from core.cache_slot import CacheSlot, UNSET
from core.exceptions import InputNotSetError
from utils.linops import solve
from utils.logging_config import get_logger
from utils.matrix import describe_shape

logger = get_logger(__name__)

Inverter = Callable[..., Any]


def make_cache_solver(invert: Inverter) -> Callable[..., Any]:
    """
    Build a cache_solve function bound to a specific inversion routine.

    Args:
        invert: Callable ``invert(matrix, *args, **kwargs) -> matrix`` that raises on failure.

    Returns:
        ``solver(slot, *args, **kwargs)`` implementing read-through-compute-store.
    """
    def _cache_solve(slot: CacheSlot, *args, **kwargs):
        """Return the slot's cached solution, computing and storing it on a miss."""
        solution = slot.get_solution()
        if solution is not None:
            logger.info("Retrieving cached solution ...")
            return solution

        logger.info("No cached result available - computing solution ...")
        matrix = slot.get_input()
        if matrix is UNSET:
            raise InputNotSetError("Cache slot has no input matrix; call set_input() first.")

        start = time.perf_counter()
        # failures propagate with the slot untouched
        result = invert(matrix, *args, **kwargs)
        logger.debug("Inverted %s matrix in %.3f ms", describe_shape(matrix),
                     (time.perf_counter() - start) * 1e3)

        slot.set_solution(result)
        return slot.get_solution()

    return _cache_solve


cache_solve = make_cache_solver(solve)

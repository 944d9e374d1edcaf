# core/cache_slot.py
"""
Single-entry cache slot for cachematrix.
Holds one input matrix and, optionally, the cached inverse of that input.
Replacing the input always drops the cached inverse.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Optional

from utils.matrix import freeze_matrix, describe_shape


class _Unset:
    """Marker for a slot whose input has not been supplied yet."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Unset, ())


UNSET = _Unset()


class SlotState(Enum):
    EMPTY = "empty"      # no valid solution
    CACHED = "cached"    # solution present for the current input


class CacheSlot:
    """
    Owns the current input matrix and its optional cached solution.

    The stored input and solution are private read-only copies, so neither can
    be changed behind the slot's back. All mutation goes through
    ``set_input`` / ``set_solution`` / ``clear_solution``.
    """
    __slots__ = ("_input", "_solution")

    def __init__(self, initial_input: Any = UNSET):
        self._input = UNSET if initial_input is UNSET else freeze_matrix(initial_input)
        self._solution: Optional[Any] = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def get_input(self):
        return self._input

    def set_input(self, new_input: Any) -> None:
        """Replace the input and drop any cached solution, even if the value is unchanged."""
        frozen = UNSET if new_input is UNSET else freeze_matrix(new_input)
        self._input = frozen
        self._solution = None

    def has_input(self) -> bool:
        return self._input is not UNSET

    # ------------------------------------------------------------------
    # Solution
    # ------------------------------------------------------------------
    def get_solution(self):
        return self._solution

    def set_solution(self, solution: Any) -> None:
        """
        Store ``solution`` as the result for the current input.
        Not checked against the input; callers own that guarantee.
        """
        self._solution = None if solution is None else freeze_matrix(solution)

    def clear_solution(self) -> None:
        self._solution = None

    def has_solution(self) -> bool:
        return self._solution is not None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def input(self):
        return self._input

    @property
    def solution(self):
        return self._solution

    @property
    def state(self) -> SlotState:
        return SlotState.CACHED if self._solution is not None else SlotState.EMPTY

    def __repr__(self) -> str:
        shape = "unset" if self._input is UNSET else describe_shape(self._input)
        return f"<CacheSlot input={shape}, state={self.state.value}>"

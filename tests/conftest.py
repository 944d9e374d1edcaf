import numpy as np
import pytest
from core.cache_slot import CacheSlot
from core.exceptions import ComputationFailure


class CountingInverter:
    """Inversion stand-in that records every call and can be told to fail."""
    def __init__(self):
        self.calls = []
        self.fail_with = None

    def __call__(self, matrix, *args, **kwargs):
        self.calls.append((matrix, args, kwargs))
        if self.fail_with is not None:
            raise self.fail_with
        scale = kwargs.get("scale", 1.0)
        return scale * np.linalg.inv(matrix)

    @property
    def count(self):
        return len(self.calls)


@pytest.fixture
def inverter():
    return CountingInverter()

@pytest.fixture
def diag_slot():
    return CacheSlot(np.array([[2.0, 0.0], [0.0, 2.0]]))

@pytest.fixture
def singular_failure():
    return ComputationFailure("Matrix inversion failed: singular matrix")

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog

import matplotlib
import pytest

from core.config import SAMPLE_PROCESSES
from core.process import ProcessSpec

matplotlib.use("Agg")


@pytest.fixture
def sample_specs():
    """P1(0,8,3) P2(1,4,1) P3(2,9,4) P4(3,5,2)"""
    return [ProcessSpec(**p) for p in SAMPLE_PROCESSES]

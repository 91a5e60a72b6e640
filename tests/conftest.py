# Allow running from repo root or from tests/ directory
import os
import sys

import pytest

HERE = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(HERE, ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from takeoff_estimator_core import EstimatorInputs  # noqa: E402


@pytest.fixture
def anchor() -> EstimatorInputs:
    """960 kg, ISA sea level, calm, asphalt."""
    return EstimatorInputs(weight_kg=960.0, oat_c=15.0, field_elev_ft=0.0, wind_kts=0.0, surface="asphalt")

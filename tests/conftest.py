import random

import pytest

from gentrify.models import District, DistrictType


class FixedRng:
    """Returns the queued draws in order; raises if asked for more."""

    def __init__(self, *draws: float):
        self.draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.draws.pop(0)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def make_district():
    def _make(**overrides):
        values = dict(
            id="d1",
            name="Test District",
            type=DistrictType.WAREHOUSE,
            scene_strength=60.0,
            gentrification_level=30.0,
            police_presence=20.0,
            rent_multiplier=1.0,
        )
        values.update(overrides)
        return District(**values)
    return _make

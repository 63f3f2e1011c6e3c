"""Shared fixtures for the tactus test suite."""

import pytest

from tactus import MeterCollection, Meter, Stratum, Tempo


@pytest.fixture
def meters() -> MeterCollection:
    """4/4, 3/4, 5/8: offsets 0, 1, 7/4, total 19/8."""
    return MeterCollection.fromMeters([Meter(4, 4), Meter(3, 4), Meter(5, 8)])


@pytest.fixture
def accelStratum() -> Stratum:
    """An accelerando 60 -> 120 over 4/4, then 120 held for 4/4."""
    return (Stratum.builder()
            .addTempo(Tempo(60), (0, 4), interpolating=True)
            .addTempo(Tempo(120), (4, 4))
            .addTempo(Tempo(120), (8, 4))
            .build())

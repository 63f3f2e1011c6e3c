"""Tests for meters and meter collections."""

import pytest

from tactus.common import F
from tactus.meter import BeatContext, Meter, MeterCollection, MeterFragment


class TestMeter:

    def test_length(self):
        assert Meter(3, 4).length == F(3, 4)
        assert Meter(7, 8).length == F(7, 8)

    @pytest.mark.parametrize("numerator, denominator", [(0, 4), (3, 6), (4, 0)])
    def test_invalid(self, numerator, denominator):
        with pytest.raises(ValueError):
            Meter(numerator, denominator)

    def test_parse(self):
        assert Meter.parse("7/8") == Meter(7, 8)
        assert Meter.parse(" 3 / 4 ") == Meter(3, 4)
        assert Meter.parse((5, 16)) == Meter(5, 16)
        with pytest.raises(ValueError):
            Meter.parse("3-4")

    def test_beat_offsets(self):
        assert Meter(3, 8).beatOffsets() == [F(0), F(1, 8), F(1, 4)]

    def test_repr(self):
        assert repr(Meter(6, 8)) == "Meter(6/8)"


class TestMeterFragment:

    def test_complete_by_default(self):
        fragment = MeterFragment(Meter(3, 4))
        assert fragment.isComplete()
        assert fragment.range == (F(0), F(3, 4))
        assert fragment.length == F(3, 4)
        assert repr(fragment) == "MeterFragment(3/4)"

    def test_partial(self):
        fragment = MeterFragment(Meter(4, 4), F(1, 2))
        assert not fragment.isComplete()
        assert fragment.length == F(1, 2)
        assert repr(fragment) == "MeterFragment(4/4, 1/2-1)"

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            MeterFragment(Meter(3, 4), F(1, 2), F(1, 4))
        with pytest.raises(ValueError):
            MeterFragment(Meter(3, 4), F(0), F(1))

    def test_fragment_uses_meter_coordinates(self):
        fragment = MeterFragment(Meter(4, 4), F(1, 4)).fragment(F(1, 2), F(3, 4))
        assert fragment == MeterFragment(Meter(4, 4), F(1, 2), F(3, 4))


class TestMeterCollection:

    def test_offsets(self, meters):
        assert meters.offsets == (F(0), F(1), F(7, 4))
        assert meters.duration == F(19, 8)
        assert meters.meters == [Meter(4, 4), Meter(3, 4), Meter(5, 8)]

    def test_from_strings_and_tuples(self, meters):
        assert MeterCollection.fromMeters(["4/4", (3, 4), MeterFragment(Meter(5, 8))]) == meters

    def test_element_at(self, meters):
        assert meters.elementAt(F(1)) == (F(1), MeterFragment(Meter(3, 4)))
        assert meters.elementAt(F(19, 8)) is None

    def test_fragment_three_meters(self, meters):
        fragment = meters[F(1, 2):F(2)]
        assert fragment.offsets == (F(0), F(1, 2), F(5, 4))
        assert fragment.elements == (
            MeterFragment(Meter(4, 4), F(1, 2), F(1)),
            MeterFragment(Meter(3, 4)),
            MeterFragment(Meter(5, 8), F(0), F(1, 4)),
        )
        assert isinstance(fragment, MeterCollection)

    def test_fragment_two_meters(self, meters):
        fragment = meters[F(3, 4):F(5, 4)]
        assert fragment.elements == (
            MeterFragment(Meter(4, 4), F(3, 4), F(1)),
            MeterFragment(Meter(3, 4), F(0), F(1, 4)),
        )

    def test_fragment_within_meter(self, meters):
        fragment = meters[F(5, 4):F(3, 2)]
        assert list(fragment) == [(F(0), MeterFragment(Meter(3, 4), F(1, 4), F(1, 2)))]

    def test_fragment_of_fragment(self, meters):
        fragment = meters[F(1, 2):F(2)][F(1, 4):F(1)]
        assert fragment.elements == (
            MeterFragment(Meter(4, 4), F(3, 4), F(1)),
            MeterFragment(Meter(3, 4), F(0), F(1, 2)),
        )

    def test_fragment_identity(self, meters):
        assert meters[F(0):meters.duration] == meters

    def test_beat_contexts(self, meters):
        contexts = meters.beatContexts()
        assert len(contexts) == 4 + 3 + 5
        assert contexts[0] == BeatContext(meterOffset=F(0), meter=Meter(4, 4), offset=F(0))
        assert contexts[4] == BeatContext(meterOffset=F(1), meter=Meter(3, 4), offset=F(0))
        assert contexts[-1].offset == F(4, 8)

    def test_beat_contexts_of_partial_fragment(self):
        collection = MeterCollection.fromMeters([MeterFragment(Meter(4, 4), F(1, 2))])
        assert [c.offset for c in collection.beatContexts()] == [F(1, 2), F(3, 4)]

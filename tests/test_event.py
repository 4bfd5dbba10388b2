import random

import pytest

from quarkcoal.event import Event, ShuffleLevel, reset_event_ids
from quarkcoal.particle import Hadron, Parton


def _line_of_partons(n):
    return [Parton(float(i), 0.0, 0.0, 0, 0, 0, 1 / 3) for i in range(n)]


def _event_with(partons):
    event = Event()
    for p in partons:
        event.add_parton(p)
    return event


def test_event_ids_increase():
    a = Event()
    b = Event()
    assert b.uid == a.uid + 1


def test_reset_event_ids():
    reset_event_ids(50)
    assert Event().uid == 50
    reset_event_ids()
    assert Event().uid == 1


def test_add_and_multiplicity():
    event = Event()
    event.add_parton(Parton())
    event.add_hadron(Hadron())
    event.add_hadron(Hadron())
    assert len(event.partons) == 1
    assert event.multiplicity == 2


def test_reset_clears():
    event = _event_with(_line_of_partons(3))
    event.add_hadron(Hadron())
    event.reset()
    assert event.partons == []
    assert event.multiplicity == 0


@pytest.mark.parametrize(
    "level, touched",
    [(ShuffleLevel.LEVEL1, 2), (ShuffleLevel.LEVEL2, 4), (ShuffleLevel.LEVEL3, 6)],
)
def test_shuffle_level_touches_its_fraction(level, touched):
    partons = _line_of_partons(8)
    original = [p.position for p in partons]
    event = _event_with(partons)
    event.shuffle_partons(level, random.Random(9))
    after = [p.position for p in event.partons]
    assert sorted(after[:touched]) == sorted(original[:touched])
    assert after[touched:] == original[touched:]


def test_shuffle_partial_only_touches_leading_partons():
    partons = _line_of_partons(10)
    original = [p.position for p in partons]
    event = _event_with(partons)
    event.shuffle_partons(0.5, random.Random(1))
    after = [p.position for p in event.partons]
    assert sorted(after[:5]) == sorted(original[:5])
    assert after[5:] == original[5:]


def test_shuffle_full_preserves_position_multiset():
    partons = _line_of_partons(20)
    original = sorted(p.position for p in partons)
    event = _event_with(partons)
    event.shuffle_partons(ShuffleLevel.LEVEL4, random.Random(2))
    assert sorted(p.position for p in event.partons) == original


def test_shuffle_keeps_momenta_and_ids():
    partons = [Parton(float(i), 0, 0, float(i), 0, 0, 1 / 3) for i in range(8)]
    ids = [p.uid for p in partons]
    event = _event_with(partons)
    event.shuffle_partons(1.0, random.Random(3))
    assert [p.uid for p in event.partons] == ids
    assert [p.px for p in event.partons] == [float(i) for i in range(8)]


def test_shuffle_fraction_above_one_is_clamped():
    partons = _line_of_partons(6)
    original = sorted(p.position for p in partons)
    event = _event_with(partons)
    event.shuffle_partons(5.0, random.Random(4))
    assert sorted(p.position for p in event.partons) == original


@pytest.mark.parametrize("fraction", [0.0, -0.3])
def test_shuffle_non_positive_fraction_is_noop(fraction):
    partons = _line_of_partons(6)
    original = [p.position for p in partons]
    event = _event_with(partons)
    event.shuffle_partons(fraction, random.Random(5))
    assert [p.position for p in event.partons] == original


def test_shuffle_too_few_selected_is_noop():
    partons = _line_of_partons(3)
    original = [p.position for p in partons]
    event = _event_with(partons)
    event.shuffle_partons(0.5, random.Random(6))
    assert [p.position for p in event.partons] == original


def test_shuffle_single_parton_is_noop():
    event = _event_with(_line_of_partons(1))
    event.shuffle_partons(1.0, random.Random(7))
    assert event.partons[0].position == (0.0, 0.0, 0.0)
import random

import pytest

from quarkcoal.constants import (
    PARTON_PID_WEIGHTS,
    get_mass,
    sample_multiplicity,
    sample_parton_pid,
)


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_known_masses():
    assert get_mass(2212) == pytest.approx(0.9382721)
    assert get_mass(443) == pytest.approx(3.09690)
    assert get_mass(3) == pytest.approx(0.0934)


def test_unknown_mass_is_none():
    assert get_mass(999999) is None


def test_particle_antiparticle_masses_match():
    assert get_mass(-2212) == get_mass(2212)
    assert get_mass(-321) == get_mass(321)


def test_parton_pid_lowest_draw_is_first_entry():
    assert sample_parton_pid(_FixedRng(0.0)) == -3


def test_parton_pid_highest_draw_is_last_entry():
    assert sample_parton_pid(_FixedRng(0.9999)) == 3


def test_parton_pid_in_weight_table():
    rng = random.Random(7)
    allowed = {pid for pid, _ in PARTON_PID_WEIGHTS}
    draws = {sample_parton_pid(rng) for _ in range(500)}
    assert draws <= allowed
    assert len(draws) == len(allowed)


def test_multiplicity_lowest_draw_at_first_populated_bin():
    assert sample_multiplicity(_FixedRng(0.0)) == 3400


def test_multiplicity_within_populated_range():
    rng = random.Random(3)
    samples = [sample_multiplicity(rng) for _ in range(2000)]
    assert all(3400 <= s < 19800 for s in samples)


def test_multiplicity_deterministic_for_seed():
    a = [sample_multiplicity(random.Random(11)) for _ in range(3)]
    b = [sample_multiplicity(random.Random(11)) for _ in range(3)]
    assert a == b
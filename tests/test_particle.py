import copy
import math
import random

import pytest

from quarkcoal.constants import PARTON_PID_WEIGHTS, get_mass
from quarkcoal.particle import (
    Hadron,
    Parton,
    Particle,
    random_parton,
    reset_particle_ids,
)


def test_distance_to():
    a = Particle(0.0, 0.0, 0.0)
    b = Particle(3.0, 4.0, 0.0)
    assert a.distance_to(b) == pytest.approx(5.0)
    assert b.distance_to(a) == pytest.approx(a.distance_to(b))


def test_distance_to_self_is_zero():
    p = Particle(1.5, -2.0, 7.0)
    assert p.distance_to(p) == 0.0


def test_unique_ids_increase():
    a = Particle()
    b = Particle()
    assert b.uid == a.uid + 1


def test_reset_particle_ids():
    reset_particle_ids(100)
    p = Parton()
    assert p.uid == 100
    reset_particle_ids()
    assert Particle().uid == 1


def test_explicit_uid_kept():
    p = Particle(uid=42)
    assert p.uid == 42


def test_mass_from_pdg():
    p = Particle(pid=2212)
    assert p.mass_from_pdg() == get_mass(2212)


def test_mass_from_pdg_unknown_is_zero():
    p = Particle(pid=-1)
    assert p.mass_from_pdg() == 0.0


def test_position_and_momentum_properties():
    p = Particle(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
    assert p.position == (1.0, 2.0, 3.0)
    assert p.momentum == (4.0, 5.0, 6.0)
    p.position = (7.0, 8.0, 9.0)
    assert (p.x, p.y, p.z) == (7.0, 8.0, 9.0)


def test_parton_mark_used():
    p = Parton(0, 0, 0, 0, 0, 0, 1.0 / 3.0)
    assert p.used is False
    p.mark_used()
    assert p.used is True


def test_hadron_positional_formation_distance():
    h = Hadron(1, 2, 3, 4, 5, 6, 1, 2.5)
    assert h.baryon_number == 1
    assert h.formation_distance == 2.5
    assert h.afterburned is False


def test_hadron_constituents():
    a = Parton()
    b = Parton()
    h = Hadron()
    h.add_constituent(a.uid)
    h.add_constituent(b.uid)
    assert h.constituent_ids == [a.uid, b.uid]


def test_hadron_constituent_lists_independent():
    h1 = Hadron()
    h2 = Hadron()
    h1.add_constituent(5)
    assert h2.constituent_ids == []


def test_identity_equality():
    a = Particle(1, 1, 1, uid=9)
    b = Particle(1, 1, 1, uid=9)
    assert a != b
    assert a == a


def test_deepcopy_keeps_uid():
    p = Parton(1, 2, 3, 0, 0, 0, 1 / 3, pid=2)
    q = copy.deepcopy(p)
    assert q.uid == p.uid
    assert q.position == p.position
    assert q is not p


def test_random_parton_properties():
    rng = random.Random(123)
    allowed = {pid for pid, _ in PARTON_PID_WEIGHTS}
    for _ in range(200):
        p = random_parton(rng)
        assert p.x ** 2 + p.y ** 2 <= 1.0 + 1e-12
        assert p.z == 0.0
        assert p.pz == 0.0
        assert 0.0 <= math.hypot(p.px, p.py) <= 5.0 + 1e-12
        assert p.baryon_number in (1.0 / 3.0, -1.0 / 3.0)
        assert p.pid in allowed
        assert p.used is False


def test_random_parton_deterministic():
    a = random_parton(random.Random(5))
    b = random_parton(random.Random(5))
    assert a.position == b.position
    assert a.momentum == b.momentum
    assert a.pid == b.pid
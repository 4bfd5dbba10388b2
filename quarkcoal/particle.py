"""Particles, partons and hadrons."""

from __future__ import annotations

import math
import random
from dataclasses import KW_ONLY, dataclass, field
from typing import Optional

from .constants import get_mass, sample_parton_pid


class _Sequence:
    """Monotonic identifier source that can be restarted."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def __call__(self) -> int:
        value = self._next
        self._next += 1
        return value

    def restart(self, start: int) -> None:
        self._next = start


_particle_ids = _Sequence(1)
_default_rng = random.Random()


def reset_particle_ids(next_id: int = 1) -> None:
    """Restart particle unique identifiers at next_id."""
    _particle_ids.restart(next_id)


@dataclass(eq=False)
class Particle:
    """A point particle with position, momentum and baryon number."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    baryon_number: float = 0.0
    _: KW_ONLY
    pid: int = 0
    mass: float = 0.0
    uid: int = field(default_factory=_particle_ids)

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @position.setter
    def position(self, xyz: tuple[float, float, float]) -> None:
        self.x, self.y, self.z = xyz

    @property
    def momentum(self) -> tuple[float, float, float]:
        return (self.px, self.py, self.pz)

    @momentum.setter
    def momentum(self, pxyz: tuple[float, float, float]) -> None:
        self.px, self.py, self.pz = pxyz

    def distance_to(self, other: Particle) -> float:
        """Euclidean distance between the two positions."""
        return math.dist(self.position, other.position)

    def mass_from_pdg(self) -> float:
        """Tabulated mass for this particle's PDG code, or 0 if unknown."""
        mass = get_mass(self.pid)
        return 0.0 if mass is None else mass


@dataclass(eq=False)
class Parton(Particle):
    """A quark or antiquark that may be combined into a hadron."""

    _: KW_ONLY
    used: bool = False

    def mark_used(self) -> None:
        self.used = True


@dataclass(eq=False)
class Hadron(Particle):
    """A hadron formed from two or three partons."""

    formation_distance: float = 0.0
    _: KW_ONLY
    afterburned: bool = False
    constituent_ids: list[int] = field(default_factory=list)

    def add_constituent(self, uid: int) -> None:
        self.constituent_ids.append(uid)


def random_parton(rng: Optional[random.Random] = None) -> Parton:
    """Draw a toy parton: uniform in the unit disk with a Tsallis-like pT."""
    rng = rng or _default_rng

    u = rng.random()
    phi_pos = rng.uniform(0.0, 2.0 * math.pi)
    r_pos = math.sqrt(u)
    x = r_pos * math.cos(phi_pos)
    y = r_pos * math.sin(phi_pos)

    temperature = 0.7
    power = 4.0
    while True:
        pt = rng.uniform(0.0, 5.0)
        if rng.random() < (1.0 + pt / temperature) ** -power:
            break

    phi = rng.uniform(0.0, 2.0 * math.pi)
    px = pt * math.cos(phi)
    py = pt * math.sin(phi)
    baryon_number = 1.0 / 3.0 if rng.random() < 0.5 else -1.0 / 3.0

    return Parton(x, y, 0.0, px, py, 0.0, baryon_number, pid=sample_parton_pid(rng))
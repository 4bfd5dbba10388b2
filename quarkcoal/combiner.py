"""Base class for parton combiners and shared hadron-forming helpers."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

from .particle import Hadron, Parton


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def invariant_mass(partons: Sequence[Parton]) -> float:
    """Invariant mass of a group of partons using their tabulated masses."""
    energy = 0.0
    px = py = pz = 0.0
    for parton in partons:
        m = parton.mass_from_pdg()
        energy += math.sqrt(parton.px**2 + parton.py**2 + parton.pz**2 + m * m)
        px += parton.px
        py += parton.py
        pz += parton.pz
    return math.sqrt(max(0.0, energy * energy - (px * px + py * py + pz * pz)))


def form_hadron(
    partons: Sequence[Parton],
    formation_distance: float,
    afterburned: bool = False,
) -> Hadron:
    """Combine partons into a hadron at their centroid and mark them used."""
    count = len(partons)
    x = sum(p.x for p in partons) / count
    y = sum(p.y for p in partons) / count
    z = sum(p.z for p in partons) / count
    hadron = Hadron(
        x,
        y,
        z,
        sum(p.px for p in partons),
        sum(p.py for p in partons),
        sum(p.pz for p in partons),
        float(_round_half_away(sum(p.baryon_number for p in partons))),
        formation_distance,
        mass=invariant_mass(partons),
        afterburned=afterburned,
    )
    for parton in partons:
        hadron.add_constituent(parton.uid)
        parton.mark_used()
    return hadron


def _perimeter(a: Parton, b: Parton, c: Parton) -> float:
    return a.distance_to(b) + a.distance_to(c) + b.distance_to(c)


class Combiner(ABC):
    """Strategy that turns a list of partons into hadrons."""

    @abstractmethod
    def combine(self, partons: Sequence[Parton]) -> list[Hadron]:
        """Combine partons into hadrons."""

    def afterburner(self, partons: Sequence[Parton]) -> list[Hadron]:
        """Sweep leftover partons into mesons, then into consecutive triplets."""
        unused = [p for p in partons if not p.used]
        plus = [p for p in unused if p.baryon_number > 0]
        minus = [p for p in unused if not p.baryon_number > 0]

        result = [
            form_hadron((a, b), a.distance_to(b), afterburned=True)
            for a, b in zip(plus, minus)
        ]

        remain = [p for p in unused if not p.used]
        for start in range(0, len(remain) - 2, 3):
            a, b, c = remain[start:start + 3]
            result.append(form_hadron((a, b, c), _perimeter(a, b, c), afterburned=True))
        return result
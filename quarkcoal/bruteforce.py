"""Combiners that search all parton pairs and triplets directly."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from itertools import combinations
from typing import Optional

from .combiner import Combiner, form_hadron
from .particle import Hadron, Parton


def _rounded(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _perimeter(a: Parton, b: Parton, c: Parton) -> float:
    return a.distance_to(b) + a.distance_to(c) + b.distance_to(c)


def _is_meson_pair(a: Parton, b: Parton) -> bool:
    return _rounded(a.baryon_number + b.baryon_number) == 0


def _is_baryon_triplet(a: Parton, b: Parton, c: Parton) -> bool:
    return abs(_rounded(a.baryon_number + b.baryon_number + c.baryon_number)) == 1


def nearest_neighbors(
    query: Parton,
    partons: Sequence[Parton],
    max_results: int = 50,
) -> list[tuple[Parton, float]]:
    """Unused partons other than query with their distances, closest first."""
    found = [
        (parton, query.distance_to(parton))
        for parton in partons
        if parton is not query and not parton.used
    ]
    found.sort(key=lambda item: item[1])
    return found[:max_results]


class BruteForceGlobal(Combiner):
    """Form hadrons from the globally closest candidates over all pairs and triplets.

    Baryon candidate distances are divided by three times the baryon
    preference. Leftover partons are not swept up.
    """

    def __init__(self, baryon_preference: float = 1.0) -> None:
        self.baryon_preference = baryon_preference
        self._ratio = 3.0 * baryon_preference

    def combine(self, partons: Sequence[Parton]) -> list[Hadron]:
        available = [p for p in partons if not p.used]
        candidates: list[tuple[float, float, tuple[Parton, ...]]] = []

        for a, b in combinations(available, 2):
            if _is_meson_pair(a, b):
                dist = a.distance_to(b)
                candidates.append((dist, dist, (a, b)))

        for a, b, c in combinations(available, 3):
            if _is_baryon_triplet(a, b, c):
                raw = _perimeter(a, b, c)
                candidates.append((raw / self._ratio, raw, (a, b, c)))

        candidates.sort(key=lambda item: item[0])

        hadrons: list[Hadron] = []
        for _, raw, members in candidates:
            if any(p.used for p in members):
                continue
            hadrons.append(form_hadron(members, raw))
        return hadrons


class BruteForceGreedy(Combiner):
    """Walk partons in order and take the nearest acceptable partner.

    Each meson pairing is rejected with probability r / (1 + r), where r is
    the baryon preference; leftovers go through the afterburner.
    """

    def __init__(
        self,
        baryon_preference: float = 1.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.baryon_preference = baryon_preference
        self._ratio = baryon_preference
        self._reject_probability = baryon_preference / (1.0 + baryon_preference)
        self._rng = rng or random.Random()

    def _reject_meson(self) -> bool:
        return self._rng.random() < self._reject_probability

    def _baryon_partner(self, a: Parton, b: Parton, partons: Sequence[Parton]) -> Optional[Parton]:
        for c in partons:
            if c is a or c is b or c.used:
                continue
            if _is_baryon_triplet(a, b, c):
                return c
        return None

    def combine(self, partons: Sequence[Parton]) -> list[Hadron]:
        hadrons: list[Hadron] = []
        for a in partons:
            if a.used:
                continue
            for b, dist in nearest_neighbors(a, partons):
                if b.used:
                    continue
                if _is_meson_pair(a, b):
                    if self._reject_meson():
                        continue
                    hadrons.append(form_hadron((a, b), dist))
                    break
                c = self._baryon_partner(a, b, partons)
                if c is not None:
                    hadrons.append(form_hadron((a, b, c), _perimeter(a, b, c)))
                    break

        hadrons.extend(self.afterburner(partons))
        return hadrons


class BruteForceDualGreedy(Combiner):
    """For each parton, compare its best meson partner with its best baryon triplet.

    The triplet perimeter is divided by three times the baryon preference
    before comparison; leftovers go through the afterburner.
    """

    def __init__(self, baryon_preference: float = 1.0) -> None:
        self.baryon_preference = baryon_preference
        self._ratio = 3.0 * baryon_preference

    def combine(self, partons: Sequence[Parton]) -> list[Hadron]:
        hadrons: list[Hadron] = []
        for a in partons:
            if a.used:
                continue

            closest_opp: Optional[Parton] = None
            closest_opp_dist = math.inf
            best_pair: Optional[tuple[Parton, Parton]] = None
            best_triplet_dist = math.inf

            for b in partons:
                if b is a or b.used:
                    continue
                pair_sum = _rounded(a.baryon_number + b.baryon_number)
                d = a.distance_to(b)
                if pair_sum == 0:
                    if d < closest_opp_dist:
                        closest_opp, closest_opp_dist = b, d
                    continue
                if a.baryon_number != b.baryon_number:
                    continue
                for c in partons:
                    if c is a or c is b or c.used:
                        continue
                    if c.baryon_number != a.baryon_number:
                        continue
                    if not _is_baryon_triplet(a, b, c):
                        continue
                    td = _perimeter(a, b, c)
                    if td < best_triplet_dist:
                        best_triplet_dist = td
                        best_pair = (b, c)

            if closest_opp is not None and (
                best_pair is None or closest_opp_dist < best_triplet_dist / self._ratio
            ):
                hadrons.append(form_hadron((a, closest_opp), closest_opp_dist))
            elif best_pair is not None:
                hadrons.append(form_hadron((a, *best_pair), best_triplet_dist))

        hadrons.extend(self.afterburner(partons))
        return hadrons
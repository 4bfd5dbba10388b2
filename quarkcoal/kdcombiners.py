"""Combiners that find candidate partners with a k-d tree."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Optional

from .combiner import Combiner, form_hadron
from .kdtree import PartonKDTree
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


class KDTreeGlobal(Combiner):
    """Form hadrons from the globally closest candidates among tree neighbours.

    Meson candidates come from the 20 nearest neighbours of each parton and
    baryon candidates from pairs among the 10 nearest; baryon distances are
    divided by three times the baryon preference. Leftovers go through the
    afterburner.
    """

    def __init__(self, baryon_preference: float = 1.0) -> None:
        self.baryon_preference = baryon_preference
        self._ratio = 3.0 * baryon_preference

    def combine(self, partons: Sequence[Parton]) -> list[Hadron]:
        tree = PartonKDTree(partons)
        candidates: list[tuple[float, float, tuple[Parton, ...]]] = []

        for a in partons:
            for b, dist in tree.k_nearest(a, 20):
                if b is a or not _is_meson_pair(a, b):
                    continue
                candidates.append((dist, a.distance_to(b), (a, b)))

        for a in partons:
            neighbors = [p for p, _ in tree.k_nearest(a, 10)]
            for i, b in enumerate(neighbors):
                if b is a:
                    continue
                for c in neighbors[i + 1:]:
                    if c is a or c is b:
                        continue
                    if not _is_baryon_triplet(a, b, c):
                        continue
                    raw = _perimeter(a, b, c)
                    candidates.append((raw / self._ratio, raw, (a, b, c)))

        candidates.sort(key=lambda item: item[0])

        hadrons: list[Hadron] = []
        for _, formation, members in candidates:
            if any(p.used for p in members):
                continue
            hadrons.append(form_hadron(members, formation))

        hadrons.extend(self.afterburner(partons))
        return hadrons


class KDTreeGreedy(Combiner):
    """Greedy meson pass followed by a greedy baryon pass over tree neighbours.

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

    def _baryon_for(self, a: Parton, neighbors: list[Parton]) -> Optional[tuple[Parton, Parton]]:
        for i, b in enumerate(neighbors):
            if b.used or b is a:
                continue
            for c in neighbors[i + 1:]:
                if c.used or c is a or c is b:
                    continue
                if _is_baryon_triplet(a, b, c):
                    return b, c
        return None

    def combine(self, partons: Sequence[Parton]) -> list[Hadron]:
        tree = PartonKDTree(partons)
        hadrons: list[Hadron] = []

        for a in partons:
            if a.used:
                continue
            for b, dist in tree.k_nearest(a, 50):
                if b is a or b.used or not _is_meson_pair(a, b):
                    continue
                if self._reject_meson():
                    continue
                hadrons.append(form_hadron((a, b), dist))
                break

        for a in partons:
            if a.used:
                continue
            neighbors = [p for p, _ in tree.k_nearest(a, 50)]
            pair = self._baryon_for(a, neighbors)
            if pair is not None:
                b, c = pair
                hadrons.append(form_hadron((a, b, c), _perimeter(a, b, c)))

        hadrons.extend(self.afterburner(partons))
        return hadrons


class KDTreeDualGreedy(Combiner):
    """For each parton, compare its best meson partner with its best same-sign triplet.

    The triplet perimeter is divided by three times the baryon preference
    before comparison; leftovers go through the afterburner.
    """

    def __init__(self, baryon_preference: float = 1.0) -> None:
        self.baryon_preference = baryon_preference
        self._ratio = 3.0 * baryon_preference

    def combine(self, partons: Sequence[Parton]) -> list[Hadron]:
        tree = PartonKDTree(partons)
        hadrons: list[Hadron] = []

        for a in partons:
            if a.used:
                continue
            neighbors = tree.k_nearest(a, len(partons))

            best_opp: Optional[Parton] = None
            best_opp_dist = math.inf
            best_pair: Optional[tuple[Parton, Parton]] = None
            best_triplet_dist = math.inf

            for b, d_ab in neighbors:
                if b is a or b.used:
                    continue
                if _is_meson_pair(a, b):
                    if d_ab < best_opp_dist:
                        best_opp, best_opp_dist = b, d_ab
                    continue
                if b.baryon_number != a.baryon_number:
                    continue
                for c, d_ac in neighbors:
                    if c is a or c is b or c.used or c.baryon_number != a.baryon_number:
                        continue
                    if not _is_baryon_triplet(a, b, c):
                        continue
                    td = d_ab + d_ac + b.distance_to(c)
                    if td < best_triplet_dist:
                        best_triplet_dist = td
                        best_pair = (b, c)

            baryon_dist = best_triplet_dist / self._ratio if best_pair is not None else math.inf

            if best_opp is not None and best_opp_dist < baryon_dist and not best_opp.used:
                hadrons.append(form_hadron((a, best_opp), best_opp_dist))
            elif best_pair is not None and baryon_dist < math.inf:
                hadrons.append(form_hadron((a, *best_pair), best_triplet_dist))

        hadrons.extend(self.afterburner(partons))
        return hadrons
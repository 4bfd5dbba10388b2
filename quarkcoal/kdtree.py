"""Spatial nearest-neighbour search over parton positions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

import numpy as np
from scipy.spatial import cKDTree

from .particle import Parton


class PartonKDTree:
    """k-d tree over the positions of a fixed list of partons.

    The tree is built once; the used flag of each parton is read at query
    time, so partons marked used after construction are skipped.
    """

    def __init__(self, partons: Sequence[Parton]) -> None:
        self._partons = list(partons)
        if self._partons:
            points = np.array([p.position for p in self._partons], dtype=float)
            self._tree: Optional[cKDTree] = cKDTree(points, leafsize=10)
        else:
            self._tree = None

    def __len__(self) -> int:
        return len(self._partons)

    def _search(self, query: Parton, count: int) -> list[tuple[Parton, float]]:
        """Up to count nearest partons (used or not) with distances, closest first."""
        if self._tree is None or count <= 0:
            return []
        k = min(count, len(self._partons))
        distances, indices = self._tree.query(query.position, k=k)
        distances = np.atleast_1d(distances)
        indices = np.atleast_1d(indices)
        return [(self._partons[int(i)], float(d)) for d, i in zip(distances, indices)]

    def k_nearest(self, query: Parton, max_results: int = 50) -> list[tuple[Parton, float]]:
        """Unused partons among the max_results nearest, with distances, closest first.

        The query itself is included when it belongs to the tree and is unused.
        """
        return [(p, d) for p, d in self._search(query, max_results) if not p.used]

    def find_nearest_opposite(self, query: Parton) -> Optional[Parton]:
        """Nearest unused parton of opposite baryon-number sign among the ten closest."""
        for parton, _ in self._search(query, 10):
            if parton.used:
                continue
            if parton.baryon_number * query.baryon_number < 0:
                return parton
        return None

    def find_nearest_same(self, query: Parton, k: int) -> list[Parton]:
        """Up to k nearest unused partons of the same baryon-number sign, excluding query."""
        result: list[Parton] = []
        for parton, _ in self._search(query, k * 5):
            if len(result) >= k:
                break
            if parton is query or parton.used:
                continue
            if parton.baryon_number * query.baryon_number > 0:
                result.append(parton)
        return result
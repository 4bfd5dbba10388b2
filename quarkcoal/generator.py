"""Random generation of parton events."""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Optional

from .constants import sample_multiplicity
from .event import Event
from .particle import Parton, random_parton


def _baryon_thirds(parton: Parton) -> int:
    return int(round(parton.baryon_number * 3.0))


class EventGenerator:
    """Draws events of random partons with a fixed total baryon number.

    sampler produces one parton per call; by default toy partons are drawn
    from the generator's random source.
    """

    def __init__(
        self,
        sampler: Optional[Callable[[], Parton]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.sampler = sampler or (lambda: random_parton(self.rng))

    def generate(self, n_partons: int = -1, sum_baryon_number: int = 0) -> Event:
        """A new event of n_partons partons, topped up to the wanted baryon number.

        A negative n_partons draws the multiplicity from the reference
        distribution. Extra partons are drawn and kept only when they move the
        total baryon number toward the target.
        """
        count = sample_multiplicity(self.rng) if n_partons < 0 else n_partons
        partons = [self.sampler() for _ in range(count)]
        total = sum(_baryon_thirds(p) for p in partons)
        target = sum_baryon_number * 3

        while total != target:
            parton = self.sampler()
            thirds = _baryon_thirds(parton)
            if (total < target and thirds > 0) or (total > target and thirds < 0):
                total += thirds
                partons.append(parton)

        return Event(partons=partons)
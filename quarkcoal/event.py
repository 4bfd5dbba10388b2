"""Events holding partons and the hadrons formed from them."""

from __future__ import annotations

import random
from dataclasses import KW_ONLY, dataclass, field
from enum import Enum
from typing import Optional, Union

from .particle import Hadron, Parton


class _Sequence:
    def __init__(self, start: int = 1) -> None:
        self._next = start

    def __call__(self) -> int:
        value = self._next
        self._next += 1
        return value

    def restart(self, start: int) -> None:
        self._next = start


_event_ids = _Sequence(1)
_default_rng = random.Random()


def reset_event_ids(next_id: int = 1) -> None:
    """Restart event identifiers at next_id."""
    _event_ids.restart(next_id)


class ShuffleLevel(Enum):
    """Predefined fractions of parton positions to shuffle."""

    LEVEL1 = 0.25
    LEVEL2 = 0.50
    LEVEL3 = 0.75
    LEVEL4 = 1.00

    @property
    def fraction(self) -> float:
        return self.value


@dataclass(eq=False)
class Event:
    """A collision event: its partons, the hadrons formed and the reaction plane."""

    partons: list[Parton] = field(default_factory=list)
    hadrons: list[Hadron] = field(default_factory=list)
    reaction_plane: float = 0.0
    _: KW_ONLY
    uid: int = field(default_factory=_event_ids)

    @property
    def multiplicity(self) -> int:
        """Number of hadrons in the event."""
        return len(self.hadrons)

    def add_parton(self, parton: Parton) -> None:
        self.partons.append(parton)

    def add_hadron(self, hadron: Hadron) -> None:
        self.hadrons.append(hadron)

    def shuffle_partons(
        self,
        amount: Union[ShuffleLevel, float],
        rng: Optional[random.Random] = None,
    ) -> None:
        """Randomly permute the positions of a fraction of the partons.

        The fraction is clamped to 1; nothing happens when fewer than two
        partons would take part.
        """
        fraction = amount.fraction if isinstance(amount, ShuffleLevel) else float(amount)
        count = len(self.partons)
        if count < 2 or fraction <= 0.0:
            return
        fraction = min(fraction, 1.0)
        selected_count = int(fraction * count)
        if selected_count < 2:
            return

        rng = rng or _default_rng
        selected = self.partons[:selected_count]
        rng.shuffle(selected)
        positions = [p.position for p in selected]
        rng.shuffle(positions)
        for parton, position in zip(selected, positions):
            parton.position = position

    def reset(self) -> None:
        """Drop all partons and hadrons."""
        self.partons.clear()
        self.hadrons.clear()
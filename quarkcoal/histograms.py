"""Minimal fixed-bin histograms, profiles and labelled counters."""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional


class _Binning:
    def __init__(self, nbins: int, low: float, high: float) -> None:
        if nbins <= 0:
            raise ValueError(f"number of bins must be positive, got {nbins}")
        if not high > low:
            raise ValueError(f"upper edge {high} must exceed lower edge {low}")
        self.nbins = nbins
        self.low = float(low)
        self.high = float(high)

    @property
    def width(self) -> float:
        return (self.high - self.low) / self.nbins

    def locate(self, x: float) -> int:
        """Bin index for x: -1 below range, nbins above range or NaN."""
        if math.isnan(x):
            return self.nbins
        if x < self.low:
            return -1
        if x >= self.high:
            return self.nbins
        return min(int((x - self.low) / self.width), self.nbins - 1)


def _labels(labels: Optional[Iterable[str]], nbins: int) -> list[str]:
    result = list(labels) if labels is not None else [""] * nbins
    if len(result) != nbins:
        raise ValueError(f"expected {nbins} labels, got {len(result)}")
    return result


class Hist1D:
    """One-dimensional histogram with equal-width bins and under/overflow."""

    def __init__(
        self,
        nbins: int,
        low: float,
        high: float,
        name: str = "",
        title: str = "",
        labels: Optional[Iterable[str]] = None,
    ) -> None:
        self._binning = _Binning(nbins, low, high)
        self.name = name
        self.title = title
        self.labels = _labels(labels, nbins)
        self.counts = [0.0] * nbins
        self.underflow = 0.0
        self.overflow = 0.0
        self.entries = 0

    @property
    def nbins(self) -> int:
        return self._binning.nbins

    @property
    def low(self) -> float:
        return self._binning.low

    @property
    def high(self) -> float:
        return self._binning.high

    def fill(self, x: float, weight: float = 1.0) -> None:
        index = self._binning.locate(x)
        if index < 0:
            self.underflow += weight
        elif index >= self.nbins:
            self.overflow += weight
        else:
            self.counts[index] += weight
        self.entries += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "nbins": self.nbins,
            "low": self.low,
            "high": self.high,
            "labels": list(self.labels),
            "counts": list(self.counts),
            "underflow": self.underflow,
            "overflow": self.overflow,
            "entries": self.entries,
        }


class Profile1D:
    """Mean of y in bins of x."""

    def __init__(
        self,
        nbins: int,
        low: float,
        high: float,
        name: str = "",
        title: str = "",
        labels: Optional[Iterable[str]] = None,
    ) -> None:
        self._binning = _Binning(nbins, low, high)
        self.name = name
        self.title = title
        self.labels = _labels(labels, nbins)
        self.sum_y = [0.0] * nbins
        self.sum_y2 = [0.0] * nbins
        self.counts = [0] * nbins
        self.underflow = 0
        self.overflow = 0

    @property
    def nbins(self) -> int:
        return self._binning.nbins

    def fill(self, x: float, y: float) -> None:
        index = self._binning.locate(x)
        if index < 0:
            self.underflow += 1
        elif index >= self.nbins:
            self.overflow += 1
        else:
            self.sum_y[index] += y
            self.sum_y2[index] += y * y
            self.counts[index] += 1

    def mean(self, index: int) -> float:
        """Mean of y in bin index; 0 for an empty bin."""
        count = self.counts[index]
        return self.sum_y[index] / count if count else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "nbins": self.nbins,
            "low": self._binning.low,
            "high": self._binning.high,
            "labels": list(self.labels),
            "counts": list(self.counts),
            "sum_y": list(self.sum_y),
            "sum_y2": list(self.sum_y2),
            "means": [self.mean(i) for i in range(self.nbins)],
            "underflow": self.underflow,
            "overflow": self.overflow,
        }


class LabelledCounts:
    """Counts keyed by arbitrary string labels, in order of first appearance."""

    def __init__(self, name: str = "", title: str = "") -> None:
        self.name = name
        self.title = title
        self.counts: dict[str, float] = {}

    def fill(self, label: str, weight: float = 1.0) -> None:
        self.counts[label] = self.counts.get(label, 0.0) + weight

    def sorted_by_count(self) -> list[tuple[str, float]]:
        """Labels with positive counts, largest count first."""
        positive = [(label, count) for label, count in self.counts.items() if count > 0]
        return sorted(positive, key=lambda item: item[1], reverse=True)
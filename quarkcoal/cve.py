"""Pair correlations of hadron azimuthal angles by baryon-number class."""

from __future__ import annotations

import json
import math
from collections.abc import Sequence
from dataclasses import dataclass, fields
from os import PathLike
from pathlib import Path
from typing import Union

from .event import Event
from .histograms import Hist1D, Profile1D
from .particle import Hadron

#: Labels of the six pair classes, in index order.
COMBO_LABELS: tuple[str, ...] = (
    "Baryon-Baryon",
    "Baryon-AntiBaryon",
    "Baryon-Meson",
    "AntiBaryon-AntiBaryon",
    "AntiBaryon-Meson",
    "Meson-Meson",
)

_PAIR_INDEX = ((0, 1, 2), (1, 3, 4), (2, 4, 5))
_TWO_PI = 2.0 * math.pi
_PHI_LOW = -0.5 * math.pi
_PHI_HIGH = 1.5 * math.pi


def _kind(baryon_number: float) -> int:
    if baryon_number > 0:
        return 0
    if baryon_number < 0:
        return 1
    return 2


def pair_index(baryon_number_1: float, baryon_number_2: float) -> int:
    """Index of the pair class for two baryon numbers (see COMBO_LABELS)."""
    return _PAIR_INDEX[_kind(baryon_number_1)][_kind(baryon_number_2)]


def range_phi(dphi: float) -> float:
    """Map an angle into [-pi/2, 3pi/2)."""
    d = (dphi + math.pi) % _TWO_PI - math.pi
    if d < _PHI_LOW:
        d += _TWO_PI
    return d


@dataclass
class _PairHistograms:
    dphi_position: Hist1D
    dphi_momentum: Hist1D
    sumphi_position: Hist1D
    sumphi_momentum: Hist1D
    delta_position: Profile1D
    gamma_position: Profile1D
    delta_momentum: Profile1D
    gamma_momentum: Profile1D
    delta_position_ntrk: Profile1D
    gamma_position_ntrk: Profile1D
    delta_momentum_ntrk: Profile1D
    gamma_momentum_ntrk: Profile1D

    @classmethod
    def create(cls, combo: str, mixed: bool) -> _PairHistograms:
        lab = combo + ("_MixEvt" if mixed else "")
        tail = combo + (" Mix Event" if mixed else "")
        delta = "#LTcos(#Delta#phi)#GT"
        gamma = "#LTcos(#phi_{1}+#phi_{2})#GT"

        def angle(name: str, title: str, axis: str) -> Hist1D:
            return Hist1D(64, _PHI_LOW, _PHI_HIGH, name, f"{title};{axis};Counts")

        def single(name: str, title: str, axis: str) -> Profile1D:
            return Profile1D(1, 0.0, 1.0, name, f"{title};;{axis}")

        def vs_ntrk(name: str, title: str, axis: str) -> Profile1D:
            return Profile1D(150, 0.0, 15000.0, name, f"{title};N_{{tracks}};{axis}")

        return cls(
            dphi_position=angle(f"hCdPhiP_{lab}", f"#Delta#phi Position {tail}", "#Delta#phi"),
            dphi_momentum=angle(f"hCdPhiM_{lab}", f"#Delta#phi Momentum {tail}", "#Delta#phi"),
            sumphi_position=angle(f"hSdPhiP_{lab}", f"Sum#phi Position {tail}", "Sum#phi"),
            sumphi_momentum=angle(f"hSdPhiM_{lab}", f"Sum#phi Momentum {tail}", "Sum#phi"),
            delta_position=single(f"pDeltaP_{lab}", f"{delta} Position {tail}", delta),
            gamma_position=single(f"pGammaP_{lab}", f"{gamma} Position {tail}", gamma),
            delta_momentum=single(f"pDeltaM_{lab}", f"{delta} Momentum {tail}", delta),
            gamma_momentum=single(f"pGammaM_{lab}", f"{gamma} Momentum {tail}", gamma),
            delta_position_ntrk=vs_ntrk(
                f"pDeltaPNtrk_{lab}", f"{delta} vs N_{{tracks}} Position {tail}", delta
            ),
            gamma_position_ntrk=vs_ntrk(
                f"pGammaPNtrk_{lab}", f"{gamma} vs N_{{tracks}} Position {tail}", gamma
            ),
            delta_momentum_ntrk=vs_ntrk(
                f"pDeltaMNtrk_{lab}", f"{delta} vs N_{{tracks}} Momentum {tail}", delta
            ),
            gamma_momentum_ntrk=vs_ntrk(
                f"pGammaMNtrk_{lab}", f"{gamma} vs N_{{tracks}} Momentum {tail}", gamma
            ),
        )

    def all(self) -> list[Union[Hist1D, Profile1D]]:
        return [getattr(self, f.name) for f in fields(self)]


def _passes_cuts(hadron: Hadron) -> bool:
    pt = math.hypot(hadron.px, hadron.py)
    if not 0.2 <= pt <= 3.0:
        return False
    eta = math.asinh(hadron.pz / pt)
    return -0.8 <= eta <= 0.8


class CVEAnalyzer:
    """Azimuthal pair correlators in position and momentum space.

    Pairs are split into the six classes of COMBO_LABELS; only hadrons with
    0.2 <= pT <= 3 and |eta| <= 0.8 that were not afterburned are used.
    """

    def __init__(self, mixed: bool = False) -> None:
        self.mixed = mixed
        self.histograms = [_PairHistograms.create(label, mixed) for label in COMBO_LABELS]

    def _analyze_pair(self, h1: Hadron, h2: Hadron, n_trk: int) -> None:
        hists = self.histograms[pair_index(h1.baryon_number, h2.baryon_number)]
        if not (_passes_cuts(h1) and _passes_cuts(h2)):
            return

        phi_p1 = math.atan2(h1.y, h1.x)
        phi_p2 = math.atan2(h2.y, h2.x)
        dphi_p = phi_p1 - phi_p2
        sumphi_p = phi_p1 + phi_p2
        delta_p = math.cos(dphi_p)
        gamma_p = math.cos(sumphi_p)

        phi_m1 = math.atan2(h1.py, h1.px)
        phi_m2 = math.atan2(h2.py, h2.px)
        dphi_m = phi_m1 - phi_m2
        sumphi_m = phi_m1 + phi_m2
        delta_m = math.cos(dphi_m)
        gamma_m = math.cos(sumphi_m)

        hists.dphi_position.fill(range_phi(dphi_p))
        hists.sumphi_position.fill(range_phi(sumphi_p))
        hists.delta_position.fill(0.5, delta_p)
        hists.gamma_position.fill(0.5, gamma_p)
        hists.delta_position_ntrk.fill(n_trk, delta_p)
        hists.gamma_position_ntrk.fill(n_trk, gamma_p)

        hists.dphi_momentum.fill(range_phi(dphi_m))
        hists.sumphi_momentum.fill(range_phi(sumphi_m))
        hists.delta_momentum.fill(0.5, delta_m)
        hists.gamma_momentum.fill(0.5, gamma_m)
        hists.delta_momentum_ntrk.fill(n_trk, delta_m)
        hists.gamma_momentum_ntrk.fill(n_trk, gamma_m)

    def process(self, event: Event) -> None:
        """Correlate every distinct pair of hadrons within one event."""
        hadrons = [h for h in event.hadrons if not h.afterburned]
        n_trk = event.multiplicity
        for i, h1 in enumerate(hadrons):
            for h2 in hadrons[i + 1:]:
                self._analyze_pair(h1, h2, n_trk)

    def process_mixed(self, signal: Event, backgrounds: Sequence[Event]) -> None:
        """Correlate hadrons of a signal event with those of each background event."""
        signal_hadrons = [h for h in signal.hadrons if not h.afterburned]
        for background in backgrounds:
            n_trk = signal.multiplicity + background.multiplicity
            background_hadrons = [h for h in background.hadrons if not h.afterburned]
            for h1 in signal_hadrons:
                for h2 in background_hadrons:
                    self._analyze_pair(h1, h2, n_trk)

    def finish(self, path: Union[str, PathLike[str]]) -> None:
        """Write all histograms and profiles to a JSON file."""
        output = {hist.name: hist.to_dict() for group in self.histograms for hist in group.all()}
        with Path(path).open("w", encoding="utf-8") as handle:
            json.dump(output, handle, indent=2)
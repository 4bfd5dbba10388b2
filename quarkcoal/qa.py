"""Quality-assurance histograms for the hadrons of each event."""

from __future__ import annotations

import json
import math
from collections import Counter
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any, Union

from .event import Event
from .histograms import Hist1D, LabelledCounts, Profile1D

_TWO_PI = 2.0 * math.pi

#: Labels of the hadron ratio bins, in bin order.
RATIO_LABELS: tuple[str, ...] = (
    "(#bar{B}+B)/M",
    "#bar{B}/B",
    "p/#pi^{+}",
    "#bar{p}/p",
    "#Lambda/p",
    "K^{+}/#pi^{+}",
    "#rho^{+}/#pi^{+}",
)

#: Labels of the afterburned-fraction profile bins, in bin order.
AFTERBURNED_LABELS: tuple[str, ...] = (
    "AfterBurned Particles / Total Particles",
    "AfterBurned Mesons / Total Mesons",
    "AfterBurned Baryons / Total Baryons",
)

#: Display names for common PDG codes; others are reported as "Unknown".
PARTICLE_NAMES: dict[int, str] = {
    111: "pi0",
    211: "pi+",
    -211: "pi-",
    113: "rho0",
    213: "rho+",
    -213: "rho-",
    221: "eta",
    223: "omega",
    333: "phi",
    311: "K0",
    -311: "K0_bar",
    321: "K+",
    -321: "K-",
    313: "K*0",
    -313: "K*0_bar",
    323: "K*+",
    -323: "K*-",
    443: "J/psi",
    2212: "proton",
    -2212: "antiproton",
    2112: "neutron",
    -2112: "antineutron",
    2224: "Delta++",
    -2224: "Delta--_bar",
    1114: "Delta-",
    -1114: "Delta+_bar",
    3122: "Lambda0",
    -3122: "Lambda0_bar",
    3212: "Sigma0",
    -3212: "Sigma0_bar",
    3222: "Sigma+",
    -3222: "Sigma-_bar",
    3112: "Sigma-",
    -3112: "Sigma+_bar",
    3312: "Xi-",
    -3312: "Xi-_bar",
    3322: "Xi0",
    -3322: "Xi0_bar",
    3334: "Omega-",
    -3334: "Omega+",
}


def _pseudorapidity(pt: float, pz: float) -> float:
    if pt > 0.0:
        return math.asinh(pz / pt)
    if pz > 0.0:
        return math.inf
    if pz < 0.0:
        return -math.inf
    return math.nan


def _azimuth(y: float, x: float) -> float:
    phi = math.atan2(y, x)
    return phi + _TWO_PI if phi < 0 else phi


@dataclass
class _KinematicHistograms:
    pt: Hist1D
    eta: Hist1D
    phi_momentum: Hist1D
    phi_position: Hist1D

    @classmethod
    def create(cls, suffix: str, title: str) -> _KinematicHistograms:
        return cls(
            pt=Hist1D(100, 0.0, 10.0, f"hPt_{suffix}", f"p_{{T}} - {title}; p_{{T}}; Counts"),
            eta=Hist1D(100, -5.0, 5.0, f"hEta_{suffix}", f"#eta - {title}; #eta; Counts"),
            phi_momentum=Hist1D(
                64, 0.0, _TWO_PI, f"hPhiM_{suffix}", f"#phi_{{m}} - {title}; #phi_{{m}}; Counts"
            ),
            phi_position=Hist1D(
                64, 0.0, _TWO_PI, f"hPhiP_{suffix}", f"#phi_{{p}} - {title}; #phi_{{p}}; Counts"
            ),
        )

    def fill(self, pt: float, eta: float, phi_m: float, phi_p: float) -> None:
        self.pt.fill(pt)
        self.eta.fill(eta)
        self.phi_momentum.fill(phi_m)
        self.phi_position.fill(phi_p)

    def histograms(self) -> list[Hist1D]:
        return [self.pt, self.eta, self.phi_momentum, self.phi_position]


class QAAnalyzer:
    """Fills kinematic distributions, PID counts and hadron ratios per event.

    Baryons, antibaryons and mesons are filled separately.
    """

    def __init__(self) -> None:
        self.baryons = _KinematicHistograms.create("b", "Baryons")
        self.antibaryons = _KinematicHistograms.create("ab", "Anti-Baryons")
        self.mesons = _KinematicHistograms.create("m", "Mesons")
        self.pid_counts = LabelledCounts("hPIDUnsort", "Unsorted Hadron PID labels;PID;Counts")
        self.afterburned_ratio = Profile1D(
            3,
            0.5,
            3.5,
            name="hAfterBurnedFlagRatio",
            title="After Burned Particles",
            labels=AFTERBURNED_LABELS,
        )
        self.class_counts: Counter[str] = Counter()
        self._pid_totals: Counter[int] = Counter()

    def process(self, event: Event) -> None:
        """Fill all histograms and counters from the hadrons of one event."""
        afterburned_baryons = afterburned_mesons = 0
        n_baryons = n_mesons = 0
        for hadron in event.hadrons:
            pt = math.hypot(hadron.px, hadron.py)
            eta = _pseudorapidity(pt, hadron.pz)
            phi_m = _azimuth(hadron.py, hadron.px)
            phi_p = _azimuth(hadron.y, hadron.x)

            bn = hadron.baryon_number
            if bn > 0:
                group, kind = self.baryons, "baryon"
            elif bn < 0:
                group, kind = self.antibaryons, "antibaryon"
            else:
                group, kind = self.mesons, "meson"
            group.fill(pt, eta, phi_m, phi_p)
            self.class_counts[kind] += 1

            if kind == "meson":
                n_mesons += 1
                afterburned_mesons += hadron.afterburned
            else:
                n_baryons += 1
                afterburned_baryons += hadron.afterburned

            self._pid_totals[hadron.pid] += 1
            self.pid_counts.fill(str(hadron.pid), 1.0)

        total = n_baryons + n_mesons
        if total > 0:
            self.afterburned_ratio.fill(1, (afterburned_baryons + afterburned_mesons) / total)
        if n_baryons > 0:
            self.afterburned_ratio.fill(2, afterburned_baryons / n_baryons)
        if n_mesons > 0:
            self.afterburned_ratio.fill(3, afterburned_mesons / n_mesons)

    def ratios(self) -> dict[str, float]:
        """Hadron yield ratios keyed by RATIO_LABELS; 0 where the denominator is 0."""
        baryons = self.class_counts["baryon"]
        antibaryons = self.class_counts["antibaryon"]
        mesons = self.class_counts["meson"]
        protons = self._pid_totals[2212]
        antiprotons = self._pid_totals[-2212]
        lambdas = self._pid_totals[3122]
        kaons = self._pid_totals[321]
        rhos = self._pid_totals[213]
        pions = self._pid_totals[211]

        values = dict.fromkeys(RATIO_LABELS, 0.0)
        if mesons > 0:
            values[RATIO_LABELS[0]] = (baryons + antibaryons) / mesons
        if baryons > 0:
            values[RATIO_LABELS[1]] = antibaryons / baryons
        if pions > 0:
            values[RATIO_LABELS[2]] = protons / pions
            values[RATIO_LABELS[5]] = kaons / pions
            values[RATIO_LABELS[6]] = rhos / pions
        if protons > 0:
            values[RATIO_LABELS[3]] = antiprotons / protons
            values[RATIO_LABELS[4]] = lambdas / protons
        return values

    def sorted_pid_counts(self) -> list[tuple[int, float]]:
        """(PDG code, count) pairs with positive counts, largest count first."""
        return [(int(label), count) for label, count in self.pid_counts.sorted_by_count()]

    def finish(self, path: Union[str, PathLike[str]]) -> None:
        """Write all histograms and derived summaries to a JSON file."""
        output: dict[str, Any] = {}
        for group in (self.baryons, self.antibaryons, self.mesons):
            for hist in group.histograms():
                output[hist.name] = hist.to_dict()
        output[self.afterburned_ratio.name] = self.afterburned_ratio.to_dict()

        pid_counts = self.sorted_pid_counts()
        output["hPID"] = {
            "name": "hPID",
            "title": "PID Sorted by Count;PID;Counts",
            "labels": [str(pid) for pid, _ in pid_counts],
            "counts": [count for _, count in pid_counts],
        }
        output["hPIDName"] = {
            "name": "hPIDName",
            "title": "PID Sorted by Count with Names;Name;Counts",
            "labels": [PARTICLE_NAMES.get(pid, "Unknown") for pid, _ in pid_counts],
            "counts": [count for _, count in pid_counts],
        }

        ratios = self.ratios()
        output["hRatio"] = {
            "name": "hRatio",
            "title": "Hadron Ratios;;Value",
            "labels": list(RATIO_LABELS),
            "counts": [ratios[label] for label in RATIO_LABELS],
        }

        with Path(path).open("w", encoding="utf-8") as handle:
            json.dump(output, handle, indent=2)
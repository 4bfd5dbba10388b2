"""Inference of PDG particle codes from quark content and invariant mass."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Optional

from .constants import (
    MESON_VECTOR_TO_PSEUDOSCALAR_RATIO,
    OMEGA_TO_RHO_RATIO,
    RHO_TO_PION_RATIO,
    get_mass,
)
from .event import Event

PID_PI0 = 111
PID_ETA = 221
PID_RHO0 = 113
PID_OMEGA = 223
PID_PHI = 333

DEFAULT_VP_RATIO = MESON_VECTOR_TO_PSEUDOSCALAR_RATIO
DEFAULT_RHO_PI_RATIO = RHO_TO_PION_RATIO
DEFAULT_OMEGA_RHO_RATIO = OMEGA_TO_RHO_RATIO

_CHARMONIUM_CODES = (
    441, 443, 10441, 20443, 10443, 445, 100441,
    100443, 30443, 100445, 9000443, 9010443, 9020443,
)

_default_rng = random.Random()


def _mass_or_zero(pdg: int) -> float:
    mass = get_mass(pdg)
    return 0.0 if mass is None else mass


def infer_quarkonium_pdg(flavor: int, mass: float) -> int:
    """Closest quarkonium state for a heavy flavour (4=c, 5=b, 6=t); 0 otherwise."""
    if flavor == 4:
        best = _CHARMONIUM_CODES[0]
        best_diff = abs(mass - _mass_or_zero(best))
        for pdg in _CHARMONIUM_CODES:
            diff = abs(mass - _mass_or_zero(pdg))
            if diff < best_diff:
                best, best_diff = pdg, diff
        return best
    if flavor == 5:
        pdg = 100 * flavor + 10 * flavor + 1
        if abs(mass - _mass_or_zero(pdg)) > abs(mass - _mass_or_zero(pdg + 2)):
            pdg += 2
            if abs(mass - _mass_or_zero(553)) > abs(mass - _mass_or_zero(10551)):
                pdg = 10551
        return pdg
    if flavor == 6:
        if abs(mass - _mass_or_zero(661)) > abs(mass - _mass_or_zero(663)):
            return 663
        return 661
    return 0


def infer_meson_pdg(q1: int, q2: int, mass: float) -> int:
    """PDG code of the pseudoscalar meson made of flavour codes q1 and q2."""
    if q1 == -q2:
        flavor = abs(q1)
        if flavor <= 2:
            return PID_PI0
        if flavor == 3:
            return PID_PHI
        return infer_quarkonium_pdg(flavor, mass)
    qmax = max(abs(q1), abs(q2))
    qmin = min(abs(q1), abs(q2))
    pdg = 100 * qmax + 10 * qmin + 1
    sign = 1 if q1 + q2 > 0 else -1
    phase = 1 if qmax % 2 == 0 else -1
    return pdg * sign * phase


def infer_baryon_pdg(q1: int, q2: int, q3: int, mass: float, spin_mult: int = -1) -> int:
    """PDG code of the baryon (or antibaryon) made of three flavour codes.

    spin_mult is 2S+1; a negative value chooses decuplet for three identical
    flavours and octet otherwise.
    """
    k1, k2, k3 = sorted((abs(q1), abs(q2), abs(q3)), reverse=True)
    antibaryon = q1 + q2 + q3 < 0

    if (k1, k2, k3) == (3, 2, 1):
        want_sigma = abs(mass - _mass_or_zero(3212)) < abs(mass - _mass_or_zero(3122))
        pdg = 3212 if want_sigma else 3122
        return -pdg if antibaryon else pdg

    mult = spin_mult if spin_mult >= 0 else (4 if k1 == k2 == k3 else 2)

    if mult == 4:
        pdg = 1000 * k1 + 100 * k2 + 10 * k3 + mult
    else:
        first = 1000 * k1 + 100 * k2 + 10 * k3 + mult
        second = 1000 * k1 + 100 * k3 + 10 * k2 + mult
        if abs(mass - _mass_or_zero(first)) <= abs(mass - _mass_or_zero(second)):
            pdg = first
        else:
            pdg = second

    return -pdg if antibaryon else pdg


def infer_meson_spin(vp_ratio: float, rnd: float) -> int:
    """0 for a pseudoscalar, 1 for a vector meson, given V/P ratio and a uniform draw."""
    return 0 if rnd < 1.0 / (1.0 + vp_ratio) else 1


def _pick_light_diagonal(rnd: float, p_pi0: float, p_eta: float, p_rho0: float) -> int:
    if rnd < p_pi0:
        return PID_PI0
    if rnd < p_pi0 + p_eta:
        return PID_ETA
    if rnd < p_pi0 + p_eta + p_rho0:
        return PID_RHO0
    return PID_OMEGA


def resolve_diagonal_light_meson(rnd: float, rho_pi_ratio: float, omega_rho_ratio: float) -> int:
    """Choose pi0, eta, rho0 or omega for a light diagonal quark pair."""
    denom = 2.0 * (1.0 + rho_pi_ratio)
    p_pi0 = 1.0 / denom
    p_rho0 = rho_pi_ratio / denom
    p_eta = (1.0 + rho_pi_ratio - rho_pi_ratio * omega_rho_ratio) / denom
    return _pick_light_diagonal(rnd, p_pi0, p_eta, p_rho0)


def infer_pid_with_rng(
    quarks: Sequence[int],
    mass: float,
    rnd: float,
    vp_ratio: float,
    rho_pi_ratio: float,
    omega_rho_ratio: float,
) -> int:
    """PDG code for a quark list, using an explicit uniform draw and ratios; 0 if unsupported."""
    if len(quarks) == 2:
        q1, q2 = quarks
        if q1 == -q2:
            flavor = abs(q1)
            if flavor <= 2:
                return resolve_diagonal_light_meson(rnd, rho_pi_ratio, omega_rho_ratio)
            if flavor == 3:
                return PID_PHI
            return infer_quarkonium_pdg(flavor, mass)
        spin = infer_meson_spin(vp_ratio, rnd)
        pdg = infer_meson_pdg(q1, q2, mass)
        if spin == 1 and abs(pdg) % 10 == 1:
            pdg += 2 if pdg > 0 else -2
        return pdg
    if len(quarks) == 3:
        return infer_baryon_pdg(quarks[0], quarks[1], quarks[2], mass)
    return 0


def infer_pid(quarks: Sequence[int], mass: float, rng: Optional[random.Random] = None) -> int:
    """PDG code for a quark list using the default production ratios."""
    rng = rng or _default_rng
    return infer_pid_with_rng(
        quarks,
        mass,
        rng.random(),
        DEFAULT_VP_RATIO,
        DEFAULT_RHO_PI_RATIO,
        DEFAULT_OMEGA_RHO_RATIO,
    )


def batch_assign_diagonal_light_mesons(
    masses: Sequence[float],
    num_charged_pions: int,
    num_charged_rhos: int,
    rng: Optional[random.Random] = None,
) -> list[int]:
    """Assign pi0/eta/rho0/omega to light diagonal mesons from event-level charged counts."""
    count = len(masses)
    if count == 0:
        return []
    rng = rng or _default_rng

    expected_pi0 = (num_charged_pions + num_charged_rhos) / (1.0 + RHO_TO_PION_RATIO) / 2.0
    expected_rho0 = expected_pi0 * RHO_TO_PION_RATIO
    expected_omega = expected_rho0 * OMEGA_TO_RHO_RATIO
    expected_eta = max(0.0, count - expected_pi0 - expected_rho0 - expected_omega)

    p_pi0 = expected_pi0 / count
    p_eta = expected_eta / count
    p_rho0 = expected_rho0 / count
    return [_pick_light_diagonal(rng.random(), p_pi0, p_eta, p_rho0) for _ in masses]


def _is_light_diagonal(flavors: Sequence[int]) -> bool:
    return len(flavors) == 2 and flavors[0] == -flavors[1] and abs(flavors[0]) <= 2


def assign_pids(event: Event, rng: Optional[random.Random] = None) -> None:
    """Set the PDG code of every hadron in the event from its constituents.

    Raises KeyError if a hadron refers to a parton that is not in the event.
    """
    partons_by_uid = {parton.uid: parton for parton in event.partons}
    flavors = [
        [partons_by_uid[uid].pid for uid in hadron.constituent_ids]
        for hadron in event.hadrons
    ]

    for hadron, quark_codes in zip(event.hadrons, flavors):
        if not _is_light_diagonal(quark_codes):
            hadron.pid = infer_pid(quark_codes, hadron.mass, rng)

    num_charged_pions = sum(1 for h in event.hadrons if abs(h.pid) == 211)
    num_charged_rhos = sum(1 for h in event.hadrons if abs(h.pid) == 213)

    diagonal = [h for h, codes in zip(event.hadrons, flavors) if _is_light_diagonal(codes)]
    if diagonal:
        codes = batch_assign_diagonal_light_mesons(
            [h.mass for h in diagonal], num_charged_pions, num_charged_rhos, rng
        )
        for hadron, pdg in zip(diagonal, codes):
            hadron.pid = pdg
"""Particle masses, production ratios and reference distributions."""

from __future__ import annotations

import random
from bisect import bisect_right
from itertools import accumulate
from typing import Optional

#: Masses in GeV keyed by PDG code.
MASS_TABLE: dict[int, float] = {
    1: 0.00467,  # d
    2: 0.00216,  # u
    3: 0.0934,  # s
    4: 1.27,  # c
    5: 4.18,  # b
    6: 172.5,  # t
    21: 0.0,  # gluon
    11: 0.000510999,  # e-
    -11: 0.000510999,  # e+
    12: 0.0,
    -12: 0.0,
    13: 0.1056584,  # mu-
    -13: 0.1056584,  # mu+
    14: 0.0,
    -14: 0.0,
    15: 1.77686,  # tau-
    -15: 1.77686,  # tau+
    16: 0.0,
    -16: 0.0,
    22: 0.0,  # photon
    23: 91.1876,  # Z0
    24: 80.377,  # W+
    -24: 80.377,  # W-
    111: 0.1349768,  # pi0
    211: 0.1395704,  # pi+
    -211: 0.1395704,  # pi-
    311: 0.497611,  # K0
    -311: 0.497611,  # K0bar
    310: 0.497611,  # K0 short
    130: 0.497611,  # K0 long
    321: 0.493677,  # K+
    -321: 0.493677,  # K-
    2212: 0.9382721,  # p
    -2212: 0.9382721,  # pbar
    2112: 0.9395654,  # n
    -2112: 0.9395654,  # nbar
    3122: 1.115683,  # Lambda
    -3122: 1.115683,  # Lambda bar
    3124: 1.519,  # Lambda(1520)
    3112: 1.197449,  # Sigma-
    3222: 1.18937,  # Sigma+
    3212: 1.192642,  # Sigma0
    3312: 1.32171,  # Xi-
    -3312: 1.32171,  # Xi+ bar
    3334: 1.67245,  # Omega-
    -3334: 1.67245,  # Omega+ bar
    # Charmonium
    441: 2.9839,
    443: 3.09690,
    10441: 3.41475,
    10443: 3.51066,
    445: 3.55620,
    100441: 3.63990,
    100443: 3.68610,
    30443: 3.77313,
    100445: 4.15300,
    9000443: 4.03900,
    9010443: 4.19100,
    9020443: 4.42100,
    # Bottomonium
    551: 9.3987,
    553: 9.46030,
    10551: 10.5794,
}

#: Relative likelihood of forming baryons versus mesons.
BARYON_PREFERENCE_FACTOR = 1.0
#: Vector-to-pseudoscalar meson ratio (V/P).
MESON_VECTOR_TO_PSEUDOSCALAR_RATIO = 1.0 / 3.0
#: rho0 / pi0 production ratio.
RHO_TO_PION_RATIO = 0.36
#: omega / rho0 production ratio.
OMEGA_TO_RHO_RATIO = 1.90
#: K* / K production ratio.
KSTAR_TO_K_RATIO = 0.50

#: Relative weights used when drawing a parton flavour code.
PARTON_PID_WEIGHTS: tuple[tuple[int, float], ...] = (
    (-3, 3.0),
    (-2, 10.0),
    (-1, 10.0),
    (1, 10.0),
    (2, 10.0),
    (3, 3.0),
)

MULTIPLICITY_BINS = 100
MULTIPLICITY_LOW = 0.0
MULTIPLICITY_HIGH = 20000.0

# Reference parton multiplicity distribution, keyed by 1-based bin number.
# Bin 101 is the overflow bin and is not used for sampling.
_MULTIPLICITY_CONTENTS: dict[int, float] = {
    18: 1, 22: 1, 23: 7, 24: 8, 25: 11, 26: 5, 27: 17, 28: 27, 29: 30,
    30: 67, 31: 84, 32: 95, 33: 110, 34: 163, 35: 169, 36: 254, 37: 323,
    38: 333, 39: 407, 40: 430, 41: 513, 42: 541, 43: 634, 44: 676, 45: 670,
    46: 754, 47: 740, 48: 773, 49: 831, 50: 777, 51: 868, 52: 887, 53: 834,
    54: 831, 55: 833, 56: 885, 57: 831, 58: 774, 59: 791, 60: 728, 61: 687,
    62: 604, 63: 611, 64: 587, 65: 501, 66: 473, 67: 460, 68: 416, 69: 343,
    70: 332, 71: 276, 72: 259, 73: 233, 74: 199, 75: 134, 76: 141, 77: 124,
    78: 89, 79: 71, 80: 83, 81: 56, 82: 47, 83: 41, 84: 32, 85: 26, 86: 23,
    87: 14, 88: 12, 89: 4, 90: 10, 91: 2, 92: 6, 93: 6, 94: 3, 96: 1, 97: 2,
    99: 3, 101: 1,
}


def _multiplicity_cumulative() -> list[float]:
    contents = [float(_MULTIPLICITY_CONTENTS.get(b, 0)) for b in range(1, MULTIPLICITY_BINS + 1)]
    cumulative = [0.0, *accumulate(contents)]
    total = cumulative[-1]
    return [c / total for c in cumulative]


_MULTIPLICITY_CDF = _multiplicity_cumulative()
_default_rng = random.Random()


def get_mass(pdg_code: int) -> Optional[float]:
    """Return the mass in GeV for a PDG code, or None if it is not tabulated."""
    return MASS_TABLE.get(pdg_code)


def sample_multiplicity(rng: Optional[random.Random] = None) -> int:
    """Draw a parton multiplicity from the reference distribution."""
    rng = rng or _default_rng
    width = (MULTIPLICITY_HIGH - MULTIPLICITY_LOW) / MULTIPLICITY_BINS
    r = rng.random()
    index = min(bisect_right(_MULTIPLICITY_CDF, r) - 1, MULTIPLICITY_BINS - 1)
    x = MULTIPLICITY_LOW + index * width
    lower, upper = _MULTIPLICITY_CDF[index], _MULTIPLICITY_CDF[index + 1]
    if r > lower and upper > lower:
        x += width * (r - lower) / (upper - lower)
    return int(x)


def sample_parton_pid(rng: Optional[random.Random] = None) -> int:
    """Draw a parton flavour code according to PARTON_PID_WEIGHTS."""
    rng = rng or _default_rng
    total = sum(weight for _, weight in PARTON_PID_WEIGHTS)
    r = rng.random() * total
    for pid, weight in PARTON_PID_WEIGHTS:
        if r < weight:
            return pid
        r -= weight
    return 0
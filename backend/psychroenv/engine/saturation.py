"""
Saturation vapour pressure models.

Every model takes a temperature in °C and returns the saturation vapour
pressure in hPa. The model is selected with the SaturationModel enum; each
variant resolves to an explicit coefficient struct below.

Buck and Vaisala switch between the water and ice formulations at exactly
0°C. The step at the branch point is inherited from the published equations
and is kept.
"""

import math
from typing import NamedTuple

from psychroenv.config import (
    SaturationModel,
    DEFAULT_PRESSURE_HPA,
    KELVIN_OFFSET,
)


class IAPWSCoefficients(NamedTuple):
    Tc: float  # critical temperature, K
    Pc: float  # critical pressure, hPa
    C1: float
    C2: float
    C3: float
    C4: float
    C5: float
    C6: float


class BuckCoefficients(NamedTuple):
    a: float  # hPa
    b: float
    c: float  # °C
    d: float  # °C


class MagnusCoefficients(NamedTuple):
    a: float  # hPa
    b: float
    c: float  # °C


class HylandWexlerCoefficients(NamedTuple):
    """ln(Pws[Pa]) = k_1/θ + k0 + k1·θ + k2·θ² + k3·θ³ + k4·θ⁴ + k_ln·ln(θ)"""

    k_1: float
    k0: float
    k1: float
    k2: float
    k3: float
    k4: float
    k_ln: float


IAPWS = IAPWSCoefficients(
    Tc=647.096,
    Pc=220640.0,
    C1=-7.85951783,
    C2=1.84408259,
    C3=-11.7866497,
    C4=22.6807411,
    C5=-15.9618719,
    C6=1.80122502,
)

BUCK_WATER = BuckCoefficients(a=6.1121, b=18.678, c=257.14, d=234.5)
BUCK_ICE = BuckCoefficients(a=6.1115, b=23.036, c=279.82, d=333.7)

MAGNUS = MagnusCoefficients(a=6.1094, b=17.625, c=243.04)

VAISALA_WATER = HylandWexlerCoefficients(
    k_1=-0.58002206e4,
    k0=0.13914993e1,
    k1=-0.48640239e-1,
    k2=0.41764768e-4,
    k3=-0.14452093e-7,
    k4=0.0,
    k_ln=0.65459673e1,
)

VAISALA_ICE = HylandWexlerCoefficients(
    k_1=-0.56745359e4,
    k0=0.63925247e1,
    k1=-0.96778430e-2,
    k2=0.62215701e-6,
    k3=0.20747825e-8,
    k4=-0.94840240e-12,
    k_ln=0.41635019e1,
)

# Vaisala's correction of the absolute temperature over water:
#   θ = T - Σ Ci·T^i, i = 0..3
VAISALA_THETA = (0.4931358, -0.46094296e-2, 0.13746454e-4, -0.12743214e-7)


def _pws_iapws(temp_c: float) -> float:
    """IAPWS-95 saturation pressure over liquid water (0.083% for -20 to 50°C)."""
    k = IAPWS
    temp_k = temp_c + KELVIN_OFFSET
    v = 1.0 - temp_k / k.Tc
    ln_ratio = (k.Tc / temp_k) * (
        k.C1 * v
        + k.C2 * v ** 1.5
        + k.C3 * v ** 3
        + k.C4 * v ** 3.5
        + k.C5 * v ** 4
        + k.C6 * v ** 7.5
    )
    return k.Pc * math.exp(ln_ratio)


def buck_coefficients(temp_c: float) -> BuckCoefficients:
    """Water branch at or above 0°C, ice branch below."""
    return BUCK_WATER if temp_c >= 0 else BUCK_ICE


def _pws_buck(temp_c: float) -> float:
    k = buck_coefficients(temp_c)
    return k.a * math.exp((k.b - temp_c / k.d) * (temp_c / (k.c + temp_c)))


def _pws_magnus(temp_c: float, pressure: float) -> float:
    k = MAGNUS
    pws = k.a * math.exp(k.b * temp_c / (k.c + temp_c))
    return pws * (pressure / DEFAULT_PRESSURE_HPA)


def _pws_vaisala(temp_c: float) -> float:
    temp_k = temp_c + KELVIN_OFFSET
    if temp_c >= 0:
        k = VAISALA_WATER
        theta = temp_k - sum(c * temp_k ** i for i, c in enumerate(VAISALA_THETA))
    else:
        k = VAISALA_ICE
        theta = temp_k

    ln_pws = (
        k.k_1 / theta
        + k.k0
        + k.k1 * theta
        + k.k2 * theta ** 2
        + k.k3 * theta ** 3
        + k.k4 * theta ** 4
        + k.k_ln * math.log(theta)
    )
    return math.exp(ln_pws) / 100.0  # Pa → hPa


def saturation_pressure(
    temp_c: float,
    model: SaturationModel = SaturationModel.BUCK,
    pressure: float = DEFAULT_PRESSURE_HPA,
) -> float:
    """
    Saturation vapour pressure (hPa) at a temperature (°C).

    Args:
        temp_c: Air temperature in °C. Not range-checked.
        model: Saturation pressure formulation.
        pressure: Atmospheric pressure in hPa. Only the Magnus model uses it.

    Returns:
        Saturation vapour pressure in hPa.
    """
    if model == SaturationModel.IAPWS:
        return _pws_iapws(temp_c)
    elif model == SaturationModel.BUCK:
        return _pws_buck(temp_c)
    elif model == SaturationModel.MAGNUS:
        return _pws_magnus(temp_c, pressure)
    elif model == SaturationModel.VAISALA:
        return _pws_vaisala(temp_c)
    raise ValueError(f"Unknown saturation model: {model}")

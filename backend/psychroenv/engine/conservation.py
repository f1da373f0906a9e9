"""
Collection risk metrics.

Empirical indicators of how fast objects held at a given temperature and RH
deteriorate:

  - Preservation Index (PI): expected lifetime in years of cellulose
    acetate film, PI = 1/k with k = RH × 5.9e12 × exp(-Ea / (R × T)).
  - IPI kinetics: years to a defined state of deterioration,
    exp((Ea - 134.9 × RH) / (R × T) + 0.0284 × RH - 28.023) / 365.
  - Lifetime multiplier (LM): lifetime relative to 20°C / 50% RH,
    (50 / RH)^1.3 × exp(Ea/R × (1/T - 1/293.15)).
  - Equilibrium moisture content of wood (EMC), Hailwood-Horrobin sorption
    fit with Simpson's temperature-dependent coefficients.

T is absolute temperature (K), RH in %, R the gas constant.
"""

import logging
import math
from typing import Callable, Optional

from psychroenv.config import (
    KELVIN_OFFSET,
    GAS_CONSTANT,
    PI_ACTIVATION_ENERGY,
    IPI_ACTIVATION_ENERGY,
    LM_ACTIVATION_ENERGY,
    LM_REFERENCE_TEMP,
    LM_REFERENCE_RH,
    EMC_WOOD_TEMP_MIN,
    EMC_WOOD_TEMP_MAX,
    ROUND_DIGITS,
)
from psychroenv.engine.errors import DomainError
from psychroenv.models.conservation import ConservationMetrics

logger = logging.getLogger(__name__)

# Reilly (1995) pre-exponential factor for acetate film, per %RH per year
_PI_RATE_FACTOR = 5.9e12

# Padfield (2004) fit of the IPI kinetics
_IPI_RH_ENERGY = 134.9   # J/mol per %RH
_IPI_RH_FACTOR = 0.0284
_IPI_OFFSET = 28.023

# Michalski (2002): lifetime more than doubles for each halving of RH
_LM_RH_EXPONENT = 1.3


def preservation_index(
    temp_c: float,
    rh: float,
    activation_energy: float = PI_ACTIVATION_ENERGY,
) -> float:
    """
    Preservation Index: expected lifetime (years) of acetate film.

    Args:
        temp_c: Temperature (°C)
        rh: Relative humidity (%)
        activation_energy: Ea in J/mol

    Raises:
        DomainError: At RH = 0%, where the decay rate is zero
    """
    if rh <= 0:
        raise DomainError(f"Preservation index is undefined at RH={rh}%")
    T_k = temp_c + KELVIN_OFFSET
    rate = rh * _PI_RATE_FACTOR * math.exp(-activation_energy / (GAS_CONSTANT * T_k))
    return 1.0 / rate


def ipi_preservation_index(
    temp_c: float,
    rh: float,
    activation_energy: float = IPI_ACTIVATION_ENERGY,
) -> float:
    """Years to a defined state of deterioration, IPI formulation."""
    T_k = temp_c + KELVIN_OFFSET
    exponent = (
        (activation_energy - _IPI_RH_ENERGY * rh) / (GAS_CONSTANT * T_k)
        + _IPI_RH_FACTOR * rh
        - _IPI_OFFSET
    )
    return math.exp(exponent) / 365.0


def lifetime_multiplier(
    temp_c: float,
    rh: float,
    activation_energy: float = LM_ACTIVATION_ENERGY,
) -> float:
    """
    Expected lifetime relative to the same object kept at 20°C / 50% RH.

    Values above 1 prolong lifetime; below 1 the object ages faster.

    Args:
        temp_c: Temperature (°C)
        rh: Relative humidity (%)
        activation_energy: Ea in kJ/mol (100 for paper, 70 for varnish)

    Raises:
        DomainError: At RH = 0%
    """
    if rh <= 0:
        raise DomainError(f"Lifetime multiplier is undefined at RH={rh}%")
    T_k = temp_c + KELVIN_OFFSET
    T_ref = LM_REFERENCE_TEMP + KELVIN_OFFSET
    ea = activation_energy * 1000.0  # kJ/mol → J/mol
    return (
        (LM_REFERENCE_RH / rh) ** _LM_RH_EXPONENT
        * math.exp(ea / GAS_CONSTANT * (1.0 / T_k - 1.0 / T_ref))
    )


def emc_wood(temp_c: float, rh: float) -> float:
    """
    Equilibrium moisture content of wood (% of dry mass).

    Raises:
        DomainError: Outside the temperature range of the sorption fit
    """
    if not EMC_WOOD_TEMP_MIN <= temp_c <= EMC_WOOD_TEMP_MAX:
        raise DomainError(
            f"Wood EMC fit covers {EMC_WOOD_TEMP_MIN} to {EMC_WOOD_TEMP_MAX}°C, got {temp_c}°C"
        )
    h = rh / 100.0
    T = temp_c

    W = 349.0 + 1.29 * T + 0.0135 * T ** 2
    K = 0.805 + 0.000736 * T - 0.00000273 * T ** 2
    K1 = 6.27 - 0.00938 * T - 0.000303 * T ** 2
    K2 = 1.91 + 0.0407 * T - 0.000293 * T ** 2

    Kh = K * h
    monolayer = Kh / (1.0 - Kh)
    dissolved = (K1 * Kh + 2.0 * K1 * K2 * Kh ** 2) / (1.0 + K1 * Kh + K1 * K2 * Kh ** 2)
    return 1800.0 / W * (monolayer + dissolved)


def _optional(fn: Callable[..., float], *args) -> Optional[float]:
    try:
        return round(fn(*args), ROUND_DIGITS)
    except DomainError as e:
        logger.debug("%s undefined: %s", fn.__name__, e)
        return None


def conservation_metrics(
    temp_c: float,
    rh: float,
    pi_activation_energy: float = PI_ACTIVATION_ENERGY,
    ipi_activation_energy: float = IPI_ACTIVATION_ENERGY,
    lm_activation_energy: float = LM_ACTIVATION_ENERGY,
) -> ConservationMetrics:
    """
    All collection risk metrics for one reading, rounded for reporting.

    A metric that is undefined for the reading (RH = 0%, temperature outside
    a fit's range) is reported as None instead of failing the others.
    """
    return ConservationMetrics(
        preservation_index=_optional(preservation_index, temp_c, rh, pi_activation_energy),
        ipi_preservation_index=_optional(ipi_preservation_index, temp_c, rh, ipi_activation_energy),
        lifetime_multiplier=_optional(lifetime_multiplier, temp_c, rh, lm_activation_energy),
        emc_wood=_optional(emc_wood, temp_c, rh),
    )

"""
Humidity derivation functions.

Pure functions of temperature (°C), relative humidity (%) and a
PsychroSettings object. Pressures are in hPa unless stated otherwise.

Two formula families are in play and must not be mixed inside one chain:

  - dew point ↔ RH ↔ temperature use the closed-form Magnus or Buck
    inversion selected by settings.dew_point_method;
  - absolute humidity ↔ RH ↔ temperature use the formula selected by
    settings.absolute_humidity_method.

Each forward function has an inverse in the same family so that
RH → X → RH reproduces the input to floating-point precision.
"""

import math
from typing import Callable

from scipy.optimize import brentq

from psychroenv.config import (
    DewPointMethod,
    AbsoluteHumidityMethod,
    KELVIN_OFFSET,
    MIXING_RATIO_FACTOR,
    R_DRY_AIR,
    R_WATER_VAPOR,
    TEMP_SEARCH_MIN,
    TEMP_SEARCH_MAX,
    ROOT_XTOL,
    ROOT_MAXITER,
)
from psychroenv.engine.errors import DomainError, ConvergenceError
from psychroenv.engine.saturation import (
    saturation_pressure,
    BUCK_WATER,
    BUCK_ICE,
    MAGNUS,
)
from psychroenv.models.state import PsychroSettings


DEFAULT_SETTINGS = PsychroSettings()

# Buck / NOAA absolute humidity constants
_AH_VAPOUR_CONSTANT = 2165.0  # g·K/(m³·kPa), water vapour
_AH_BOILING_K = 373.15
_AH_R_V = 461.5  # J/(kg·K), used by the saturation-model path

# Enthalpy (simplified psychrometric form, MR in g/kg)
_ENTHALPY_CP = 1.01
_ENTHALPY_CP_VAPOUR = 0.00189
_ENTHALPY_LATENT = 2.5


def _log_rh(rh: float, quantity: str) -> float:
    if rh <= 0:
        raise DomainError(
            f"{quantity} is undefined at RH={rh}% (logarithm of zero); "
            f"filter out RH <= 0 before calling"
        )
    return math.log(rh / 100.0)


def _find_temperature(
    objective: Callable[[float], float],
    description: str,
    lower: float = TEMP_SEARCH_MIN,
    upper: float = TEMP_SEARCH_MAX,
) -> float:
    """Bracketed root-find over temperature; raises instead of returning a bound."""
    f_lower = objective(lower)
    f_upper = objective(upper)

    # Also rejects NaN, which fails every comparison
    if not f_lower * f_upper <= 0:
        raise ConvergenceError(
            f"No temperature in [{lower}, {upper}]°C satisfies {description}"
        )

    root, result = brentq(
        objective,
        lower,
        upper,
        xtol=ROOT_XTOL,
        maxiter=ROOT_MAXITER,
        full_output=True,
        disp=False,
    )
    if not result.converged:
        raise ConvergenceError(
            f"Root-find for {description} did not converge after "
            f"{result.iterations} iterations ({result.flag})"
        )
    return root


# ---------------------------------------------------------------------------
# Vapour pressure
# ---------------------------------------------------------------------------

def vapor_pressure(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Actual (partial) water vapour pressure in hPa."""
    pws = saturation_pressure(temp_c, settings.saturation_model, settings.pressure)
    return pws * rh / 100.0


# ---------------------------------------------------------------------------
# Dew point family
# ---------------------------------------------------------------------------

def _buck_exponent(temp_c: float) -> float:
    k = BUCK_WATER
    return (k.b - temp_c / k.d) * (temp_c / (k.c + temp_c))


def _magnus_exponent(temp_c: float) -> float:
    k = MAGNUS
    return k.b * temp_c / (k.c + temp_c)


def dew_point(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """
    Dew point temperature (°C).

    Magnus (Alduchov & Eskridge): valid 0 < T < 60°C, 1 < RH < 100%.
    Buck with the Bögel modification: valid -30 < T < 60°C.

    Raises:
        DomainError: if rh <= 0.
    """
    ln_rh = _log_rh(rh, "Dew point")

    if settings.dew_point_method == DewPointMethod.MAGNUS:
        k = MAGNUS
        gamma = ln_rh + _magnus_exponent(temp_c)
        return k.c * gamma / (k.b - gamma)

    k = BUCK_WATER
    gamma = ln_rh + _buck_exponent(temp_c)
    return k.c * gamma / (k.b - gamma)


def rh_from_dew_point(
    temp_c: float, dew_point_c: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Relative humidity (%) from temperature and dew point, same family as dew_point()."""
    if settings.dew_point_method == DewPointMethod.MAGNUS:
        return 100.0 * math.exp(_magnus_exponent(dew_point_c) - _magnus_exponent(temp_c))

    k = BUCK_WATER
    ln_pw = k.b * dew_point_c / (k.c + dew_point_c)
    return 100.0 * math.exp(ln_pw - _buck_exponent(temp_c))


def temperature_from_dew_point(
    rh: float, dew_point_c: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """
    Air temperature (°C) at which air with the given dew point has the given RH.

    Magnus inverts in closed form. The Bögel term in the Buck formula has no
    closed-form inverse, so the Buck branch root-finds over
    [TEMP_SEARCH_MIN, TEMP_SEARCH_MAX].

    Raises:
        DomainError: if rh <= 0.
        ConvergenceError: if no temperature in the search range matches.
    """
    ln_rh = _log_rh(rh, "Temperature from dew point")

    if settings.dew_point_method == DewPointMethod.MAGNUS:
        k = MAGNUS
        dp_term = _magnus_exponent(dew_point_c)
        return k.c * (dp_term - ln_rh) / (k.b + ln_rh - dp_term)

    k = BUCK_WATER
    pw = k.a * math.exp(k.b * dew_point_c / (k.c + dew_point_c))

    def objective(temp_c: float) -> float:
        return 100.0 * pw / (k.a * math.exp(_buck_exponent(temp_c))) - rh

    return _find_temperature(
        objective, f"RH={rh}% at dew point {dew_point_c}°C (Buck)"
    )


def frost_point(temp_c: float, rh: float) -> float:
    """
    Frost point (°C): the dew point over ice, from the Buck ice coefficients.

    Raises:
        DomainError: if rh <= 0.
    """
    _log_rh(rh, "Frost point")
    k = BUCK_ICE
    pws_ice = k.a * math.exp((k.b - temp_c / k.d) * (temp_c / (k.c + temp_c)))
    ln_ratio = math.log(pws_ice * rh / 100.0 / k.a)
    return k.c * ln_ratio / (k.b - ln_ratio)


# ---------------------------------------------------------------------------
# Absolute humidity family
# ---------------------------------------------------------------------------

def _vapour_density_per_rh(temp_c: float, settings: PsychroSettings) -> float:
    """Absolute humidity (g/m³) contributed by each 1% of RH at temp_c."""
    temp_k = temp_c + KELVIN_OFFSET

    if settings.absolute_humidity_method == AbsoluteHumidityMethod.BUCK_EF:
        pressure_pa = settings.pressure * 100.0
        t_ratio = 1.0 - _AH_BOILING_K / temp_k
        exponent = (-0.1299 * t_ratio - 0.6445) * t_ratio - 1.976
        pv_kpa = pressure_pa * math.exp((exponent * t_ratio + 13.3185) * t_ratio) / 1000.0
        return _AH_VAPOUR_CONSTANT * (pv_kpa / 100.0) / temp_k

    pws = saturation_pressure(temp_c, settings.saturation_model, settings.pressure)
    # hPa → Pa, kg → g, per 1% RH
    return pws * 100.0 / (_AH_R_V * temp_k) * 1000.0 / 100.0


def absolute_humidity(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """
    Absolute humidity (g/m³).

    Buck_EF is an independent closed form (Buck with an enhancement by the
    atmospheric pressure); the saturation path applies the ideal gas law to
    the vapour pressure of settings.saturation_model. The two agree to
    within their approximation errors.
    """
    return rh * _vapour_density_per_rh(temp_c, settings)


def rh_from_absolute_humidity(
    temp_c: float, ah: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Relative humidity (%) of air at temp_c holding ah g/m³ of water vapour."""
    return ah / _vapour_density_per_rh(temp_c, settings)


def temperature_from_absolute_humidity(
    rh: float, ah: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """
    Temperature (°C) at which air holding ah g/m³ reaches the given RH.

    This is the path air follows when heated or cooled without adding or
    removing moisture (constant absolute humidity).

    Raises:
        ConvergenceError: if no temperature in the search range matches.
    """

    def objective(temp_c: float) -> float:
        return rh_from_absolute_humidity(temp_c, ah, settings) - rh

    return _find_temperature(objective, f"RH={rh}% at {ah} g/m³")


# ---------------------------------------------------------------------------
# Mass ratios, density, enthalpy
# ---------------------------------------------------------------------------

def mixing_ratio(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Mixing ratio (g water / kg dry air)."""
    pw = vapor_pressure(temp_c, rh, settings)
    if pw >= settings.pressure:
        raise DomainError(
            f"Vapour pressure {pw:.2f} hPa reaches atmospheric pressure "
            f"{settings.pressure} hPa at {temp_c}°C"
        )
    return MIXING_RATIO_FACTOR * pw / (settings.pressure - pw)


def humidity_ratio(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Humidity ratio (g/kg). Same quantity as the mixing ratio in this model."""
    return mixing_ratio(temp_c, rh, settings)


def specific_humidity(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Specific humidity (g water / kg moist air): w / (1 + w)."""
    w = mixing_ratio(temp_c, rh, settings) / 1000.0  # kg/kg
    return w / (1.0 + w) * 1000.0


def air_density(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Moist air density (kg/m³) from the dry air and vapour partial pressures."""
    temp_k = temp_c + KELVIN_OFFSET
    pw_pa = vapor_pressure(temp_c, rh, settings) * 100.0
    pd_pa = settings.pressure * 100.0 - pw_pa
    return pd_pa / (R_DRY_AIR * temp_k) + pw_pa / (R_WATER_VAPOR * temp_k)


def enthalpy(
    temp_c: float, rh: float, settings: PsychroSettings = DEFAULT_SETTINGS
) -> float:
    """Specific enthalpy of moist air (kJ/kg dry air)."""
    mr = mixing_ratio(temp_c, rh, settings)
    return temp_c * (_ENTHALPY_CP + _ENTHALPY_CP_VAPOUR * mr) + _ENTHALPY_LATENT * mr

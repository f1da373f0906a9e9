"""
Core state resolver.

Given a temperature / relative humidity observation and the calculation
settings, resolves every derived psychrometric quantity in one pass.
"""

import psychrolib

from psychroenv.config import ROUND_DIGITS, ROUND_DIGITS_PRESSURE
from psychroenv.engine.humidity import (
    DEFAULT_SETTINGS,
    vapor_pressure,
    dew_point,
    frost_point,
    absolute_humidity,
    mixing_ratio,
    humidity_ratio,
    specific_humidity,
    air_density,
    enthalpy,
)
from psychroenv.engine.saturation import saturation_pressure
from psychroenv.models.state import Observation, PsychroSettings, DerivedState


def derive_state(
    observation: Observation,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> DerivedState:
    """
    Main entry point. Resolves the full derived state of one observation.

    Args:
        observation: Temperature (°C) and relative humidity (%)
        settings: Saturation model, inversion families and pressure

    Returns:
        DerivedState with all properties, rounded for reporting

    Raises:
        DomainError: If RH is 0% (dew point and frost point are undefined)
    """
    Tdb = observation.temperature
    RH = observation.relative_humidity

    Ps = saturation_pressure(Tdb, settings.saturation_model, settings.pressure)
    Pv = vapor_pressure(Tdb, RH, settings)
    Tdp = dew_point(Tdb, RH, settings)
    Tfp = frost_point(Tdb, RH)
    AH = absolute_humidity(Tdb, RH, settings)
    MR = mixing_ratio(Tdb, RH, settings)
    HR = humidity_ratio(Tdb, RH, settings)
    SH = specific_humidity(Tdb, RH, settings)
    rho = air_density(Tdb, RH, settings)
    h = enthalpy(Tdb, RH, settings)

    return DerivedState(
        temperature=Tdb,
        relative_humidity=RH,
        settings=settings,
        saturation_vapor_pressure=round(Ps, ROUND_DIGITS_PRESSURE),
        actual_vapor_pressure=round(Pv, ROUND_DIGITS_PRESSURE),
        dew_point=round(Tdp, ROUND_DIGITS),
        frost_point=round(Tfp, ROUND_DIGITS),
        absolute_humidity=round(AH, ROUND_DIGITS),
        mixing_ratio=round(MR, ROUND_DIGITS),
        humidity_ratio=round(HR, ROUND_DIGITS),
        specific_humidity=round(SH, ROUND_DIGITS),
        air_density=round(rho, ROUND_DIGITS),
        enthalpy=round(h, ROUND_DIGITS),
    )


def pressure_from_altitude(altitude: float) -> float:
    """
    Convert altitude to atmospheric pressure using psychrolib's standard
    atmosphere model.

    Args:
        altitude: Altitude in meters

    Returns:
        Atmospheric pressure in hPa
    """
    psychrolib.SetUnitSystem(psychrolib.SI)
    return psychrolib.GetStandardAtmPressure(altitude) / 100.0  # Pa → hPa

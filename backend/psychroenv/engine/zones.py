"""
Environmental zone classifier.

An observation is placed relative to the envelope with six range flags and
three curve flags. The curves run through the envelope's diagonal corners at
constant absolute humidity: the low curve carries the moisture content of
(low_temp, low_rh), the high curve that of (high_temp, high_rh). Heating or
cooling air without adding or removing water moves it along such a curve,
so they separate "temperature alone can fix this" from "moisture has to
change as well".

The zone is the first rule in _ZONE_RULES whose predicate holds. Several
flag combinations satisfy more than one predicate, so the order matters.
"""

import logging
from typing import Callable

from psychroenv.engine.humidity import (
    DEFAULT_SETTINGS,
    absolute_humidity,
    rh_from_absolute_humidity,
)
from psychroenv.models.state import Observation, PsychroSettings
from psychroenv.models.zones import (
    Envelope,
    ZoneFlags,
    ZoneLabel,
    TRHZone,
    TemperatureZone,
    HumidityZone,
    ClassificationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_ENVELOPE = Envelope()


_ZONE_RULES: list[tuple[Callable[[ZoneFlags], bool], ZoneLabel]] = [
    (lambda f: f.temp_within and f.rh_within, ZoneLabel.WITHIN),
    (lambda f: f.temp_lower and f.rh_within_curve, ZoneLabel.HEATING_ONLY),
    (lambda f: f.rh_higher and f.temp_within and f.rh_within_curve, ZoneLabel.DEHUM_OR_HEATING),
    (lambda f: f.rh_higher and f.temp_within and f.rh_above_curve, ZoneLabel.DEHUM_ONLY),
    (lambda f: f.rh_lower and f.temp_within and f.rh_below_curve, ZoneLabel.HUM_ONLY),
    (lambda f: f.temp_higher and f.rh_above_curve, ZoneLabel.COOLING_AND_DEHUM),
    (lambda f: f.temp_lower and f.rh_below_curve, ZoneLabel.HEATING_AND_HUM),
    (lambda f: f.temp_lower and f.rh_above_curve, ZoneLabel.HEATING_AND_DEHUM),
    (lambda f: f.rh_lower and f.temp_within and f.rh_within_curve, ZoneLabel.HUM_OR_COOLING),
    (lambda f: f.temp_higher and f.rh_within_curve, ZoneLabel.COOLING_ONLY),
    (lambda f: f.temp_higher and f.rh_below_curve, ZoneLabel.COOLING_AND_HUM),
]


def envelope_curves(
    temp_c: float,
    envelope: Envelope,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> tuple[float, float]:
    """
    RH (%) of the low and high constant-AH curves at a temperature.

    Returns:
        (rh_low_curve, rh_high_curve)
    """
    ah_low = absolute_humidity(envelope.low_temp, envelope.low_rh, settings)
    ah_high = absolute_humidity(envelope.high_temp, envelope.high_rh, settings)
    return (
        rh_from_absolute_humidity(temp_c, ah_low, settings),
        rh_from_absolute_humidity(temp_c, ah_high, settings),
    )


def compute_flags(
    temp_c: float,
    rh: float,
    rh_low_curve: float,
    rh_high_curve: float,
    envelope: Envelope,
) -> ZoneFlags:
    return ZoneFlags(
        temp_lower=temp_c < envelope.low_temp,
        temp_within=envelope.low_temp <= temp_c <= envelope.high_temp,
        temp_higher=temp_c > envelope.high_temp,
        rh_lower=rh < envelope.low_rh,
        rh_within=envelope.low_rh <= rh <= envelope.high_rh,
        rh_higher=rh > envelope.high_rh,
        rh_below_curve=rh < rh_low_curve,
        rh_within_curve=rh_low_curve <= rh <= rh_high_curve,
        rh_above_curve=rh > rh_high_curve,
    )


def zone_from_flags(flags: ZoneFlags) -> ZoneLabel:
    """Apply the ordered rules; first match wins."""
    for predicate, label in _ZONE_RULES:
        if predicate(flags):
            return label
    return ZoneLabel.UNDETERMINED


def _trh_zone(flags: ZoneFlags) -> TRHZone:
    if flags.temp_within and flags.rh_within:
        return TRHZone.WITHIN
    if flags.temp_lower:
        if flags.rh_within:
            return TRHZone.COLD
        if flags.rh_higher:
            return TRHZone.COLD_AND_HUMID
        if flags.rh_lower:
            return TRHZone.COLD_AND_DRY
    if flags.temp_higher:
        if flags.rh_within:
            return TRHZone.HOT
        if flags.rh_higher:
            return TRHZone.HOT_AND_HUMID
        if flags.rh_lower:
            return TRHZone.HOT_AND_DRY
    if flags.temp_within:
        if flags.rh_higher:
            return TRHZone.HUMID
        if flags.rh_lower:
            return TRHZone.DRY
    return TRHZone.UNDETERMINED


def _temperature_zone(flags: ZoneFlags) -> TemperatureZone:
    if flags.temp_within:
        return TemperatureZone.WITHIN
    if flags.temp_lower:
        return TemperatureZone.COLD
    if flags.temp_higher:
        return TemperatureZone.HOT
    return TemperatureZone.UNDETERMINED


def _humidity_zone(flags: ZoneFlags) -> HumidityZone:
    if flags.rh_within:
        return HumidityZone.WITHIN
    if flags.rh_lower:
        return HumidityZone.DRY
    if flags.rh_higher:
        return HumidityZone.HUMID
    return HumidityZone.UNDETERMINED


def classify(
    observation: Observation,
    envelope: Envelope = DEFAULT_ENVELOPE,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> ClassificationResult:
    """
    Classify an observation into exactly one zone label.

    Args:
        observation: Temperature (°C) and RH (%)
        envelope: Target range
        settings: Calculation settings; the curves use its absolute humidity family

    Returns:
        ClassificationResult with the zone, the simple box categories,
        the flags and curve values that produced them.
    """
    Tdb = observation.temperature
    RH = observation.relative_humidity

    rh_low, rh_high = envelope_curves(Tdb, envelope, settings)
    flags = compute_flags(Tdb, RH, rh_low, rh_high, envelope)
    zone = zone_from_flags(flags)

    if zone == ZoneLabel.UNDETERMINED:
        logger.warning(
            "No zone rule matched T=%s, RH=%s for envelope %s",
            Tdb, RH, envelope,
        )

    if flags.temp_lower:
        d_temp = Tdb - envelope.low_temp
    elif flags.temp_higher:
        d_temp = Tdb - envelope.high_temp
    else:
        d_temp = 0.0

    if flags.rh_lower:
        d_rh = RH - envelope.low_rh
    elif flags.rh_higher:
        d_rh = RH - envelope.high_rh
    else:
        d_rh = 0.0

    return ClassificationResult(
        temperature=Tdb,
        relative_humidity=RH,
        absolute_humidity=absolute_humidity(Tdb, RH, settings),
        zone=zone,
        trh_zone=_trh_zone(flags),
        temperature_zone=_temperature_zone(flags),
        humidity_zone=_humidity_zone(flags),
        flags=flags,
        rh_low_curve=rh_low,
        rh_high_curve=rh_high,
        d_temperature=d_temp,
        d_relative_humidity=d_rh,
    )

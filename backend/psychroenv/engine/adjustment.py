"""
Adjustment planner.

For a classified observation, computes the temperature and absolute humidity
that would move it onto the envelope boundary, then reports the resulting RH
and the changes versus the original reading.

Zone strategy (the default):

  - "only"/"or" zones change one variable and hold the other. Temperature
    moves are at constant absolute humidity, and stop early when going all
    the way to the temperature bound would carry RH across the opposite RH
    bound.
  - "and" zones change both, targeting the envelope corner on the violated
    temperature side at the violated RH bound.

The two single-variable strategies ignore the curves:

  - humidity_only holds temperature and moves AH to the violated RH bound;
  - temperature_only holds the dew point and moves temperature until RH
    reaches the violated RH bound.
"""

from typing import Optional

from psychroenv.config import ROUND_DIGITS, BOUNDARY_TOL, INWARD_ROUNDING_MAX_STEPS
from psychroenv.engine.humidity import (
    DEFAULT_SETTINGS,
    absolute_humidity,
    rh_from_absolute_humidity,
    temperature_from_absolute_humidity,
    dew_point,
    temperature_from_dew_point,
)
from psychroenv.engine.zones import DEFAULT_ENVELOPE, classify
from psychroenv.models.adjustment import AdjustmentPlan, AdjustmentStrategy
from psychroenv.models.state import Observation, PsychroSettings
from psychroenv.models.zones import Envelope, ZoneLabel, HumidityZone


def _zone_targets(
    Tdb: float,
    AH: float,
    zone: ZoneLabel,
    envelope: Envelope,
    settings: PsychroSettings,
) -> tuple[float, float]:
    """New (temperature, absolute humidity) for the zone strategy."""
    e = envelope

    def ah_at(temp: float, rh: float) -> float:
        return absolute_humidity(temp, rh, settings)

    def temp_for_rh(rh: float) -> float:
        # Heating/cooling at constant moisture until RH hits the bound
        return temperature_from_absolute_humidity(rh, AH, settings)

    if zone == ZoneLabel.HEATING_ONLY:
        if rh_from_absolute_humidity(e.low_temp, AH, settings) > e.high_rh:
            return temp_for_rh(e.high_rh), AH
        return e.low_temp, AH

    elif zone == ZoneLabel.DEHUM_OR_HEATING:
        return temp_for_rh(e.high_rh), AH

    elif zone == ZoneLabel.DEHUM_ONLY:
        return Tdb, ah_at(Tdb, e.high_rh)

    elif zone in (ZoneLabel.HUM_ONLY, ZoneLabel.HUM_OR_COOLING):
        return Tdb, ah_at(Tdb, e.low_rh)

    elif zone == ZoneLabel.COOLING_ONLY:
        if rh_from_absolute_humidity(e.high_temp, AH, settings) < e.low_rh:
            return temp_for_rh(e.low_rh), AH
        return e.high_temp, AH

    elif zone == ZoneLabel.COOLING_AND_DEHUM:
        return e.high_temp, ah_at(e.high_temp, e.high_rh)

    elif zone == ZoneLabel.HEATING_AND_HUM:
        return e.low_temp, ah_at(e.low_temp, e.low_rh)

    elif zone == ZoneLabel.HEATING_AND_DEHUM:
        return e.low_temp, ah_at(e.low_temp, e.high_rh)

    elif zone == ZoneLabel.COOLING_AND_HUM:
        return e.high_temp, ah_at(e.high_temp, e.low_rh)

    # Within, Undetermined
    return Tdb, AH


def _humidity_only_targets(
    Tdb: float,
    AH: float,
    humidity_zone: HumidityZone,
    envelope: Envelope,
    settings: PsychroSettings,
) -> tuple[float, float]:
    if humidity_zone == HumidityZone.DRY:
        return Tdb, absolute_humidity(Tdb, envelope.low_rh, settings)
    if humidity_zone == HumidityZone.HUMID:
        return Tdb, absolute_humidity(Tdb, envelope.high_rh, settings)
    return Tdb, AH


def _temperature_only_targets(
    Tdb: float,
    RH: float,
    AH: float,
    humidity_zone: HumidityZone,
    envelope: Envelope,
    settings: PsychroSettings,
) -> tuple[float, float]:
    if humidity_zone == HumidityZone.DRY:
        target_rh = envelope.low_rh
    elif humidity_zone == HumidityZone.HUMID:
        target_rh = envelope.high_rh
    else:
        return Tdb, AH

    Tdp = dew_point(Tdb, RH, settings)
    new_Tdb = temperature_from_dew_point(target_rh, Tdp, settings)
    return new_Tdb, absolute_humidity(new_Tdb, target_rh, settings)


def _round_inward(
    new_Tdb: float,
    new_AH: float,
    hold_moisture: bool,
    envelope: Envelope,
    settings: PsychroSettings,
) -> tuple[float, float]:
    """
    Round a target to reporting precision without leaving the envelope.

    A target on a bound can round to just outside it. Temperature is clamped
    to the envelope range, then the last digit is stepped inward until the RH
    of the rounded pair is back in range. Constant-moisture moves step
    temperature so that moisture stays untouched; the others step AH.
    Targets that were not on or inside a bound are only rounded.
    """
    e = envelope
    step = 10.0 ** -ROUND_DIGITS
    T = round(new_Tdb, ROUND_DIGITS)
    AH = round(new_AH, ROUND_DIGITS)

    if e.low_temp - BOUNDARY_TOL <= new_Tdb <= e.high_temp + BOUNDARY_TOL:
        T = min(max(T, e.low_temp), e.high_temp)

    rh = rh_from_absolute_humidity(new_Tdb, new_AH, settings)
    if not e.low_rh - BOUNDARY_TOL <= rh <= e.high_rh + BOUNDARY_TOL:
        return T, AH

    for _ in range(INWARD_ROUNDING_MAX_STEPS):
        rh = rh_from_absolute_humidity(T, AH, settings)
        if rh > e.high_rh:
            if hold_moisture and e.low_temp <= T + step <= e.high_temp:
                T = round(T + step, ROUND_DIGITS)
            else:
                AH = round(AH - step, ROUND_DIGITS)
        elif rh < e.low_rh:
            if hold_moisture and e.low_temp <= T - step <= e.high_temp:
                T = round(T - step, ROUND_DIGITS)
            else:
                AH = round(AH + step, ROUND_DIGITS)
        else:
            break
    return T, AH


def plan_adjustment(
    observation: Observation,
    envelope: Envelope = DEFAULT_ENVELOPE,
    zone: Optional[ZoneLabel] = None,
    settings: PsychroSettings = DEFAULT_SETTINGS,
    strategy: AdjustmentStrategy = AdjustmentStrategy.ZONE,
) -> AdjustmentPlan:
    """
    Plan the temperature and moisture change that brings an observation
    into the envelope.

    Args:
        observation: Current reading
        envelope: Target range
        zone: Zone label if already classified; computed otherwise
        settings: Calculation settings
        strategy: Which variables may change

    Returns:
        AdjustmentPlan with targets and deltas, rounded for reporting

    Raises:
        ConvergenceError: If a constant-moisture temperature move has no
            solution in the search range
        DomainError: For temperature_only at 0% RH (dew point undefined)
    """
    Tdb = observation.temperature
    RH = observation.relative_humidity
    AH = absolute_humidity(Tdb, RH, settings)

    classification = classify(observation, envelope, settings)
    if zone is None:
        zone = classification.zone

    if strategy == AdjustmentStrategy.ZONE:
        new_Tdb, new_AH = _zone_targets(Tdb, AH, zone, envelope, settings)
    elif strategy == AdjustmentStrategy.HUMIDITY_ONLY:
        new_Tdb, new_AH = _humidity_only_targets(
            Tdb, AH, classification.humidity_zone, envelope, settings
        )
    elif strategy == AdjustmentStrategy.TEMPERATURE_ONLY:
        new_Tdb, new_AH = _temperature_only_targets(
            Tdb, RH, AH, classification.humidity_zone, envelope, settings
        )
    else:
        raise ValueError(f"Unknown adjustment strategy: {strategy}")

    unchanged = new_Tdb == Tdb and new_AH == AH
    hold_moisture = new_AH == AH and not unchanged
    rep_Tdb, rep_AH = _round_inward(new_Tdb, new_AH, hold_moisture, envelope, settings)

    if unchanged:
        # No move: the reading is echoed with its AH rounded like a target
        AH = rep_AH
        new_RH = RH
    else:
        new_RH = round(rh_from_absolute_humidity(rep_Tdb, rep_AH, settings), ROUND_DIGITS)
    AH = round(AH, ROUND_DIGITS)

    return AdjustmentPlan(
        temperature=Tdb,
        relative_humidity=RH,
        absolute_humidity=AH,
        zone=zone,
        strategy=strategy,
        new_temperature=rep_Tdb,
        new_absolute_humidity=rep_AH,
        new_relative_humidity=new_RH,
        delta_temperature=round(rep_Tdb - Tdb, ROUND_DIGITS),
        delta_absolute_humidity=round(rep_AH - AH, ROUND_DIGITS),
        delta_relative_humidity=round(new_RH - RH, ROUND_DIGITS),
    )

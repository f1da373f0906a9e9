"""
Heating and cooling load engine.

Estimates the power needed to move a stream of air between two states:
  Sensible: Qs = ρ × cp × V × ΔT
  Total:    Qt = ρ × V × Δh
  Latent:   Ql = Qt - Qs
with ρ the moist air density at the entering state, V in m³/s, h in kJ/kg,
so Q comes out in kW.

Plant sizing helpers convert electrical heat gains to a cooling capacity and
estimate the air temperature leaving a chilled water coil.
"""

from psychroenv.config import CP_AIR, ROUND_DIGITS
from psychroenv.engine.errors import DomainError
from psychroenv.engine.humidity import DEFAULT_SETTINGS, air_density, enthalpy
from psychroenv.models.adjustment import AdjustmentPlan
from psychroenv.models.loads import LoadEstimate
from psychroenv.models.state import PsychroSettings


def sensible_heating(
    temp_1: float,
    temp_2: float,
    volume_flow_rate: float,
    rh: float = 50.0,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> float:
    """Sensible heat (kW) to take air from temp_1 to temp_2 at constant moisture."""
    rho = air_density(temp_1, rh, settings)
    return rho * CP_AIR * volume_flow_rate * (temp_2 - temp_1)


def total_heating(
    temp_1: float,
    rh_1: float,
    temp_2: float,
    rh_2: float,
    volume_flow_rate: float,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> float:
    """Total (sensible + latent) heat (kW) from the enthalpy change."""
    rho = air_density(temp_1, rh_1, settings)
    h1 = enthalpy(temp_1, rh_1, settings)
    h2 = enthalpy(temp_2, rh_2, settings)
    return rho * volume_flow_rate * (h2 - h1)


def cooling_power(
    temp_1: float,
    rh_1: float,
    temp_2: float,
    rh_2: float,
    volume_flow_rate: float,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> float:
    """Heat removed (kW) going from state 1 to state 2; 0 if the process adds heat."""
    removed = -total_heating(temp_1, rh_1, temp_2, rh_2, volume_flow_rate, settings)
    return max(removed, 0.0)


def cooling_capacity(
    power: float,
    power_factor: float = 0.85,
    safety_factor: float = 1.2,
    efficiency: float = 0.7,
) -> float:
    """
    Cooling capacity (kW) needed to reject the heat of electrical equipment.

    Args:
        power: Electrical power draw (W)
        power_factor: Share of the draw that ends up as heat
        safety_factor: Design margin
        efficiency: Cooling plant efficiency

    Returns:
        Required cooling capacity in kW
    """
    if efficiency <= 0:
        raise ValueError("efficiency must be positive")
    heat_kw = power / 1000.0 * power_factor
    return heat_kw * safety_factor / efficiency


def off_coil_temperature(
    on_coil_dry_bulb: float,
    chw_flow_temp: float,
    chw_return_temp: float,
    beta_factor: float = 0.9,
) -> float:
    """
    Supply air temperature (°C) leaving a chilled water coil.

    The air drops beta_factor of the way from the on-coil dry bulb towards the
    mean chilled water temperature. For a wet coil this is taken as the
    dew point of the supply air.
    """
    if not 0.0 <= beta_factor <= 1.0:
        raise ValueError("beta_factor must be between 0 and 1")
    avg_chw = (chw_flow_temp + chw_return_temp) / 2.0
    return on_coil_dry_bulb - (on_coil_dry_bulb - avg_chw) * beta_factor


def _heat_ratio(qs: float, qt: float) -> float:
    if qt == 0:
        raise DomainError("Total heat is zero; sensible heat ratio is undefined")
    return max(100.0 * qs / qt, 0.0)


def sensible_heat_ratio(
    temp_1: float,
    rh_1: float,
    temp_2: float,
    rh_2: float,
    volume_flow_rate: float,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> float:
    """
    Sensible heat as a percentage of total heat. Returns 0 when the sensible
    and total heat have opposite signs.
    """
    qt = total_heating(temp_1, rh_1, temp_2, rh_2, volume_flow_rate, settings)
    qs = sensible_heating(temp_1, temp_2, volume_flow_rate, rh_1, settings)
    return _heat_ratio(qs, qt)


def estimate_plan_load(
    plan: AdjustmentPlan,
    volume_flow_rate: float,
    settings: PsychroSettings = DEFAULT_SETTINGS,
) -> LoadEstimate:
    """Power needed to treat volume_flow_rate m³/s of air as the plan describes."""
    if volume_flow_rate <= 0:
        raise ValueError("volume_flow_rate must be positive")

    t1, rh1 = plan.temperature, plan.relative_humidity
    t2, rh2 = plan.new_temperature, plan.new_relative_humidity

    rho = air_density(t1, rh1, settings)
    qs = sensible_heating(t1, t2, volume_flow_rate, rh1, settings)
    qt = total_heating(t1, rh1, t2, rh2, volume_flow_rate, settings)
    qc = cooling_power(t1, rh1, t2, rh2, volume_flow_rate, settings)

    try:
        shr = round(_heat_ratio(qs, qt), ROUND_DIGITS)
    except DomainError:
        shr = None

    return LoadEstimate(
        volume_flow_rate=volume_flow_rate,
        air_density=round(rho, ROUND_DIGITS),
        mass_flow_rate=round(rho * volume_flow_rate, ROUND_DIGITS),
        sensible_kw=round(qs, ROUND_DIGITS),
        latent_kw=round(qt - qs, ROUND_DIGITS),
        total_kw=round(qt, ROUND_DIGITS),
        cooling_kw=round(qc, ROUND_DIGITS),
        sensible_heat_ratio=shr,
    )

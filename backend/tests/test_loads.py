"""
Tests for the heating / cooling load engine.

Hand calcs use ρ ≈ 1.2 kg/m³ and cp = 1.006 kJ/(kg·K), so 1 m³/s heated by
5 K takes about 6 kW.
"""

import pytest

from psychroenv.engine.adjustment import plan_adjustment
from psychroenv.engine.errors import DomainError
from psychroenv.engine.humidity import air_density
from psychroenv.engine.loads import (
    sensible_heating,
    total_heating,
    cooling_power,
    cooling_capacity,
    off_coil_temperature,
    sensible_heat_ratio,
    estimate_plan_load,
)
from psychroenv.models.state import Observation


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.01):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


def _load(t: float, rh: float, flow: float = 1.0):
    plan = plan_adjustment(Observation(temperature=t, relative_humidity=rh))
    return plan, estimate_plan_load(plan, flow)


# ---------------------------------------------------------------------------
# Test: building blocks
# ---------------------------------------------------------------------------

class TestSensibleHeating:

    def test_hand_calc(self):
        expected = air_density(20.0, 50.0) * 1.006 * 1.0 * 5.0
        assert sensible_heating(20.0, 25.0, 1.0) == approx(expected)
        assert sensible_heating(20.0, 25.0, 1.0) == approx(6.03, abs_tol=0.05)

    def test_cooling_is_negative(self):
        assert sensible_heating(25.0, 20.0, 1.0) < 0

    def test_scales_with_flow(self):
        assert sensible_heating(20.0, 25.0, 2.0) == approx(2 * sensible_heating(20.0, 25.0, 1.0))


class TestTotalHeating:

    def test_no_change_is_zero(self):
        assert total_heating(20.0, 50.0, 20.0, 50.0, 1.0) == 0.0

    def test_humidifying_adds_latent_heat(self):
        sensible = sensible_heating(20.0, 20.0, 1.0)
        total = total_heating(20.0, 30.0, 20.0, 50.0, 1.0)
        assert sensible == 0.0
        assert total > 0

    def test_cooling_power_positive_only_when_removing_heat(self):
        assert cooling_power(30.0, 70.0, 25.0, 60.0, 1.0) > 0
        assert cooling_power(10.0, 80.0, 16.0, 55.0, 1.0) == 0.0


class TestSensibleHeatRatio:

    def test_pure_sensible_close_to_100(self):
        # Small latent part from the RH drop at constant moisture
        shr = sensible_heat_ratio(20.0, 50.0, 25.0, 36.8, 1.0)
        assert 90.0 < shr <= 110.0

    def test_undefined_without_change(self):
        with pytest.raises(DomainError):
            sensible_heat_ratio(20.0, 50.0, 20.0, 50.0, 1.0)

    def test_never_negative(self):
        # Heating while drying hard: sensible and total have opposite signs
        assert sensible_heat_ratio(20.0, 90.0, 21.0, 20.0, 1.0) == 0.0


# ---------------------------------------------------------------------------
# Test: load for a plan
# ---------------------------------------------------------------------------

class TestPlanLoad:

    def test_within_needs_nothing(self):
        _, load = _load(20.0, 50.0)
        assert load.total_kw == 0.0
        assert load.sensible_kw == 0.0
        assert load.cooling_kw == 0.0
        assert load.sensible_heat_ratio is None

    def test_heating_only(self):
        _, load = _load(10.0, 80.0)
        assert load.sensible_kw > 0
        assert load.total_kw > 0
        assert load.cooling_kw == 0.0
        assert 85.0 < load.sensible_heat_ratio < 100.0

    def test_cooling_and_dehumidify(self):
        _, load = _load(30.0, 70.0)
        assert load.total_kw < 0
        assert load.latent_kw < 0
        assert load.cooling_kw == approx(-load.total_kw)

    def test_mass_flow(self):
        _, load = _load(10.0, 80.0, flow=2.5)
        assert load.volume_flow_rate == 2.5
        assert load.mass_flow_rate == approx(load.air_density * 2.5)

    @pytest.mark.parametrize("t, rh", [(10.0, 80.0), (30.0, 70.0), (30.0, 10.0), (20.0, 90.0)])
    def test_shr_matches_sensible_heat_ratio(self, t, rh):
        plan, load = _load(t, rh)
        expected = sensible_heat_ratio(
            plan.temperature, plan.relative_humidity,
            plan.new_temperature, plan.new_relative_humidity, 1.0,
        )
        assert load.sensible_heat_ratio == pytest.approx(expected, abs=1e-4)

    def test_parts_add_up(self):
        _, load = _load(30.0, 10.0)
        assert load.sensible_kw + load.latent_kw == approx(load.total_kw, abs_tol=2e-4)

    def test_non_positive_flow_rejected(self):
        plan = plan_adjustment(Observation(temperature=10.0, relative_humidity=80.0))
        with pytest.raises(ValueError):
            estimate_plan_load(plan, 0.0)


# ---------------------------------------------------------------------------
# Test: plant sizing
# ---------------------------------------------------------------------------

class TestCoolingCapacity:

    def test_hand_calc(self):
        # 1 kW draw × 0.85 × 1.2 / 0.7
        assert cooling_capacity(1000.0) == pytest.approx(1.457143, abs=1e-6)

    def test_no_margins(self):
        assert cooling_capacity(2500.0, 1.0, 1.0, 1.0) == pytest.approx(2.5)

    def test_zero_efficiency_rejected(self):
        with pytest.raises(ValueError):
            cooling_capacity(1000.0, efficiency=0.0)


class TestOffCoilTemperature:

    def test_hand_calc(self):
        # Mean chilled water 9°C; air drops 90% of the 17 K difference
        assert off_coil_temperature(26.0, 6.0, 12.0) == pytest.approx(10.7)

    def test_ideal_coil_reaches_mean_water_temperature(self):
        assert off_coil_temperature(26.0, 6.0, 12.0, beta_factor=1.0) == pytest.approx(9.0)

    def test_beta_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            off_coil_temperature(26.0, 6.0, 12.0, beta_factor=1.5)

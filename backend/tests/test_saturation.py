"""
Tests for the saturation vapour pressure models.

Reference values are taken from the WMO / CRC tables of saturation vapour
pressure over water and ice, and cross-checked against psychrolib.
"""

import pytest
import psychrolib

from psychroenv.config import SaturationModel, DEFAULT_PRESSURE_HPA
from psychroenv.engine.saturation import (
    saturation_pressure,
    buck_coefficients,
    BUCK_WATER,
    BUCK_ICE,
)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.01):
    """
    Approximate comparison helper.
    Default tolerance: 1% relative or 0.01 hPa absolute (whichever is larger).
    """
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


ALL_MODELS = list(SaturationModel)


def _frange(start: float, stop: float, step: float) -> list[float]:
    n = int(round((stop - start) / step))
    return [start + i * step for i in range(n + 1)]


# ---------------------------------------------------------------------------
# Test: reference values at 20°C
# ---------------------------------------------------------------------------

class TestReferenceValues:
    """20°C saturation pressure is 23.39 hPa in the standard tables."""

    def test_iapws(self):
        assert saturation_pressure(20.0, SaturationModel.IAPWS) == approx(23.39)

    def test_buck(self):
        assert saturation_pressure(20.0, SaturationModel.BUCK) == approx(23.38)

    def test_magnus(self):
        assert saturation_pressure(20.0, SaturationModel.MAGNUS) == approx(23.33)

    def test_vaisala(self):
        assert saturation_pressure(20.0, SaturationModel.VAISALA) == approx(23.39)

    def test_vaisala_at_freezing(self):
        # Triple point pressure, 611.2 Pa
        assert saturation_pressure(0.0, SaturationModel.VAISALA) == approx(6.112)

    def test_buck_over_ice(self):
        # -10°C over ice, 2.599 hPa
        assert saturation_pressure(-10.0, SaturationModel.BUCK) == approx(2.599)

    def test_default_model_is_buck(self):
        assert saturation_pressure(20.0) == saturation_pressure(20.0, SaturationModel.BUCK)

    def test_unknown_model_raises(self):
        with pytest.raises(ValueError):
            saturation_pressure(20.0, "Goff-Gratch")


# ---------------------------------------------------------------------------
# Test: agreement between models and with psychrolib
# ---------------------------------------------------------------------------

class TestModelAgreement:

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_against_psychrolib(self, model):
        psychrolib.SetUnitSystem(psychrolib.SI)
        for t in _frange(0.5, 50.0, 0.5):
            expected = psychrolib.GetSatVapPres(t) / 100.0  # Pa → hPa
            assert saturation_pressure(t, model) == pytest.approx(expected, rel=0.01)

    def test_iapws_close_to_psychrolib(self):
        psychrolib.SetUnitSystem(psychrolib.SI)
        for t in (5.0, 20.0, 35.0):
            expected = psychrolib.GetSatVapPres(t) / 100.0
            assert saturation_pressure(t, SaturationModel.IAPWS) == pytest.approx(
                expected, rel=0.002
            )


# ---------------------------------------------------------------------------
# Test: monotonicity and positivity
# ---------------------------------------------------------------------------

class TestMonotonicity:
    """Pws must be positive and strictly increasing over -50..100°C."""

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_strictly_increasing(self, model):
        temps = _frange(-50.0, 100.0, 0.5)
        values = [saturation_pressure(t, model) for t in temps]
        assert all(v > 0 for v in values)
        for lower, upper in zip(values, values[1:]):
            assert upper > lower

    @pytest.mark.parametrize("model", [SaturationModel.BUCK, SaturationModel.VAISALA])
    def test_increasing_across_phase_branch(self, model):
        assert saturation_pressure(-0.01, model) < saturation_pressure(0.0, model)


# ---------------------------------------------------------------------------
# Test: Buck ice / water branch
# ---------------------------------------------------------------------------

class TestBuckBranch:

    def test_water_branch_at_zero(self):
        assert buck_coefficients(0.0) is BUCK_WATER
        assert saturation_pressure(0.0, SaturationModel.BUCK) == pytest.approx(6.1121)

    def test_ice_branch_below_zero(self):
        assert buck_coefficients(-1e-9) is BUCK_ICE
        assert saturation_pressure(-1e-9, SaturationModel.BUCK) == pytest.approx(
            6.1115, abs=1e-6
        )

    def test_step_at_zero_is_kept(self):
        # The two branches do not meet at 0°C
        water = saturation_pressure(0.0, SaturationModel.BUCK)
        ice = saturation_pressure(-1e-9, SaturationModel.BUCK)
        assert water - ice == pytest.approx(0.0006, abs=1e-6)


# ---------------------------------------------------------------------------
# Test: pressure dependence
# ---------------------------------------------------------------------------

class TestPressure:

    def test_magnus_scales_with_pressure(self):
        sea_level = saturation_pressure(20.0, SaturationModel.MAGNUS, DEFAULT_PRESSURE_HPA)
        half = saturation_pressure(20.0, SaturationModel.MAGNUS, DEFAULT_PRESSURE_HPA / 2)
        assert half == pytest.approx(sea_level / 2)

    @pytest.mark.parametrize(
        "model",
        [SaturationModel.IAPWS, SaturationModel.BUCK, SaturationModel.VAISALA],
    )
    def test_other_models_ignore_pressure(self, model):
        assert saturation_pressure(20.0, model, 800.0) == saturation_pressure(20.0, model)

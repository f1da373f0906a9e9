"""
Tests for the collection risk metrics.

Hand calcs at 20°C / 50% RH: PI ≈ 41.8 years (Reilly), IPI kinetics ≈ 44.6
years, lifetime multiplier exactly 1, wood EMC ≈ 9.3%.
"""

import logging

import pytest

from psychroenv.engine.conservation import (
    preservation_index,
    ipi_preservation_index,
    lifetime_multiplier,
    emc_wood,
    conservation_metrics,
)
from psychroenv.engine.errors import DomainError


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.01):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


# ---------------------------------------------------------------------------
# Test: Preservation Index
# ---------------------------------------------------------------------------

class TestPreservationIndex:

    def test_room_conditions(self):
        assert preservation_index(20.0, 50.0) == approx(41.76)

    def test_cooler_is_longer(self):
        assert preservation_index(10.0, 50.0) > preservation_index(20.0, 50.0)

    def test_drier_is_longer(self):
        # PI is inversely proportional to RH
        assert preservation_index(20.0, 25.0) == approx(2 * preservation_index(20.0, 50.0))

    def test_activation_energy(self):
        lower_ea = preservation_index(20.0, 50.0, activation_energy=80000.0)
        assert lower_ea < preservation_index(20.0, 50.0)

    def test_zero_rh_raises(self):
        with pytest.raises(DomainError):
            preservation_index(20.0, 0.0)


class TestIpiPreservationIndex:

    def test_room_conditions(self):
        assert ipi_preservation_index(20.0, 50.0) == approx(44.63)

    def test_cooler_is_longer(self):
        assert ipi_preservation_index(10.0, 50.0) > ipi_preservation_index(20.0, 50.0)

    def test_defined_at_zero_rh(self):
        assert ipi_preservation_index(20.0, 0.0) > ipi_preservation_index(20.0, 50.0)


# ---------------------------------------------------------------------------
# Test: lifetime multiplier
# ---------------------------------------------------------------------------

class TestLifetimeMultiplier:

    def test_reference_conditions(self):
        assert lifetime_multiplier(20.0, 50.0) == pytest.approx(1.0, abs=1e-12)

    def test_five_degree_drop_doubles_life(self):
        assert lifetime_multiplier(15.0, 50.0) == approx(2.04)

    def test_halving_rh_more_than_doubles_life(self):
        assert lifetime_multiplier(20.0, 25.0) == approx(2 ** 1.3)

    def test_varnish_is_less_temperature_sensitive(self):
        paper = lifetime_multiplier(10.0, 50.0)
        varnish = lifetime_multiplier(10.0, 50.0, activation_energy=70.0)
        assert 1.0 < varnish < paper

    def test_zero_rh_raises(self):
        with pytest.raises(DomainError):
            lifetime_multiplier(20.0, 0.0)


# ---------------------------------------------------------------------------
# Test: wood equilibrium moisture content
# ---------------------------------------------------------------------------

class TestEmcWood:

    def test_room_conditions(self):
        assert emc_wood(20.0, 50.0) == approx(9.27, abs_tol=0.05)

    def test_dry_air(self):
        assert emc_wood(20.0, 0.0) == 0.0

    def test_increases_with_rh(self):
        values = [emc_wood(20.0, rh) for rh in range(0, 101, 10)]
        assert values == sorted(values)
        assert values[-1] > 20.0

    def test_outside_fit_range_raises(self):
        with pytest.raises(DomainError):
            emc_wood(150.0, 50.0)


# ---------------------------------------------------------------------------
# Test: combined metrics
# ---------------------------------------------------------------------------

class TestConservationMetrics:

    def test_all_metrics(self):
        m = conservation_metrics(20.0, 50.0)
        assert m.preservation_index == approx(41.76)
        assert m.ipi_preservation_index == approx(44.63)
        assert m.lifetime_multiplier == 1.0
        assert m.emc_wood == approx(9.27, abs_tol=0.05)

    def test_undefined_metrics_are_none(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="psychroenv.engine.conservation"):
            m = conservation_metrics(20.0, 0.0)
        assert m.preservation_index is None
        assert m.lifetime_multiplier is None
        assert m.ipi_preservation_index is not None
        assert m.emc_wood == 0.0
        assert "undefined" in caplog.text

    def test_hot_reading_drops_only_emc(self):
        m = conservation_metrics(150.0, 5.0)
        assert m.emc_wood is None
        assert m.preservation_index is not None

    def test_activation_energies_passed_through(self):
        m = conservation_metrics(10.0, 50.0, lm_activation_energy=70.0)
        assert m.lifetime_multiplier == approx(lifetime_multiplier(10.0, 50.0, 70.0))

"""
Tests for batch processing of logger time series.
"""

import logging
from datetime import datetime, timedelta

import pytest

from psychroenv.engine import batch
from psychroenv.engine.batch import process_observations, summarize
from psychroenv.models.adjustment import AdjustmentStrategy
from psychroenv.models.zones import ZoneLabel


START = datetime(2024, 1, 1, 0, 0)


def _records(values):
    return [
        {"timestamp": START + timedelta(hours=i), "temperature": t, "relative_humidity": rh}
        for i, (t, rh) in enumerate(values)
    ]


# ---------------------------------------------------------------------------
# Test: clean series
# ---------------------------------------------------------------------------

class TestCleanSeries:

    def setup_method(self):
        self.result = process_observations(
            _records([(20.0, 50.0), (10.0, 80.0), (30.0, 70.0), (21.0, 45.0)])
        )

    def test_all_rows_processed(self):
        assert len(self.result.rows) == 4
        assert self.result.errors == []

    def test_rows_keep_order_and_timestamp(self):
        assert [r.index for r in self.result.rows] == [0, 1, 2, 3]
        assert self.result.rows[1].timestamp == START + timedelta(hours=1)

    def test_row_contents(self):
        row = self.result.rows[1]
        assert row.state.temperature == 10.0
        assert row.classification.zone == ZoneLabel.HEATING_ONLY
        assert row.plan.new_temperature == pytest.approx(16.0)

    def test_row_conservation_metrics(self):
        metrics = self.result.rows[0].conservation
        assert metrics.lifetime_multiplier == 1.0
        assert metrics.preservation_index == pytest.approx(41.76, abs=0.05)
        assert metrics.emc_wood == pytest.approx(9.27, abs=0.05)

    def test_summary_counts(self):
        summary = self.result.summary
        assert summary.total_rows == 4
        assert summary.valid_rows == 4
        assert summary.error_rows == 0
        assert summary.zone_counts == {
            ZoneLabel.WITHIN.value: 2,
            ZoneLabel.HEATING_ONLY.value: 1,
            ZoneLabel.COOLING_AND_DEHUM.value: 1,
        }
        assert summary.fraction_within == pytest.approx(0.5)

    def test_summary_stats(self):
        stats = self.result.summary.stats["temperature"]
        assert stats.mean == pytest.approx(20.25)
        assert stats.min == 10.0
        assert stats.max == 30.0
        assert set(self.result.summary.stats) == {
            "temperature", "relative_humidity", "dew_point", "absolute_humidity",
        }


# ---------------------------------------------------------------------------
# Test: bad rows do not abort the batch
# ---------------------------------------------------------------------------

class TestBadRows:

    def setup_method(self):
        records = _records([(20.0, 50.0), (20.0, 0.0), (20.0, 120.0), (10.0, 80.0)])
        records.append({"timestamp": None, "temperature": 20.0})
        records.append({"temperature": None, "relative_humidity": 50.0})
        self.records = records

    def test_errors_reported_by_index(self, caplog):
        with caplog.at_level(logging.WARNING, logger="psychroenv.engine.batch"):
            result = process_observations(self.records)

        assert [r.index for r in result.rows] == [0, 3]
        assert [e.index for e in result.errors] == [1, 2, 4, 5]
        assert result.errors[0].timestamp == START + timedelta(hours=1)
        assert "Skipping row 1" in caplog.text

    def test_zero_rh_is_a_row_error(self):
        result = process_observations(self.records)
        assert "RH=0.0%" in result.errors[0].error

    def test_summary_counts_errors(self):
        summary = process_observations(self.records).summary
        assert summary.total_rows == 6
        assert summary.valid_rows == 2
        assert summary.error_rows == 4

    def test_unphysical_temperature_is_a_row_error(self):
        result = process_observations([
            {"temperature": -279.82, "relative_humidity": 50.0},
            {"temperature": 20.0, "relative_humidity": 50.0},
        ])
        assert [r.index for r in result.rows] == [1]
        assert [e.index for e in result.errors] == [0]
        assert result.summary.zone_counts == {ZoneLabel.WITHIN.value: 1}

    def test_arithmetic_error_is_a_row_error(self, monkeypatch):
        real_derive_state = batch.derive_state

        def derive_state(observation, settings):
            if observation.temperature == 0.0:
                raise ZeroDivisionError("float division by zero")
            return real_derive_state(observation, settings)

        monkeypatch.setattr(batch, "derive_state", derive_state)
        result = process_observations(_records([(0.0, 50.0), (20.0, 50.0)]))
        assert [r.index for r in result.rows] == [1]
        assert result.errors[0].index == 0
        assert "division by zero" in result.errors[0].error


# ---------------------------------------------------------------------------
# Test: options and edge cases
# ---------------------------------------------------------------------------

class TestOptions:

    def test_strategy_applies_to_every_row(self):
        result = process_observations(
            _records([(10.0, 80.0), (30.0, 10.0)]),
            strategy=AdjustmentStrategy.HUMIDITY_ONLY,
        )
        for row in result.rows:
            assert row.plan.strategy == AdjustmentStrategy.HUMIDITY_ONLY
            assert row.plan.delta_temperature == 0.0

    def test_empty_series(self):
        result = process_observations([])
        assert result.rows == []
        assert result.summary.total_rows == 0
        assert result.summary.fraction_within is None
        assert result.summary.zone_counts == {}

    def test_summarize_with_only_errors(self):
        summary = summarize([], n_errors=3)
        assert summary.total_rows == 3
        assert summary.valid_rows == 0
        assert summary.stats == {}

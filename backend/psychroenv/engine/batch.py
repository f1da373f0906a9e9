"""
Run the derivation → classification → planning pipeline over a time series.

Each record is processed independently. A record that cannot be processed
(missing value, reading out of range, RH = 0, no root in range, float
overflow) becomes a BatchError and the rest of the batch carries on.
"""

import logging
from typing import Any, Iterable, Mapping

import numpy as np

from psychroenv.config import ROUND_DIGITS
from psychroenv.engine.adjustment import plan_adjustment
from psychroenv.engine.conservation import conservation_metrics
from psychroenv.engine.humidity import DEFAULT_SETTINGS
from psychroenv.engine.state_resolver import derive_state
from psychroenv.engine.zones import DEFAULT_ENVELOPE, classify
from psychroenv.models.adjustment import AdjustmentStrategy
from psychroenv.models.batch import (
    BatchRow,
    BatchError,
    BatchSummary,
    BatchOutput,
    FieldStats,
)
from psychroenv.models.state import Observation, PsychroSettings
from psychroenv.models.zones import Envelope, ZoneLabel

logger = logging.getLogger(__name__)

# DerivedState fields summarised over the batch
_SUMMARY_FIELDS = ("temperature", "relative_humidity", "dew_point", "absolute_humidity")


def process_observations(
    records: Iterable[Mapping[str, Any]],
    envelope: Envelope = DEFAULT_ENVELOPE,
    settings: PsychroSettings = DEFAULT_SETTINGS,
    strategy: AdjustmentStrategy = AdjustmentStrategy.ZONE,
) -> BatchOutput:
    """
    Derive, classify, plan and score the collection risk of every record.

    Args:
        records: Mappings with "temperature", "relative_humidity" and an
            optional "timestamp"
        envelope: Target range shared by all rows
        settings: Calculation settings shared by all rows
        strategy: Adjustment strategy for every row

    Returns:
        BatchOutput with successful rows, per-row errors and a summary.
    """
    rows: list[BatchRow] = []
    errors: list[BatchError] = []

    for idx, rec in enumerate(records):
        timestamp = rec.get("timestamp")
        try:
            observation = Observation(
                temperature=rec["temperature"],
                relative_humidity=rec["relative_humidity"],
                timestamp=timestamp,
            )
            state = derive_state(observation, settings)
            classification = classify(observation, envelope, settings)
            plan = plan_adjustment(
                observation, envelope, classification.zone, settings, strategy
            )
            conservation = conservation_metrics(
                observation.temperature, observation.relative_humidity
            )
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.warning("Skipping row %d (timestamp=%s): %s", idx, timestamp, e)
            errors.append(BatchError(index=idx, timestamp=timestamp, error=str(e)))
            continue

        rows.append(BatchRow(
            index=idx,
            timestamp=observation.timestamp,
            state=state,
            classification=classification,
            plan=plan,
            conservation=conservation,
        ))

    return BatchOutput(
        rows=rows,
        errors=errors,
        summary=summarize(rows, n_errors=len(errors)),
    )


def summarize(rows: list[BatchRow], n_errors: int = 0) -> BatchSummary:
    """Zone counts and per-field mean/min/max over the processed rows."""
    summary = BatchSummary(
        total_rows=len(rows) + n_errors,
        valid_rows=len(rows),
        error_rows=n_errors,
    )
    if not rows:
        return summary

    zones = np.array([r.classification.zone.value for r in rows])
    labels, counts = np.unique(zones, return_counts=True)
    summary.zone_counts = {str(label): int(n) for label, n in zip(labels, counts)}
    summary.fraction_within = round(
        float(np.mean(zones == ZoneLabel.WITHIN.value)), ROUND_DIGITS
    )

    for field in _SUMMARY_FIELDS:
        values = np.array([getattr(r.state, field) for r in rows], dtype=float)
        summary.stats[field] = FieldStats(
            mean=round(float(values.mean()), ROUND_DIGITS),
            min=round(float(values.min()), ROUND_DIGITS),
            max=round(float(values.max()), ROUND_DIGITS),
        )

    return summary

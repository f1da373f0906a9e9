"""
Pydantic models for batch processing of time series observations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from psychroenv.models.adjustment import AdjustmentPlan, AdjustmentStrategy
from psychroenv.models.conservation import ConservationMetrics
from psychroenv.models.state import DerivedState, PsychroSettings
from psychroenv.models.zones import ClassificationResult, Envelope


class BatchRecord(BaseModel):
    """
    One raw row of a logger time series.

    Values are optional here so a single bad row is reported as a row error
    instead of rejecting the whole request.
    """

    timestamp: Optional[datetime] = None
    temperature: Optional[float] = None
    relative_humidity: Optional[float] = None


class BatchInput(BaseModel):
    records: list[BatchRecord]
    envelope: Envelope = Field(default_factory=Envelope)
    settings: PsychroSettings = Field(default_factory=PsychroSettings)
    strategy: AdjustmentStrategy = AdjustmentStrategy.ZONE


class BatchRow(BaseModel):
    index: int
    timestamp: Optional[datetime] = None
    state: DerivedState
    classification: ClassificationResult
    plan: AdjustmentPlan
    conservation: ConservationMetrics


class BatchError(BaseModel):
    index: int
    timestamp: Optional[datetime] = None
    error: str


class FieldStats(BaseModel):
    mean: float
    min: float
    max: float


class BatchSummary(BaseModel):
    total_rows: int
    valid_rows: int
    error_rows: int
    zone_counts: dict[str, int] = Field(default_factory=dict)
    fraction_within: Optional[float] = None
    stats: dict[str, FieldStats] = Field(default_factory=dict)


class BatchOutput(BaseModel):
    rows: list[BatchRow]
    errors: list[BatchError]
    summary: BatchSummary

"""
Pydantic models for adjustment planning.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from psychroenv.models.state import Observation, PsychroSettings
from psychroenv.models.zones import Envelope, ZoneLabel


class AdjustmentStrategy(str, Enum):
    ZONE = "zone"                          # per-zone mix of temperature and moisture change
    HUMIDITY_ONLY = "humidity_only"        # hold temperature, change moisture
    TEMPERATURE_ONLY = "temperature_only"  # hold dew point, change temperature


class AdjustmentInput(BaseModel):
    """Input for planning the correction of one observation."""

    observation: Observation
    envelope: Envelope = Field(default_factory=Envelope)
    settings: PsychroSettings = Field(default_factory=PsychroSettings)
    strategy: AdjustmentStrategy = AdjustmentStrategy.ZONE
    zone: Optional[ZoneLabel] = Field(
        default=None,
        description="Precomputed zone; classified from the observation when omitted",
    )


class AdjustmentPlan(BaseModel):
    """Target state that brings an observation onto or inside the envelope."""

    # Input echo
    temperature: float = Field(..., description="Original temperature (°C)")
    relative_humidity: float = Field(..., description="Original RH (%)")
    absolute_humidity: float = Field(..., description="Original absolute humidity (g/m³)")
    zone: ZoneLabel
    strategy: AdjustmentStrategy

    # Targets
    new_temperature: float = Field(..., description="Target temperature (°C)")
    new_absolute_humidity: float = Field(..., description="Target absolute humidity (g/m³)")
    new_relative_humidity: float = Field(..., description="RH at the target state (%)")

    # Changes required
    delta_temperature: float = Field(..., description="°C")
    delta_absolute_humidity: float = Field(..., description="g/m³")
    delta_relative_humidity: float = Field(..., description="%")

"""
Pydantic models for heating / cooling load estimates.
"""

from typing import Optional

from pydantic import BaseModel, Field

from psychroenv.models.adjustment import AdjustmentPlan, AdjustmentStrategy
from psychroenv.models.state import Observation, PsychroSettings
from psychroenv.models.zones import Envelope


class LoadInput(BaseModel):
    """Input for estimating the power needed to carry out an adjustment."""

    observation: Observation
    envelope: Envelope = Field(default_factory=Envelope)
    settings: PsychroSettings = Field(default_factory=PsychroSettings)
    strategy: AdjustmentStrategy = AdjustmentStrategy.ZONE
    volume_flow_rate: float = Field(..., gt=0.0, description="Air volume flow (m³/s)")


class LoadEstimate(BaseModel):
    """Power to move a stream of air from the observed to the target state."""

    volume_flow_rate: float  # m³/s
    air_density: float       # kg/m³ at the entering state
    mass_flow_rate: float    # kg/s

    sensible_kw: float = Field(..., description="Sensible heat (kW); negative = removed")
    latent_kw: float = Field(..., description="Latent heat (kW); negative = removed")
    total_kw: float = Field(..., description="Total heat (kW); negative = removed")
    cooling_kw: float = Field(..., description="Cooling power (kW), 0 when heating")
    sensible_heat_ratio: Optional[float] = Field(
        None, description="Sensible / total (%); None when the state does not change"
    )


class LoadOutput(BaseModel):
    plan: AdjustmentPlan
    load: LoadEstimate

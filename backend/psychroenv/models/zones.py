"""
Pydantic models for the target envelope and zone classification.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from psychroenv.config import (
    DEFAULT_LOW_TEMP,
    DEFAULT_HIGH_TEMP,
    DEFAULT_LOW_RH,
    DEFAULT_HIGH_RH,
    OBSERVATION_TEMP_MIN,
    OBSERVATION_TEMP_MAX,
)
from psychroenv.models.state import Observation, PsychroSettings


class ZoneLabel(str, Enum):
    WITHIN = "Within"
    HEATING_ONLY = "Heating only"
    DEHUM_OR_HEATING = "Dehumidify or heating"
    DEHUM_ONLY = "Dehumidify only"
    HUM_ONLY = "Humidify only"
    COOLING_AND_DEHUM = "Cooling and dehumidify"
    HEATING_AND_HUM = "Heating and humidify"
    HEATING_AND_DEHUM = "Heating and dehumidify"
    HUM_OR_COOLING = "Humidify or cooling"
    COOLING_ONLY = "Cooling only"
    COOLING_AND_HUM = "Cooling and humidify"
    UNDETERMINED = "Undetermined"


class TRHZone(str, Enum):
    """Plain temperature/RH box category, ignoring the transition curves."""

    WITHIN = "Within"
    COLD = "Cold"
    COLD_AND_HUMID = "Cold and humid"
    COLD_AND_DRY = "Cold and dry"
    HOT = "Hot"
    HOT_AND_HUMID = "Hot and humid"
    HOT_AND_DRY = "Hot and dry"
    HUMID = "Humid"
    DRY = "Dry"
    UNDETERMINED = "Undetermined"


class TemperatureZone(str, Enum):
    WITHIN = "Within"
    COLD = "Cold"
    HOT = "Hot"
    UNDETERMINED = "Undetermined"


class HumidityZone(str, Enum):
    WITHIN = "Within"
    DRY = "Dry"
    HUMID = "Humid"
    UNDETERMINED = "Undetermined"


class Envelope(BaseModel):
    """Target temperature / RH range. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    low_temp: float = Field(
        default=DEFAULT_LOW_TEMP, ge=OBSERVATION_TEMP_MIN, le=OBSERVATION_TEMP_MAX,
        allow_inf_nan=False, description="°C",
    )
    high_temp: float = Field(
        default=DEFAULT_HIGH_TEMP, ge=OBSERVATION_TEMP_MIN, le=OBSERVATION_TEMP_MAX,
        allow_inf_nan=False, description="°C",
    )
    low_rh: float = Field(default=DEFAULT_LOW_RH, ge=0.0, le=100.0, description="%")
    high_rh: float = Field(default=DEFAULT_HIGH_RH, ge=0.0, le=100.0, description="%")

    @model_validator(mode="after")
    def _check_order(self) -> "Envelope":
        if self.low_temp >= self.high_temp:
            raise ValueError(
                f"low_temp ({self.low_temp}) must be below high_temp ({self.high_temp})"
            )
        if self.low_rh >= self.high_rh:
            raise ValueError(
                f"low_rh ({self.low_rh}) must be below high_rh ({self.high_rh})"
            )
        return self


class ZoneFlags(BaseModel):
    """Boolean position of an observation relative to the envelope."""

    temp_lower: bool
    temp_within: bool
    temp_higher: bool
    rh_lower: bool
    rh_within: bool
    rh_higher: bool
    rh_below_curve: bool
    rh_within_curve: bool
    rh_above_curve: bool


class ClassifyInput(BaseModel):
    """Input for classifying one observation against an envelope."""

    observation: Observation
    envelope: Envelope = Field(default_factory=Envelope)
    settings: PsychroSettings = Field(default_factory=PsychroSettings)


class ClassificationResult(BaseModel):
    """Zone label plus the intermediate values used to pick it."""

    temperature: float
    relative_humidity: float
    absolute_humidity: float = Field(..., description="Absolute humidity (g/m³)")

    zone: ZoneLabel
    trh_zone: TRHZone
    temperature_zone: TemperatureZone
    humidity_zone: HumidityZone
    flags: ZoneFlags

    rh_low_curve: float = Field(
        ..., description="RH (%) at this temperature with the AH of the (low_temp, low_rh) corner"
    )
    rh_high_curve: float = Field(
        ..., description="RH (%) at this temperature with the AH of the (high_temp, high_rh) corner"
    )

    d_temperature: float = Field(
        ..., description="Temperature minus the violated bound (°C), 0 when within"
    )
    d_relative_humidity: float = Field(
        ..., description="RH minus the violated bound (%), 0 when within"
    )

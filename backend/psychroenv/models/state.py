"""
Pydantic models for observations, calculation settings and derived state.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from psychroenv.config import (
    SaturationModel,
    DewPointMethod,
    AbsoluteHumidityMethod,
    DEFAULT_PRESSURE_HPA,
    DEFAULT_SATURATION_MODEL,
    DEFAULT_DEW_POINT_METHOD,
    DEFAULT_AH_METHOD,
    OBSERVATION_TEMP_MIN,
    OBSERVATION_TEMP_MAX,
)


class Observation(BaseModel):
    """A single temperature / relative humidity reading."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(
        ..., ge=OBSERVATION_TEMP_MIN, le=OBSERVATION_TEMP_MAX, allow_inf_nan=False,
        description="Air temperature (°C)",
    )
    relative_humidity: float = Field(
        ..., ge=0.0, le=100.0, allow_inf_nan=False,
        description="Relative humidity (0-100%)",
    )
    timestamp: Optional[datetime] = Field(
        default=None, description="Optional time of the reading"
    )


class PsychroSettings(BaseModel):
    """
    Formula choices threaded through every derivation.

    The dew point and absolute humidity inversions only round-trip when
    the same family is used in both directions, so these are carried as
    one object instead of being picked per call.
    """

    model_config = ConfigDict(frozen=True)

    saturation_model: SaturationModel = Field(
        default=DEFAULT_SATURATION_MODEL,
        description="Saturation vapour pressure formulation",
    )
    dew_point_method: DewPointMethod = Field(
        default=DEFAULT_DEW_POINT_METHOD,
        description="Closed-form family for dew point and its inverses",
    )
    absolute_humidity_method: AbsoluteHumidityMethod = Field(
        default=DEFAULT_AH_METHOD,
        description="Formula for absolute humidity and its inverse",
    )
    pressure: float = Field(
        default=DEFAULT_PRESSURE_HPA, gt=0.0, allow_inf_nan=False,
        description="Atmospheric pressure (hPa)",
    )


class DerivedStateInput(BaseModel):
    """Input model for deriving a full state from one observation."""

    observation: Observation
    settings: PsychroSettings = Field(default_factory=PsychroSettings)


class DerivedState(BaseModel):
    """All psychrometric quantities derived from one observation."""

    # Input echo
    temperature: float = Field(..., description="Air temperature (°C)")
    relative_humidity: float = Field(..., description="Relative humidity (%)")
    settings: PsychroSettings

    # Derived properties
    saturation_vapor_pressure: float = Field(..., description="Saturation vapour pressure (hPa)")
    actual_vapor_pressure: float = Field(..., description="Partial vapour pressure (hPa)")
    dew_point: float = Field(..., description="Dew point (°C)")
    frost_point: float = Field(..., description="Frost point over ice (°C)")
    absolute_humidity: float = Field(..., description="Absolute humidity (g/m³)")
    mixing_ratio: float = Field(..., description="Mixing ratio (g/kg)")
    humidity_ratio: float = Field(..., description="Humidity ratio (g/kg)")
    specific_humidity: float = Field(..., description="Specific humidity (g/kg)")
    air_density: float = Field(..., description="Moist air density (kg/m³)")
    enthalpy: float = Field(..., description="Specific enthalpy (kJ/kg)")

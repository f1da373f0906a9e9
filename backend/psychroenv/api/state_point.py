"""
API routes for saturation pressure and derived state resolution.
"""

from fastapi import APIRouter, HTTPException, Query

from psychroenv.config import (
    SaturationModel,
    DewPointMethod,
    DEFAULT_PRESSURE_HPA,
    ROUND_DIGITS,
    ROUND_DIGITS_PRESSURE,
    OBSERVATION_TEMP_MIN,
    OBSERVATION_TEMP_MAX,
)
from psychroenv.engine.humidity import temperature_from_dew_point
from psychroenv.engine.saturation import saturation_pressure
from psychroenv.engine.state_resolver import derive_state, pressure_from_altitude
from psychroenv.models.state import DerivedStateInput, DerivedState, PsychroSettings

router = APIRouter(prefix="/api/v1", tags=["state"])


@router.post("/state", response_model=DerivedState)
async def create_state(data: DerivedStateInput) -> DerivedState:
    """
    Resolve every derived psychrometric quantity for one observation.

    Returns saturation and actual vapour pressure, dew and frost point,
    absolute humidity, mixing/humidity ratio, specific humidity, air density
    and enthalpy.
    """
    try:
        return derive_state(data.observation, data.settings)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/saturation-pressure")
async def get_saturation_pressure(
    temperature: float = Query(..., ge=OBSERVATION_TEMP_MIN, le=OBSERVATION_TEMP_MAX),
    model: SaturationModel = SaturationModel.BUCK,
    pressure: float = Query(DEFAULT_PRESSURE_HPA, gt=0.0),
) -> dict:
    """Saturation vapour pressure (hPa) at a temperature (°C)."""
    try:
        pws = saturation_pressure(temperature, model, pressure)
        return {
            "temperature": temperature,
            "model": model,
            "pressure": pressure,
            "saturation_vapor_pressure": round(pws, ROUND_DIGITS_PRESSURE),
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/temperature-from-dew-point")
async def get_temperature_from_dew_point(
    relative_humidity: float,
    dew_point: float,
    method: DewPointMethod = DewPointMethod.MAGNUS,
) -> dict:
    """
    Temperature (°C) at which air with the given dew point reaches the given RH.
    """
    settings = PsychroSettings(dew_point_method=method)
    try:
        temperature = temperature_from_dew_point(relative_humidity, dew_point, settings)
        return {
            "relative_humidity": relative_humidity,
            "dew_point": dew_point,
            "method": method,
            "temperature": round(temperature, ROUND_DIGITS),
        }
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/pressure-from-altitude")
async def get_pressure_from_altitude(altitude: float) -> dict:
    """
    Convert altitude to atmospheric pressure.

    Args:
        altitude: Altitude in meters

    Returns:
        Atmospheric pressure in hPa
    """
    try:
        pressure = pressure_from_altitude(altitude)
        return {"altitude": altitude, "pressure": round(pressure, ROUND_DIGITS)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

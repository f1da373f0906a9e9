"""
API routes for adjustment planning, load estimates and plant sizing.
"""

from fastapi import APIRouter, HTTPException

from psychroenv.engine.adjustment import plan_adjustment
from psychroenv.config import ROUND_DIGITS
from psychroenv.engine.loads import estimate_plan_load, cooling_capacity, off_coil_temperature
from psychroenv.models.adjustment import AdjustmentInput, AdjustmentPlan
from psychroenv.models.loads import LoadInput, LoadOutput

router = APIRouter(prefix="/api/v1", tags=["adjustment"])


@router.post("/adjustment", response_model=AdjustmentPlan)
async def create_adjustment(data: AdjustmentInput) -> AdjustmentPlan:
    """
    Plan the temperature and moisture change that brings an observation
    into the envelope.
    """
    try:
        return plan_adjustment(
            data.observation,
            data.envelope,
            data.zone,
            data.settings,
            data.strategy,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/loads", response_model=LoadOutput)
async def create_load_estimate(data: LoadInput) -> LoadOutput:
    """
    Plan an adjustment and estimate the heating/cooling power it needs for
    the given air volume flow.
    """
    try:
        plan = plan_adjustment(
            data.observation,
            data.envelope,
            settings=data.settings,
            strategy=data.strategy,
        )
        load = estimate_plan_load(plan, data.volume_flow_rate, data.settings)
        return LoadOutput(plan=plan, load=load)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/cooling-capacity")
async def get_cooling_capacity(
    power: float,
    power_factor: float = 0.85,
    safety_factor: float = 1.2,
    efficiency: float = 0.7,
) -> dict:
    """Cooling capacity (kW) to reject the heat of an electrical load (W)."""
    try:
        capacity = cooling_capacity(power, power_factor, safety_factor, efficiency)
        return {"power": power, "cooling_capacity_kw": round(capacity, ROUND_DIGITS)}
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/off-coil-temperature")
async def get_off_coil_temperature(
    on_coil_dry_bulb: float,
    chw_flow_temp: float,
    chw_return_temp: float,
    beta_factor: float = 0.9,
) -> dict:
    """Supply air temperature (°C) leaving a chilled water coil."""
    try:
        temp = off_coil_temperature(on_coil_dry_bulb, chw_flow_temp, chw_return_temp, beta_factor)
        return {"off_coil_temperature": round(temp, ROUND_DIGITS)}
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

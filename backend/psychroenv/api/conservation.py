"""
API route for collection risk metrics.
"""

from fastapi import APIRouter, HTTPException

from psychroenv.engine.conservation import conservation_metrics
from psychroenv.models.conservation import ConservationInput, ConservationMetrics

router = APIRouter(prefix="/api/v1", tags=["conservation"])


@router.post("/conservation", response_model=ConservationMetrics)
async def create_conservation_metrics(data: ConservationInput) -> ConservationMetrics:
    """
    Preservation Index, IPI kinetics, lifetime multiplier and wood EMC for
    one observation. Metrics undefined for the reading come back as null.
    """
    try:
        return conservation_metrics(
            data.observation.temperature,
            data.observation.relative_humidity,
            data.pi_activation_energy,
            data.ipi_activation_energy,
            data.lm_activation_energy,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

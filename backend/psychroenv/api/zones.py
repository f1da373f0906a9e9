"""
API routes for zone classification.
"""

from fastapi import APIRouter, HTTPException

from psychroenv.engine.zones import classify
from psychroenv.models.zones import ClassifyInput, ClassificationResult

router = APIRouter(prefix="/api/v1", tags=["zone"])


@router.post("/zone", response_model=ClassificationResult)
async def classify_observation(data: ClassifyInput) -> ClassificationResult:
    """
    Classify an observation against a target envelope.

    Returns the zone label, the simple temperature/RH categories and the
    curve values the decision was based on.
    """
    try:
        return classify(data.observation, data.envelope, data.settings)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

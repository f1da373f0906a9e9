"""
API route for batch processing of logger time series.
"""

from fastapi import APIRouter, HTTPException

from psychroenv.engine.batch import process_observations
from psychroenv.models.batch import BatchInput, BatchOutput

router = APIRouter(prefix="/api/v1", tags=["batch"])


@router.post("/batch", response_model=BatchOutput)
async def process_batch(data: BatchInput) -> BatchOutput:
    """
    Derive, classify and plan every record of a time series.

    Rows that cannot be processed are returned in `errors` with their index;
    they never fail the request.
    """
    if not data.records:
        raise HTTPException(status_code=422, detail="No records provided.")

    try:
        return process_observations(
            [r.model_dump() for r in data.records],
            data.envelope,
            data.settings,
            data.strategy,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from psychroenv.api.state_point import router as state_point_router
from psychroenv.api.zones import router as zones_router
from psychroenv.api.adjustment import router as adjustment_router
from psychroenv.api.batch import router as batch_router
from psychroenv.api.conservation import router as conservation_router

router = APIRouter()
router.include_router(state_point_router)
router.include_router(zones_router)
router.include_router(adjustment_router)
router.include_router(batch_router)
router.include_router(conservation_router)

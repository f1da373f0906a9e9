"""
FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from psychroenv.api.router import router
from psychroenv.config import CORS_ORIGINS

app = FastAPI(
    title="psychroenv API",
    description="Psychrometric state derivation and environmental control planning",
    version="0.1.0",
)

# CORS: origins come from PSYCHROENV_CORS_ORIGINS; no cookies or auth headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "psychroenv"}

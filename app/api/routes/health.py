"""
Health routes.
Owns: Liveness probe.
"""

from fastapi import APIRouter

from .models import HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()

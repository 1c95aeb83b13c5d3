"""Liveness probe."""

from fastapi import APIRouter

from linguaflow.schemas.language import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok")

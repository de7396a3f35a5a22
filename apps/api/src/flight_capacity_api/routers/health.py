"""Liveness router."""

from __future__ import annotations

from fastapi import APIRouter

from ..config import settings
from ..schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", service=settings.service_name)

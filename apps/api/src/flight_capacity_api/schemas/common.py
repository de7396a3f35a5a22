"""Shared response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str
    service: str


class ErrorResponse(BaseModel):
    """Standard error payload.

    Validation failures add ``expected``/``received``; provider failures add
    ``upstreamStatus``/``upstreamBody``.
    """

    success: bool = False
    error: str
    message: str | None = None
    expected: Any = None
    received: Any = None

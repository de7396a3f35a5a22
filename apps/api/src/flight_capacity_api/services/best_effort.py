"""Tagged results for enrichment calls that must never fail a request."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or the reason the call produced none."""

    value: T | None = None
    error: str | None = None
    attempted: bool = True

    @property
    def ok(self) -> bool:
        return self.attempted and self.error is None

    @classmethod
    def skipped(cls, reason: str) -> Outcome[T]:
        return cls(error=reason, attempted=False)


async def attempt(label: str, call: Awaitable[T]) -> Outcome[T]:
    """Await ``call`` and wrap its result; any failure becomes an error outcome."""
    try:
        return Outcome(value=await call)
    except Exception as exc:
        logger.warning("Best-effort %s failed: %s", label, exc)
        return Outcome(error=str(exc) or type(exc).__name__)

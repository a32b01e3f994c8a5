"""
Receipt model — the outcome of one executed operation.

The build graph never lets an action exception escape to callers of
``execute``: failures are captured here and in the execution report.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of running one operation of one unit."""

    unit: str
    operation: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def path(self) -> str:
        return f"{self.unit}:{self.operation}"

    @classmethod
    def success(cls, unit: str, operation: str, **kwargs: Any) -> Receipt:
        """Create a success receipt."""
        return cls(unit=unit, operation=operation, status="ok", **kwargs)

    @classmethod
    def failure(cls, unit: str, operation: str, error: str, **kwargs: Any) -> Receipt:
        """Create a failure receipt."""
        return cls(unit=unit, operation=operation, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, unit: str, operation: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Create a skip receipt."""
        return cls(
            unit=unit,
            operation=operation,
            status="skipped",
            metadata={"reason": reason},
            **kwargs,
        )

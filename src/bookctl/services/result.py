"""ServiceResult and ServiceError — what every build operation returns.

INVARIANT: Fatal build errors never escape a public service method as
exceptions; they come back as ``ok=False`` with a structured error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from bookctl.domain.errors import BookBuildError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BookBuildError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"build"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, such as snippets that were not found.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry when verbose).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

"""ServiceResult and ServiceError — the service contract.

INVARIANT: All service-layer methods return ServiceResult. Extension
errors become ``ok=False`` results; a failed run never carries a plan.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from planext.domain.errors import ExtensionError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_extension_error(cls, exc: ExtensionError) -> ServiceError:
        """Carry the error code, message, and originating extension."""
        return cls(code=exc.code, message=exc.message, detail={"extension": exc.extension})


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"extend"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

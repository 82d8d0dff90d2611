"""Domain errors – invalid messages and conflicting registrations."""

from __future__ import annotations

from typing import Any

from antiflood.kernel.errors.base import AntiFloodError


class DomainError(AntiFloodError):
    """A message or registration breaks a scheduling invariant."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """A :class:`Message` field is invalid.

    ``errors`` lists one ``{"field": ..., "error": ...}`` dict per bad field.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "errors": self.errors}


class ConflictError(DomainError):
    """A message id is already registered."""

    default_code = "conflict"


__all__ = ["ConflictError", "DomainError", "ValidationError"]

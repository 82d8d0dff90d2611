"""Application-layer errors – contract violations between engine and rules."""

from __future__ import annotations

from typing import Any

from antiflood.kernel.errors.base import AntiFloodError


class ApplicationError(AntiFloodError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class InvalidArgumentError(ApplicationError, ValueError):
    """A rule function was called with, or returned, a value outside its contract.

    Always a programming error in the engine or in a caller-supplied rule;
    never retried.
    """

    default_code = "invalid_argument"

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.argument = argument
        if argument is not None:
            self.detail.setdefault("argument", argument)


__all__ = ["ApplicationError", "InvalidArgumentError"]

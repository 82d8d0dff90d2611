"""Root of the antiflood error hierarchy."""

from __future__ import annotations

from typing import Any


class AntiFloodError(Exception):
    """Base for every error antiflood raises.

    ``code`` is a stable slug for filtering logs; ``detail`` carries the
    identifiers involved (message id, rule name, setting name).
    """

    default_code: str = "antiflood_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, bound onto log events."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.detail:
            payload["detail"] = self.detail
        return payload


__all__ = ["AntiFloodError"]

"""Config errors – rejected ``ANTIFLOOD_*`` values."""
from __future__ import annotations

from antiflood.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or built."""

    default_code = "config_error"


class InvalidSettingValueError(ConfigError):
    """A gap or priority setting cannot drive the built-in rules.

    ``setting_name`` is the field or environment variable that was rejected.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "value": repr(value)},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError"]

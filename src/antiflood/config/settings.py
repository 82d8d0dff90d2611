"""Config settings – Settings base class, loaders and ``AntiFloodSettings``."""
from __future__ import annotations

import abc
import dataclasses
import math
import os
from datetime import timedelta
from typing import Any, ClassVar, TypeVar

from dotenv import load_dotenv

from antiflood.config.errors import ConfigError, InvalidSettingValueError

# Keeps requested_at ± gap inside the datetime range.
MAX_GAP_SECONDS = timedelta(days=36525).total_seconds()


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


T = TypeVar("T", bound=Settings)


@dataclasses.dataclass
class AntiFloodSettings(Settings):
    """Gaps enforced by the built-in rules.

    Every value is read from ``ANTIFLOOD_<FIELD>`` by :class:`EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "ANTIFLOOD"

    min_gap_seconds: float = 10.0
    recipient_gap_seconds: float = 60.0
    high_priority_window_seconds: float = 86400.0
    high_priority: int = 1

    def _validate(self) -> None:
        for name in ("min_gap_seconds", "recipient_gap_seconds", "high_priority_window_seconds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidSettingValueError(name, value, "must be a number of seconds")
            if not math.isfinite(value):
                raise InvalidSettingValueError(name, value, "must be finite")
            if not 0 <= value <= MAX_GAP_SECONDS:
                raise InvalidSettingValueError(name, value, f"must be between 0 and {MAX_GAP_SECONDS:.0f}")
        if isinstance(self.high_priority, bool) or not isinstance(self.high_priority, int):
            raise InvalidSettingValueError("high_priority", self.high_priority, "must be an integer")

    @property
    def min_gap(self) -> timedelta:
        return timedelta(seconds=self.min_gap_seconds)

    @property
    def recipient_gap(self) -> timedelta:
        return timedelta(seconds=self.recipient_gap_seconds)

    @property
    def high_priority_window(self) -> timedelta:
        return timedelta(seconds=self.high_priority_window_seconds)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    Unset variables keep the field default.
    """

    def load(self, settings_class: type[T]) -> T:
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = os.environ.get(env_key)
            if raw is None:
                continue
            try:
                kwargs[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:
        if type_hint is int or type_hint == "int":
            return int(value)
        if type_hint is float or type_hint == "float":
            return float(value)
        return value


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file then fall back to ``EnvSettingsLoader``."""

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = [
    "AntiFloodSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MAX_GAP_SECONDS",
    "Settings",
    "SettingsLoader",
]

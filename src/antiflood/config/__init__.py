"""Config – 12-factor settings and loaders."""

from antiflood.config.errors import (
    ConfigError,
    InvalidSettingValueError,
)
from antiflood.config.settings import (
    AntiFloodSettings,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
)

__all__ = [
    "AntiFloodSettings",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "Settings",
    "SettingsLoader",
]

"""Configuration management for plugman."""

from .config import Config, ConfigError, SettingsData

__all__ = ["Config", "ConfigError", "SettingsData"]

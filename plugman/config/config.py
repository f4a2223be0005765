"""Configuration management class for plugman.

Everything plugman stores lives under one home directory::

    ~/.plugman/
        config.yaml     optional settings
        manifest.yaml   repositories and profiles
        trx.lock        transaction marker (only while an operation runs)
        repos/          imported repositories, one per host/user/name
        runtime/        generated plugin directory (see ``rebuild``)
"""

import os
from pathlib import Path
from typing import Any, TypedDict

import yaml

from plugman.core.errors import PlugmanError
from plugman.core.manifest import DEFAULT_PROFILE
from plugman.output import MessageType, VerbosityLevel, message

HOME_ENV = "PLUGMAN_HOME"


class SettingsData(TypedDict, total=False):
    """Type definition for ``config.yaml``."""

    runtime_directory: str
    stale_transaction_seconds: int | None
    default_profile: str


class ConfigError(PlugmanError):
    """Exception raised for configuration validation errors.

    Can contain multiple error messages.
    """

    def __init__(self, errors: str | list[str]):
        """Initialize ConfigError.

        Args:
            errors: Single error message or list of error messages
        """
        if isinstance(errors, str):
            self.errors = [errors]
        else:
            self.errors = errors
        super().__init__(self._format_errors())

    def _format_errors(self) -> str:
        """Format errors for display."""
        if len(self.errors) == 1:
            return self.errors[0]
        else:
            error_list = "\n".join(f"  - {err}" for err in self.errors)
            return f"Configuration has {len(self.errors)} errors:\n{error_list}"


class Config:
    """Paths and settings for one plugman home directory."""

    def __init__(self, home: Path | None = None):
        """Initialize the Config manager.

        Args:
            home: Optional custom home directory.
                  Defaults to $PLUGMAN_HOME, then ~/.plugman
        """
        if home is None:
            env = os.environ.get(HOME_ENV)
            home = Path(env).expanduser() if env else Path.home() / ".plugman"

        self.home_directory = home
        self.settings_file = home / "config.yaml"
        self.manifest_file = home / "manifest.yaml"
        self.transaction_file = home / "trx.lock"
        self.repos_directory = home / "repos"

        settings = self.read_settings()
        runtime = settings.get("runtime_directory")
        self.runtime_directory = Path(runtime).expanduser() if runtime else home / "runtime"
        self.stale_transaction_seconds = settings.get("stale_transaction_seconds")
        self.default_profile = settings.get("default_profile", DEFAULT_PROFILE)

    def ensure_directories(self) -> None:
        """Create the home and repos directories if they don't exist.

        Raises:
            ConfigError: If a directory cannot be created
        """
        directories = {
            "home": self.home_directory,
            "repos": self.repos_directory,
        }

        for dir_name, dir_path in directories.items():
            try:
                dir_path.mkdir(parents=True, exist_ok=True)
                message(f"Ensured {dir_name} directory exists: {dir_path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
            except OSError as e:
                raise ConfigError(f"Failed to create {dir_name} directory {dir_path}: {e}") from e

    @staticmethod
    def validate(settings: dict[str, Any]) -> None:
        """Validate the settings structure.

        Collects all validation errors before raising an exception.

        Args:
            settings: The settings dictionary to validate

        Raises:
            ConfigError: If the settings are invalid, with all errors
        """
        errors: list[str] = []

        known = set(SettingsData.__annotations__)
        for key in settings:
            if key not in known:
                errors.append(f"Unknown setting '{key}'")

        if "runtime_directory" in settings:
            value = settings["runtime_directory"]
            if not isinstance(value, str) or not value:
                errors.append("'runtime_directory' must be a non-empty string")

        if "stale_transaction_seconds" in settings:
            value = settings["stale_transaction_seconds"]
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value <= 0):
                errors.append("'stale_transaction_seconds' must be a positive integer or null")

        if "default_profile" in settings:
            value = settings["default_profile"]
            if not isinstance(value, str) or not value:
                errors.append("'default_profile' must be a non-empty string")

        if errors:
            raise ConfigError(errors)

    def read_settings(self) -> SettingsData:
        """Load ``config.yaml``.

        Returns:
            The validated settings, or an empty dict if the file is absent

        Raises:
            ConfigError: If the file cannot be parsed or is invalid
        """
        if not self.settings_file.exists():
            return {}

        try:
            with open(self.settings_file, "rb") as f:
                settings = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse configuration file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}") from e

        if settings is None:
            return {}
        if not isinstance(settings, dict):
            raise ConfigError(f"Configuration file {self.settings_file} must contain a mapping")

        self.validate(settings)
        message(f"Configuration loaded from {self.settings_file}", MessageType.DEBUG, VerbosityLevel.DEBUG)
        return settings

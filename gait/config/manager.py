"""ConfigManager - read and mutate configuration through a repository."""

import os
from pathlib import Path
from typing import Any, Optional

from gait import COMMIT_FORMATS
from gait.config.models import MAX_LENGTH_RANGE, Config, ConfigError, Provider, provider_to_dict
from gait.config.repository import ConfigRepository, JsonFileRepository

PROVIDER_ENV_VAR = "GAIT_PROVIDER"

# Keys accepted by 'gait config set'
SETTABLE_KEYS = ["default_format", "max_length", "timeout"]


def _parse_setting(key: str, value: Any) -> Any:
    """Convert a raw (usually string) value for key, raising ConfigError when invalid."""
    if key == "default_format":
        if value not in COMMIT_FORMATS:
            raise ConfigError(f"default_format must be: {', '.join(COMMIT_FORMATS)}")
        return value

    if key == "max_length":
        low, high = MAX_LENGTH_RANGE
        try:
            length = int(value)
        except (TypeError, ValueError):
            length = None
        if length is None or not low <= length <= high:
            raise ConfigError(f"max_length must be a number between {low} and {high}")
        return length

    if key == "timeout":
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            seconds = None
        if seconds is None or seconds <= 0:
            raise ConfigError("timeout must be a positive number of seconds")
        return int(seconds) if seconds.is_integer() else seconds

    raise ConfigError(f"Unknown configuration key: {key}. Available keys: {', '.join(SETTABLE_KEYS)}")


class ConfigManager:
    """Manages loading and saving configuration."""

    def __init__(self, repository: ConfigRepository | None = None):
        self.repository = repository or JsonFileRepository()

    @property
    def config_path(self) -> Optional[Path]:
        return self.repository.path

    def get_config(self) -> Config:
        return Config.from_dict(self.repository.read())

    def set_value(self, key: str, value: Any) -> Any:
        """Validate and store a setting. Returns the stored value."""
        parsed = _parse_setting(key, value)
        self.repository.write(key, parsed)
        return parsed

    def _write_providers(self, providers: list[Provider]) -> None:
        self.repository.write("providers", [provider_to_dict(p) for p in providers])

    def add_provider(self, provider: Provider) -> None:
        config = self.get_config()
        if config.get_provider(provider.name):
            raise ConfigError(f"Provider '{provider.name}' already exists")
        self._write_providers([*config.providers, provider])

    def remove_provider(self, name: str) -> bool:
        """Remove a provider by name. Clears the default if it pointed there."""
        config = self.get_config()
        remaining = [p for p in config.providers if p.name != name]
        if len(remaining) == len(config.providers):
            return False

        self._write_providers(remaining)
        if config.default_provider == name:
            self.repository.write("default_provider", "")
        return True

    def set_default_provider(self, name: str) -> None:
        config = self.get_config()
        if not config.get_provider(name):
            raise ConfigError(f"Provider '{name}' not found")
        self.repository.write("default_provider", name)

    def get_default_provider(self) -> Optional[Provider]:
        """Provider to use for generation.

        Precedence: GAIT_PROVIDER environment variable > configured default >
        first configured provider. None when nothing is configured.
        """
        config = self.get_config()

        env_name = os.environ.get(PROVIDER_ENV_VAR)
        if env_name:
            provider = config.get_provider(env_name)
            if provider is None:
                raise ConfigError(f"{PROVIDER_ENV_VAR}={env_name} does not match a configured provider")
            return provider

        if not config.providers:
            return None

        if config.default_provider:
            provider = config.get_provider(config.default_provider)
            if provider:
                return provider

        return config.providers[0]

    def reset(self) -> None:
        self.repository.clear()

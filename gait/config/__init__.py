"""Configuration Management Package"""

from gait.config.models import (
    Config,
    ConfigError,
    Provider,
    OpenAIProvider,
    OllamaProvider,
    ClaudeProvider,
    PROVIDER_TYPES,
    provider_from_dict,
)
from gait.config.repository import (
    ConfigRepository,
    JsonFileRepository,
    MemoryRepository,
    default_config_path,
)
from gait.config.manager import ConfigManager, SETTABLE_KEYS

__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "ConfigRepository",
    "JsonFileRepository",
    "MemoryRepository",
    "Provider",
    "OpenAIProvider",
    "OllamaProvider",
    "ClaudeProvider",
    "PROVIDER_TYPES",
    "SETTABLE_KEYS",
    "default_config_path",
    "provider_from_dict",
]

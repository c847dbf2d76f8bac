"""Configuration records: general settings and LLM provider entries."""

import sys
from dataclasses import dataclass, field, asdict, fields
from typing import ClassVar, Optional

from gait import COMMIT_FORMATS, DEFAULT_FORMAT

# Upper bound matches the validator's hard subject limit
MAX_LENGTH_RANGE = (1, 72)


class ConfigError(Exception):
    """Raised for invalid configuration values or unknown providers."""
    pass


@dataclass
class OpenAIProvider:
    """Hosted OpenAI (or compatible) endpoint."""
    TYPE: ClassVar[str] = "OPENAI"

    name: str
    model: str = "gpt-4o-mini"
    api_key: Optional[str] = None
    url: Optional[str] = None  # base URL for OpenAI-compatible servers

    @property
    def type(self) -> str:
        return self.TYPE


@dataclass
class OllamaProvider:
    """Local model served by Ollama."""
    TYPE: ClassVar[str] = "OLLAMA"

    name: str
    model: str = "llama3.2:3b"
    url: str = "http://localhost:11434"

    @property
    def type(self) -> str:
        return self.TYPE


@dataclass
class ClaudeProvider:
    """Anthropic Claude API."""
    TYPE: ClassVar[str] = "ANTHROPIC"

    name: str
    model: str = "claude-sonnet-4-20250514"
    api_key: Optional[str] = None

    @property
    def type(self) -> str:
        return self.TYPE


Provider = OpenAIProvider | OllamaProvider | ClaudeProvider

_PROVIDER_CLASSES = {cls.TYPE: cls for cls in (OpenAIProvider, OllamaProvider, ClaudeProvider)}
PROVIDER_TYPES = list(_PROVIDER_CLASSES)


def provider_from_dict(data: dict) -> Provider:
    """Build a provider record from its stored form. Raises ConfigError when invalid."""
    provider_type = str(data.get("type", "")).upper()
    cls = _PROVIDER_CLASSES.get(provider_type)
    if cls is None:
        raise ConfigError(f"Unknown provider type '{data.get('type')}'. Use one of: {', '.join(PROVIDER_TYPES)}")
    if not data.get("name"):
        raise ConfigError("Provider name is required")

    valid_keys = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in valid_keys and v is not None})


def provider_to_dict(provider: Provider) -> dict:
    data = {"type": provider.type}
    data.update({k: v for k, v in asdict(provider).items() if v is not None})
    return data


@dataclass
class Config:
    """User configuration with sensible defaults."""
    default_format: str = DEFAULT_FORMAT
    max_length: int = 50
    timeout: Optional[float] = None
    providers: list = field(default_factory=list)
    default_provider: str = ""

    def to_dict(self) -> dict:
        data = {
            "default_format": self.default_format,
            "max_length": self.max_length,
            "providers": [provider_to_dict(p) for p in self.providers],
            "default_provider": self.default_provider,
        }
        if self.timeout is not None:
            data["timeout"] = self.timeout
        return data

    def get_provider(self, name: str) -> Optional[Provider]:
        return next((p for p in self.providers if p.name == name), None)

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.default_format not in COMMIT_FORMATS:
            warnings.append(f"Invalid default_format '{self.default_format}', using '{defaults.default_format}'")
            self.default_format = defaults.default_format

        low, high = MAX_LENGTH_RANGE
        if not isinstance(self.max_length, int) or not low <= self.max_length <= high:
            warnings.append(f"Invalid max_length '{self.max_length}', using {defaults.max_length}")
            self.max_length = defaults.max_length

        if self.timeout is not None and (not isinstance(self.timeout, (int, float)) or self.timeout <= 0):
            warnings.append(f"Invalid timeout '{self.timeout}', using provider default")
            self.timeout = None

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        providers = []
        for entry in data.get("providers") or []:
            try:
                providers.append(provider_from_dict(entry))
            except (ConfigError, TypeError, AttributeError) as e:
                print(f"Config warning: skipping provider {entry!r}: {e}", file=sys.stderr)

        config = cls(
            default_format=data.get("default_format", DEFAULT_FORMAT),
            max_length=data.get("max_length", 50),
            timeout=data.get("timeout"),
            providers=providers,
            default_provider=data.get("default_provider") or "",
        )
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config

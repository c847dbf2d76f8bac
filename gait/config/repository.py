"""Storage backends for the configuration record."""

import json
import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

CONFIG_ENV_VAR = "GAIT_CONFIG"


def default_config_path() -> Path:
    """~/.gait/config.json unless GAIT_CONFIG points elsewhere."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".gait" / "config.json"


class ConfigRepository(ABC):
    """Keyed record storage. Every write is a read-modify-write of the whole record."""

    path: Optional[Path] = None

    @abstractmethod
    def read(self) -> dict:
        pass

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class MemoryRepository(ConfigRepository):
    """In-memory storage, for tests and throwaway sessions."""

    def __init__(self, data: dict | None = None):
        self._data = dict(data or {})

    def read(self) -> dict:
        return json.loads(json.dumps(self._data))

    def write(self, key: str, value: Any) -> None:
        self._data[key] = value

    def clear(self) -> None:
        self._data = {}


class JsonFileRepository(ConfigRepository):
    """JSON file storage. The file and its directory are created on first read."""

    INITIAL_RECORD = {"providers": [], "default_provider": ""}

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else default_config_path()

    def _dump(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    def read(self) -> dict:
        if not self.path.exists():
            self._dump(self.INITIAL_RECORD)
            return json.loads(json.dumps(self.INITIAL_RECORD))

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Warning: Could not load {self.path}: {e}", file=sys.stderr)
            return {}

        if not isinstance(data, dict):
            print(f"Warning: Ignoring {self.path}: expected a JSON object", file=sys.stderr)
            return {}
        return data

    def write(self, key: str, value: Any) -> None:
        data = self.read()
        data[key] = value
        self._dump(data)

    def clear(self) -> None:
        self._dump({})

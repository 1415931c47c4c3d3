"""Credential and Default Model Storage"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

API_KEY_ENV = "ANTHROPIC_API_KEY"
MODEL_ENV = "GY_MODEL"


class ConfigError(Exception):
    """Raised when the config file cannot be written."""
    pass


@dataclass
class Config:
    """Persisted credential record."""
    anthropic_api_key: str = ""
    model: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []

        if not isinstance(self.anthropic_api_key, str):
            warnings.append("Invalid anthropic_api_key, ignoring stored key")
            self.anthropic_api_key = ""

        if self.model is not None and (not isinstance(self.model, str) or not self.model.strip()):
            warnings.append(f"Invalid model '{self.model}', using '{DEFAULT_MODEL}'")
            self.model = None

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Loads and saves ~/.gy_config.json."""

    CONFIG_FILENAME = ".gy_config.json"
    FILE_MODE = 0o600

    def __init__(self):
        self._config: Optional[Config] = None

    def get_config_path(self) -> Path:
        return Path.home() / self.CONFIG_FILENAME

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        path = self.get_config_path()
        if path.exists():
            self._config = self._load_from_file(path)
        else:
            self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config) -> Path:
        path = self.get_config_path()
        try:
            # Owner-only from creation; the mode argument is ignored for an existing file
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                os.chmod(path, self.FILE_MODE)
                json.dump(config.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to write config: {e}")
        self._config = config
        return path


def resolve_api_key(config: Config) -> Optional[str]:
    """Environment variable wins over the stored key."""
    env_key = os.environ.get(API_KEY_ENV, "").strip()
    if env_key:
        return env_key
    if config.anthropic_api_key:
        return config.anthropic_api_key
    return None


def resolve_model(cli_model: Optional[str], config: Config) -> str:
    """Precedence: --model > GY_MODEL > config file > default."""
    return cli_model or os.environ.get(MODEL_ENV) or config.model or DEFAULT_MODEL


_manager = ConfigManager()


def get_manager() -> ConfigManager:
    return _manager


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_MODEL",
    "API_KEY_ENV",
    "MODEL_ENV",
    "get_manager",
    "resolve_api_key",
    "resolve_model",
]

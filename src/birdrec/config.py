"""Configuration loading, saving, and management."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from birdrec.constants import (
    DEFAULT_CHANNELS,
    DEFAULT_PERMISSION_MODE,
    DEFAULT_SAMPLE_RATE,
    VALID_PERMISSION_MODES,
)


@dataclass
class RecordingDefaults:
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    default_device: str = ""


@dataclass
class PermissionDefaults:
    microphone: str = DEFAULT_PERMISSION_MODE


@dataclass
class StorageDefaults:
    data_dir: str = ""
    cache_dir: str = ""


@dataclass
class BirdrecConfig:
    recording: RecordingDefaults = field(default_factory=RecordingDefaults)
    permissions: PermissionDefaults = field(default_factory=PermissionDefaults)
    storage: StorageDefaults = field(default_factory=StorageDefaults)

    @classmethod
    def load(cls, config_path: Path | None = None) -> BirdrecConfig:
        """Load config from TOML file, falling back to defaults for missing keys."""
        config = cls()
        if config_path is None or not config_path.exists():
            return config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        for section_field in fields(config):
            section = getattr(config, section_field.name)
            for k, v in data.get(section_field.name, {}).items():
                if hasattr(section, k):
                    setattr(section, k, v)

        return config

    def save(self, config_path: Path) -> None:
        """Write current config to TOML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        data = self._to_dict()
        with open(config_path, "wb") as f:
            tomli_w.dump(data, f)

    def get(self, key: str) -> Any:
        """Get a config value by dotted key (e.g., 'recording.sample_rate')."""
        obj, name = self._resolve(key)
        return getattr(obj, name)

    def set(self, key: str, value: Any) -> None:
        """Set a config value by dotted key."""
        obj, name = self._resolve(key)

        # Coerce value to match the field type
        current = getattr(obj, name)
        coerced = _coerce_value(value, current, key)
        _validate_value(key, coerced)
        setattr(obj, name, coerced)

    def _resolve(self, key: str) -> tuple[Any, str]:
        section, _, name = key.partition(".")
        if not name:
            raise KeyError(f"Invalid key format: {key!r}. Use 'section.key' (e.g., 'recording.sample_rate')")
        obj = getattr(self, section, None)
        if obj is None or section not in {f.name for f in fields(self)}:
            raise KeyError(f"Unknown config section: {section!r}")
        if not hasattr(obj, name):
            raise KeyError(f"Unknown config key: {key!r}")
        return obj, name

    def _to_dict(self) -> dict:
        """Convert config to a nested dict for TOML serialization."""
        result = {}
        for section_field in fields(self):
            section_obj = getattr(self, section_field.name)
            section_dict = {}
            for f in fields(section_obj):
                section_dict[f.name] = getattr(section_obj, f.name)
            result[section_field.name] = section_dict
        return result


def _coerce_value(value: Any, current: Any, key: str) -> Any:
    """Coerce a string value to match the type of the current value."""
    if isinstance(value, str) and not isinstance(current, str):
        if isinstance(current, bool):
            if value.lower() in ("true", "1", "yes"):
                return True
            elif value.lower() in ("false", "0", "no"):
                return False
            raise ValueError(f"Cannot convert {value!r} to bool for key {key!r}")
        if isinstance(current, int):
            try:
                return int(value)
            except ValueError:
                raise ValueError(f"Cannot convert {value!r} to int for key {key!r}") from None
    return value


def _validate_value(key: str, value: Any) -> None:
    """Validate a config value."""
    if key == "permissions.microphone" and value not in VALID_PERMISSION_MODES:
        raise ValueError(
            f"Invalid permission mode: {value!r}. Choose from: {', '.join(VALID_PERMISSION_MODES)}"
        )
    if key == "recording.sample_rate" and value <= 0:
        raise ValueError(f"sample_rate must be positive, got {value}")
    if key == "recording.channels" and value <= 0:
        raise ValueError(f"channels must be positive, got {value}")

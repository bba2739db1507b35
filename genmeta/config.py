"""Configuration loading for genmeta (.genmeta.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".genmeta.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GenMetaConfig:
    """Represents the settings defined in .genmeta.yml."""

    root: Path
    reference_dir: Optional[Path] = None
    output: Optional[str] = None
    exit_on_error: bool = False
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> GenMetaConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GenMetaConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    reference = _as_str(data.get("reference_dir"))
    output = _as_str(data.get("output"))
    if output and output != "-":
        output = str(root / output)

    return GenMetaConfig(
        root=root,
        reference_dir=root / reference if reference else None,
        output=output,
        exit_on_error=_as_bool(data.get("exit_on_error")) or False,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "GenMetaConfig", "load_config"]

"""Configuration loading for codeingest (.codeingest.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .logging import get_logger

CONFIG_FILENAME = ".codeingest.yml"

CATEGORIES = ("routes", "models", "controllers", "components", "services")

DEFAULT_MAX_WORKERS = 5
DEFAULT_PYTHON_SAMPLE = 20
DEFAULT_JAVA_SAMPLE = 30

logger = get_logger("config")


@dataclass
class SampleLimits:
    """How many files the stack detector reads when sniffing for a framework."""

    python: int = DEFAULT_PYTHON_SAMPLE
    java: int = DEFAULT_JAVA_SAMPLE


@dataclass
class IngestConfig:
    """Represents the settings defined in .codeingest.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=lambda: list(CATEGORIES))
    max_workers: int = DEFAULT_MAX_WORKERS
    sample_limits: SampleLimits = field(default_factory=SampleLimits)

    def category_enabled(self, name: str) -> bool:
        return name in self.categories


def load_config(config_path: Path) -> IngestConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.is_file():
        return IngestConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    exclude_paths = [
        item.strip("/") for item in _as_str_list(data.get("exclude_paths")) if item.strip("/")
    ]

    categories = list(CATEGORIES)
    category_data = _as_dict(data.get("categories"))
    if category_data and "enabled" in category_data:
        requested = [name.lower() for name in _as_str_list(category_data.get("enabled"))]
        unknown = sorted(set(requested) - set(CATEGORIES))
        if unknown:
            raise ConfigError(f"Unknown categories requested: {', '.join(unknown)}")
        categories = [name for name in CATEGORIES if name in requested]

    max_workers = _as_int(data.get("max_workers"))
    if max_workers is not None and max_workers < 1:
        raise ConfigError("max_workers must be a positive integer")

    limits = SampleLimits()
    limit_data = _as_dict(data.get("sample_limits"))
    if limit_data:
        python_limit = _as_int(limit_data.get("python"))
        java_limit = _as_int(limit_data.get("java"))
        if python_limit is not None:
            limits.python = python_limit
        if java_limit is not None:
            limits.java = java_limit

    return IngestConfig(
        root=root,
        exclude_paths=exclude_paths,
        categories=categories,
        max_workers=max_workers or DEFAULT_MAX_WORKERS,
        sample_limits=limits,
    )


def load_config_or_default(root: Path) -> IngestConfig:
    """Like :func:`load_config`, but logs a malformed file and falls back to defaults."""
    try:
        return load_config(root)
    except ConfigError as exc:
        logger.warning("Ignoring invalid configuration: %s", exc)
        return IngestConfig(root=Path(root))


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.name == CONFIG_FILENAME:
        return config_path
    return config_path / CONFIG_FILENAME


def _read_config(path: Path) -> Any:
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
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CATEGORIES", "IngestConfig", "SampleLimits", "load_config", "load_config_or_default"]

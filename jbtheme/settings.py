"""Persistent settings for jbtheme."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from jbtheme.logger import get_logger
from jbtheme.source import DEFAULT_COLOR_SCHEMES_MANAGER_URL, DEFAULT_TIMEOUT

logger = get_logger(__name__)

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

RESOLUTION_SINGLE = "single"
RESOLUTION_FULL = "full"
RESOLUTION_DEPTHS: tuple[str, ...] = (RESOLUTION_SINGLE, RESOLUTION_FULL)

DEFAULT_SCHEMES: tuple[str, ...] = ("Darcula",)
DEFAULT_OUTPUT_DIR = "themes"

# Request timeout settings (in seconds)
MIN_REQUEST_TIMEOUT = 1.0
MAX_REQUEST_TIMEOUT = 120.0

# Worker pool used when converting several schemes
MIN_MAX_WORKERS = 1
MAX_MAX_WORKERS = 32
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class Settings:
    """User-configurable settings stored on disk."""

    source: str = DEFAULT_COLOR_SCHEMES_MANAGER_URL
    schemes: tuple[str, ...] = DEFAULT_SCHEMES
    output_dir: str = DEFAULT_OUTPUT_DIR
    # JSON mapping table; the built-in table is used when unset
    mapping_file: str | None = None
    resolution_depth: str = RESOLUTION_SINGLE
    log_level: str = "WARNING"
    request_timeout: float = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS

    @property
    def full_chain(self) -> bool:
        """Whether the whole ancestor chain should be merged."""
        return self.resolution_depth == RESOLUTION_FULL

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Settings:
        """Create settings from a mapping, applying defaults for invalid values.

        Args:
            data: Mapping containing raw settings values.

        Returns:
            A Settings instance with validated values.
        """
        source = _coerce_str(data.get("source")) or DEFAULT_COLOR_SCHEMES_MANAGER_URL

        schemes = DEFAULT_SCHEMES
        raw_schemes = data.get("schemes")
        if isinstance(raw_schemes, list):
            parsed = tuple(name for name in raw_schemes if isinstance(name, str) and name)
            if parsed:
                schemes = parsed

        output_dir = _coerce_str(data.get("output_dir")) or DEFAULT_OUTPUT_DIR
        mapping_file = _coerce_str(data.get("mapping_file")) or None

        depth_value = _coerce_str(data.get("resolution_depth"))
        resolution_depth = depth_value if depth_value in RESOLUTION_DEPTHS else RESOLUTION_SINGLE

        log_level_value = _coerce_str(data.get("log_level"))
        log_level = log_level_value if log_level_value is not None and log_level_value in LOG_LEVELS else "WARNING"

        request_timeout = _coerce_float(data.get("request_timeout"))
        if (
            request_timeout is None
            or request_timeout < MIN_REQUEST_TIMEOUT
            or request_timeout > MAX_REQUEST_TIMEOUT
        ):
            request_timeout = DEFAULT_TIMEOUT

        max_workers = _coerce_int(data.get("max_workers"))
        if max_workers is None or max_workers < MIN_MAX_WORKERS or max_workers > MAX_MAX_WORKERS:
            max_workers = DEFAULT_MAX_WORKERS

        return cls(
            source=source,
            schemes=schemes,
            output_dir=output_dir,
            mapping_file=mapping_file,
            resolution_depth=resolution_depth,
            log_level=log_level,
            request_timeout=request_timeout,
            max_workers=max_workers,
        )

    def to_dict(self) -> dict[str, object]:
        """Serialize settings to a dictionary.

        Returns:
            Dictionary representation of settings.
        """
        return {
            "source": self.source,
            "schemes": list(self.schemes),
            "output_dir": self.output_dir,
            "mapping_file": self.mapping_file,
            "resolution_depth": self.resolution_depth,
            "log_level": self.log_level,
            "request_timeout": self.request_timeout,
            "max_workers": self.max_workers,
        }


def get_config_dir() -> Path:
    """Get the directory used for persistent configuration.

    Returns:
        Path to the configuration directory.
    """
    override_dir = os.environ.get("JBTHEME_CONFIG_DIR")
    if override_dir:
        return Path(override_dir).expanduser()

    base_dir = os.environ.get("XDG_CONFIG_HOME")
    if base_dir:
        return Path(base_dir).expanduser() / "jbtheme"

    return Path.home() / ".config" / "jbtheme"


def get_settings_path() -> Path:
    """Get the full path to the settings file.

    Returns:
        Path to the settings JSON file.
    """
    return get_config_dir() / "settings.json"


def load_settings() -> Settings:
    """Load settings from disk.

    Returns:
        Loaded settings, or defaults if none exist.
    """
    settings_path = get_settings_path()
    if not settings_path.exists():
        return Settings()

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning(f"Failed to parse settings file {settings_path}: {exc}")
        return Settings()
    except OSError as exc:
        logger.warning(f"Failed to read settings file {settings_path}: {exc}")
        return Settings()

    if not isinstance(raw, dict):
        logger.warning(f"Settings file {settings_path} contains invalid data")
        return Settings()

    return Settings.from_mapping(raw)


def save_settings(settings: Settings) -> None:
    """Persist settings to disk.

    Args:
        settings: Settings to persist.
    """
    settings_path = get_settings_path()
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    except OSError as exc:
        logger.warning(f"Failed to save settings to {settings_path}: {exc}")


def _coerce_str(value: object) -> str | None:
    """Coerce a value into a string if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        String value or None.
    """
    if isinstance(value, str):
        return value
    return None


def _coerce_int(value: object) -> int | None:
    """Coerce a value into an integer if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        Integer value or None.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _coerce_float(value: object) -> float | None:
    """Coerce a value into a float if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        Float value or None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None

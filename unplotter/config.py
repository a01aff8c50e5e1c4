"""
Settings Module

Loads tunable settings from YAML on top of the defaults in constants.py.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .constants import (
    HIT_TEST_THRESHOLD_PX,
    DEFAULT_RENDER_SCALE,
    DEFAULT_BEZIER_STEPS,
    EXPORT_FLOAT_PRECISION,
    EXPORT_FORMATS,
)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

# (section, key) -> Settings attribute
_SETTING_KEYS = {
    ("hit_test", "threshold_px"): "hit_threshold_px",
    ("rendering", "scale"): "render_scale",
    ("extraction", "bezier_steps"): "bezier_steps",
    ("export", "float_precision"): "float_precision",
    ("export", "formats"): "export_formats",
}


class SettingsError(Exception):
    """Raised when a settings file cannot be read or holds bad values."""
    pass


@dataclass
class Settings:
    """Resolved settings for one run."""
    hit_threshold_px: float = HIT_TEST_THRESHOLD_PX
    render_scale: float = DEFAULT_RENDER_SCALE
    bezier_steps: int = DEFAULT_BEZIER_STEPS
    float_precision: int = EXPORT_FLOAT_PRECISION
    export_formats: Tuple[str, ...] = field(default=EXPORT_FORMATS)
    source: Optional[str] = None


def _coerce(attr: str, value: Any) -> Any:
    if attr == "export_formats":
        formats = tuple(str(v).lower() for v in value)
        unknown = [f for f in formats if f not in EXPORT_FORMATS]
        if unknown:
            raise SettingsError(f"Unknown export format(s): {', '.join(unknown)}")
        return formats
    if attr in ("bezier_steps", "float_precision"):
        number = int(value)
        if number < 1 and attr == "bezier_steps":
            raise SettingsError(f"bezier_steps must be >= 1, got {number}")
        return number
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise SettingsError(f"{attr} must be a positive finite number, got {number}")
    return number


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    """
    Build Settings from a parsed YAML mapping.

    Args:
        data: Mapping of section name -> {key: value}

    Returns:
        Settings with any recognised values applied

    Raises:
        SettingsError: If a recognised value has the wrong type or range
    """
    settings = Settings()

    for section, values in (data or {}).items():
        if not isinstance(values, dict):
            logger.warning(f"Ignoring settings section '{section}': not a mapping")
            continue
        for key, value in values.items():
            attr = _SETTING_KEYS.get((section, key))
            if attr is None:
                logger.warning(f"Ignoring unknown setting {section}.{key}")
                continue
            try:
                setattr(settings, attr, _coerce(attr, value))
            except (TypeError, ValueError) as e:
                raise SettingsError(f"Bad value for {section}.{key}: {value!r} ({e})")

    return settings


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Settings file; the packaged settings.yaml when None

    Returns:
        Resolved Settings

    Raises:
        SettingsError: If the file is missing or not valid YAML
    """
    settings_path = Path(path) if path else DEFAULT_SETTINGS_PATH

    if not settings_path.exists():
        if path is None:
            logger.debug("Packaged settings.yaml not found, using defaults")
            return Settings()
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsError(f"Cannot parse settings file {settings_path}: {e}")

    settings = settings_from_dict(data or {})
    settings.source = str(settings_path)
    logger.debug(f"Loaded settings from {settings_path}")
    return settings

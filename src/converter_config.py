"""
Converter Configuration - Settings for ANSI to HTML rendering and the HTTP surface
Loads JSON settings merged over defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 1_000_000


@dataclass
class ConverterConfig:
    """Configuration shared by the converter, server and CLI."""
    fg: str = "var(--foreground)"
    bg: str = "transparent"
    newline: bool = False
    colors: Dict[int, str] = field(default_factory=dict)
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH
    host: str = "127.0.0.1"
    port: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for easier passing."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Build a config from a (possibly partial) dictionary, keeping defaults for missing keys"""
        merged = _merge_config(cls().to_dict(), data)
        merged["colors"] = _parse_color_overrides(merged.get("colors") or {})
        return cls(**merged)


def _merge_config(default: Dict, loaded: Dict) -> Dict:
    """Merge loaded config with defaults"""
    merged = default.copy()
    for key, value in loaded.items():
        if key in merged:
            merged[key] = value
        else:
            logger.warning(f"Ignoring unknown config key: {key}")
    return merged


def _parse_color_overrides(colors: Dict[Any, Any]) -> Dict[int, str]:
    """Normalize palette overrides to {index: css color}, dropping invalid entries"""
    overrides = {}
    if not isinstance(colors, dict):
        logger.warning(f"Ignoring palette overrides that are not a JSON object: {colors!r}")
        return overrides
    for key, value in colors.items():
        try:
            index = int(key)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring palette override with non-numeric index: {key!r}")
            continue
        if not 0 <= index <= 255 or not isinstance(value, str) or not value:
            logger.warning(f"Ignoring invalid palette override {key!r}: {value!r}")
            continue
        overrides[index] = value
    return overrides


def load_config(path: Optional[str] = None) -> ConverterConfig:
    """Load configuration from a JSON file, falling back to defaults"""
    if path and os.path.exists(path):
        try:
            with open(path, "r") as f:
                data = json.load(f)
            if isinstance(data, dict):
                return ConverterConfig.from_dict(data)
            logger.warning(f"Config file {path} does not contain a JSON object")
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load config file: {e}")
    elif path:
        logger.warning(f"Config file not found: {path}")

    return ConverterConfig()

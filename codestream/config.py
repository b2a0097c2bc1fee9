"""Configuration management for codestream."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

from .stream import DEFAULT_HIGH_WATER, DEFAULT_WINDOW

_log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CODESTREAM_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/codestream/config.yaml"


@dataclass(frozen=True)
class BufferLimits:
    """Streaming buffer cap: cut to ``window`` chars once past ``high_water``."""

    high_water: int = DEFAULT_HIGH_WATER
    window: int = DEFAULT_WINDOW


@dataclass(frozen=True)
class RenderSettings:
    theme: str = "monokai"
    line_numbers: bool = True


class ConfigManager:
    """Manage codestream configuration from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        path = config_path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        self.config_path = Path(path).expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration, writing the defaults first if the file is missing."""
        if not self.config_path.exists():
            self._create_default_config()
        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            _log.warning("Error reading config %s: %s", self.config_path, e)
            return {}
        if not isinstance(content, dict):
            return {}
        return content

    def _create_default_config(self) -> None:
        default_config = {
            "stream": {
                "high_water": DEFAULT_HIGH_WATER,
                "window": DEFAULT_WINDOW,
            },
            "render": {
                "theme": "monokai",
                "line_numbers": True,
            },
        }
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                yaml.dump(default_config, f, default_flow_style=False)
        except OSError as e:
            _log.warning("Could not write default config %s: %s", self.config_path, e)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name) or {}
        return section if isinstance(section, dict) else {}

    def get_buffer_limits(self) -> BufferLimits:
        """Streaming buffer limits, file values over defaults."""
        stream = self._section("stream")
        high_water = self._int_setting(stream, "high_water", DEFAULT_HIGH_WATER)
        window = self._int_setting(stream, "window", DEFAULT_WINDOW)
        if window <= 0 or window >= high_water:
            _log.warning(
                "Invalid stream limits (high_water=%d, window=%d), using defaults",
                high_water, window,
            )
            return BufferLimits()
        return BufferLimits(high_water=high_water, window=window)

    def _int_setting(self, section: Dict[str, Any], key: str, default: int) -> int:
        value = section.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            _log.warning("Invalid value for %s: %r, using %d", key, value, default)
            return default

    def get_render_settings(self) -> RenderSettings:
        render = self._section("render")
        defaults = RenderSettings()
        return RenderSettings(
            theme=render.get("theme", defaults.theme),
            line_numbers=bool(render.get("line_numbers", defaults.line_numbers)),
        )

    def save(self) -> None:
        """Save configuration to file."""
        with open(self.config_path, "w") as f:
            yaml.dump(self.data, f, default_flow_style=False)

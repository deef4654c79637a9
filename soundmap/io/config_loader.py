"""
Configuration Loader

YAML-based configuration parser for SoundMap.

Loads source power, observer distance, propagation model, noise limits and
canvas size from a YAML file. Missing sections fall back to the defaults of
the interactive calculator (60 dB source at 5 m, hemispherical spreading,
Flanders residential limits, 600 x 600 canvas).

Example file:
    source:
      sound_power_db: 60
    observer:
      distance_m: 5
    model: hemispherical
    thresholds:
      - {db: 45, label: "Day (45dB)"}
      - {db: 35, label: "Night (35dB)"}
    canvas: {width: 600, height: 600}

Usage:
    loader = ConfigLoader('configs/heat_pump.yaml')
    config = loader.get_config()
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import yaml

from soundmap.physics.constants import (
    CANVAS_SIZE_PX,
    DEFAULT_DISTANCE_M,
    DEFAULT_SOUND_POWER_DB,
)
from soundmap.physics.contours import DEFAULT_THRESHOLDS, Threshold, get_preset
from soundmap.physics.propagation import AcousticParams, PropagationModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanvasConfig:
    """Drawing surface size [px]."""

    width: float = CANVAS_SIZE_PX
    height: float = CANVAS_SIZE_PX


@dataclass(frozen=True)
class SoundMapConfig:
    """Complete SoundMap configuration."""

    name: str
    sound_power_db: float = DEFAULT_SOUND_POWER_DB
    distance_m: float = DEFAULT_DISTANCE_M
    model: PropagationModel = PropagationModel.HEMISPHERICAL
    thresholds: Tuple[Threshold, ...] = DEFAULT_THRESHOLDS
    canvas: CanvasConfig = CanvasConfig()

    @property
    def params(self) -> AcousticParams:
        return AcousticParams(sound_power_db=self.sound_power_db, distance_m=self.distance_m)


def _as_float(value: Any, field: str) -> float:
    """Convert a config value to float, reporting the offending field."""
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{field}' must be a number, got {value!r}") from None


class ConfigLoader:
    """
    Loads SoundMap configurations from YAML files.

    Usage:
        loader = ConfigLoader('configs/heat_pump.yaml')
        config = loader.get_config()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            filepath: Path to YAML config file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[SoundMapConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load configuration from YAML file.

        Args:
            filepath: Path to YAML config file

        Returns:
            True if loaded successfully

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the YAML or the configuration is malformed
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Config file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            try:
                self.data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Malformed YAML in {filepath}: {e}") from e

        if not isinstance(self.data, dict):
            raise ValueError(f"Config root must be a mapping: {filepath}")

        self._config = self._parse_config()
        logger.info(
            "Loaded config '%s' from %s (%d thresholds)",
            self._config.name,
            filepath,
            len(self._config.thresholds),
        )
        return True

    def _parse_config(self) -> SoundMapConfig:
        """Parse loaded YAML data into SoundMapConfig."""
        source = self._section("source")
        observer = self._section("observer")

        return SoundMapConfig(
            name=str(self.data.get("name", "Unnamed Configuration")),
            sound_power_db=_as_float(
                source.get("sound_power_db", DEFAULT_SOUND_POWER_DB), "source.sound_power_db"
            ),
            distance_m=_as_float(observer.get("distance_m", DEFAULT_DISTANCE_M), "observer.distance_m"),
            model=PropagationModel.from_name(self.data.get("model", "hemispherical")),
            thresholds=self._parse_thresholds(),
            canvas=self._parse_canvas(),
        )

    def _section(self, key: str) -> Dict[str, Any]:
        """Return an optional mapping section, empty when absent."""
        section = self.data.get(key) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Section '{key}' must be a mapping, got {section!r}")
        return section

    def _parse_thresholds(self) -> Tuple[Threshold, ...]:
        """Parse noise limits, either a preset name or an explicit list."""
        preset_name = self.data.get("preset")
        if preset_name is not None:
            preset = get_preset(str(preset_name))
            if preset is None:
                raise ValueError(f"Unknown threshold preset: {preset_name}")
            return preset

        entries = self.data.get("thresholds")
        if entries is None:
            return DEFAULT_THRESHOLDS
        if not isinstance(entries, list):
            raise ValueError(f"'thresholds' must be a list, got {entries!r}")

        thresholds: List[Threshold] = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict) or "db" not in entry:
                raise ValueError(f"Threshold #{idx} must be a mapping with a 'db' key")
            thresholds.append(
                Threshold(
                    db=_as_float(entry["db"], f"thresholds[{idx}].db"),
                    label=str(entry.get("label") or ""),
                )
            )

        return tuple(thresholds)

    def _parse_canvas(self) -> CanvasConfig:
        """Parse drawing surface size."""
        canvas = self._section("canvas")
        width = _as_float(canvas.get("width", CANVAS_SIZE_PX), "canvas.width")
        height = _as_float(canvas.get("height", CANVAS_SIZE_PX), "canvas.height")

        if not (width > 0 and height > 0):
            raise ValueError(f"Canvas size must be positive, got {width} x {height}")

        return CanvasConfig(width=width, height=height)

    def get_config(self) -> Optional[SoundMapConfig]:
        """
        Get parsed configuration.

        Returns:
            SoundMapConfig or None if not loaded
        """
        return self._config


def load_config(filepath: str) -> SoundMapConfig:
    """
    Convenience function to load a config file.

    Args:
        filepath: Path to YAML config file

    Returns:
        SoundMapConfig instance
    """
    loader = ConfigLoader(filepath)
    return loader.get_config()

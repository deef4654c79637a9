"""
SoundMap I/O Package

Configuration loading and result export.
"""

from .config_loader import CanvasConfig, ConfigLoader, SoundMapConfig, load_config
from .exporter import export_result_to_yaml, get_default_filename

__all__ = [
    "CanvasConfig",
    "ConfigLoader",
    "SoundMapConfig",
    "load_config",
    "export_result_to_yaml",
    "get_default_filename",
]

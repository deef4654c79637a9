"""
Result Exporter

Serializes a calculator result to YAML so a configuration and its
computed levels can be saved and shared.
"""

import logging
from datetime import datetime
from typing import Optional

import yaml

from soundmap.simulation.calculator import SoundMapResult
from soundmap.visualization.projection import Projection, projection_to_dict

logger = logging.getLogger(__name__)


def export_result_to_yaml(
    result: SoundMapResult,
    filepath: str,
    name: str = "Sound Map",
    projection: Optional[Projection] = None,
) -> bool:
    """
    Export a result to a YAML file.

    Args:
        result: Calculator result
        filepath: Output file path
        name: Human-readable configuration name
        projection: Diagram layout to include (optional)

    Returns:
        True if export successful, False otherwise
    """
    data = {
        "export": {
            "name": name,
            "created": datetime.now().strftime("%Y-%m-%d %H:%M"),
            "version": "1.0",
        },
        "result": result.to_dict(),
    }
    if projection is not None:
        data["diagram"] = projection_to_dict(projection)

    try:
        with open(filepath, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to export result to %s: %s", filepath, e)
        return False

    logger.info("Result saved to %s", filepath)
    return True


def get_default_filename() -> str:
    """Generate default filename with timestamp."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"soundmap_{timestamp}.yaml"

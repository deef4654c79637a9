"""
SoundMap Source Package

Free-field sound propagation calculator with:
- Point source spreading law (hemispherical Q=2, spherical Q=1)
- Regulatory contour rings (day/night limits)
- 2D sound map projection with matplotlib rendering
"""

from soundmap.physics import (
    DEFAULT_THRESHOLDS,
    AcousticParams,
    ContourLevel,
    PropagationModel,
    Threshold,
    compute_distance_for_pressure,
    compute_pressure,
    generate_contours,
)
from soundmap.simulation.calculator import SoundMapResult, build_projection, evaluate
from soundmap.visualization.projection import LinearScale, Projection, project

__version__ = "1.0.0"
__author__ = "SoundMap Contributors"

__all__ = [
    # Physics
    "AcousticParams",
    "PropagationModel",
    "compute_pressure",
    "compute_distance_for_pressure",
    "Threshold",
    "ContourLevel",
    "DEFAULT_THRESHOLDS",
    "generate_contours",
    # Visualization
    "LinearScale",
    "Projection",
    "project",
    # Simulation
    "SoundMapResult",
    "evaluate",
    "build_projection",
]

"""
SoundMap Physics Package

Point source propagation and regulatory contour calculations.

Modules:
    - constants: Spreading corrections, distance floor, layout constants
    - propagation: Forward (Lw, r -> Lp) and inverse (Lw, Lp -> r) spreading law
    - contours: Threshold rings sorted by radius
"""

from .constants import (
    HEMISPHERICAL_CORRECTION_DB,
    MIN_DISTANCE_M,
    SPHERICAL_CORRECTION_DB,
)
from .contours import (
    DEFAULT_THRESHOLDS,
    ContourLevel,
    Threshold,
    generate_contours,
    get_preset,
    get_preset_names,
)
from .propagation import (
    AcousticParams,
    PropagationModel,
    compute_attenuation,
    compute_distance_for_pressure,
    compute_pressure,
)

__all__ = [
    # Constants
    "HEMISPHERICAL_CORRECTION_DB",
    "SPHERICAL_CORRECTION_DB",
    "MIN_DISTANCE_M",
    # Propagation
    "AcousticParams",
    "PropagationModel",
    "compute_pressure",
    "compute_distance_for_pressure",
    "compute_attenuation",
    # Contours
    "Threshold",
    "ContourLevel",
    "DEFAULT_THRESHOLDS",
    "generate_contours",
    "get_preset",
    "get_preset_names",
]

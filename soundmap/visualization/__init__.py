"""
SoundMap Visualization Package

Coordinate projection and rendering of the sound map diagram.
"""

from .projection import (
    Circle,
    LinearScale,
    Line,
    PrimitiveRole,
    Projection,
    Rect,
    Text,
    compute_domain_max,
    project,
)

__all__ = [
    "LinearScale",
    "Projection",
    "PrimitiveRole",
    "Circle",
    "Line",
    "Rect",
    "Text",
    "compute_domain_max",
    "project",
]

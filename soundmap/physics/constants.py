"""
Acoustic Constants for Sound Propagation

All distances in metres, all levels in decibels.

References:
    - ISO 9613-2:1996, "Attenuation of sound during propagation outdoors"
    - Bies & Hansen, "Engineering Noise Control", 5th Ed., Chapter 5
"""

from typing import Final, Tuple

# =============================================================================
# POINT SOURCE SPREADING (Lp = Lw - 20*log10(r) - C)
# =============================================================================

HEMISPHERICAL_CORRECTION_DB: Final[float] = 8.0
"""Spreading correction for Q=2 (source on a reflecting plane): 10*log10(2π) ≈ 8 dB"""

SPHERICAL_CORRECTION_DB: Final[float] = 11.0
"""Spreading correction for Q=1 (free space): 10*log10(4π) ≈ 11 dB"""

MIN_DISTANCE_M: Final[float] = 0.1
"""Distance floor applied before the logarithm [m]"""

DISTANCE_LAW_FACTOR: Final[float] = 20.0
"""Inverse square law in dB: 20*log10(r)"""

PRESSURE_DISPLAY_DECIMALS: Final[int] = 1
"""Decimals kept on the headline sound pressure level"""

# =============================================================================
# INPUT RANGES (slider ranges of the interactive calculator)
# =============================================================================

SOUND_POWER_RANGE_DB: Final[Tuple[float, float]] = (30.0, 120.0)
"""Typical sound power range [dB]; heat pumps sit around 50-70 dB"""

DISTANCE_RANGE_M: Final[Tuple[float, float]] = (1.0, 50.0)
"""Typical observer distance range [m]"""

DEFAULT_SOUND_POWER_DB: Final[float] = 60.0
DEFAULT_DISTANCE_M: Final[float] = 5.0

# =============================================================================
# DIAGRAM LAYOUT
# =============================================================================

CANVAS_SIZE_PX: Final[int] = 600
"""Default square drawing surface [px]"""

DOMAIN_MARGIN_FACTOR: Final[float] = 1.2
"""Domain half-width = 1.2 x the furthest relevant distance"""

MIN_DOMAIN_HALF_WIDTH_M: Final[float] = 1e-6
"""Fallback domain half-width when distance and all radii are zero [m]"""


class PlotColors:
    """Diagram colour palette (Tailwind slate/red/blue)"""

    CONTOUR: Final[str] = "#ef4444"
    CONTOUR_LABEL: Final[str] = "#dc2626"
    SOURCE: Final[str] = "#ef4444"
    OBSERVER: Final[str] = "#3b82f6"
    MARKER_EDGE: Final[str] = "#ffffff"
    LABEL_BACKGROUND: Final[str] = "#ffffffe6"
    LABEL_BORDER: Final[str] = "#cbd5e1"
    TEXT_PRIMARY: Final[str] = "#1e293b"
    TEXT_SECONDARY: Final[str] = "#64748b"
    BACKGROUND: Final[str] = "#f8fafc"

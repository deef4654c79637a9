"""
Regulatory Contour Generation

Derives, for each noise limit, the radius at which the source's sound
pressure level has decayed to that limit. Rings are returned innermost
(loudest) first.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .propagation import PropagationModel, compute_distance_for_pressure, format_number


@dataclass(frozen=True)
class Threshold:
    """
    Noise limit supplied by the caller.

    Attributes:
        db: Limit sound pressure level [dB]
        label: Display label (e.g. "Day (45dB)")
    """

    db: float
    label: str = ""

    @property
    def display_label(self) -> str:
        """Label, or "<db> dB" when none was given."""
        return self.label or f"{format_number(self.db)} dB"


@dataclass(frozen=True)
class ContourLevel:
    """
    Distance at which the sound pressure decays to a limit.

    Attributes:
        radius_m: Ring radius [m], full precision
        threshold_db: Limit reached on the ring [dB]
        label: Label of the originating threshold
    """

    radius_m: float
    threshold_db: float
    label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or f"{format_number(self.threshold_db)} dB"

    def to_dict(self) -> Dict:
        """Convert contour to dictionary for logging/serialization."""
        return {
            "radius_m": self.radius_m,
            "threshold_db": self.threshold_db,
            "label": self.label,
        }


def generate_contours(
    sound_power_db: float,
    thresholds: Iterable[Threshold],
    model: PropagationModel = PropagationModel.HEMISPHERICAL,
) -> List[ContourLevel]:
    """
    Generate one contour ring per threshold.

    Radii are computed regardless of whether the source is loud enough to
    reach the limit beyond 1 m; a quiet source simply yields a small ring.
    Threshold values are not validated.

    Args:
        sound_power_db: Sound power level Lw [dB]
        thresholds: Noise limits, in any order
        model: Spreading model (default: hemispherical, Q=2)

    Returns:
        Contours sorted ascending by radius
    """
    contours = [
        ContourLevel(
            radius_m=compute_distance_for_pressure(limit.db, sound_power_db, model),
            threshold_db=limit.db,
            label=limit.label,
        )
        for limit in thresholds
    ]

    return sorted(contours, key=lambda contour: contour.radius_m)


# =============================================================================
# THRESHOLD PRESETS
# =============================================================================

THRESHOLD_PRESETS: Dict[str, Tuple[Threshold, ...]] = {
    # Flemish environmental limits for residential areas (VLAREM II, indicative)
    "Flanders Residential": (
        Threshold(db=45.0, label="Day (45dB)"),
        Threshold(db=35.0, label="Night (35dB)"),
    ),
    # WHO Environmental Noise Guidelines for the European Region (2018)
    "WHO Guideline": (
        Threshold(db=53.0, label="Lden (53dB)"),
        Threshold(db=45.0, label="Lnight (45dB)"),
    ),
}

DEFAULT_PRESET_NAME = "Flanders Residential"

DEFAULT_THRESHOLDS: Tuple[Threshold, ...] = THRESHOLD_PRESETS[DEFAULT_PRESET_NAME]


def get_preset(name: str) -> Optional[Tuple[Threshold, ...]]:
    """
    Get a threshold preset by name.

    Args:
        name: Preset name (e.g., "Flanders Residential")

    Returns:
        Tuple of thresholds or None if not found
    """
    return THRESHOLD_PRESETS.get(name)


def get_preset_names() -> List[str]:
    """Get list of available preset names."""
    return list(THRESHOLD_PRESETS.keys())

"""
Sound Map Calculator

Evaluates the full result set (pressure level, attenuation, contours) for
one source/observer configuration.

Results are memoized by (sound power, distance, model, thresholds); a
cache miss recomputes everything from scratch and yields identical values.

Usage:
    result = evaluate(60.0, 5.0)
    projection = build_projection(result)
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterable, Tuple

from soundmap.physics.constants import CANVAS_SIZE_PX
from soundmap.physics.contours import (
    DEFAULT_THRESHOLDS,
    ContourLevel,
    Threshold,
    generate_contours,
)
from soundmap.physics.propagation import (
    AcousticParams,
    PropagationModel,
    compute_attenuation,
    compute_pressure,
)
from soundmap.visualization.projection import Projection, project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SoundMapResult:
    """
    Results for one configuration.

    Attributes:
        params: Source power and observer distance
        model: Spreading model used
        sound_pressure_db: Lp at the observer [dB], one decimal
        attenuation_db: Lw - Lp [dB], one decimal
        contours: Threshold rings, ascending radius
        exceeded: Labels of thresholds the observer level exceeds
    """

    params: AcousticParams
    model: PropagationModel
    sound_pressure_db: float
    attenuation_db: float
    contours: Tuple[ContourLevel, ...]
    exceeded: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/YAML export."""
        return {
            "sound_power_db": self.params.sound_power_db,
            "distance_m": self.params.distance_m,
            "model": self.model.value,
            "directivity_q": self.model.directivity_q,
            "sound_pressure_db": self.sound_pressure_db,
            "attenuation_db": self.attenuation_db,
            "contours": [c.to_dict() for c in self.contours],
            "exceeded": list(self.exceeded),
        }


@lru_cache(maxsize=256)
def _evaluate_cached(
    sound_power_db: float,
    distance_m: float,
    model: PropagationModel,
    thresholds: Tuple[Threshold, ...],
) -> SoundMapResult:
    params = AcousticParams(sound_power_db=sound_power_db, distance_m=distance_m)

    pressure = compute_pressure(params, model)
    contours = generate_contours(sound_power_db, thresholds, model)
    exceeded = tuple(t.display_label for t in thresholds if pressure > t.db)

    logger.debug(
        "Evaluated Lw=%s dB r=%s m (%s): Lp=%s dB, %d contours",
        sound_power_db,
        distance_m,
        model.value,
        pressure,
        len(contours),
    )

    return SoundMapResult(
        params=params,
        model=model,
        sound_pressure_db=pressure,
        attenuation_db=compute_attenuation(sound_power_db, pressure),
        contours=tuple(contours),
        exceeded=exceeded,
    )


def evaluate(
    sound_power_db: float,
    distance_m: float,
    model: PropagationModel = PropagationModel.HEMISPHERICAL,
    thresholds: Iterable[Threshold] = DEFAULT_THRESHOLDS,
) -> SoundMapResult:
    """
    Evaluate pressure level, attenuation and contours.

    Args:
        sound_power_db: Sound power level Lw [dB]
        distance_m: Observer distance [m]
        model: Spreading model (default: hemispherical, Q=2)
        thresholds: Noise limits (default: Flanders residential day/night)

    Returns:
        SoundMapResult
    """
    return _evaluate_cached(
        float(sound_power_db), float(distance_m), model, tuple(thresholds)
    )


def build_projection(
    result: SoundMapResult, width: float = CANVAS_SIZE_PX, height: float = CANVAS_SIZE_PX
) -> Projection:
    """Lay out the diagram for a result."""
    return project(
        result.params.distance_m,
        result.contours,
        pressure_db=result.sound_pressure_db,
        width=width,
        height=height,
    )


def clear_cache() -> None:
    """Drop all memoized results."""
    _evaluate_cached.cache_clear()


def cache_info():
    """Memoization statistics (hits, misses, maxsize, currsize)."""
    return _evaluate_cached.cache_info()


# =============================================================================
# VALIDATION FUNCTIONS
# =============================================================================


def validate_reference_example() -> dict:
    """
    Validate the calculator against a hand-computed reference case.

    Problem Parameters (ground-mounted heat pump):
        Lw = 60 dB
        r = 5 m
        Q = 2 (hemispherical, C = 8 dB)
        Limits: 45 dB (day), 35 dB (night)

    Hand calculation:
        Lp = 60 - 20*log10(5) - 8 = 38.02 dB -> 38.0 dB
        r(45 dB) = 10^((60 - 45 - 8) / 20) = 10^0.35 ≈ 2.239 m
        r(35 dB) = 10^((60 - 35 - 8) / 20) = 10^0.85 ≈ 7.079 m
        D = 1.2 * max(5, 7.079) ≈ 8.495 m

    Returns:
        Dict containing computed values, expected values, and validation status
    """
    result = evaluate(60.0, 5.0, PropagationModel.HEMISPHERICAL, DEFAULT_THRESHOLDS)
    projection = build_projection(result)

    expected_pressure_db = 38.0
    expected_radii_m = (2.239, 7.079)
    expected_domain_max_m = 8.495
    tolerance_m = 0.001

    radii = tuple(c.radius_m for c in result.contours)
    radius_errors = [abs(a - b) for a, b in zip(radii, expected_radii_m)]
    domain_error = abs(projection.domain_max - expected_domain_max_m)

    is_valid = (
        result.sound_pressure_db == expected_pressure_db
        and len(radii) == len(expected_radii_m)
        and all(err <= tolerance_m for err in radius_errors)
        and domain_error <= tolerance_m
    )

    return {
        "input_parameters": {
            "Lw_dB": 60.0,
            "r_m": 5.0,
            "model": PropagationModel.HEMISPHERICAL.value,
            "correction_dB": PropagationModel.HEMISPHERICAL.correction_db,
            "thresholds_dB": [t.db for t in DEFAULT_THRESHOLDS],
        },
        "computed_values": {
            "Lp_dB": result.sound_pressure_db,
            "contour_radii_m": list(radii),
            "domain_max_m": projection.domain_max,
        },
        "expected_values": {
            "Lp_dB": expected_pressure_db,
            "contour_radii_m": list(expected_radii_m),
            "domain_max_m": expected_domain_max_m,
            "tolerance_m": tolerance_m,
        },
        "validation": {
            "is_valid": is_valid,
            "max_radius_error_m": max(radius_errors) if radius_errors else 0.0,
            "domain_error_m": domain_error,
        },
    }

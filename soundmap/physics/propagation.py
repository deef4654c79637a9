"""
Point Source Propagation with Numba JIT Optimization

Free-field conversion between sound power level (Lw) and sound pressure
level (Lp) for a single idealized point source.

    Lp = Lw - 20*log10(r) - C

where C absorbs the directivity factor Q (C = 8 dB for Q=2, 11 dB for Q=1).

References:
    - ISO 9613-2:1996, Eq. (3) with Dc = 10*log10(Q)
    - Bies & Hansen, "Engineering Noise Control", 5th Ed., Eq. 5.3
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

import numba
import numpy as np

from .constants import (
    DISTANCE_LAW_FACTOR,
    HEMISPHERICAL_CORRECTION_DB,
    MIN_DISTANCE_M,
    PRESSURE_DISPLAY_DECIMALS,
    SPHERICAL_CORRECTION_DB,
)

# =============================================================================
# PROPAGATION MODEL ENUMERATION
# =============================================================================


class PropagationModel(Enum):
    """
    Geometric spreading model of the source.

    Scientific Note:
        - HEMISPHERICAL: source resting on a hard ground plane, radiates
          into a half-space (Q=2)
        - SPHERICAL: source suspended in free space (Q=1)
    """

    HEMISPHERICAL = "hemispherical"  # Q=2, ground-mounted equipment
    SPHERICAL = "spherical"  # Q=1, free field

    @property
    def directivity_q(self) -> int:
        """Directivity factor Q."""
        return 2 if self is PropagationModel.HEMISPHERICAL else 1

    @property
    def correction_db(self) -> float:
        """Spreading correction C [dB] subtracted from Lw - 20*log10(r)."""
        if self is PropagationModel.HEMISPHERICAL:
            return HEMISPHERICAL_CORRECTION_DB
        return SPHERICAL_CORRECTION_DB

    @classmethod
    def from_name(cls, name: str) -> "PropagationModel":
        """
        Look up a model by its (case-insensitive) name or value.

        Raises:
            ValueError: If the name matches no model
        """
        key = str(name).strip().lower()
        for model in cls:
            if key in (model.value, model.name.lower()):
                return model
        raise ValueError(
            f"Unknown propagation model '{name}', expected one of {[m.value for m in cls]}"
        )


@dataclass(frozen=True)
class AcousticParams:
    """
    Source and observer inputs.

    Attributes:
        sound_power_db: Sound power level Lw of the source [dB]
        distance_m: Source-to-observer distance r [m]
    """

    sound_power_db: float
    distance_m: float


# =============================================================================
# NUMBA JIT-COMPILED FUNCTIONS
# =============================================================================


@numba.jit(nopython=True, cache=True)
def _calculate_sound_pressure_jit(
    sound_power_db: float, distance_m: float, correction_db: float, min_distance_m: float
) -> float:
    """
    JIT-compiled point source spreading law

    Lp = Lw - 20*log10(max(r, r_min)) - C

    Args:
        sound_power_db: Sound power level Lw [dB]
        distance_m: Observer distance [m]
        correction_db: Spreading correction C [dB]
        min_distance_m: Distance floor [m]

    Returns:
        Unrounded sound pressure level [dB]
    """
    if distance_m < min_distance_m:
        distance_m = min_distance_m

    return sound_power_db - DISTANCE_LAW_FACTOR * np.log10(distance_m) - correction_db


@numba.jit(nopython=True, cache=True)
def _calculate_distance_for_pressure_jit(
    target_db: float, sound_power_db: float, correction_db: float
) -> float:
    """
    JIT-compiled inverse spreading law

    r = 10^((Lw - Lp - C) / 20)

    Returns:
        Distance at which Lp is reached [m]
    """
    exponent = (sound_power_db - target_db - correction_db) / DISTANCE_LAW_FACTOR
    return 10.0**exponent


# =============================================================================
# HIGH-LEVEL API FUNCTIONS
# =============================================================================


def round_level(value_db: float, decimals: int = PRESSURE_DISPLAY_DECIMALS) -> float:
    """
    Round a level for display, half away from zero.

    The exact binary value of the float is rounded, so 38.25 becomes 38.3
    and 38.05 (stored as 38.04999...) becomes 38.0.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value_db):
        return value_db

    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value_db).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Shortest display form: 5 -> '5', 2.5 -> '2.5'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def compute_pressure(
    params: AcousticParams, model: PropagationModel = PropagationModel.HEMISPHERICAL
) -> float:
    """
    Calculate the sound pressure level at the observer.

    Lp = Lw - 20*log10(r) - C, rounded to one decimal.

    Distances below 0.1 m (including zero and negative values) are
    floored to 0.1 m before the logarithm.

    Args:
        params: Source power and observer distance
        model: Spreading model (default: hemispherical, Q=2)

    Returns:
        Sound pressure level Lp [dB], one decimal

    Reference: ISO 9613-2:1996, Eq. (3)
    """
    lp = _calculate_sound_pressure_jit(
        float(params.sound_power_db),
        float(params.distance_m),
        model.correction_db,
        MIN_DISTANCE_M,
    )
    return round_level(float(lp))


def compute_distance_for_pressure(
    target_db: float,
    sound_power_db: float,
    model: PropagationModel = PropagationModel.HEMISPHERICAL,
) -> float:
    """
    Calculate the distance at which the pressure level decays to target_db.

    Derived from Lp = Lw - 20*log10(r) - C:
        log10(r) = (Lw - Lp - C) / 20
        r = 10^((Lw - Lp - C) / 20)

    No floor and no rounding: a quiet source yields a sub-metre radius,
    which is returned as computed.

    Args:
        target_db: Target sound pressure level [dB]
        sound_power_db: Sound power level Lw [dB]
        model: Spreading model (default: hemispherical, Q=2)

    Returns:
        Distance [m], full precision
    """
    return float(
        _calculate_distance_for_pressure_jit(
            float(target_db), float(sound_power_db), model.correction_db
        )
    )


def compute_attenuation(sound_power_db: float, pressure_db: float) -> float:
    """Level drop Lw - Lp between source and observer [dB], one decimal."""
    return round_level(sound_power_db - pressure_db)

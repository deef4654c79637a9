"""
SoundMap Simulation Package

Memoized evaluation of a source/observer configuration.
"""

from .calculator import (
    SoundMapResult,
    build_projection,
    cache_info,
    clear_cache,
    evaluate,
    validate_reference_example,
)

__all__ = [
    "SoundMapResult",
    "evaluate",
    "build_projection",
    "clear_cache",
    "cache_info",
    "validate_reference_example",
]

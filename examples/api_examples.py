"""
SoundMap API Examples

Usage examples demonstrating the sound propagation API.
"""

import os
import sys

import numpy as np

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def example_basic_pressure():
    """
    Example 1: Pressure Level at the Neighbour

    Heat pump (Lw = 60 dB) on the ground, neighbour's window at 5 m.
    """
    from soundmap import AcousticParams, PropagationModel, compute_pressure

    params = AcousticParams(sound_power_db=60.0, distance_m=5.0)

    lp_ground = compute_pressure(params, PropagationModel.HEMISPHERICAL)
    lp_free = compute_pressure(params, PropagationModel.SPHERICAL)

    print("Example 1: Pressure Level")
    print(f"  Ground-mounted (Q=2): {lp_ground:.1f} dB")
    print(f"  Free field (Q=1):     {lp_free:.1f} dB")


def example_required_distance():
    """
    Example 2: Required Distance for a Noise Limit

    How far away must the observer be for 35 dB at night?
    """
    from soundmap import compute_distance_for_pressure

    for lw in (55.0, 60.0, 65.0, 70.0):
        r = compute_distance_for_pressure(35.0, lw)
        print(f"  Lw = {lw:.0f} dB -> 35 dB reached at {r:.2f} m")


def example_distance_sweep():
    """
    Example 3: Level Decay Curve

    Sample the pressure level on a logarithmic distance grid.
    """
    from soundmap import AcousticParams, compute_pressure

    distances = np.logspace(-1, 2, 7)  # 0.1 m .. 100 m
    for r in distances:
        lp = compute_pressure(AcousticParams(60.0, float(r)))
        print(f"  r = {r:7.2f} m  Lp = {lp:5.1f} dB")


def example_sound_map():
    """
    Example 4: Sound Map Image

    Evaluate contours for the Flanders limits and render the diagram.
    """
    from soundmap import build_projection, evaluate
    from soundmap.visualization.matplotlib_2d import save_sound_map

    result = evaluate(60.0, 5.0)
    projection = build_projection(result)

    for contour in result.contours:
        print(f"  {contour.label}: {contour.radius_m:.3f} m")

    path = save_sound_map(projection, "output/example_soundmap.png")
    print(f"  Saved: {path}")


if __name__ == "__main__":
    example_basic_pressure()
    print("\nExample 2: Required Distance")
    example_required_distance()
    print("\nExample 3: Distance Sweep")
    example_distance_sweep()
    print("\nExample 4: Sound Map")
    example_sound_map()

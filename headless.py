#!/usr/bin/env python3
"""
Headless SoundMap CLI

Compute the sound pressure level and regulatory contours for one source
without a GUI, optionally rendering the sound map and exporting the result.

Usage:
    python headless.py                          # Default: 60 dB at 5 m
    python headless.py --power 70 --distance 12 # Custom source/observer
    python headless.py --config heat_pump.yaml  # From file

Examples:
    # Free-field source with custom limits
    python headless.py --model spherical --threshold 50:Day --threshold 40:Night

    # Render the diagram and save the numbers
    python headless.py --plot output/soundmap.png --export output/soundmap.yaml
"""

import argparse
import logging
import math
import os
import sys
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from soundmap.io.config_loader import CanvasConfig, SoundMapConfig, load_config
from soundmap.io.exporter import export_result_to_yaml
from soundmap.physics.constants import (
    DEFAULT_DISTANCE_M,
    DEFAULT_SOUND_POWER_DB,
    DISTANCE_RANGE_M,
    SOUND_POWER_RANGE_DB,
)
from soundmap.physics.contours import (
    DEFAULT_THRESHOLDS,
    Threshold,
    get_preset,
    get_preset_names,
)
from soundmap.physics.propagation import PropagationModel, format_number
from soundmap.simulation.calculator import build_projection, evaluate

logger = logging.getLogger("soundmap.headless")


def parse_threshold(text: str) -> Threshold:
    """Parse 'DB' or 'DB:LABEL' into a Threshold."""
    db_text, _, label = text.partition(":")
    try:
        db = float(db_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid threshold '{text}', expected DB[:LABEL]")
    return Threshold(db=db, label=label or f"{format_number(db)} dB")


def validate_inputs(config: SoundMapConfig) -> Optional[str]:
    """
    Reject inputs the calculator is not meant to receive.

    Returns:
        Error message, or None if the inputs are usable
    """
    if not math.isfinite(config.sound_power_db):
        return f"Sound power must be a finite number, got {config.sound_power_db}"
    if not math.isfinite(config.distance_m) or config.distance_m <= 0:
        return f"Distance must be a positive number, got {config.distance_m}"
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a sound map for a point source")

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file")

    # Source/observer parameters
    parser.add_argument(
        "--power",
        type=float,
        default=DEFAULT_SOUND_POWER_DB,
        help=f"Sound power level Lw in dB (default: {DEFAULT_SOUND_POWER_DB:g}, "
        f"typical {SOUND_POWER_RANGE_DB[0]:g}-{SOUND_POWER_RANGE_DB[1]:g})",
    )
    parser.add_argument(
        "--distance",
        type=float,
        default=DEFAULT_DISTANCE_M,
        help=f"Observer distance in m (default: {DEFAULT_DISTANCE_M:g}, "
        f"typical {DISTANCE_RANGE_M[0]:g}-{DISTANCE_RANGE_M[1]:g})",
    )
    parser.add_argument(
        "--model",
        choices=[m.value for m in PropagationModel],
        default=PropagationModel.HEMISPHERICAL.value,
        help="Spreading model (default: hemispherical)",
    )

    # Noise limits
    parser.add_argument(
        "--threshold",
        type=parse_threshold,
        action="append",
        default=None,
        metavar="DB[:LABEL]",
        help="Noise limit, repeatable (default: Flanders day/night)",
    )
    parser.add_argument(
        "--preset", choices=get_preset_names(), default=None, help="Named noise limit preset"
    )

    # Outputs
    parser.add_argument("--plot", type=str, default=None, help="Save sound map image (png/svg/pdf)")
    parser.add_argument("--export", type=str, default=None, help="Save result as YAML")

    # Options
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser


def config_from_args(args: argparse.Namespace) -> SoundMapConfig:
    """Build a configuration from command-line arguments."""
    thresholds: List[Threshold]
    if args.threshold:
        thresholds = list(args.threshold)
    elif args.preset:
        thresholds = list(get_preset(args.preset))
    else:
        thresholds = list(DEFAULT_THRESHOLDS)

    return SoundMapConfig(
        name="Command Line",
        sound_power_db=args.power,
        distance_m=args.distance,
        model=PropagationModel.from_name(args.model),
        thresholds=tuple(thresholds),
        canvas=CanvasConfig(),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Load config
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            print(f"Error: Config file not found: {args.config}")
            return 1
        except ValueError as e:
            print(f"Error: Invalid config file {args.config}: {e}")
            return 1
    else:
        config = config_from_args(args)

    error = validate_inputs(config)
    if error:
        print(f"Error: {error}")
        return 1

    result = evaluate(config.sound_power_db, config.distance_m, config.model, config.thresholds)

    if not args.quiet:
        print("=" * 60)
        print("SoundMap Headless Mode")
        print("=" * 60)
        print(f"Configuration: {config.name}")
        print(f"Sound Power (Lw): {config.sound_power_db:.1f} dB")
        print(f"Distance: {config.distance_m:g} m")
        print(f"Model: {config.model.value} (Q={config.model.directivity_q})")
        print("=" * 60)
        print("\n--- RESULTS ---")
        print(f"Sound Pressure (Lp): {result.sound_pressure_db:.1f} dB")
        print(f"Attenuation: {result.attenuation_db:.1f} dB")
        for contour in result.contours:
            print(
                f"Contour {contour.display_label} @ {contour.threshold_db:g} dB: "
                f"{contour.radius_m:.3f} m"
            )
        if result.exceeded:
            print(f"Exceeded limits: {', '.join(result.exceeded)}")
        print("=" * 60)
    else:
        # Machine-readable output
        print(f"{result.sound_pressure_db:.1f}")

    projection = None
    if args.plot:
        # Imported lazily so plain calculations do not load matplotlib
        import matplotlib

        matplotlib.use("Agg")  # Non-interactive backend
        from soundmap.visualization.matplotlib_2d import save_sound_map

        projection = build_projection(result, config.canvas.width, config.canvas.height)
        try:
            save_sound_map(projection, args.plot)
        except (OSError, ValueError) as e:
            logger.error("Failed to save sound map to %s: %s", args.plot, e)
            print(f"Error: Could not write {args.plot}")
            return 1
        if not args.quiet:
            print(f"Sound map saved to: {args.plot}")

    if args.export:
        if not export_result_to_yaml(result, args.export, name=config.name, projection=projection):
            print(f"Error: Could not write {args.export}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

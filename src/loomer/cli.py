"""
loomer Command Line
===================

Build a looming model, assemble its frame sequence and optionally
extract the Apparent Looming Threshold, from the shell.

Usage:
    python -m loomer constant --speed 500 --start-distance 500 --frame-rate 30
    python -m loomer variable --speeds 100,200,300 --response-frame 2
    python -m loomer diameter --duration 1 --response-frame 20 --new-distance 20 --json

Defaults come from the loaded settings (loomer.yaml and LOOMER_*
environment variables); command line options override them.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import yaml
from pydantic import ValidationError

from loomer.animation import assemble_frames
from loomer.builders import constant_speed_model, diameter_model, variable_speed_model
from loomer.config import Settings, load_config, setup_logging
from loomer.errors import InvalidInputError, InvariantViolationError, LoomerError
from loomer.models.parameters import ExpansionPolicy
from loomer.models.stimulus import LoomingModel
from loomer.threshold import get_alt


logger = logging.getLogger(__name__)


# =============================================================================
# Argument Parsing
# =============================================================================

def _common_options() -> argparse.ArgumentParser:
    """Options shared by every model subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--response-frame",
        type=int,
        default=None,
        help="Frame of the escape response; extracts the ALT when given",
    )
    common.add_argument(
        "--new-distance",
        type=float,
        default=None,
        help="Viewing distance (cm) for ALT extraction (required for diameter models)",
    )
    common.add_argument(
        "--latency",
        type=float,
        default=None,
        help="Response latency (s) subtracted before sampling the ALT",
    )
    common.add_argument(
        "--pad",
        type=float,
        default=None,
        help="Seconds of first-frame hold prepended to the animation",
    )
    common.add_argument(
        "--pad-blank",
        action="store_true",
        help="Hide the stimulus during padding",
    )
    common.add_argument(
        "--correction",
        type=float,
        default=None,
        help="Display calibration factor applied to diameters",
    )
    common.add_argument(
        "--json",
        action="store_true",
        help="Print the ALT report as JSON",
    )
    return common


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="loomer",
        description="Generate looming stimulus frame data and extract ALTs.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a loomer.yaml configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the configured log level",
    )
    
    common = _common_options()
    subparsers = parser.add_subparsers(dest="model", required=True)
    
    constant = subparsers.add_parser(
        "constant", parents=[common], help="Attacker at constant speed"
    )
    constant.add_argument("--screen-distance", type=float, default=None)
    constant.add_argument("--frame-rate", type=float, default=None)
    constant.add_argument("--speed", type=float, default=None)
    constant.add_argument("--attacker-diameter", type=float, default=None)
    constant.add_argument("--start-distance", type=float, default=None)
    
    variable = subparsers.add_parser(
        "variable", parents=[common], help="Attacker following a speed profile"
    )
    profile = variable.add_mutually_exclusive_group(required=True)
    profile.add_argument(
        "--speeds",
        type=str,
        help="Comma separated speeds (cm/s), one per frame",
    )
    profile.add_argument(
        "--speeds-file",
        type=Path,
        help="Text file with one speed (cm/s) per line",
    )
    variable.add_argument("--screen-distance", type=float, default=None)
    variable.add_argument("--frame-rate", type=float, default=None)
    variable.add_argument("--attacker-diameter", type=float, default=None)
    
    diameter = subparsers.add_parser(
        "diameter", parents=[common], help="On-screen diameter trajectory"
    )
    diameter.add_argument("--start-diameter", type=float, default=None)
    diameter.add_argument("--end-diameter", type=float, default=None)
    diameter.add_argument("--duration", type=float, default=None)
    diameter.add_argument("--frame-rate", type=float, default=None)
    diameter.add_argument(
        "--expansion",
        dest="expansion_policy",
        choices=[policy.value for policy in ExpansionPolicy],
        default=None,
    )
    
    return parser


# =============================================================================
# Model Construction
# =============================================================================

def _merged(defaults, args: argparse.Namespace) -> dict:
    """Configured defaults overridden by any options given on the CLI."""
    values = defaults.model_dump()
    for name in values:
        override = getattr(args, name, None)
        if override is not None:
            values[name] = override
    return values


def read_speed_profile(
    speeds: Optional[str] = None,
    speeds_file: Optional[Path] = None,
) -> List[float]:
    """
    Parse a speed profile from a comma separated string or a text file.
    
    Raises:
        InvalidInputError: If a value is not numeric or the file
            cannot be read
    """
    if speeds_file is not None:
        try:
            return np.loadtxt(speeds_file, dtype=float, ndmin=1).tolist()
        except (OSError, ValueError) as exc:
            raise InvalidInputError(f"Could not read speeds from {speeds_file}: {exc}") from exc
    
    try:
        return [float(value) for value in speeds.split(",") if value.strip()]
    except ValueError as exc:
        raise InvalidInputError(f"Speeds must be numeric: {exc}") from exc


def build_model(args: argparse.Namespace, settings: Settings) -> LoomingModel:
    """Build the model selected on the command line."""
    if args.model == "constant":
        return constant_speed_model(**_merged(settings.constant_speed, args))
    if args.model == "variable":
        profile = read_speed_profile(args.speeds, args.speeds_file)
        return variable_speed_model(profile, **_merged(settings.variable_speed, args))
    return diameter_model(**_merged(settings.diameter, args))


# =============================================================================
# Entry Point
# =============================================================================

def run(args: argparse.Namespace, settings: Settings) -> None:
    """Build, assemble and (optionally) extract; print the results."""
    model = build_model(args, settings)
    animation = settings.animation
    
    sequence = assemble_frames(
        model,
        correction=args.correction if args.correction is not None else animation.correction,
        pad=args.pad if args.pad is not None else animation.pad,
        pad_blank=args.pad_blank or animation.pad_blank,
        markers=animation.markers,
        width=animation.width,
        height=animation.height,
    )
    
    if args.response_frame is None:
        print(repr(model))
        print(repr(sequence))
        print(f"Animation duration: {sequence.duration:.2f}s")
        return
    
    threshold = settings.threshold
    report = get_alt(
        model,
        response_frame=args.response_frame,
        new_distance=args.new_distance if args.new_distance is not None else threshold.new_distance,
        latency=args.latency if args.latency is not None else threshold.latency,
    )
    
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(repr(model))
        print(repr(sequence))
        print(report.summary())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse command line options and run.
    
    Returns:
        Process exit code: 0 on success, 2 on invalid input or
        configuration
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    
    try:
        settings = load_config(args.config)
    except (ValidationError, ValueError, yaml.YAMLError) as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 2
    
    if args.log_level:
        settings.logging.level = args.log_level
    setup_logging(settings)
    
    try:
        run(args, settings)
    except InvariantViolationError:
        raise
    except LoomerError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 2
    
    return 0


if __name__ == "__main__":  # pragma: no cover - module level CLI hook
    sys.exit(main())

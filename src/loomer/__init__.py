"""
loomer
======

Calibrated looming stimuli and Apparent Looming Threshold extraction.

This package generates frame-by-frame kinematic descriptions of a
circular "attacker" approaching an observer at a fixed viewing distance,
and extracts escape-response thresholds from them.

Components:
    - kinematics: visual angle, angular velocity and screen diameter
    - builders: constant speed, variable speed and diameter models
    - animation: padding, display correction and frame annotations
    - threshold: Apparent Looming Threshold (ALT) extraction
    - config: YAML/environment configuration

Example:
    from loomer import constant_speed_model, get_alt
    
    model = constant_speed_model(frame_rate=30, speed=500, start_distance=500)
    report = get_alt(model, response_frame=29, latency=0.1)
    print(report)
"""

__version__ = "0.1.0"

from loomer.builders import constant_speed_model, diameter_model, variable_speed_model
from loomer.animation import MarkerConfig, assemble_frames, pad_series
from loomer.threshold import get_alt
from loomer.models import (
    AltReport,
    ConstantSpeedModel,
    DiameterModel,
    Frame,
    FrameSeries,
    LoomingModel,
    VariableSpeedModel,
)

__all__ = [
    "__version__",
    "constant_speed_model",
    "variable_speed_model",
    "diameter_model",
    "assemble_frames",
    "pad_series",
    "MarkerConfig",
    "get_alt",
    "AltReport",
    "ConstantSpeedModel",
    "VariableSpeedModel",
    "DiameterModel",
    "LoomingModel",
    "Frame",
    "FrameSeries",
]

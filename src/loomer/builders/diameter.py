"""
Diameter Builder
================

Builds a looming model directly from an on-screen diameter trajectory.

No attacker size or screen distance is ever specified, so the resulting
model carries only ``diam_on_screen``. Angles must later be computed
against an externally supplied viewing distance.

Expansion Policies:
    constant_speed:
        1/diameter is proportional to distance, so interpolating the
        reciprocal linearly mimics constant physical closing speed
        (growth accelerates over time).
        
            proxy_i = 1/start - (i - 1) * (1/start - 1/end) / (N - 1)
            diam_i  = 1 / proxy_i
    
    constant_diameter:
        Linear interpolation of the diameter itself.
        
            diam_i = start + (i - 1) * (end - start) / (N - 1)
"""

import logging

import numpy as np

from loomer.builders.validation import frame_count, validate_params
from loomer.errors import InvalidConfigError, InvalidInputError
from loomer.models.frame import FrameSeries
from loomer.models.parameters import DiameterParams, ExpansionPolicy
from loomer.models.stimulus import DiameterModel


logger = logging.getLogger(__name__)


def _expansion_policy(value) -> ExpansionPolicy:
    try:
        return ExpansionPolicy(value)
    except ValueError:
        options = " or ".join(f"'{policy.value}'" for policy in ExpansionPolicy)
        raise InvalidConfigError(
            f"expansion_policy {value!r} not recognised: must be {options}"
        ) from None


def diameter_model(
    start_diameter: float = 3.0,
    end_diameter: float = 50.0,
    duration: float = 3.0,
    frame_rate: float = 60.0,
    expansion_policy: str = "constant_speed",
) -> DiameterModel:
    """
    Build a diameter-trajectory looming model.
    
    Args:
        start_diameter: On-screen diameter at frame 1 (cm)
        end_diameter: On-screen diameter at the last frame (cm)
        duration: Animation length (seconds)
        frame_rate: Playback frame rate (frames/second)
        expansion_policy: 'constant_speed' or 'constant_diameter'
        
    Returns:
        DiameterModel
        
    Raises:
        InvalidConfigError: If ``expansion_policy`` is not recognised
        InvalidInputError: If a parameter is out of range or the
            duration covers fewer than two frames
    """
    policy = _expansion_policy(expansion_policy)
    params = validate_params(
        DiameterParams,
        start_diameter=start_diameter,
        end_diameter=end_diameter,
        duration=duration,
        frame_rate=frame_rate,
        expansion_policy=policy,
    )
    
    total_frames = frame_count(params.duration, params.frame_rate)
    if total_frames < 2:
        raise InvalidInputError(
            f"duration of {params.duration}s at {params.frame_rate}fps gives "
            f"{total_frames} frame(s); at least 2 are required"
        )
    
    steps = np.arange(total_frames)
    if policy is ExpansionPolicy.CONSTANT_SPEED:
        start_proxy = 1.0 / params.start_diameter
        end_proxy = 1.0 / params.end_diameter
        step = (start_proxy - end_proxy) / (total_frames - 1)
        diam_on_screen = 1.0 / (start_proxy - steps * step)
    else:
        step = (params.end_diameter - params.start_diameter) / (total_frames - 1)
        diam_on_screen = params.start_diameter + steps * step
    
    series = FrameSeries.build(
        frame_rate=params.frame_rate,
        diam_on_screen=diam_on_screen,
    )
    
    logger.info(
        f"Diameter model built: {total_frames} frames "
        f"({total_frames / params.frame_rate:.2f}s), "
        f"{params.start_diameter}->{params.end_diameter}cm, "
        f"expansion={policy.value}"
    )
    
    return DiameterModel(
        series=series,
        frame_rate=params.frame_rate,
        start_diameter=params.start_diameter,
        end_diameter=params.end_diameter,
        duration_seconds=params.duration,
        expansion_policy=policy,
    )

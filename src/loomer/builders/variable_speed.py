"""
Variable Speed Builder
======================

Builds a looming model from a per-frame speed profile.

The last sample of the profile is assumed to coincide with zero
distance, so the approach is back-calculated from the end:

    distance_per_frame_i = speed_i / frame_rate
    start_distance       = Σ distance_per_frame
    distance_i           = start_distance - cumsum(distance_per_frame)_i

Angular velocity uses the discrete derivative since there is no single
analytic speed. High accelerations late in a profile can push
intermediate frames towards infinite size, so every frame is clamped
individually.
"""

import logging
from typing import Sequence, Union

import numpy as np

from loomer.builders.validation import validate_params
from loomer.errors import InvalidInputError
from loomer.kinematics import (
    MAX_SCREEN_DIAMETER,
    angular_velocity_discrete,
    screen_diameter,
    visual_angle,
)
from loomer.models.frame import FrameSeries
from loomer.models.parameters import VariableSpeedParams
from loomer.models.stimulus import VariableSpeedModel


logger = logging.getLogger(__name__)


def _speed_profile(speeds: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """Coerce ``speeds`` to a read-only 1-D float array or fail."""
    try:
        profile = np.array(speeds, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            "speed_profile must be a one-dimensional numeric sequence"
        ) from exc
    
    if profile.ndim != 1:
        raise InvalidInputError(
            f"speed_profile must be one-dimensional, got {profile.ndim} dimensions"
        )
    if profile.size == 0:
        raise InvalidInputError("speed_profile must contain at least one speed")
    if not np.all(np.isfinite(profile)):
        raise InvalidInputError("speed_profile must contain only finite speeds")
    if np.any(profile < 0):
        raise InvalidInputError(
            "speed_profile must not contain negative speeds (receding stimuli "
            "are not supported)"
        )
    
    profile.flags.writeable = False
    return profile


def variable_speed_model(
    speed_profile: Union[Sequence[float], np.ndarray],
    screen_distance: float = 20.0,
    frame_rate: float = 60.0,
    attacker_diameter: float = 50.0,
) -> VariableSpeedModel:
    """
    Build a variable-speed looming model.
    
    Args:
        speed_profile: Attacker speed for every frame (cm/s), sampled at
            ``frame_rate``; the last sample is at contact
        screen_distance: Observer to screen distance (cm)
        frame_rate: Playback and profile frame rate (frames/second)
        attacker_diameter: Attacker diameter (cm)
        
    Returns:
        VariableSpeedModel
        
    Raises:
        InvalidInputError: If the profile is not a 1-D sequence of
            non-negative finite numbers, or a parameter is not positive
    """
    profile = _speed_profile(speed_profile)
    params = validate_params(
        VariableSpeedParams,
        screen_distance=screen_distance,
        frame_rate=frame_rate,
        attacker_diameter=attacker_diameter,
    )
    
    distance_per_frame = profile / params.frame_rate
    start_distance = float(np.sum(distance_per_frame))
    distance = start_distance - np.cumsum(distance_per_frame)
    
    alpha = visual_angle(params.attacker_diameter, distance)
    dadt = angular_velocity_discrete(alpha, params.frame_rate)
    diam_on_screen = screen_diameter(alpha, params.screen_distance)
    
    series = FrameSeries.build(
        frame_rate=params.frame_rate,
        diam_on_screen=diam_on_screen,
        distance=distance,
        alpha=alpha,
        dadt=dadt,
    )
    
    clamped = int(np.sum(diam_on_screen >= MAX_SCREEN_DIAMETER))
    logger.info(
        f"Variable speed model built: {profile.size} frames "
        f"({profile.size / params.frame_rate:.2f}s), "
        f"start_distance={start_distance:.2f}cm"
    )
    if clamped > 1:
        logger.warning(
            f"{clamped} frames exceed {MAX_SCREEN_DIAMETER}cm on screen and were clamped; "
            f"check the end of the speed profile"
        )
    
    return VariableSpeedModel(
        series=series,
        screen_distance=params.screen_distance,
        frame_rate=params.frame_rate,
        speed_profile=profile,
        attacker_diameter=params.attacker_diameter,
        start_distance=start_distance,
    )

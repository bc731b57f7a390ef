"""
Constant Speed Builder
======================

Builds a looming model for an attacker closing at constant speed.

Frame 1 already represents one time-step of travel, so the last frame
lands at (near) zero distance: the stimulus reaches "contact" on the
final frame.

Formulas:
    total_frames = ceil(start_distance / speed * frame_rate)
    distance_i   = round(start_distance - i * speed / frame_rate, 2)
    alpha_i      = visual_angle(attacker_diameter, distance_i)
    dadt_i       = closed form at distance_i (undefined at frame 1)
    diam_i       = screen_diameter(alpha_i, screen_distance)
"""

import logging

import numpy as np

from loomer.builders.validation import frame_count, validate_params
from loomer.errors import InvalidInputError
from loomer.kinematics import (
    MAX_SCREEN_DIAMETER,
    angular_velocity_closed_form,
    screen_diameter,
    visual_angle,
)
from loomer.models.frame import FrameSeries
from loomer.models.parameters import ConstantSpeedParams
from loomer.models.stimulus import ConstantSpeedModel


logger = logging.getLogger(__name__)


def constant_speed_model(
    screen_distance: float = 20.0,
    frame_rate: float = 60.0,
    speed: float = 500.0,
    attacker_diameter: float = 50.0,
    start_distance: float = 1000.0,
) -> ConstantSpeedModel:
    """
    Build a constant-speed looming model.
    
    Args:
        screen_distance: Observer to screen distance (cm)
        frame_rate: Playback frame rate (frames/second)
        speed: Closing speed (cm/s)
        attacker_diameter: Attacker diameter (cm)
        start_distance: Attacker distance at time zero (cm)
        
    Returns:
        ConstantSpeedModel
        
    Raises:
        InvalidInputError: If any parameter is not positive, or the
            approach covers no frames
    """
    params = validate_params(
        ConstantSpeedParams,
        screen_distance=screen_distance,
        frame_rate=frame_rate,
        speed=speed,
        attacker_diameter=attacker_diameter,
        start_distance=start_distance,
    )
    
    total_frames = frame_count(params.start_distance / params.speed, params.frame_rate)
    if total_frames < 1:
        raise InvalidInputError(
            f"start_distance={params.start_distance}cm at speed={params.speed}cm/s "
            f"and frame_rate={params.frame_rate}fps gives no frames"
        )
    distance_per_frame = params.speed / params.frame_rate
    
    frames = np.arange(1, total_frames + 1)
    distance = np.round(params.start_distance - frames * distance_per_frame, 2)
    
    alpha = visual_angle(params.attacker_diameter, distance)
    dadt = angular_velocity_closed_form(params.speed, params.attacker_diameter, distance)
    # Frame 1 has no previous frame; undefined for every model
    dadt[0] = np.nan
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
        f"Constant speed model built: {total_frames} frames "
        f"({total_frames / params.frame_rate:.2f}s), "
        f"speed={params.speed}cm/s, start_distance={params.start_distance}cm"
    )
    if clamped:
        logger.debug(f"{clamped} terminal frame(s) clamped to {MAX_SCREEN_DIAMETER}cm")
    
    return ConstantSpeedModel(
        series=series,
        screen_distance=params.screen_distance,
        frame_rate=params.frame_rate,
        speed=params.speed,
        attacker_diameter=params.attacker_diameter,
        start_distance=params.start_distance,
    )

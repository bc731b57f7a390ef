"""
Threshold Extractor
===================

Extracts the Apparent Looming Threshold (ALT) from a looming model.

The ALT is the rate of change of visual angle at the moment a specimen
initiates its escape response. Given the frame at which the response was
observed, the extractor:

    1. Shifts the sample frame earlier by the response latency
           adjusted = response_frame - round(frame_rate * latency)
    2. Recomputes visual angle and dα/dt for the viewing distance
       (an override, or the model's own screen distance)
    3. For attacker models, derives perceived distance and speed
           distance_p = cos(α/2) * (D/2) / sin(α/2)
           speed_p    = -d(distance_p)/dt
    4. Samples everything at the adjusted frame

Diameter models carry no attacker size or screen distance: a viewing
distance must be supplied and perceived distance/speed are never
produced for them.

The input model is never modified.
"""

import logging
from typing import Optional

import numpy as np

from loomer.errors import (
    InvalidInputError,
    MissingParameterError,
    OutOfRangeError,
    UnextractableError,
)
from loomer.kinematics import (
    angular_velocity_discrete,
    perceived_distance,
    rad2deg,
    visual_angle,
)
from loomer.models.frame import FrameSeries
from loomer.models.report import AltReport
from loomer.models.stimulus import (
    ConstantSpeedModel,
    DiameterModel,
    LoomingModel,
    MODEL_TYPES,
    VariableSpeedModel,
)


logger = logging.getLogger(__name__)


def _validate(
    model: LoomingModel,
    response_frame: Optional[int],
    new_distance: Optional[float],
    latency: float,
) -> None:
    """Fail fast on bad inputs, in a fixed order."""
    if not isinstance(model, MODEL_TYPES):
        raise InvalidInputError(
            "Input must be a ConstantSpeedModel, VariableSpeedModel or "
            f"DiameterModel, got {type(model).__name__}"
        )
    if response_frame is None:
        raise MissingParameterError(
            "A 'response_frame' is required to extract the ALT and associated data"
        )
    if isinstance(response_frame, bool) or not isinstance(response_frame, (int, np.integer)):
        raise InvalidInputError(
            f"'response_frame' must be an integer, got {response_frame!r}"
        )
    if response_frame == 1:
        raise UnextractableError(
            "ALT cannot be extracted from the first frame: 'response_frame' "
            "must be 2 or higher"
        )
    if response_frame > model.total_frames:
        raise OutOfRangeError(
            f"The 'response_frame' ({response_frame}) is greater than the last "
            f"frame of the model ({model.total_frames})"
        )
    if response_frame < 1:
        raise OutOfRangeError(
            f"The 'response_frame' ({response_frame}) must be 2 or higher"
        )
    if isinstance(model, DiameterModel) and new_distance is None:
        raise MissingParameterError(
            "Extracting data from a DiameterModel requires a screen viewing "
            "distance, entered as 'new_distance'"
        )
    if new_distance is not None and new_distance <= 0:
        raise InvalidInputError(f"'new_distance' must be positive, got {new_distance}")
    if latency < 0:
        raise InvalidInputError(f"'latency' must be non-negative, got {latency}")


def _value_at(values: Optional[np.ndarray], frame: int) -> Optional[float]:
    if values is None:
        return None
    value = float(values[frame - 1])
    if np.isnan(value):
        return None
    return value


def _adjusted_series(
    model: LoomingModel,
    new_distance: Optional[float],
) -> FrameSeries:
    """Recompute angles (and perceived metrics) for the viewing distance."""
    series = model.series
    
    if new_distance is not None:
        alpha = visual_angle(series.diam_on_screen, new_distance)
        dadt = angular_velocity_discrete(alpha, model.frame_rate)
    else:
        # Own viewing distance: the model's columns are the exact angles
        alpha = series.alpha
        dadt = series.dadt
    
    if isinstance(model, (ConstantSpeedModel, VariableSpeedModel)):
        distance_p = perceived_distance(alpha, model.attacker_diameter)
        speed_p = -angular_velocity_discrete(distance_p, model.frame_rate)
        return series.with_columns(
            alpha=alpha,
            dadt=dadt,
            perceived_distance=distance_p,
            perceived_speed=speed_p,
        )
    
    return series.with_columns(alpha=alpha, dadt=dadt)


def _speed_in_model(model: LoomingModel, frame: int) -> Optional[float]:
    if isinstance(model, ConstantSpeedModel):
        return model.speed
    if isinstance(model, VariableSpeedModel):
        return float(model.speed_profile[frame - 1])
    return None


def get_alt(
    model: LoomingModel,
    response_frame: Optional[int] = None,
    new_distance: Optional[float] = None,
    latency: float = 0.0,
) -> AltReport:
    """
    Extract the Apparent Looming Threshold at a response frame.
    
    Args:
        model: Constant speed, variable speed or diameter model
        response_frame: Frame at which the response was observed
        new_distance: Viewing distance (cm) if different from the one
            modelled; required for diameter models
        latency: Response latency (seconds) to subtract
        
    Returns:
        AltReport
        
    Raises:
        InvalidInputError: Unrecognised model, non-integer response
            frame, or bad distance/latency
        MissingParameterError: No response frame, or no distance for a
            diameter model
        UnextractableError: Response frame (after latency) before frame 2
        OutOfRangeError: Response frame beyond the last frame
    """
    _validate(model, response_frame, new_distance, latency)
    response_frame = int(response_frame)
    
    response_frame_adjusted = response_frame - int(round(model.frame_rate * latency))
    if response_frame_adjusted < 2:
        raise UnextractableError(
            f"Latency of {latency}s moves the response frame to "
            f"{response_frame_adjusted}; ALT is undefined before frame 2"
        )
    
    adjusted = _adjusted_series(model, new_distance)
    
    alt = _value_at(adjusted.dadt, response_frame_adjusted)
    if alt is None:
        raise UnextractableError(
            f"dα/dt is undefined at frame {response_frame_adjusted}"
        )
    
    report = AltReport(
        alt=alt,
        alt_deg=rad2deg(alt),
        response_frame=response_frame,
        response_frame_adjusted=response_frame_adjusted,
        latency_applied=latency,
        distance_perceived=_value_at(adjusted.perceived_distance, response_frame_adjusted),
        speed_perceived=_value_at(adjusted.perceived_speed, response_frame_adjusted),
        distance_in_model=_value_at(model.series.distance, response_frame_adjusted),
        speed_in_model=_speed_in_model(model, response_frame_adjusted),
        new_distance_applied=new_distance,
        adjusted_series=adjusted,
        original_model=model,
    )
    
    logger.info(
        f"ALT extracted from {model.kind} model: {alt:.4f}rad/s at frame "
        f"{response_frame_adjusted} (response {response_frame}, latency {latency}s)"
    )
    return report

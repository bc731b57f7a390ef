"""
Looming Kinematics
==================

Trigonometric primitives shared by every model builder and by the
threshold extractor.

Formulas:
    alpha        = |2 * atan((diameter / 2) / distance)|
    dα/dt        = 4 * speed * diameter / (4 * distance² + diameter²)
    diam_screen  = 2 * screen_distance * tan(alpha / 2)
    distance_p   = cos(alpha / 2) * (diameter / 2) / sin(alpha / 2)

All functions accept scalars or numpy arrays. Scalars in, float out;
arrays in, arrays out.

Units:
    Distances and diameters in cm, speeds in cm/s, angles in radians.
"""

import logging
from typing import Union

import numpy as np


logger = logging.getLogger(__name__)


# Largest on-screen diameter (cm) ever reported. Terminal frames where the
# distance reaches zero diverge towards infinity and are clamped to this.
MAX_SCREEN_DIAMETER: float = 1000.0

ArrayLike = Union[float, np.ndarray]


def _as_output(values: np.ndarray) -> ArrayLike:
    """Return a Python float for 0-d results, the array otherwise."""
    if values.ndim == 0:
        return float(values)
    return values


def visual_angle(diameter: ArrayLike, distance: ArrayLike) -> ArrayLike:
    """
    Compute the visual angle subtended by a circle.
    
    The absolute value is taken because the arctangent of a ratio with a
    (rounded) negative or negative-zero distance flips sign, while the
    visual angle is always reported positive.
    
    Args:
        diameter: Object diameter (cm)
        distance: Distance from the observer (cm)
        
    Returns:
        Visual angle in radians, in [0, π]
    """
    diameter = np.asarray(diameter, dtype=float)
    distance = np.asarray(distance, dtype=float)
    
    with np.errstate(divide="ignore", invalid="ignore"):
        alpha = np.abs(2.0 * np.arctan((diameter / 2.0) / distance))
    
    return _as_output(alpha)


def angular_velocity_closed_form(
    speed: ArrayLike,
    diameter: ArrayLike,
    distance: ArrayLike,
) -> ArrayLike:
    """
    Analytic rate of change of visual angle.
    
    Valid for an object of fixed diameter closing at constant speed.
    Only the constant-speed builder has an explicit analytic speed.
    
    Args:
        speed: Closing speed (cm/s)
        diameter: Object diameter (cm)
        distance: Current distance (cm)
        
    Returns:
        dα/dt in radians/second
    """
    speed = np.asarray(speed, dtype=float)
    diameter = np.asarray(diameter, dtype=float)
    distance = np.asarray(distance, dtype=float)
    
    dadt = 4.0 * (speed * diameter) / ((4.0 * distance**2) + diameter**2)
    return _as_output(dadt)


def angular_velocity_discrete(alpha: np.ndarray, frame_rate: float) -> np.ndarray:
    """
    Backward first difference of a visual angle series.
    
    The first element is undefined (NaN) since there is no previous frame.
    
    Args:
        alpha: 1-D visual angle series (radians)
        frame_rate: Frames per second
        
    Returns:
        dα/dt series (radians/second), same length as ``alpha``
    """
    alpha = np.asarray(alpha, dtype=float)
    dadt = np.full(alpha.shape, np.nan, dtype=float)
    if alpha.size > 1:
        dadt[1:] = np.diff(alpha) * frame_rate
    return dadt


def screen_diameter(
    alpha: ArrayLike,
    screen_distance: float,
    max_diameter: float = MAX_SCREEN_DIAMETER,
) -> ArrayLike:
    """
    On-screen diameter reproducing ``alpha`` at ``screen_distance``.
    
    Rounded to 2 decimal places (a tenth of a millimetre). Values whose
    magnitude exceeds ``max_diameter`` (or are not finite) are replaced by
    ``max_diameter``, each frame independently.
    
    Args:
        alpha: Visual angle (radians)
        screen_distance: Observer to screen distance (cm)
        max_diameter: Clamp ceiling (cm)
        
    Returns:
        Diameter on screen (cm)
    """
    alpha = np.asarray(alpha, dtype=float)
    
    diam = np.round(2.0 * screen_distance * np.tan(alpha / 2.0), 2)
    overflow = ~np.isfinite(diam) | (np.abs(diam) > max_diameter)
    diam = np.where(overflow, max_diameter, diam)
    
    if diam.ndim and np.any(overflow):
        logger.debug(
            f"Clamped {int(np.sum(overflow))} on-screen diameters to {max_diameter}cm"
        )
    
    return _as_output(diam)


def perceived_distance(alpha: ArrayLike, diameter: float) -> ArrayLike:
    """
    Distance implied by a visual angle for an object of known diameter.
    
    Inverse of :func:`visual_angle`, solved for distance.
    
    Args:
        alpha: Visual angle (radians)
        diameter: True object diameter (cm)
        
    Returns:
        Perceived distance (cm)
    """
    alpha = np.asarray(alpha, dtype=float)
    
    with np.errstate(divide="ignore", invalid="ignore"):
        distance = np.cos(alpha / 2.0) * (diameter / 2.0) / np.sin(alpha / 2.0)
    
    return _as_output(distance)


def rad2deg(radians: ArrayLike) -> ArrayLike:
    """Convert radians to degrees."""
    return _as_output(np.asarray(radians, dtype=float) * 180.0 / np.pi)

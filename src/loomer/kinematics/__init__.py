"""
Kinematics Module
=================

Visual angle geometry for looming stimuli.

This module provides:
    - Visual angle of a circle at a distance
    - Closed-form and discrete angular velocity
    - Clamped on-screen diameter
    - Perceived distance (inverse visual angle)
"""

from loomer.kinematics.angles import (
    MAX_SCREEN_DIAMETER,
    angular_velocity_closed_form,
    angular_velocity_discrete,
    perceived_distance,
    rad2deg,
    screen_diameter,
    visual_angle,
)

__all__ = [
    "MAX_SCREEN_DIAMETER",
    "visual_angle",
    "angular_velocity_closed_form",
    "angular_velocity_discrete",
    "screen_diameter",
    "perceived_distance",
    "rad2deg",
]

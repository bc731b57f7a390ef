"""
Model Parameters
================

Pydantic models describing the experimental parameters of each builder.

These serve two purposes:
    1. Builders validate their arguments through them before computing
    2. The configuration layer uses them as default sections

Defaults reproduce a typical fish escape-response setup: a 50cm
attacker approaching at 500cm/s from 10m, viewed on a screen 20cm away
and played back at 60 frames per second.
"""

from enum import Enum

from pydantic import BaseModel, Field

from loomer.kinematics.angles import MAX_SCREEN_DIAMETER


class ExpansionPolicy(str, Enum):
    """
    How a diameter model grows between its start and end diameter.
    
    Attributes:
        CONSTANT_SPEED: Diameter follows an object closing at constant
            speed (growth accelerates over time)
        CONSTANT_DIAMETER: Diameter grows by the same amount every frame
    """
    
    CONSTANT_SPEED = "constant_speed"
    CONSTANT_DIAMETER = "constant_diameter"


class ConstantSpeedParams(BaseModel):
    """Parameters for a constant-speed approach."""
    
    screen_distance: float = Field(
        default=20.0,
        gt=0,
        description="Distance from the observer to the screen (cm)",
    )
    frame_rate: float = Field(
        default=60.0,
        gt=0,
        description="Playback frame rate (frames/second)",
    )
    speed: float = Field(
        default=500.0,
        gt=0,
        description="Closing speed of the attacker (cm/s)",
    )
    attacker_diameter: float = Field(
        default=50.0,
        gt=0,
        description="Diameter of the simulated attacker (cm)",
    )
    start_distance: float = Field(
        default=1000.0,
        gt=0,
        description="Distance of the attacker when the approach starts (cm)",
    )


class VariableSpeedParams(BaseModel):
    """Scalar parameters for a variable-speed approach."""
    
    screen_distance: float = Field(
        default=20.0,
        gt=0,
        description="Distance from the observer to the screen (cm)",
    )
    frame_rate: float = Field(
        default=60.0,
        gt=0,
        description="Frame rate of the speed profile and playback",
    )
    attacker_diameter: float = Field(
        default=50.0,
        gt=0,
        description="Diameter of the simulated attacker (cm)",
    )


class DiameterParams(BaseModel):
    """Parameters for an on-screen diameter trajectory."""
    
    start_diameter: float = Field(
        default=3.0,
        gt=0,
        le=MAX_SCREEN_DIAMETER,
        description="On-screen diameter at the first frame (cm)",
    )
    end_diameter: float = Field(
        default=50.0,
        gt=0,
        le=MAX_SCREEN_DIAMETER,
        description="On-screen diameter at the last frame (cm)",
    )
    duration: float = Field(
        default=3.0,
        gt=0,
        description="Length of the animation (seconds)",
    )
    frame_rate: float = Field(
        default=60.0,
        gt=0,
        description="Playback frame rate (frames/second)",
    )
    expansion_policy: ExpansionPolicy = Field(
        default=ExpansionPolicy.CONSTANT_SPEED,
        description="'constant_speed' or 'constant_diameter'",
    )

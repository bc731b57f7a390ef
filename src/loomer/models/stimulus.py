"""
Stimulus Models
===============

The three looming model variants produced by the builders.

LoomingModel is a closed tagged union:
    - ConstantSpeedModel: attacker of known size at constant speed
    - VariableSpeedModel: attacker of known size following a speed profile
    - DiameterModel: on-screen diameter trajectory only

Each variant carries its FrameSeries plus the parameters needed to
re-derive angles and perceived metrics. A DiameterModel has no attacker
size or screen distance, so perceived distance and speed can never be
derived from it.

Consumers dispatch with isinstance over MODEL_TYPES; anything else is
rejected as invalid input.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

import numpy as np

from loomer.models.frame import FrameSeries
from loomer.models.parameters import ExpansionPolicy


@dataclass(frozen=True, slots=True, eq=False)
class ConstantSpeedModel:
    """
    Attacker closing at a constant speed.
    
    Attributes:
        series: Frame series, last frame at (near) zero distance
        screen_distance: Observer to screen distance (cm)
        frame_rate: Frames per second
        speed: Closing speed (cm/s)
        attacker_diameter: Attacker diameter (cm)
        start_distance: Distance at time zero (cm)
    """
    
    kind: ClassVar[str] = "constant_speed"
    
    series: FrameSeries
    screen_distance: float
    frame_rate: float
    speed: float
    attacker_diameter: float
    start_distance: float
    
    @property
    def total_frames(self) -> int:
        return len(self.series)
    
    @property
    def duration(self) -> float:
        return self.total_frames / self.frame_rate
    
    def __repr__(self) -> str:
        return (
            f"ConstantSpeedModel(frames={self.total_frames}, "
            f"speed={self.speed}cm/s, "
            f"start_distance={self.start_distance}cm, "
            f"attacker_diameter={self.attacker_diameter}cm, "
            f"screen_distance={self.screen_distance}cm)"
        )


@dataclass(frozen=True, slots=True, eq=False)
class VariableSpeedModel:
    """
    Attacker following a per-frame speed profile.
    
    The last profile sample is taken to coincide with zero distance;
    ``start_distance`` is back-calculated from the profile.
    
    Attributes:
        series: Frame series
        screen_distance: Observer to screen distance (cm)
        frame_rate: Frames per second (also the profile sample rate)
        speed_profile: Read-only speed per frame (cm/s)
        attacker_diameter: Attacker diameter (cm)
        start_distance: Back-calculated distance at time zero (cm)
    """
    
    kind: ClassVar[str] = "variable_speed"
    
    series: FrameSeries
    screen_distance: float
    frame_rate: float
    speed_profile: np.ndarray
    attacker_diameter: float
    start_distance: float
    
    @property
    def total_frames(self) -> int:
        return len(self.series)
    
    @property
    def duration(self) -> float:
        return self.total_frames / self.frame_rate
    
    def __repr__(self) -> str:
        return (
            f"VariableSpeedModel(frames={self.total_frames}, "
            f"start_distance={self.start_distance:.2f}cm, "
            f"attacker_diameter={self.attacker_diameter}cm, "
            f"screen_distance={self.screen_distance}cm)"
        )


@dataclass(frozen=True, slots=True, eq=False)
class DiameterModel:
    """
    On-screen diameter trajectory.
    
    Attributes:
        series: Frame series (diam_on_screen only)
        frame_rate: Frames per second
        start_diameter: Diameter at frame 1 (cm)
        end_diameter: Diameter at the last frame (cm)
        duration_seconds: Requested duration (s)
        expansion_policy: How the diameter grows
    """
    
    kind: ClassVar[str] = "diameter"
    
    series: FrameSeries
    frame_rate: float
    start_diameter: float
    end_diameter: float
    duration_seconds: float
    expansion_policy: ExpansionPolicy
    
    @property
    def total_frames(self) -> int:
        return len(self.series)
    
    @property
    def duration(self) -> float:
        return self.total_frames / self.frame_rate
    
    def __repr__(self) -> str:
        return (
            f"DiameterModel(frames={self.total_frames}, "
            f"diameter={self.start_diameter}->{self.end_diameter}cm, "
            f"expansion={self.expansion_policy.value})"
        )


LoomingModel = Union[ConstantSpeedModel, VariableSpeedModel, DiameterModel]

MODEL_TYPES = (ConstantSpeedModel, VariableSpeedModel, DiameterModel)

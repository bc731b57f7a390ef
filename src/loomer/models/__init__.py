"""
Data Models
===========

Data models for the looming stimulus core.

Models:
    Frames:
        - Frame: One frame of kinematic state
        - FrameSeries: Immutable column store owned by a model
    
    Parameters:
        - ExpansionPolicy: Diameter growth policy
        - ConstantSpeedParams, VariableSpeedParams, DiameterParams
    
    Stimulus:
        - ConstantSpeedModel, VariableSpeedModel, DiameterModel
        - LoomingModel: Tagged union of the three variants
    
    Report:
        - AltReport: Apparent Looming Threshold extraction result
"""

from loomer.models.frame import Frame, FrameSeries
from loomer.models.parameters import (
    ConstantSpeedParams,
    DiameterParams,
    ExpansionPolicy,
    VariableSpeedParams,
)
from loomer.models.stimulus import (
    MODEL_TYPES,
    ConstantSpeedModel,
    DiameterModel,
    LoomingModel,
    VariableSpeedModel,
)
from loomer.models.report import AltReport

__all__ = [
    # Frames
    "Frame",
    "FrameSeries",
    # Parameters
    "ExpansionPolicy",
    "ConstantSpeedParams",
    "VariableSpeedParams",
    "DiameterParams",
    # Stimulus
    "ConstantSpeedModel",
    "VariableSpeedModel",
    "DiameterModel",
    "LoomingModel",
    "MODEL_TYPES",
    # Report
    "AltReport",
]

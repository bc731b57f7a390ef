"""
Model Builders
==============

Pure functions turning experimental parameters into looming models.

Builders:
    - constant_speed_model: fixed speed from a start distance
    - variable_speed_model: per-frame speed profile ending at contact
    - diameter_model: on-screen diameter trajectory

Each call returns a new immutable model; there is no hidden state, so
identical parameters always give identical frame series.
"""

from loomer.builders.constant_speed import constant_speed_model
from loomer.builders.variable_speed import variable_speed_model
from loomer.builders.diameter import diameter_model

__all__ = [
    "constant_speed_model",
    "variable_speed_model",
    "diameter_model",
]

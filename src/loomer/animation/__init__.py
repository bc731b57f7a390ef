"""
Animation Module
================

Frame sequence assembly for rendering collaborators.

This module provides:
    - pad_series: prepend a hold of the first frame
    - assemble_frames: padding, display correction and annotation
    - MarkerConfig: which annotations to schedule

No images are produced here; renderers consume AnnotatedSequence.
"""

from loomer.animation.markers import MarkerConfig, MarkerPosition
from loomer.animation.assembler import (
    DEFAULT_CORRECTION,
    AnnotatedFrame,
    AnnotatedSequence,
    assemble_frames,
    pad_series,
    schedule_annotations,
)

__all__ = [
    "MarkerConfig",
    "MarkerPosition",
    "DEFAULT_CORRECTION",
    "AnnotatedFrame",
    "AnnotatedSequence",
    "assemble_frames",
    "pad_series",
    "schedule_annotations",
]

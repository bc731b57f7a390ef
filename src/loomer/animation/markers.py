"""
Marker Configuration
====================

Which annotations the renderer should draw on each frame.

Annotations:
    - dots: small corner dot on the first animation frame, every
      ``dots_interval`` animation frames, and the last frame, used to
      sync high-speed recordings with the stimulus
    - frame_number: frame label in a corner
    - start_marker: an "X" on the very first frame of the video

Positions are two letters, vertical then horizontal: 'tl', 'tr',
'bl' or 'br'.
"""

from typing import Literal

from pydantic import BaseModel, Field


MarkerPosition = Literal["tl", "tr", "bl", "br"]


class MarkerConfig(BaseModel):
    """
    Annotation scheduling options for an animation.
    
    Dots and frame numbers are opt-in; only the start marker is drawn
    by default.
    """
    
    dots: bool = Field(
        default=False,
        description="Schedule sync dots on animation frames",
    )
    dots_interval: int = Field(
        default=20,
        ge=1,
        description="Animation frames between sync dots",
    )
    dots_position: MarkerPosition = Field(
        default="br",
        description="Corner for sync dots",
    )
    frame_number: bool = Field(
        default=False,
        description="Label every frame with its number",
    )
    frame_number_position: MarkerPosition = Field(
        default="tr",
        description="Corner for frame number labels",
    )
    start_marker: bool = Field(
        default=True,
        description="Mark the first frame of the video",
    )

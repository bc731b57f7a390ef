"""
Frame Sequence Assembler
========================

Turns a model's frame series into the annotated sequence a renderer
draws, one image per entry, in order.

Pipeline:
    1. Padding: prepend a static (or blank) hold of frame 1
    2. Correction: scale diameters by the display calibration factor
    3. Annotation: schedule dots, frame-number labels and start marker

Numbering:
    first_animation_index  = total_length - original_length + 1
    animation_frame_number = original_length - (total_length - i)
    
    Padding frames are labelled from their own counter (1p, 2p, ...)
    so the two numbering spaces never collide.

Design Rules:
    - The model and its series are never modified
    - The correction factor comes from an external calibration step
      and is applied unmodified
    - Produces metadata only; no images are drawn here
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from loomer.animation.markers import MarkerConfig
from loomer.builders.validation import frame_count
from loomer.errors import InvalidInputError, InvariantViolationError
from loomer.models.frame import OPTIONAL_COLUMNS, FrameSeries
from loomer.models.stimulus import MODEL_TYPES, LoomingModel


logger = logging.getLogger(__name__)


DEFAULT_CORRECTION: float = 0.0285


@dataclass(frozen=True, slots=True)
class AnnotatedFrame:
    """
    Rendering instructions for one frame.
    
    Attributes:
        index: 1-based frame index in the (padded) video
        diam_on_screen_corrected: Diameter to draw, display units
        is_padding: True for frames before the animation starts
        animation_frame_number: Frame number within the animation
            (zero or negative for padding frames)
        dot_scheduled: Draw a sync dot on this frame
        frame_number_label: Text label, empty when disabled
        start_marker: Draw the start marker on this frame
    """
    
    index: int
    diam_on_screen_corrected: float
    is_padding: bool
    animation_frame_number: int
    dot_scheduled: bool
    frame_number_label: str
    start_marker: bool


@dataclass(frozen=True, slots=True, eq=False)
class AnnotatedSequence:
    """
    Everything a renderer/encoder needs to produce the video.
    
    Attributes:
        frames: Annotated frames in playback order
        series: Padded frame series (uncorrected diameters)
        frame_rate: Playback frame rate
        width: Video width in pixels (even)
        height: Video height in pixels (even)
        original_length: Frames in the model's own series
        pad_frames: Frames prepended as padding
        markers: Marker options used for scheduling
    """
    
    frames: Tuple[AnnotatedFrame, ...]
    series: FrameSeries
    frame_rate: float
    width: int
    height: int
    original_length: int
    pad_frames: int
    markers: MarkerConfig
    
    @property
    def duration(self) -> float:
        """Video duration in seconds."""
        return len(self.frames) / self.frame_rate
    
    def __len__(self) -> int:
        return len(self.frames)
    
    def __repr__(self) -> str:
        return (
            f"AnnotatedSequence(frames={len(self.frames)}, "
            f"pad_frames={self.pad_frames}, "
            f"{self.width}x{self.height}@{self.frame_rate}fps)"
        )


def pad_series(
    series: FrameSeries,
    pad_seconds: float,
    pad_blank: bool = False,
) -> FrameSeries:
    """
    Prepend a hold of the first frame to a series.
    
    Frame 1's distance, angle and angular velocity are replicated. The
    diameter is replicated too, or forced to 0 when ``pad_blank`` is set
    (an invisible stimulus). Frames are renumbered 1..N and times
    recomputed.
    
    Args:
        series: Series to pad
        pad_seconds: Length of the hold (seconds)
        pad_blank: Hide the stimulus during the hold
        
    Returns:
        New series of ``len(series) + ceil(pad_seconds * frame_rate)`` frames
        
    Raises:
        InvalidInputError: If ``pad_seconds`` is negative
        InvariantViolationError: If the padded length is wrong
    """
    if pad_seconds < 0:
        raise InvalidInputError(f"pad must be non-negative, got {pad_seconds}")
    
    pad_frames = frame_count(pad_seconds, series.frame_rate)
    if pad_frames == 0:
        return series
    
    columns = {}
    for name in OPTIONAL_COLUMNS:
        values = getattr(series, name)
        if values is None:
            continue
        columns[name] = np.concatenate([np.full(pad_frames, values[0]), values])
    
    hold = 0.0 if pad_blank else series.diam_on_screen[0]
    diam_on_screen = np.concatenate([np.full(pad_frames, hold), series.diam_on_screen])
    
    padded = FrameSeries.build(
        frame_rate=series.frame_rate,
        diam_on_screen=diam_on_screen,
        **columns,
    )
    
    if len(padded) != len(series) + pad_frames:
        raise InvariantViolationError(
            f"Padded series has {len(padded)} frames, expected "
            f"{len(series)} + {pad_frames}"
        )
    
    logger.debug(
        f"Padded series with {pad_frames} {'blank' if pad_blank else 'hold'} frames "
        f"({pad_seconds}s)"
    )
    return padded


def schedule_annotations(
    diam_corrected: np.ndarray,
    original_length: int,
    markers: MarkerConfig,
) -> Tuple[AnnotatedFrame, ...]:
    """
    Decide the annotations of every frame.
    
    Args:
        diam_corrected: Corrected diameters of the padded sequence
        original_length: Frames in the unpadded animation
        markers: Marker options
        
    Returns:
        One AnnotatedFrame per entry of ``diam_corrected``
    """
    total_length = len(diam_corrected)
    first_animation_index = total_length - original_length + 1
    
    frames = []
    for index in range(1, total_length + 1):
        is_padding = index < first_animation_index
        animation_frame_number = original_length - (total_length - index)
        
        dot = markers.dots and not is_padding and (
            index == first_animation_index
            or animation_frame_number % markers.dots_interval == 0
            or index == total_length
        )
        
        if not markers.frame_number:
            label = ""
        elif is_padding:
            label = f"{index}p"
        else:
            label = str(animation_frame_number)
        
        frames.append(
            AnnotatedFrame(
                index=index,
                diam_on_screen_corrected=float(diam_corrected[index - 1]),
                is_padding=is_padding,
                animation_frame_number=animation_frame_number,
                dot_scheduled=dot,
                frame_number_label=label,
                start_marker=markers.start_marker and index == 1,
            )
        )
    
    return tuple(frames)


def _even(value: int, name: str) -> int:
    if value <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value}")
    if value % 2 != 0:
        logger.info(f"{name}={value} is odd, using {value + 1} for encoder compatibility")
        return value + 1
    return value


def assemble_frames(
    model: LoomingModel,
    correction: Optional[float] = DEFAULT_CORRECTION,
    pad: Optional[float] = None,
    pad_blank: bool = False,
    markers: Optional[MarkerConfig] = None,
    width: int = 1280,
    height: int = 1024,
) -> AnnotatedSequence:
    """
    Build the annotated frame sequence for a model.
    
    Args:
        model: Any looming model
        correction: Display calibration factor, or None for no scaling
        pad: Seconds of hold to prepend, or None for no padding
        pad_blank: Hide the stimulus during padding
        markers: Marker options (defaults to MarkerConfig())
        width: Video width in pixels; odd values are bumped by one
        height: Video height in pixels; odd values are bumped by one
        
    Returns:
        AnnotatedSequence
        
    Raises:
        InvalidInputError: On an unrecognised model or bad option
    """
    if not isinstance(model, MODEL_TYPES):
        raise InvalidInputError(
            "Input must be a ConstantSpeedModel, VariableSpeedModel or "
            f"DiameterModel, got {type(model).__name__}"
        )
    if correction is not None and correction <= 0:
        raise InvalidInputError(f"correction must be positive, got {correction}")
    
    markers = markers or MarkerConfig()
    width = _even(width, "width")
    height = _even(height, "height")
    
    series = model.series
    if pad is not None:
        series = pad_series(series, pad, pad_blank)
    
    if correction is not None:
        diam_corrected = series.diam_on_screen * correction
    else:
        diam_corrected = series.diam_on_screen.copy()
    
    frames = schedule_annotations(diam_corrected, len(model.series), markers)
    
    sequence = AnnotatedSequence(
        frames=frames,
        series=series,
        frame_rate=model.frame_rate,
        width=width,
        height=height,
        original_length=len(model.series),
        pad_frames=len(series) - len(model.series),
        markers=markers,
    )
    
    logger.info(
        f"{model.kind} sequence assembled: {len(frames)} frames "
        f"({sequence.duration:.2f}s, {sequence.pad_frames} padding), "
        f"{width}x{height}"
    )
    return sequence

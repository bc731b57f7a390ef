"""
Frame Data Model
=================

Per-frame kinematic records and the immutable series that owns them.

A FrameSeries stores one numpy column per quantity. Columns are copied
and flagged read-only on construction, so a series handed out by a
builder can never be changed in place. Every later transform (padding,
re-angling for a new viewing distance) produces a NEW series.

Columns:
    frame              - 1-based frame index
    time               - frame / frame_rate (seconds)
    diam_on_screen     - on-screen diameter (cm), always present
    distance           - attacker distance (cm), speed models only
    alpha              - visual angle (radians)
    dadt               - angular velocity (radians/second), NaN at frame 1
    perceived_distance - distance implied by alpha (cm)
    perceived_speed    - closing speed implied by alpha (cm/s)

Design Rules:
    - Undefined values are stored as NaN and surfaced as None in Frame
    - Optional columns are None when the model cannot produce them
"""

import dataclasses
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

import numpy as np

from loomer.errors import InvariantViolationError, OutOfRangeError


OPTIONAL_COLUMNS = (
    "distance",
    "alpha",
    "dadt",
    "perceived_distance",
    "perceived_speed",
)


def _freeze(values, dtype) -> np.ndarray:
    """Copy ``values`` into a read-only 1-D array."""
    array = np.array(values, dtype=dtype)
    array.flags.writeable = False
    return array


def _optional(values: Optional[np.ndarray], position: int) -> Optional[float]:
    if values is None:
        return None
    value = float(values[position])
    if np.isnan(value):
        return None
    return value


@dataclass(frozen=True, slots=True)
class Frame:
    """
    A single stimulus frame.
    
    Attributes:
        index: 1-based frame number
        time: Seconds since the start of the sequence
        distance: Attacker distance (cm), None for diameter models
        alpha: Visual angle (radians)
        dadt: Angular velocity (radians/second), None at frame 1
        diam_on_screen: On-screen diameter (cm)
        perceived_distance: Perceived distance (cm), if computed
        perceived_speed: Perceived speed (cm/s), if computed
    """
    
    index: int
    time: float
    distance: Optional[float]
    alpha: Optional[float]
    dadt: Optional[float]
    diam_on_screen: float
    perceived_distance: Optional[float] = None
    perceived_speed: Optional[float] = None


@dataclass(frozen=True, slots=True, eq=False)
class FrameSeries:
    """
    Ordered, immutable sequence of frames.
    
    Owned by the model that created it. Use :meth:`build` to create a
    series from raw columns; frame numbers and times are derived from
    the column length and frame rate.
    
    Example:
        series = FrameSeries.build(
            frame_rate=30,
            diam_on_screen=[1.0, 1.2, 1.5],
        )
        series.frame_at(2).time  # 0.0667
    """
    
    frame_rate: float
    frame: np.ndarray
    time: np.ndarray
    diam_on_screen: np.ndarray
    distance: Optional[np.ndarray] = None
    alpha: Optional[np.ndarray] = None
    dadt: Optional[np.ndarray] = None
    perceived_distance: Optional[np.ndarray] = None
    perceived_speed: Optional[np.ndarray] = None
    
    def __post_init__(self) -> None:
        length = len(self.frame)
        object.__setattr__(self, "frame", _freeze(self.frame, int))
        
        for name in ("time", "diam_on_screen") + OPTIONAL_COLUMNS:
            values = getattr(self, name)
            if values is None:
                continue
            frozen = _freeze(values, float)
            if frozen.ndim != 1 or frozen.size != length:
                raise InvariantViolationError(
                    f"Column '{name}' has shape {frozen.shape}, expected ({length},)"
                )
            object.__setattr__(self, name, frozen)
    
    @classmethod
    def build(
        cls,
        frame_rate: float,
        diam_on_screen,
        **columns,
    ) -> "FrameSeries":
        """
        Create a series numbered 1..N with ``time = frame / frame_rate``.
        
        Args:
            frame_rate: Frames per second
            diam_on_screen: On-screen diameter column
            **columns: Any of the optional columns
            
        Returns:
            New FrameSeries
        """
        diam_on_screen = np.asarray(diam_on_screen, dtype=float)
        frame = np.arange(1, diam_on_screen.size + 1)
        return cls(
            frame_rate=frame_rate,
            frame=frame,
            time=frame / frame_rate,
            diam_on_screen=diam_on_screen,
            **columns,
        )
    
    def __len__(self) -> int:
        return int(self.frame.size)
    
    def __iter__(self) -> Iterator[Frame]:
        for index in range(1, len(self) + 1):
            yield self.frame_at(index)
    
    def __repr__(self) -> str:
        present = [name for name in OPTIONAL_COLUMNS if getattr(self, name) is not None]
        return (
            f"FrameSeries(frames={len(self)}, "
            f"frame_rate={self.frame_rate}, "
            f"columns={present})"
        )
    
    def frame_at(self, index: int) -> Frame:
        """
        Return the frame with 1-based ``index``.
        
        Raises:
            OutOfRangeError: If ``index`` is outside 1..len(self)
        """
        if not 1 <= index <= len(self):
            raise OutOfRangeError(
                f"Frame {index} is outside the series (1..{len(self)})"
            )
        position = index - 1
        return Frame(
            index=int(self.frame[position]),
            time=float(self.time[position]),
            distance=_optional(self.distance, position),
            alpha=_optional(self.alpha, position),
            dadt=_optional(self.dadt, position),
            diam_on_screen=float(self.diam_on_screen[position]),
            perceived_distance=_optional(self.perceived_distance, position),
            perceived_speed=_optional(self.perceived_speed, position),
        )
    
    def columns(self) -> Dict[str, np.ndarray]:
        """Return all present columns keyed by name."""
        result = {
            "frame": self.frame,
            "time": self.time,
            "diam_on_screen": self.diam_on_screen,
        }
        for name in OPTIONAL_COLUMNS:
            values = getattr(self, name)
            if values is not None:
                result[name] = values
        return result
    
    def with_columns(self, **changes) -> "FrameSeries":
        """Return a copy with some columns replaced or added."""
        return dataclasses.replace(self, **changes)

"""
ALT Report
==========

Result of an Apparent Looming Threshold extraction.

The report holds both the untouched input model and the adjusted frame
series recomputed for the requested viewing distance, so the two can be
compared side by side.

Output Contract (to_dict):
    {
        "alt": 1.2345,
        "alt_deg": 70.7316,
        "response_frame": 29,
        "response_frame_adjusted": 23,
        "latency_applied": 0.2,
        "distance_perceived": 120.5,
        "speed_perceived": 498.7,
        "distance_in_model": 116.67,
        "speed_in_model": 500.0,
        "new_distance_applied": null,
        "model": "constant_speed"
    }
"""

from dataclasses import dataclass
from typing import Optional

from loomer.models.frame import FrameSeries
from loomer.models.stimulus import LoomingModel


def _rounded(value: Optional[float], digits: int = 4) -> Optional[float]:
    if value is None:
        return None
    return round(value, digits)


@dataclass(frozen=True, slots=True, eq=False)
class AltReport:
    """
    Apparent Looming Threshold extraction result.
    
    Radians are canonical; degree fields are for display only.
    Perceived and in-model metrics are None for diameter models.
    
    Attributes:
        alt: dα/dt at the adjusted response frame (radians/second)
        alt_deg: ``alt`` in degrees/second
        response_frame: Frame at which the response was observed
        response_frame_adjusted: Frame after latency correction
        latency_applied: Latency used for the correction (seconds)
        distance_perceived: Perceived distance at the adjusted frame (cm)
        speed_perceived: Perceived speed at the adjusted frame (cm/s)
        distance_in_model: Modelled distance at the adjusted frame (cm)
        speed_in_model: Modelled speed at the adjusted frame (cm/s)
        new_distance_applied: Viewing distance override, if any (cm)
        adjusted_series: Series recomputed for the viewing distance
        original_model: The unmodified input model
    """
    
    alt: float
    alt_deg: float
    response_frame: int
    response_frame_adjusted: int
    latency_applied: float
    distance_perceived: Optional[float]
    speed_perceived: Optional[float]
    distance_in_model: Optional[float]
    speed_in_model: Optional[float]
    new_distance_applied: Optional[float]
    adjusted_series: FrameSeries
    original_model: LoomingModel
    
    def __repr__(self) -> str:
        return (
            f"AltReport(alt={self.alt:.4f}rad/s, "
            f"frame={self.response_frame}->{self.response_frame_adjusted}, "
            f"model={self.original_model.kind})"
        )
    
    def __str__(self) -> str:
        return self.summary()
    
    def to_dict(self) -> dict:
        """Export scalar results as a dictionary for logging/serialization."""
        return {
            "alt": _rounded(self.alt),
            "alt_deg": _rounded(self.alt_deg),
            "response_frame": self.response_frame,
            "response_frame_adjusted": self.response_frame_adjusted,
            "latency_applied": self.latency_applied,
            "distance_perceived": _rounded(self.distance_perceived),
            "speed_perceived": _rounded(self.speed_perceived),
            "distance_in_model": _rounded(self.distance_in_model),
            "speed_in_model": _rounded(self.speed_in_model),
            "new_distance_applied": self.new_distance_applied,
            "model": self.original_model.kind,
        }
    
    def summary(self) -> str:
        """Human-readable summary of the extraction."""
        if self.new_distance_applied is None:
            new_distance = "n/a"
        else:
            new_distance = f"{self.new_distance_applied}cm"
        
        lines = [
            "Extraction complete.",
            "",
            f"Response Frame:            {self.response_frame}",
            f"Response Frame Adjusted:   {self.response_frame_adjusted}",
            f"Latency Applied:           {self.latency_applied}s",
            f"New Screen Distance:       {new_distance}",
            "",
            "The Apparent Looming Threshold is:",
            f"ALT: {round(self.alt, 4)} radians/sec",
        ]
        return "\n".join(lines)

"""Planner tuning parameters."""

from __future__ import annotations
from pydantic import BaseModel

from .geometry import Vec3


class PlannerParams(BaseModel):
    """Constants that govern clamping, snapping and rounding."""
    scale_min: float = 0.1              # Gizmo scale clamp on drag end
    scale_max: float = 10.0
    min_dimension: float = 0.1          # Meters; no dimension ever drops below this

    closing_threshold: float = 0.5      # Click distance that snaps to an existing point
    point_radius: float = 0.15          # Inward buffer for drawn points
    segment_buffer: float = 0.15        # Inward buffer for resized segment endpoints
    min_segment_length: float = 1.0
    length_decimals: int = 2            # Rounding of derived segment lengths

    object_default_scale: Vec3 = (1.0, 0.5, 1.0)
    object_min_width: float = 0.2       # Rooftop object scale.x / scale.z floor
    object_min_height: float = 0.1      # Rooftop object scale.y floor

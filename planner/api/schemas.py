"""API request/response schemas."""

from __future__ import annotations
from typing import Any, Union

from pydantic import BaseModel

from planner.core.rooftop import RoofObjectField
from planner.models import (
    AxisVisibility, DrawingPhase, Location, NodeTransform, Point3D, RoofType,
    Segment, TransformMode, TransformTarget, Vec3, WorkflowStep,
)

# Text inputs may send numbers as strings; vectors arrive as triples.
InputValue = Union[float, str, list[float], None]


class AddBuildingRequest(BaseModel):
    roof_type: RoofType


class LocationRequest(BaseModel):
    lat: float
    lng: float


class TargetRequest(BaseModel):
    target: TransformTarget


class ModeRequest(BaseModel):
    mode: TransformMode


class StepRequest(BaseModel):
    step: WorkflowStep


class FieldEditRequest(BaseModel):
    """A numeric input, e.g. field='buildingWidth', value='12.5'."""
    field: str
    value: InputValue


class ObjectEditRequest(BaseModel):
    field: RoofObjectField
    value: InputValue


class ObjectDragRequest(BaseModel):
    """Gizmo release on a rooftop object (world position)."""
    position: Vec3
    scale: Vec3


class ActivateRequest(BaseModel):
    object_id: str | None


class PointRequest(BaseModel):
    point: Point3D


class SegmentSelectRequest(BaseModel):
    index: int | None


class SegmentLengthRequest(BaseModel):
    length: InputValue
    index: int | None = None


class EditResponse(BaseModel):
    """Whether an input was applied, and the resulting building."""
    applied: bool
    building: dict[str, Any]


class DragEndResponse(BaseModel):
    node: NodeTransform
    building: dict[str, Any]


class DrawingInfo(BaseModel):
    phase: DrawingPhase
    points: list[Point3D]
    segments: list[Segment]
    is_closed: bool
    closing_point_index: int | None
    selected_segment_index: int | None
    selected_segment_length: float | None


class SessionState(BaseModel):
    """Everything the front-end needs to render the current session."""
    location: Location
    step: WorkflowStep
    target: TransformTarget
    mode: TransformMode
    dragging: bool
    axes: AxisVisibility | None = None
    active_object_id: str | None = None
    building: dict[str, Any] | None = None
    drawing: DrawingInfo | None = None


class ShapeInfo(BaseModel):
    id: str
    name: str
    available: bool

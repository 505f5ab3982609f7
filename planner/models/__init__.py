from .geometry import Point2D, Point3D, Vector2D, Vec3, direction_from_points, distance, clamp
from .transform import Matrix4, NodeTransform, TransformTarget, TransformMode, AxisVisibility
from .building import (
    RoofType, Location, RooftopObject, Segment, DrawingPhase, DrawingState,
    FlatBuilding, SaddleBuilding, HippedBuilding, Building, building_adapter,
)
from .parameters import PlannerParams
from .session import PlannerSession, WorkflowStep

__all__ = [
    "Point2D", "Point3D", "Vector2D", "Vec3", "direction_from_points", "distance", "clamp",
    "Matrix4", "NodeTransform", "TransformTarget", "TransformMode", "AxisVisibility",
    "RoofType", "Location", "RooftopObject", "Segment", "DrawingPhase", "DrawingState",
    "FlatBuilding", "SaddleBuilding", "HippedBuilding", "Building", "building_adapter",
    "PlannerParams",
    "PlannerSession", "WorkflowStep",
]

"""Abstract base class for all building shapes.

Every roof shape the planner offers implements this interface. Shapes are:
- Self-contained: each knows its defaults and its own roof fields
- Policy holders: each decides which gizmo targets, modes and axes it offers
- Settling: each keeps its roof resting on the body after any change
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from pydantic import BaseModel

from planner.core.errors import InvalidOperationError
from planner.models import (
    AxisVisibility, Building, Location, PlannerParams,
    TransformMode, TransformTarget, Vec3,
)


class FieldRange(BaseModel):
    """Inclusive bounds for a numerically editable field."""
    lo: float | None = None
    hi: float | None = None
    integer: bool = False
    vector: bool = False


BODY_FIELDS: dict[str, FieldRange] = {
    "building_width": FieldRange(lo=0.1, hi=200.0),
    "building_height": FieldRange(lo=0.1, hi=200.0),
    "building_length": FieldRange(lo=0.1, hi=200.0),
    "building_position": FieldRange(vector=True),
    "building_rotation": FieldRange(vector=True),
    "group_position": FieldRange(vector=True),
    "group_rotation": FieldRange(vector=True),
}


class BuildingShape(ABC):
    """
    Base class for all roof shapes.

    Subclasses implement `create()`, `scale_axes()` and, when they carry
    a roof, `bake_roof_scale()` and `settle()`.
    """

    @abstractmethod
    def get_id(self) -> str:
        """Roof type tag (e.g., 'saddle')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name (e.g., 'Saddle Roof')."""
        ...

    @abstractmethod
    def create(self, location: Location | None = None) -> Building:
        """Construct a building of this shape with default dimensions."""
        ...

    @abstractmethod
    def scale_axes(self, target: TransformTarget) -> tuple[bool, bool, bool]:
        """Scale handles offered for a target. The height axis is always on."""
        ...

    def default_target(self) -> TransformTarget:
        return TransformTarget.GROUP

    def targets(self) -> list[TransformTarget]:
        return [TransformTarget.GROUP, TransformTarget.BUILDING, TransformTarget.ROOF]

    def allowed_modes(self, target: TransformTarget) -> list[TransformMode]:
        if target not in self.targets():
            return []
        if target == TransformTarget.GROUP:
            return [TransformMode.TRANSLATE, TransformMode.ROTATE]
        if target == TransformTarget.BUILDING:
            return [TransformMode.TRANSLATE, TransformMode.SCALE]
        return [TransformMode.SCALE]

    def axis_visibility(self, target: TransformTarget, mode: TransformMode) -> AxisVisibility:
        """Translate moves X/Z only, rotate is about Y only."""
        if mode == TransformMode.TRANSLATE:
            return AxisVisibility(show_x=True, show_y=False, show_z=True)
        if mode == TransformMode.ROTATE:
            return AxisVisibility(show_x=False, show_y=True, show_z=False)
        x, y, z = self.scale_axes(target)
        return AxisVisibility(show_x=x, show_y=y, show_z=z)

    def bake_scale(
        self,
        building: Building,
        target: TransformTarget,
        scale: Vec3,
        params: PlannerParams,
    ) -> Building:
        """Multiply a clamped gizmo scale into the target's dimensions."""
        if target == TransformTarget.BUILDING:
            sx, sy, sz = scale
            lo = params.min_dimension
            building = building.model_copy(update={
                "building_width": max(lo, building.building_width * sx),
                "building_height": max(lo, building.building_height * sy),
                "building_length": max(lo, building.building_length * sz),
            })
        elif target == TransformTarget.ROOF:
            building = self.bake_roof_scale(building, scale, params)
        else:
            raise InvalidOperationError("The group cannot be scaled")
        return self.settle(building)

    def bake_roof_scale(self, building: Building, scale: Vec3, params: PlannerParams) -> Building:
        raise InvalidOperationError(f"{self.get_name()} has no roof to scale")

    def settle(self, building: Building) -> Building:
        """Rest the body on the ground plane (base at y = 0)."""
        x, _, z = building.building_position
        return building.model_copy(update={
            "building_position": (x, building.building_height / 2, z),
        })

    def field_ranges(self) -> dict[str, FieldRange]:
        return dict(BODY_FIELDS)

    def field_updates(self, building: Building, field: str, value: float | Vec3) -> dict:
        """Model updates for a validated numeric edit."""
        return {field: value}

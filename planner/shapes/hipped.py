"""Hipped roof - an n-sided pyramid centred over the body."""

from __future__ import annotations

from planner.models import (
    HippedBuilding, Location, PlannerParams, TransformTarget, Vec3,
)
from planner.shapes.base import BuildingShape, FieldRange


class HippedShape(BuildingShape):

    def get_id(self) -> str:
        return "hipped"

    def get_name(self) -> str:
        return "Hipped Roof"

    def create(self, location: Location | None = None) -> HippedBuilding:
        return HippedBuilding(location=location)

    def scale_axes(self, target: TransformTarget) -> tuple[bool, bool, bool]:
        if target == TransformTarget.ROOF:
            # Radius is uniform, driven by the X handle
            return (True, True, False)
        return (True, True, True)

    def bake_roof_scale(self, building: HippedBuilding, scale: Vec3, params: PlannerParams) -> HippedBuilding:
        lo = params.min_dimension
        return building.model_copy(update={
            "roof_radius": max(lo, building.roof_radius * scale[0]),
            "roof_height": max(lo, building.roof_height * scale[1]),
        })

    def settle(self, building: HippedBuilding) -> HippedBuilding:
        building = super().settle(building)
        x, _, z = building.building_position
        return building.model_copy(update={
            "roof_position": (x, building.building_height + building.roof_height / 2, z),
        })

    def field_ranges(self) -> dict[str, FieldRange]:
        ranges = super().field_ranges()
        # Roofed shapes turn through the group only
        del ranges["building_rotation"]
        ranges["roof_height"] = FieldRange(lo=0.1, hi=100.0)
        ranges["roof_radius"] = FieldRange(lo=0.1, hi=200.0)
        ranges["roof_segments"] = FieldRange(lo=3, hi=64, integer=True)
        return ranges

"""Saddle (gable) roof.

The roof is a triangular profile extruded along the building length.
Its width and length always track the body; only its height is free.
"""

from __future__ import annotations

from planner.models import (
    Location, PlannerParams, SaddleBuilding, TransformTarget, Vec3,
)
from planner.shapes.base import BuildingShape, FieldRange


class SaddleShape(BuildingShape):

    def get_id(self) -> str:
        return "saddle"

    def get_name(self) -> str:
        return "Saddle Roof"

    def create(self, location: Location | None = None) -> SaddleBuilding:
        return SaddleBuilding(location=location)

    def scale_axes(self, target: TransformTarget) -> tuple[bool, bool, bool]:
        if target == TransformTarget.ROOF:
            return (False, True, False)
        return (True, True, True)

    def bake_roof_scale(self, building: SaddleBuilding, scale: Vec3, params: PlannerParams) -> SaddleBuilding:
        return building.model_copy(update={
            "roof_height": max(params.min_dimension, building.roof_height * scale[1]),
        })

    def settle(self, building: SaddleBuilding) -> SaddleBuilding:
        building = super().settle(building)
        x, _, z = building.building_position
        return building.model_copy(update={
            "roof_width": building.building_width,
            "roof_length": building.building_length,
            "roof_position": (x, building.building_height, z - building.building_length / 2),
        })

    def field_ranges(self) -> dict[str, FieldRange]:
        ranges = super().field_ranges()
        # Roofed shapes turn through the group only
        del ranges["building_rotation"]
        ranges["roof_height"] = FieldRange(lo=0.1, hi=100.0)
        return ranges

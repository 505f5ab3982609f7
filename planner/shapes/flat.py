"""Flat roof - a plain box, edited through the body only."""

from __future__ import annotations

from planner.models import FlatBuilding, Location, TransformTarget
from planner.shapes.base import BuildingShape


class FlatShape(BuildingShape):
    """Box building without a roof node."""

    def get_id(self) -> str:
        return "flat"

    def get_name(self) -> str:
        return "Flat Roof"

    def create(self, location: Location | None = None) -> FlatBuilding:
        return FlatBuilding(location=location)

    def default_target(self) -> TransformTarget:
        return TransformTarget.BUILDING

    def targets(self) -> list[TransformTarget]:
        return [TransformTarget.GROUP, TransformTarget.BUILDING]

    def scale_axes(self, target: TransformTarget) -> tuple[bool, bool, bool]:
        return (True, True, True)

"""Coordinate frames of a building.

The footprint frame is the building body's frame dropped to the ground:
origin at the centre of the floor, X across the width, Z along the
length. Rooftop objects and drawn points are stored in this frame.
"""

from __future__ import annotations

from planner.core.matrix import apply_to_point, compose, invert, multiply
from planner.models import Building, Matrix4, Point2D, Point3D, clamp


def group_matrix(building: Building) -> Matrix4:
    return compose(building.group_position, building.group_rotation)


def footprint_matrix(building: Building) -> Matrix4:
    """Footprint frame -> world, at unit scale."""
    x, _, z = building.building_position
    local = compose((x, 0.0, z), building.building_rotation)
    return multiply(group_matrix(building), local)


def to_world(building: Building, local: Point3D) -> Point3D:
    return apply_to_point(footprint_matrix(building), local)


def to_local(building: Building, world: Point3D) -> Point3D:
    return apply_to_point(invert(footprint_matrix(building)), world)


def floor_to_world(building: Building, point: Point2D, elevation: float = 0.0) -> Point3D:
    """Lift a footprint point to the given height and move it to world space."""
    return to_world(building, Point3D(x=point.x, y=elevation, z=point.z))


def half_extents(building: Building) -> tuple[float, float]:
    return building.building_width / 2, building.building_length / 2


def clamp_to_footprint(building: Building, point: Point2D, buffer: float) -> Point2D:
    """Clamp a footprint point so it stays `buffer` inside the walls.

    On a footprint narrower than twice the buffer the point is centred.
    """
    hw, hl = half_extents(building)
    x_limit = max(0.0, hw - buffer)
    z_limit = max(0.0, hl - buffer)
    return Point2D(
        x=clamp(point.x, -x_limit, x_limit),
        z=clamp(point.z, -z_limit, z_limit),
    )

"""Rooftop polygon drawing and segment-length editing.

Points are clicked in world space and stored in the footprint frame.
A click close to an existing point finishes the drawing:

- near the last or second-to-last point: stop, leave the polyline open
- near point 0 when exactly three points exist: stop open, but keep a
  closing reference so the third edge back to point 0 is still a segment
- near any other earlier point: close the loop at that point

A click on the only point is ignored, so a finished drawing always has
at least one segment.
"""

from __future__ import annotations
import logging

from planner.core.editor import parse_number
from planner.core.frames import clamp_to_footprint, floor_to_world, half_extents, to_local
from planner.models import (
    Building, DrawingState, PlannerParams, Point2D, Point3D, Segment, Vector2D,
    direction_from_points, distance,
)

logger = logging.getLogger(__name__)


def derive_segments(drawing: DrawingState, decimals: int = 2) -> list[Segment]:
    """Consecutive edges, plus the closing edge when there is one."""
    points = drawing.points
    segments = [
        Segment(from_=points[i - 1], to=points[i], length=round(distance(points[i - 1], points[i]), decimals))
        for i in range(1, len(points))
    ]
    if drawing.has_closing_segment and points:
        last, target = points[-1], points[drawing.closing_point_index or 0]
        segments.append(Segment(from_=last, to=target, length=round(distance(last, target), decimals)))
    return segments


def segment_endpoints(drawing: DrawingState, index: int) -> tuple[int, int]:
    """Point indices (from, to) of a segment."""
    n = len(drawing.points)
    if 0 <= index < n - 1:
        return index, index + 1
    if index == n - 1 and n > 0 and drawing.has_closing_segment:
        return index, drawing.closing_point_index or 0
    raise IndexError(f"No segment {index} in a drawing of {n} points")


def ray_extent(origin: Point2D, direction: Vector2D, half_width: float, half_length: float) -> float:
    """Distance from origin along a unit direction to the box [-hw, hw] x [-hl, hl]."""
    limits: list[float] = []
    for o, d, half in ((origin.x, direction.x, half_width), (origin.z, direction.z, half_length)):
        if d > 1e-12:
            limits.append((half - o) / d)
        elif d < -1e-12:
            limits.append((-half - o) / d)
    if not limits:
        return 0.0
    return max(0.0, min(limits))


class PolygonDrawer:
    """Builds the rooftop polygon of a building from clicks and drags."""

    def __init__(self, params: PlannerParams | None = None) -> None:
        self.params = params or PlannerParams()

    def segments(self, building: Building) -> list[Segment]:
        return derive_segments(building.drawing, self.params.length_decimals)

    def world_points(self, building: Building) -> list[Point3D]:
        """Drawn points in world space at roof elevation."""
        return [
            floor_to_world(building, p, building.building_height)
            for p in building.drawing.points
        ]

    def click(self, building: Building, world_point: Point3D) -> Building:
        """Append a point, or finish the drawing when a click snaps to one."""
        drawing = building.drawing
        if drawing.finished:
            logger.debug("Click ignored, drawing already finished")
            return building

        match = self._nearest_point(building, world_point)
        if match is not None and len(drawing.points) < 2:
            logger.debug("Click on the only point ignored, a drawing needs two points")
            return building
        if match is not None:
            return self._with_drawing(building, self._finish(drawing, match))

        local = to_local(building, world_point).to_floor()
        point = clamp_to_footprint(building, local, self.params.point_radius)
        return self._with_drawing(building, drawing.model_copy(update={
            "points": [*drawing.points, point],
        }))

    def drag_point(self, building: Building, index: int, world_point: Point3D) -> Building:
        """Move one point to where its gizmo was released."""
        points = list(building.drawing.points)
        if not 0 <= index < len(points):
            raise IndexError(f"No point {index} in a drawing of {len(points)} points")
        local = to_local(building, world_point).to_floor()
        points[index] = clamp_to_footprint(building, local, self.params.point_radius)
        return self._with_drawing(building, building.drawing.model_copy(update={"points": points}))

    def select_segment(self, building: Building, index: int | None) -> Building:
        if index is not None:
            segment_endpoints(building.drawing, index)
        return self._with_drawing(building, building.drawing.model_copy(update={
            "selected_segment_index": index,
        }))

    def selected_segment_length(self, building: Building) -> float | None:
        """Live length of the selected segment, following point drags."""
        index = building.drawing.selected_segment_index
        if index is None:
            return None
        try:
            return self.segments(building)[index].length
        except IndexError:
            return None

    def max_segment_length(self, building: Building, index: int) -> float:
        """Longest the segment can get without its end leaving the footprint."""
        drawing = building.drawing
        start, end = segment_endpoints(drawing, index)
        origin = drawing.points[start]
        direction = direction_from_points(origin, drawing.points[end]).normalized()
        hw, hl = half_extents(building)
        buffer = self.params.segment_buffer
        return ray_extent(origin, direction, hw - buffer, hl - buffer)

    def adjust_segment_length(self, building: Building, index: int, length: object) -> Building:
        """Resize a segment by sliding its end point along the segment direction."""
        requested = parse_number("length", length)
        drawing = building.drawing
        start, end = segment_endpoints(drawing, index)
        origin, target = drawing.points[start], drawing.points[end]

        current = distance(origin, target)
        if current < 1e-9:
            logger.warning(f"Segment {index} has zero length, resize ignored")
            return building

        bound = self.max_segment_length(building, index)
        if bound < 1e-9:
            logger.warning(f"Segment {index} has no room inside the footprint, resize ignored")
            return building
        new_length = min(max(requested, self.params.min_segment_length), bound)
        direction = direction_from_points(origin, target).normalized()

        points = list(drawing.points)
        points[end] = origin + direction * new_length
        logger.debug(f"Segment {index}: {current:.3f} -> {new_length:.3f} (max {bound:.3f})")
        return self._with_drawing(building, drawing.model_copy(update={"points": points}))

    def fit_to_footprint(self, building: Building) -> Building:
        """Pull every point back inside the current footprint."""
        drawing = building.drawing
        if not drawing.points:
            return building
        points = [clamp_to_footprint(building, p, self.params.point_radius) for p in drawing.points]
        return self._with_drawing(building, drawing.model_copy(update={"points": points}))

    def reset(self, building: Building) -> Building:
        logger.info("Drawing reset")
        return self._with_drawing(building, DrawingState())

    def _nearest_point(self, building: Building, world_point: Point3D) -> int | None:
        """Index of the closest existing point within the closing threshold."""
        click = world_point.to_floor()
        best: int | None = None
        best_distance = self.params.closing_threshold
        for i, p in enumerate(self.world_points(building)):
            d = distance(click, p.to_floor())
            if d <= best_distance and (best is None or d < best_distance):
                best, best_distance = i, d
        return best

    def _finish(self, drawing: DrawingState, match: int) -> DrawingState:
        n = len(drawing.points)
        if match >= n - 2:
            logger.info(f"Drawing finished open with {n} points")
            return drawing.model_copy(update={"finished": True})
        if n == 3 and match == 0:
            logger.info("Drawing finished open with closing reference to point 0")
            return drawing.model_copy(update={"finished": True, "closing_point_index": 0})
        logger.info(f"Drawing closed at point {match} with {n} points")
        return drawing.model_copy(update={
            "finished": True,
            "is_closed": True,
            "closing_point_index": match,
        })

    def _with_drawing(self, building: Building, drawing: DrawingState) -> Building:
        return building.model_copy(update={"drawing": drawing})

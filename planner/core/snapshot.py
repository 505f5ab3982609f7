"""Snapshot codec - the JSON the host page stores in its hidden field.

The snapshot is the building's camelCase fields plus, once the drawing
is finished, ``hasClosedLoopSystem``, ``segments`` and
``closingPointIndex``. Loading re-derives the drawn points from
``segments[].from``.
"""

from __future__ import annotations
import json
import logging
from typing import Any

from planner.core.polygon import derive_segments
from planner.models import Building, DrawingState, PlannerParams, Segment, building_adapter

logger = logging.getLogger(__name__)

DRAWING_KEYS = ("hasClosedLoopSystem", "segments", "closingPointIndex")


def dump_snapshot(building: Building, params: PlannerParams | None = None) -> dict[str, Any]:
    params = params or PlannerParams()
    data = building.model_dump(mode="json", by_alias=True)
    drawing = building.drawing
    if drawing.finished:
        data["hasClosedLoopSystem"] = drawing.is_closed
        data["segments"] = [
            s.model_dump(mode="json", by_alias=True)
            for s in derive_segments(drawing, params.length_decimals)
        ]
        data["closingPointIndex"] = drawing.closing_point_index
    return data


def snapshot_json(building: Building, params: PlannerParams | None = None) -> str:
    return json.dumps(dump_snapshot(building, params))


def load_snapshot(data: dict[str, Any] | str) -> Building:
    """Rebuild a building, including its finished drawing, from a snapshot."""
    if isinstance(data, str):
        data = json.loads(data)
    fields = {k: v for k, v in data.items() if k not in DRAWING_KEYS}
    building = building_adapter.validate_python(fields)

    raw_segments = data.get("segments")
    if not raw_segments:
        return building

    segments = [Segment.model_validate(s) for s in raw_segments]
    is_closed = bool(data.get("hasClosedLoopSystem", False))
    closing = data.get("closingPointIndex")
    points = [s.from_ for s in segments]
    if not (is_closed or closing is not None):
        # Open polyline: the last point only appears as a segment end
        points.append(segments[-1].to)

    drawing = DrawingState(
        points=points,
        finished=True,
        is_closed=is_closed,
        closing_point_index=closing,
    )
    logger.info(f"Loaded drawing with {len(points)} points (closed={is_closed})")
    return building.model_copy(update={"drawing": drawing})

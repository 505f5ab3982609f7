"""Rooftop objects - placement and footprint clamping.

Objects live in the footprint frame. Every update path funnels through
`clamp_object`: scale is clamped first, then position against the new
scale, then the object is seated on the roof plane.
"""

from __future__ import annotations
import logging
import uuid
from enum import Enum

from planner.core.editor import parse_number
from planner.core.errors import InvalidOperationError
from planner.core.frames import half_extents, to_local
from planner.models import (
    Building, PlannerParams, Point3D, RooftopObject, Vec3, clamp,
)

logger = logging.getLogger(__name__)


class RoofObjectField(str, Enum):
    WIDTH = "width"
    HEIGHT = "height"
    LENGTH = "length"
    POSITION_X = "positionX"
    POSITION_Z = "positionZ"


class RooftopObjectEngine:
    """Places, edits and re-seats the boxes standing on a roof."""

    def __init__(self, params: PlannerParams | None = None) -> None:
        self.params = params or PlannerParams()

    def clamp_object(self, building: Building, position: Vec3, scale: Vec3) -> tuple[Vec3, Vec3]:
        p = self.params
        # The body extent wins over the minimum object size
        sx = min(max(scale[0], p.object_min_width), building.building_width)
        sy = min(max(scale[1], p.object_min_height), building.building_height)
        sz = min(max(scale[2], p.object_min_width), building.building_length)

        hw, hl = half_extents(building)
        x = clamp(position[0], -hw + sx / 2, hw - sx / 2)
        z = clamp(position[2], -hl + sz / 2, hl - sz / 2)
        y = building.building_height + sy / 2
        return (x, y, z), (sx, sy, sz)

    def place(self, building: Building, object_id: str | None = None) -> tuple[Building, RooftopObject]:
        """Drop a default-sized object in the middle of the roof."""
        position, scale = self.clamp_object(building, (0.0, 0.0, 0.0), self.params.object_default_scale)
        obj = RooftopObject(id=object_id or uuid.uuid4().hex, position=position, scale=scale)
        logger.info(f"Placed rooftop object {obj.id} at {position}")
        return building.model_copy(update={"roof_objects": [*building.roof_objects, obj]}), obj

    def get(self, building: Building, object_id: str) -> RooftopObject:
        for obj in building.roof_objects:
            if obj.id == object_id:
                return obj
        raise KeyError(object_id)

    def delete(self, building: Building, object_id: str) -> Building:
        """Remove an object. Unknown ids are ignored."""
        remaining = [o for o in building.roof_objects if o.id != object_id]
        if len(remaining) == len(building.roof_objects):
            logger.debug(f"Delete of unknown rooftop object {object_id} ignored")
            return building
        return building.model_copy(update={"roof_objects": remaining})

    def update_from_editor(
        self,
        building: Building,
        object_id: str,
        field: RoofObjectField | str,
        value: object,
    ) -> Building:
        """Apply one numeric input from the object editor."""
        try:
            field = RoofObjectField(field)
        except ValueError:
            raise InvalidOperationError(f"Rooftop objects have no editable field {field!r}") from None
        number = parse_number(field.value, value)
        obj = self.get(building, object_id)
        (x, y, z), (sx, sy, sz) = obj.position, obj.scale

        if field == RoofObjectField.WIDTH:
            sx = number
        elif field == RoofObjectField.HEIGHT:
            sy = number
        elif field == RoofObjectField.LENGTH:
            sz = number
        elif field == RoofObjectField.POSITION_X:
            x = number
        else:
            z = number

        return self._replace(building, obj, (x, y, z), (sx, sy, sz))

    def update_from_drag(
        self,
        building: Building,
        object_id: str,
        world_position: Vec3,
        scale: Vec3,
    ) -> Building:
        """Apply the gizmo's final world position and scale for an object."""
        obj = self.get(building, object_id)
        local = to_local(building, Point3D.from_tuple(world_position))
        return self._replace(building, obj, local.to_tuple(), scale)

    def rest_all(self, building: Building) -> Building:
        """Re-clamp and re-seat every object against the current body."""
        objects = []
        for obj in building.roof_objects:
            position, scale = self.clamp_object(building, obj.position, obj.scale)
            objects.append(obj.model_copy(update={"position": position, "scale": scale}))
        return building.model_copy(update={"roof_objects": objects})

    def _replace(self, building: Building, obj: RooftopObject, position: Vec3, scale: Vec3) -> Building:
        position, scale = self.clamp_object(building, position, scale)
        updated = obj.model_copy(update={"position": position, "scale": scale})
        return building.model_copy(update={
            "roof_objects": [updated if o.id == obj.id else o for o in building.roof_objects],
        })


def next_active_id(building: Building, active_id: str | None) -> str | None:
    """Keep the active id if it still exists, else fall back to the first object."""
    ids = [o.id for o in building.roof_objects]
    if active_id is None or active_id in ids:
        return active_id
    return ids[0] if ids else None

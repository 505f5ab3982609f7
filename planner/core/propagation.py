"""Transform propagation - gizmo node transforms into building fields.

The gizmo reports the live transform of whichever node it is attached
to (group, building body or roof). Translate and rotate are read straight
through on every frame. Scale is a transient drag artefact: it is left
alone while the drag is in progress and baked into the dimensions when
the drag ends, after which the node's scale is reset to unit.
"""

from __future__ import annotations
import logging

from pydantic import BaseModel

from planner.core.errors import InvalidOperationError
from planner.core.polygon import PolygonDrawer
from planner.core.rooftop import RooftopObjectEngine
from planner.models import (
    Building, NodeTransform, PlannerParams, TransformMode, TransformTarget, Vec3, clamp,
)
from planner.shapes.base import BuildingShape

logger = logging.getLogger(__name__)

UNIT_SCALE: Vec3 = (1.0, 1.0, 1.0)


class DragResult(BaseModel):
    """Outcome of a released drag: the new building and the node to restore."""
    building: Building
    node: NodeTransform
    changed: bool


class TransformPropagator:
    """
    Stateless propagation for one building shape.

    Takes the current building, the gizmo's target/mode and the node's
    live transform; returns the updated building.
    """

    def __init__(self, shape: BuildingShape, params: PlannerParams | None = None) -> None:
        self.shape = shape
        self.params = params or PlannerParams()

    def check_mode(self, target: TransformTarget, mode: TransformMode) -> None:
        if mode not in self.shape.allowed_modes(target):
            raise InvalidOperationError(
                f"{self.shape.get_name()}: {mode.value} is not offered for the {target.value}"
            )

    def read_node(
        self,
        building: Building,
        target: TransformTarget,
        mode: TransformMode,
        node: NodeTransform,
    ) -> Building:
        """Copy the node's position or Y rotation into the building, dimensions untouched.

        Rotation is only read in rotate mode, position only outside it.
        """
        self.check_mode(target, mode)
        if target == TransformTarget.ROOF:
            # The roof only scales; its placement follows the body.
            return self.shape.settle(building)

        prefix = "group" if target == TransformTarget.GROUP else "building"
        if mode == TransformMode.ROTATE:
            rx, _, rz = getattr(building, f"{prefix}_rotation")
            update = {f"{prefix}_rotation": (rx, node.rotation[1], rz)}
        else:
            _, y, _ = getattr(building, f"{prefix}_position")
            update = {f"{prefix}_position": (node.position[0], y, node.position[2])}
        return self.shape.settle(building.model_copy(update=update))

    def on_change(
        self,
        building: Building,
        target: TransformTarget,
        mode: TransformMode,
        node: NodeTransform,
    ) -> Building | None:
        """Per-frame update. Returns None when nothing observable changed."""
        candidate = self.read_node(building, target, mode, node)
        if candidate == building:
            return None
        return candidate

    def on_drag_end(
        self,
        building: Building,
        target: TransformTarget,
        mode: TransformMode,
        node: NodeTransform,
    ) -> DragResult:
        """Finalise a drag; in scale mode bake the clamped scale into dimensions."""
        updated = self.read_node(building, target, mode, node)

        if mode == TransformMode.SCALE:
            lo, hi = self.params.scale_min, self.params.scale_max
            scale: Vec3 = (
                clamp(node.scale[0], lo, hi),
                clamp(node.scale[1], lo, hi),
                clamp(node.scale[2], lo, hi),
            )
            updated = self.shape.bake_scale(updated, target, scale, self.params)
            logger.debug(f"Baked scale {scale} into {target.value}")

        updated = propagate_dependents(building, updated, self.params)
        return DragResult(
            building=updated,
            node=self._node_for(updated, target, node),
            changed=updated != building,
        )

    def _node_for(self, building: Building, target: TransformTarget, node: NodeTransform) -> NodeTransform:
        """Node transform the renderer should restore after a drag."""
        if target == TransformTarget.GROUP:
            return NodeTransform(
                position=building.group_position,
                rotation=building.group_rotation,
                scale=UNIT_SCALE,
            )
        if target == TransformTarget.BUILDING:
            return NodeTransform(
                position=building.building_position,
                rotation=building.building_rotation,
                scale=UNIT_SCALE,
            )
        return NodeTransform(
            position=getattr(building, "roof_position", node.position),
            rotation=getattr(building, "roof_rotation", node.rotation),
            scale=UNIT_SCALE,
        )


def propagate_dependents(previous: Building, updated: Building, params: PlannerParams | None = None) -> Building:
    """Re-seat rooftop objects and re-fit drawn points after a body change."""
    footprint_changed = (
        previous.building_width != updated.building_width
        or previous.building_length != updated.building_length
    )
    if footprint_changed or previous.building_height != updated.building_height:
        updated = RooftopObjectEngine(params).rest_all(updated)
    if footprint_changed:
        updated = PolygonDrawer(params).fit_to_footprint(updated)
    return updated

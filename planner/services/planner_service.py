"""High-level planner service - the single controller the API talks to."""

from __future__ import annotations
import logging
from typing import Any, Callable

from pydantic import BaseModel

from planner.config import Settings, settings as default_settings
from planner.core.editor import edit_building_field
from planner.core.errors import InvalidOperationError, OutOfRangeError
from planner.core.mapscale import PlatformSize, platform_size, static_map_url
from planner.core.polygon import PolygonDrawer
from planner.core.propagation import TransformPropagator, propagate_dependents
from planner.core.registry import ShapeRegistry, create_default_registry
from planner.core.rooftop import RoofObjectField, RooftopObjectEngine, next_active_id
from planner.core.snapshot import dump_snapshot, load_snapshot, snapshot_json
from planner.models import (
    AxisVisibility, Building, Location, NodeTransform, PlannerParams, PlannerSession,
    Point3D, RooftopObject, TransformMode, TransformTarget, Vec3, WorkflowStep,
)
from planner.shapes.base import BuildingShape

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]


class MemorySink:
    """Keeps the last published snapshot, like a hidden form field."""

    def __init__(self) -> None:
        self.value = ""
        self.writes = 0

    def __call__(self, payload: str) -> None:
        self.value = payload
        self.writes += 1


class MapInfo(BaseModel):
    location: Location
    image_url: str
    platform: PlatformSize


class PlannerService:
    """Owns the session, routes edits to the engines, publishes snapshots."""

    def __init__(
        self,
        registry: ShapeRegistry | None = None,
        params: PlannerParams | None = None,
        settings: Settings | None = None,
        sink: Sink | None = None,
        initial_snapshot: dict[str, Any] | str | None = None,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.params = params or PlannerParams()
        self.settings = settings or default_settings
        self.sink = sink
        self.objects = RooftopObjectEngine(self.params)
        self.drawer = PolygonDrawer(self.params)
        self._published: str | None = None

        self.session = PlannerSession(
            location=Location(lat=self.settings.start_lat, lng=self.settings.start_lng),
        )

        if initial_snapshot:
            self.load(initial_snapshot)
        elif len(self.settings.available_building_types) == 1:
            self.add_building(self.settings.available_building_types[0])

    # -- session ----------------------------------------------------------

    @property
    def building(self) -> Building | None:
        return self.session.building

    def require_building(self) -> Building:
        if self.session.building is None:
            raise InvalidOperationError("No building has been added yet")
        return self.session.building

    def shape(self) -> BuildingShape:
        return self.registry.require(self.require_building().roof_type)

    def propagator(self) -> TransformPropagator:
        return TransformPropagator(self.shape(), self.params)

    def load(self, data: dict[str, Any] | str) -> Building:
        """Restore the session from a host-provided snapshot."""
        building = load_snapshot(data)
        shape = self.registry.require(building.roof_type)
        if building.location is not None:
            self.session.location = building.location
        self._start(building, shape)
        logger.info(f"Loaded {building.roof_type} building from snapshot")
        return building

    def add_building(self, roof_type: str) -> Building:
        if roof_type not in self.settings.available_building_types:
            raise InvalidOperationError(f"Roof type {roof_type!r} is not available")
        shape = self.registry.require(roof_type)
        building = shape.create(self.session.location)
        self._start(building, shape)
        logger.info(f"Added {roof_type} building at {self.session.location.lat}, {self.session.location.lng}")
        return building

    def _start(self, building: Building, shape: BuildingShape) -> None:
        self.session.building = building
        self.session.step = WorkflowStep.DEFINE_BUILDING
        self.session.target = shape.default_target()
        self.session.mode = TransformMode.TRANSLATE
        self.session.dragging = False
        self.session.active_object_id = building.roof_objects[0].id if building.roof_objects else None
        self.publish()

    def set_step(self, step: WorkflowStep) -> None:
        self.require_building()
        self.session.step = step
        self.session.dragging = False

    def _require_step(self, step: WorkflowStep) -> Building:
        building = self.require_building()
        if self.session.step != step:
            raise InvalidOperationError(
                f"Operation needs step {step.value}, session is in {self.session.step.value}"
            )
        return building

    # -- location / map ---------------------------------------------------

    def select_location(self, lat: float, lng: float) -> MapInfo:
        self.session.location = Location(lat=lat, lng=lng)
        if self.session.building is not None:
            self._commit(self.session.building.model_copy(update={"location": self.session.location}))
        return self.map_info()

    def map_info(self) -> MapInfo:
        loc = self.session.location
        s = self.settings
        return MapInfo(
            location=loc,
            image_url=static_map_url(
                loc.lat, loc.lng, s.map_zoom, s.map_width_px, s.map_height_px,
                api_key=s.google_maps_api_key, map_type=s.map_type,
            ),
            platform=platform_size(loc.lat, s.map_zoom, s.map_width_px, s.map_height_px, s.platform_margin),
        )

    # -- transforms -------------------------------------------------------

    def set_target(self, target: TransformTarget) -> None:
        shape = self.shape()
        if target not in shape.targets():
            raise InvalidOperationError(f"{shape.get_name()} has no {target.value} target")
        self.session.target = target
        self.session.mode = TransformMode.TRANSLATE if target == TransformTarget.GROUP else TransformMode.SCALE
        self.session.dragging = False

    def set_mode(self, mode: TransformMode) -> None:
        self.propagator().check_mode(self.session.target, mode)
        self.session.mode = mode

    def axis_visibility(self) -> AxisVisibility:
        return self.shape().axis_visibility(self.session.target, self.session.mode)

    def drag_start(self) -> None:
        self._require_step(WorkflowStep.DEFINE_BUILDING)
        self.session.dragging = True

    def transform_changed(self, node: NodeTransform) -> bool:
        """Per-frame gizmo report. Returns True when the building changed."""
        building = self._require_step(WorkflowStep.DEFINE_BUILDING)
        updated = self.propagator().on_change(building, self.session.target, self.session.mode, node)
        if updated is None:
            return False
        return self._commit(updated)

    def drag_end(self, node: NodeTransform) -> NodeTransform:
        """Release the gizmo; returns the node transform to restore."""
        building = self._require_step(WorkflowStep.DEFINE_BUILDING)
        self.session.dragging = False
        result = self.propagator().on_drag_end(building, self.session.target, self.session.mode, node)
        self._commit(result.building)
        return result.node

    def edit_field(self, field: str, value: object) -> bool:
        """Numeric input. Invalid values are dropped and the old state kept."""
        building = self._require_step(WorkflowStep.DEFINE_BUILDING)
        try:
            updated = edit_building_field(self.shape(), building, field, value)
        except OutOfRangeError as e:
            logger.debug(f"Rejected input: {e}")
            return False
        return self._commit(updated)

    # -- rooftop objects --------------------------------------------------

    def place_object(self) -> RooftopObject:
        building = self._require_step(WorkflowStep.DEFINE_RESTRICTIONS)
        updated, obj = self.objects.place(building)
        self._commit(updated)
        self.session.active_object_id = obj.id
        return obj

    def activate_object(self, object_id: str | None) -> None:
        building = self.require_building()
        if object_id is not None:
            self.objects.get(building, object_id)
        self.session.active_object_id = object_id

    def update_object(self, object_id: str, field: RoofObjectField | str, value: object) -> bool:
        building = self._require_step(WorkflowStep.DEFINE_RESTRICTIONS)
        try:
            updated = self.objects.update_from_editor(building, object_id, field, value)
        except OutOfRangeError as e:
            logger.debug(f"Rejected input: {e}")
            return False
        return self._commit(updated)

    def drag_object(self, object_id: str, world_position: Vec3, scale: Vec3) -> RooftopObject:
        building = self._require_step(WorkflowStep.DEFINE_RESTRICTIONS)
        updated = self.objects.update_from_drag(building, object_id, world_position, scale)
        self._commit(updated)
        return self.objects.get(updated, object_id)

    def delete_object(self, object_id: str) -> None:
        building = self._require_step(WorkflowStep.DEFINE_RESTRICTIONS)
        updated = self.objects.delete(building, object_id)
        self._commit(updated)
        self.session.active_object_id = next_active_id(updated, self.session.active_object_id)

    # -- drawing ----------------------------------------------------------

    def click(self, point: Point3D) -> Building:
        building = self._require_step(WorkflowStep.DEFINE_LAYOUT)
        self._commit(self.drawer.click(building, point))
        return self.require_building()

    def drag_point(self, index: int, point: Point3D) -> Building:
        building = self._require_step(WorkflowStep.DEFINE_LAYOUT)
        self._commit(self.drawer.drag_point(building, index, point))
        return self.require_building()

    def select_segment(self, index: int | None) -> None:
        building = self._require_step(WorkflowStep.DEFINE_LAYOUT)
        self._commit(self.drawer.select_segment(building, index))

    def set_segment_length(self, length: object, index: int | None = None) -> bool:
        """Resize a segment (the selected one by default)."""
        building = self._require_step(WorkflowStep.DEFINE_LAYOUT)
        if index is None:
            index = building.drawing.selected_segment_index
        if index is None:
            raise InvalidOperationError("No segment selected")
        try:
            updated = self.drawer.adjust_segment_length(building, index, length)
        except OutOfRangeError as e:
            logger.debug(f"Rejected input: {e}")
            return False
        return self._commit(updated)

    def reset_drawing(self) -> None:
        building = self._require_step(WorkflowStep.DEFINE_LAYOUT)
        self._commit(self.drawer.reset(building))

    # -- output -----------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        return dump_snapshot(self.require_building(), self.params)

    def publish(self) -> None:
        """Write the snapshot to the sink if it differs from the last write."""
        building = self.session.building
        if building is None or self.sink is None:
            return
        payload = snapshot_json(building, self.params)
        if payload == self._published:
            return
        self._published = payload
        self.sink(payload)

    def _commit(self, updated: Building) -> bool:
        previous = self.require_building()
        updated = propagate_dependents(previous, updated, self.params)
        if updated == previous:
            return False
        self.session.building = updated
        self.publish()
        return True

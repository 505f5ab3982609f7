"""Tests for the planner service: session flow, step gating and publishing."""

import json

import pytest

from planner.config import Settings
from planner.core.errors import InvalidOperationError
from planner.core.snapshot import snapshot_json
from planner.models import (
    Location, NodeTransform, Point3D, SaddleBuilding, TransformMode, TransformTarget,
    WorkflowStep,
)
from planner.services.planner_service import MemorySink, PlannerService

SQUARE = [(-3, -3), (3, -3), (3, 3), (-3, 3), (-3, -3)]


def _published(sink: MemorySink) -> dict:
    return json.loads(sink.value)


class TestStartup:

    def test_no_building_until_one_is_added(self, service, sink):
        assert service.building is None
        assert sink.writes == 0
        assert service.session.location == Location(lat=45.8664544, lng=25.7981645)

    def test_single_available_type_is_added(self, sink):
        service = PlannerService(settings=Settings(available_building_types=["hipped"]), sink=sink)
        assert service.building.roof_type == "hipped"
        assert sink.writes == 1

    def test_initial_snapshot(self, settings, sink):
        stored = SaddleBuilding(building_width=8.0, location=Location(lat=1.5, lng=2.5))
        service = PlannerService(settings=settings, sink=sink, initial_snapshot=snapshot_json(stored))
        assert service.building == stored
        assert service.session.location == stored.location
        assert _published(sink)["buildingWidth"] == 8

    def test_add_building(self, service, sink):
        service.add_building("saddle")
        assert _published(sink)["roofType"] == "saddle"
        assert service.session.target == TransformTarget.GROUP
        assert service.session.step == WorkflowStep.DEFINE_BUILDING

    def test_flat_starts_on_the_body(self, service):
        service.add_building("flat")
        assert service.session.target == TransformTarget.BUILDING

    def test_unavailable_type(self, sink):
        service = PlannerService(settings=Settings(available_building_types=["flat"]), sink=sink)
        with pytest.raises(InvalidOperationError):
            service.add_building("saddle")

    def test_operations_need_a_building(self, service):
        with pytest.raises(InvalidOperationError):
            service.edit_field("buildingWidth", 3)


class TestTransforms:

    def test_target_switch_picks_mode(self, service):
        service.add_building("saddle")
        service.set_target(TransformTarget.ROOF)
        assert service.session.mode == TransformMode.SCALE
        assert service.axis_visibility().show_y
        service.set_target(TransformTarget.GROUP)
        assert service.session.mode == TransformMode.TRANSLATE

    def test_flat_has_no_roof_target(self, service):
        service.add_building("flat")
        with pytest.raises(InvalidOperationError):
            service.set_target(TransformTarget.ROOF)

    def test_mode_not_offered(self, service):
        service.add_building("saddle")
        with pytest.raises(InvalidOperationError):
            service.set_mode(TransformMode.SCALE)

    def test_live_translate(self, service, sink):
        service.add_building("saddle")
        node = NodeTransform(position=(3.0, 7.0, 4.0))
        assert service.transform_changed(node) is True
        assert service.building.group_position == (3, 0, 4)
        writes = sink.writes
        assert service.transform_changed(node) is False
        assert sink.writes == writes

    def test_scale_drag_end(self, service, sink):
        service.add_building("flat")
        service.set_mode(TransformMode.SCALE)
        service.drag_start()
        assert service.session.dragging
        node = service.drag_end(NodeTransform(position=(0.0, 2.5, 0.0), scale=(1.5, 1.0, 1.0)))
        assert not service.session.dragging
        assert node.scale == (1, 1, 1)
        assert _published(sink)["buildingWidth"] == 15


class TestFieldEdits:

    def test_valid_edit_publishes(self, service, sink):
        service.add_building("flat")
        assert service.edit_field("buildingWidth", "12") is True
        assert _published(sink)["buildingWidth"] == 12

    def test_rejected_edit_keeps_state(self, service, sink):
        service.add_building("flat")
        before, writes = service.building, sink.writes
        assert service.edit_field("buildingWidth", "abc") is False
        assert service.edit_field("buildingWidth", 500) is False
        assert service.building == before
        assert sink.writes == writes

    def test_unchanged_value_is_not_published(self, service, sink):
        service.add_building("flat")
        writes = sink.writes
        assert service.edit_field("buildingWidth", 10) is False
        assert sink.writes == writes


class TestStepGating:

    def test_drawing_needs_layout_step(self, service):
        service.add_building("flat")
        with pytest.raises(InvalidOperationError):
            service.click(Point3D(x=0, y=5, z=0))

    def test_objects_need_restrictions_step(self, service):
        service.add_building("flat")
        with pytest.raises(InvalidOperationError):
            service.place_object()

    def test_transforms_need_building_step(self, service):
        service.add_building("flat")
        service.set_step(WorkflowStep.DEFINE_LAYOUT)
        with pytest.raises(InvalidOperationError):
            service.edit_field("buildingWidth", 3)


class TestRooftopObjects:

    @pytest.fixture
    def restricting(self, service):
        service.add_building("flat")
        service.set_step(WorkflowStep.DEFINE_RESTRICTIONS)
        return service

    def test_place_activates(self, restricting, sink):
        obj = restricting.place_object()
        assert restricting.session.active_object_id == obj.id
        assert _published(sink)["roofObjects"][0]["position"] == [0, 5.25, 0]

    def test_delete_active_falls_back(self, restricting):
        first = restricting.place_object()
        second = restricting.place_object()
        restricting.delete_object(second.id)
        assert restricting.session.active_object_id == first.id
        restricting.delete_object(first.id)
        assert restricting.session.active_object_id is None

    def test_activate_unknown(self, restricting):
        with pytest.raises(KeyError):
            restricting.activate_object("missing")

    def test_invalid_editor_value(self, restricting):
        obj = restricting.place_object()
        assert restricting.update_object(obj.id, "width", "wide") is False
        assert restricting.update_object(obj.id, "width", 3) is True
        assert restricting.building.roof_objects[0].scale[0] == 3

    def test_body_shrink_reseats_objects(self, restricting):
        obj = restricting.place_object()
        restricting.update_object(obj.id, "positionX", 4)
        restricting.set_step(WorkflowStep.DEFINE_BUILDING)
        restricting.edit_field("buildingWidth", 4)
        assert restricting.building.roof_objects[0].position[0] == pytest.approx(1.5)


class TestDrawing:

    @pytest.fixture
    def drawing(self, service):
        service.add_building("flat")
        service.set_step(WorkflowStep.DEFINE_LAYOUT)
        return service

    def test_closed_drawing_is_published(self, drawing, sink):
        for x, z in SQUARE:
            drawing.click(Point3D(x=x, y=5, z=z))
        data = _published(sink)
        assert data["hasClosedLoopSystem"] is True
        assert len(data["segments"]) == 4

    def test_reset_removes_segments(self, drawing, sink):
        for x, z in SQUARE:
            drawing.click(Point3D(x=x, y=5, z=z))
        drawing.reset_drawing()
        assert "segments" not in _published(sink)

    def test_segment_length_needs_selection(self, drawing):
        for x, z in SQUARE[:2]:
            drawing.click(Point3D(x=x, y=5, z=z))
        with pytest.raises(InvalidOperationError):
            drawing.set_segment_length(4)
        drawing.select_segment(0)
        assert drawing.set_segment_length("4") is True
        assert drawing.drawer.selected_segment_length(drawing.building) == 4

    def test_body_shrink_refits_points(self, drawing):
        drawing.click(Point3D(x=4, y=5, z=4))
        drawing.set_step(WorkflowStep.DEFINE_BUILDING)
        drawing.edit_field("buildingLength", 6)
        p = drawing.building.drawing.points[0]
        assert (p.x, p.z) == pytest.approx((4, 2.85))


class TestMap:

    def test_location_updates_building_and_map(self, service, sink):
        service.add_building("flat")
        info = service.select_location(10.0, 20.0)
        assert "center=10.0,20.0" in info.image_url
        assert "key=test-key" in info.image_url
        assert _published(sink)["location"] == {"lat": 10, "lng": 20}

"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from planner.api.schemas import (
    ActivateRequest, AddBuildingRequest, DragEndResponse, DrawingInfo, EditResponse,
    FieldEditRequest, LocationRequest, ModeRequest, ObjectDragRequest, ObjectEditRequest,
    PointRequest, SegmentLengthRequest, SegmentSelectRequest, SessionState, ShapeInfo,
    StepRequest, TargetRequest,
)
from planner.models import NodeTransform, RooftopObject
from planner.services.planner_service import MapInfo, MemorySink, PlannerService

router = APIRouter()

# Shared service instance; the sink stands in for the host's hidden field
_sink = MemorySink()
_service = PlannerService(sink=_sink)


def get_service() -> PlannerService:
    return _service


def get_sink() -> MemorySink:
    return _sink


def _state(service: PlannerService) -> SessionState:
    session = service.session
    state = SessionState(
        location=session.location,
        step=session.step,
        target=session.target,
        mode=session.mode,
        dragging=session.dragging,
        active_object_id=session.active_object_id,
    )
    building = service.building
    if building is None:
        return state

    drawer = service.drawer
    drawing = building.drawing
    state.axes = service.axis_visibility()
    state.building = service.snapshot()
    state.drawing = DrawingInfo(
        phase=drawing.phase,
        points=drawer.world_points(building),
        segments=drawer.segments(building),
        is_closed=drawing.is_closed,
        closing_point_index=drawing.closing_point_index,
        selected_segment_index=drawing.selected_segment_index,
        selected_segment_length=drawer.selected_segment_length(building),
    )
    return state


def _edited(service: PlannerService, applied: bool) -> EditResponse:
    return EditResponse(applied=applied, building=service.snapshot())


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/shapes", response_model=list[ShapeInfo])
async def list_shapes(service: PlannerService = Depends(get_service)) -> list[ShapeInfo]:
    """List roof shapes and whether the host allows them."""
    available = service.settings.available_building_types
    return [
        ShapeInfo(id=s.get_id(), name=s.get_name(), available=s.get_id() in available)
        for s in service.registry.list_shapes()
    ]


@router.get("/session", response_model=SessionState)
async def get_session(service: PlannerService = Depends(get_service)) -> SessionState:
    return _state(service)


@router.post("/building", response_model=SessionState)
async def add_building(request: AddBuildingRequest, service: PlannerService = Depends(get_service)) -> SessionState:
    """Replace the current building with a fresh one of the given roof type."""
    service.add_building(request.roof_type.value)
    return _state(service)


@router.post("/location", response_model=MapInfo)
async def select_location(request: LocationRequest, service: PlannerService = Depends(get_service)) -> MapInfo:
    return service.select_location(request.lat, request.lng)


@router.get("/map", response_model=MapInfo)
async def map_info(service: PlannerService = Depends(get_service)) -> MapInfo:
    return service.map_info()


@router.post("/step", response_model=SessionState)
async def set_step(request: StepRequest, service: PlannerService = Depends(get_service)) -> SessionState:
    service.set_step(request.step)
    return _state(service)


@router.post("/transform/target", response_model=SessionState)
async def set_target(request: TargetRequest, service: PlannerService = Depends(get_service)) -> SessionState:
    service.set_target(request.target)
    return _state(service)


@router.post("/transform/mode", response_model=SessionState)
async def set_mode(request: ModeRequest, service: PlannerService = Depends(get_service)) -> SessionState:
    service.set_mode(request.mode)
    return _state(service)


@router.post("/transform/start", status_code=204)
async def drag_start(service: PlannerService = Depends(get_service)) -> Response:
    service.drag_start()
    return Response(status_code=204)


@router.post("/transform/change", response_model=EditResponse)
async def transform_changed(node: NodeTransform, service: PlannerService = Depends(get_service)) -> EditResponse:
    """Per-frame gizmo report; `applied` is False on unchanged frames."""
    return _edited(service, service.transform_changed(node))


@router.post("/transform/end", response_model=DragEndResponse)
async def drag_end(node: NodeTransform, service: PlannerService = Depends(get_service)) -> DragEndResponse:
    restored = service.drag_end(node)
    return DragEndResponse(node=restored, building=service.snapshot())


@router.post("/building/fields", response_model=EditResponse)
async def edit_field(request: FieldEditRequest, service: PlannerService = Depends(get_service)) -> EditResponse:
    return _edited(service, service.edit_field(request.field, request.value))


@router.post("/roof-objects", response_model=RooftopObject)
async def place_object(service: PlannerService = Depends(get_service)) -> RooftopObject:
    return service.place_object()


@router.post("/roof-objects/active", response_model=SessionState)
async def activate_object(request: ActivateRequest, service: PlannerService = Depends(get_service)) -> SessionState:
    try:
        service.activate_object(request.object_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown rooftop object {request.object_id}")
    return _state(service)


@router.patch("/roof-objects/{object_id}", response_model=EditResponse)
async def update_object(
    object_id: str, request: ObjectEditRequest, service: PlannerService = Depends(get_service),
) -> EditResponse:
    try:
        applied = service.update_object(object_id, request.field, request.value)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown rooftop object {object_id}")
    return _edited(service, applied)


@router.post("/roof-objects/{object_id}/drag", response_model=RooftopObject)
async def drag_object(
    object_id: str, request: ObjectDragRequest, service: PlannerService = Depends(get_service),
) -> RooftopObject:
    try:
        return service.drag_object(object_id, request.position, request.scale)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown rooftop object {object_id}")


@router.delete("/roof-objects/{object_id}", response_model=SessionState)
async def delete_object(object_id: str, service: PlannerService = Depends(get_service)) -> SessionState:
    service.delete_object(object_id)
    return _state(service)


@router.post("/drawing/click", response_model=SessionState)
async def click(request: PointRequest, service: PlannerService = Depends(get_service)) -> SessionState:
    service.click(request.point)
    return _state(service)


@router.post("/drawing/points/{index}", response_model=SessionState)
async def drag_point(index: int, request: PointRequest, service: PlannerService = Depends(get_service)) -> SessionState:
    try:
        service.drag_point(index, request.point)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _state(service)


@router.post("/drawing/segments/select", response_model=SessionState)
async def select_segment(
    request: SegmentSelectRequest, service: PlannerService = Depends(get_service),
) -> SessionState:
    try:
        service.select_segment(request.index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _state(service)


@router.post("/drawing/segments/length", response_model=EditResponse)
async def set_segment_length(
    request: SegmentLengthRequest, service: PlannerService = Depends(get_service),
) -> EditResponse:
    try:
        applied = service.set_segment_length(request.length, request.index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _edited(service, applied)


@router.post("/drawing/reset", response_model=SessionState)
async def reset_drawing(service: PlannerService = Depends(get_service)) -> SessionState:
    service.reset_drawing()
    return _state(service)


@router.get("/snapshot")
async def snapshot(sink: MemorySink = Depends(get_sink)) -> Response:
    """The last snapshot written to the sink, verbatim."""
    return Response(content=sink.value or "{}", media_type="application/json")

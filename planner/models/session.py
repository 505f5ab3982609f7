"""Planner session - the state owned by the single top-level controller."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel

from .building import Building, Location
from .transform import TransformMode, TransformTarget


class WorkflowStep(str, Enum):
    DEFINE_BUILDING = "define_building"          # gizmo transforms, numeric dimensions
    DEFINE_RESTRICTIONS = "define_restrictions"  # rooftop objects
    DEFINE_LAYOUT = "define_layout"              # rooftop polygon


class PlannerSession(BaseModel):
    """
    Holds everything the user is editing.

    The building is replaced wholesale on every update; the remaining
    fields describe what the UI is currently pointed at.
    """
    location: Location
    building: Building | None = None
    step: WorkflowStep = WorkflowStep.DEFINE_BUILDING
    target: TransformTarget = TransformTarget.GROUP
    mode: TransformMode = TransformMode.TRANSLATE
    dragging: bool = False
    active_object_id: str | None = None

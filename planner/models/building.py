"""Building models - the three roof-shape variants and what they own.

Field names are snake_case in Python and camelCase on the wire
(``buildingWidth``, ``groupPosition`` ...), matching what the browser
front-end reads and writes.
"""

from __future__ import annotations
import math
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from .geometry import Point2D, Vec3


class PlannerModel(BaseModel):
    """Immutable camelCase model; updates go through ``model_copy``."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RoofType(str, Enum):
    FLAT = "flat"
    SADDLE = "saddle"
    HIPPED = "hipped"


class Location(PlannerModel):
    lat: float
    lng: float


class RooftopObject(PlannerModel):
    """A box resting on the roof, in the building's footprint frame.

    ``scale`` is (width, height, length). ``position.y`` is always the
    roof plane plus half the object height.
    """
    id: str
    position: Vec3
    scale: Vec3


class Segment(PlannerModel):
    """A derived edge of the drawn polygon."""
    from_: Point2D = Field(alias="from")
    to: Point2D
    length: float


class DrawingPhase(str, Enum):
    EMPTY = "empty"
    DRAWING = "drawing"
    FINISHED = "finished"


class DrawingState(PlannerModel):
    """Clicked polygon points in the footprint frame plus closing state."""
    points: list[Point2D] = []
    finished: bool = False
    is_closed: bool = False
    closing_point_index: int | None = None
    selected_segment_index: int | None = None

    @property
    def phase(self) -> DrawingPhase:
        if self.finished:
            return DrawingPhase.FINISHED
        if self.points:
            return DrawingPhase.DRAWING
        return DrawingPhase.EMPTY

    @property
    def has_closing_segment(self) -> bool:
        return self.is_closed or self.closing_point_index is not None


class BuildingBase(PlannerModel):
    """Fields shared by every roof shape."""
    group_position: Vec3 = (0.0, 0.0, 0.0)
    group_rotation: Vec3 = (0.0, 0.0, 0.0)
    building_position: Vec3 = (0.0, 2.5, 0.0)
    building_rotation: Vec3 = (0.0, 0.0, 0.0)
    building_width: float = Field(default=10.0, gt=0)
    building_height: float = Field(default=5.0, gt=0)
    building_length: float = Field(default=10.0, gt=0)  # depth

    location: Location | None = None
    roof_objects: list[RooftopObject] = []
    drawing: DrawingState = Field(default_factory=DrawingState, exclude=True)


class FlatBuilding(BuildingBase):
    roof_type: Literal["flat"] = "flat"


class SaddleBuilding(BuildingBase):
    """Gable roof extruded along the building length.

    The roof profile starts at the back face, hence z = -length / 2.
    """
    roof_type: Literal["saddle"] = "saddle"
    roof_position: Vec3 = (0.0, 5.0, -5.0)
    roof_rotation: Vec3 = (0.0, 0.0, 0.0)
    roof_width: float = Field(default=10.0, gt=0)
    roof_height: float = Field(default=4.0, gt=0)
    roof_length: float = Field(default=10.0, gt=0)


class HippedBuilding(BuildingBase):
    """Pyramid roof: an n-sided cone turned so its corners meet the walls."""
    roof_type: Literal["hipped"] = "hipped"
    roof_position: Vec3 = (0.0, 6.5, 0.0)
    roof_rotation: Vec3 = (0.0, math.pi / 4, 0.0)
    roof_radius: float = Field(default=10.0 / math.sqrt(2), gt=0)
    roof_height: float = Field(default=3.0, gt=0)
    roof_segments: int = Field(default=4, ge=3)


Building = Annotated[
    Union[FlatBuilding, SaddleBuilding, HippedBuilding],
    Field(discriminator="roof_type"),
]

building_adapter: TypeAdapter[Building] = TypeAdapter(Building)

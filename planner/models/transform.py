"""Transform models - 4x4 matrices and live gizmo node snapshots."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict

from .geometry import Vec3


class Matrix4(BaseModel):
    """Affine 4x4 matrix, row-major. Column 3 holds the translation."""
    model_config = ConfigDict(frozen=True)

    elements: tuple[float, ...]

    def row(self, i: int) -> tuple[float, ...]:
        return self.elements[i * 4:i * 4 + 4]

    def get(self, row: int, col: int) -> float:
        return self.elements[row * 4 + col]


class TransformTarget(str, Enum):
    GROUP = "group"
    BUILDING = "building"
    ROOF = "roof"


class TransformMode(str, Enum):
    TRANSLATE = "translate"
    SCALE = "scale"
    ROTATE = "rotate"


class NodeTransform(BaseModel):
    """Live transform of one scene node as reported by the gizmo.

    Position and rotation are in the node's parent space; rotation is
    Euler XYZ in radians. Scale is the transient drag factor.
    """
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)


class AxisVisibility(BaseModel):
    """Which gizmo handles the front-end should show."""
    show_x: bool
    show_y: bool
    show_z: bool

"""Shape registry - stores and resolves building shapes by roof type."""

from __future__ import annotations

from planner.core.errors import UnknownShapeError
from planner.shapes.base import BuildingShape


class ShapeRegistry:
    """
    Central registry for all building shapes.

    Shapes are registered at startup. Everything that depends on the
    roof type resolves its handler here instead of branching on the tag.
    """

    def __init__(self) -> None:
        self._shapes: dict[str, BuildingShape] = {}

    def register(self, shape: BuildingShape) -> None:
        """Register a building shape."""
        self._shapes[shape.get_id()] = shape

    def unregister(self, roof_type: str) -> None:
        """Remove a shape from the registry."""
        self._shapes.pop(roof_type, None)

    def get_shape(self, roof_type: str) -> BuildingShape | None:
        return self._shapes.get(roof_type)

    def require(self, roof_type: str) -> BuildingShape:
        shape = self._shapes.get(roof_type)
        if shape is None:
            raise UnknownShapeError(roof_type)
        return shape

    def list_shapes(self) -> list[BuildingShape]:
        """Return all registered shapes."""
        return list(self._shapes.values())


def create_default_registry() -> ShapeRegistry:
    """Create a registry with the flat, saddle and hipped shapes."""
    from planner.shapes import FlatShape, SaddleShape, HippedShape

    registry = ShapeRegistry()
    registry.register(FlatShape())
    registry.register(SaddleShape())
    registry.register(HippedShape())
    return registry

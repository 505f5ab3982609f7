from .base import BuildingShape, FieldRange
from .flat import FlatShape
from .saddle import SaddleShape
from .hipped import HippedShape

__all__ = ["BuildingShape", "FieldRange", "FlatShape", "SaddleShape", "HippedShape"]

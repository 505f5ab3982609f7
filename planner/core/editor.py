"""Numeric field editing for building dimensions and transforms.

Values arrive from text inputs, so anything that is not a finite number
inside the field's declared range is rejected with OutOfRangeError and
the caller keeps its previous state.
"""

from __future__ import annotations
import logging
import math

from pydantic.alias_generators import to_snake

from planner.core.errors import InvalidOperationError, OutOfRangeError
from planner.models import Building
from planner.shapes.base import BuildingShape, FieldRange

logger = logging.getLogger(__name__)


def parse_number(field: str, value: object) -> float:
    """Coerce an input value to a finite float."""
    if isinstance(value, bool):
        raise OutOfRangeError(field, value)
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise OutOfRangeError(field, value) from None
    if not math.isfinite(number):
        raise OutOfRangeError(field, value)
    return number


def check_range(field: str, value: object, limits: FieldRange) -> float:
    number = parse_number(field, value)
    if limits.integer and not number.is_integer():
        raise OutOfRangeError(field, value, limits.lo, limits.hi)
    if limits.lo is not None and number < limits.lo:
        raise OutOfRangeError(field, value, limits.lo, limits.hi)
    if limits.hi is not None and number > limits.hi:
        raise OutOfRangeError(field, value, limits.lo, limits.hi)
    return int(number) if limits.integer else number


def _vector(building: Building, field: str, value: object) -> tuple[float, float, float]:
    """Validate a triple. Positions stay grounded, rotations stay upright."""
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise OutOfRangeError(field, value)
    x, y, z = (parse_number(field, v) for v in value)
    current = getattr(building, field)
    if field.endswith("_position"):
        return (x, current[1], z)
    return (current[0], y, current[2])


def edit_building_field(
    shape: BuildingShape,
    building: Building,
    field: str,
    value: object,
) -> Building:
    """Apply one numeric edit, e.g. ``("buildingWidth", "12.5")``.

    Accepts camelCase or snake_case field names. Returns the settled
    building; raises OutOfRangeError when the value is rejected.
    """
    name = to_snake(field)
    limits = shape.field_ranges().get(name)
    if limits is None:
        raise InvalidOperationError(f"{shape.get_name()} has no editable field {field!r}")

    if limits.vector:
        parsed: float | tuple[float, float, float] = _vector(building, name, value)
    else:
        parsed = check_range(field, value, limits)

    logger.debug(f"Edit {name} = {parsed!r} on {shape.get_id()} building")
    updated = building.model_copy(update=shape.field_updates(building, name, parsed))
    return shape.settle(updated)

"""Planner exception hierarchy."""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for all planner errors."""


class SingularMatrixError(PlannerError):
    """A transform matrix could not be inverted."""


class OutOfRangeError(PlannerError):
    """A numeric input was non-numeric or outside its declared range."""

    def __init__(self, field: str, value: object, lo: float | None = None, hi: float | None = None) -> None:
        self.field = field
        self.value = value
        self.lo = lo
        self.hi = hi
        if lo is None and hi is None:
            super().__init__(f"{field}: {value!r} is not a finite number")
        else:
            super().__init__(f"{field}: {value!r} outside [{lo}, {hi}]")


class InvalidOperationError(PlannerError):
    """The operation is not valid in the current session state."""


class UnknownShapeError(PlannerError):
    """No shape handler is registered for a roof type."""

    def __init__(self, roof_type: str) -> None:
        self.roof_type = roof_type
        super().__init__(f"Unknown roof type: {roof_type!r}")

"""
RangeValidator - implements the "min", "max" and "between" rules.
"""

from collections.abc import Sized
from typing import Any

from .base_validator import BaseValidator


class RangeValidator(BaseValidator):
    """
    Validates that a field's size is within a range.

    The size of a number is its value; the size of a string or a collection
    is its length. Fields that also carry a numeric/integer rule are measured
    by value even when they arrive as strings.

    Parameters:
    - min: Minimum size (inclusive)
    - max: Maximum size (inclusive)
    - numeric: Measure string values as numbers
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_value = self._bound("min")
        self.max_value = self._bound("max")
        self.numeric = bool(self.parameters.get("numeric", False))

        if self.min_value is None and self.max_value is None:
            raise ValueError("RangeValidator requires at least one of: min, max")

    def _bound(self, key: str) -> float | None:
        raw = self.parameters.get(key)
        if raw is None:
            return None
        try:
            return float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"RangeValidator '{key}' must be numeric, got {raw!r}")

    def check(self, value: Any, record: dict[str, Any]) -> None:
        size = self._size(value)
        if size is None:
            # not measurable as a number; the numeric/integer rule reports it
            return

        params = {"min": _display(self.min_value), "max": _display(self.max_value)}

        if self.min_value is not None and size < self.min_value:
            raise self.violation(f"Size {size} is less than minimum {params['min']}", **params)

        if self.max_value is not None and size > self.max_value:
            raise self.violation(f"Size {size} exceeds maximum {params['max']}", **params)

    def _size(self, value: Any) -> float | None:
        if isinstance(value, bool):
            return float(value)
        if isinstance(value, int | float):
            return float(value)
        if isinstance(value, str):
            if not self.numeric:
                return float(len(value))
            try:
                return float(value.strip())
            except ValueError:
                return None
        if isinstance(value, Sized):
            return float(len(value))
        raise self.violation(f"Cannot measure the size of {type(value).__name__}")

    @property
    def rule_type(self) -> str:
        return "range"


def _display(bound: float | None) -> str:
    if bound is None:
        return ""
    return str(int(bound)) if bound.is_integer() else str(bound)

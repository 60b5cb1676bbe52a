"""
TypeValidator - implements the "numeric", "integer", "string" and "boolean" rules.
"""

from typing import Any

from .base_validator import BaseValidator


class TypeValidator(BaseValidator):
    """
    Validates that a field holds (or, for text input, parses as) a type.

    Payloads usually arrive as strings, so "99.99" is numeric and "0" is a
    boolean. The string type is strict: 123 is not a string. Python booleans
    are never numbers even though bool subclasses int.

    Parameters:
    - expected_type: numeric, integer, string, boolean (or float/int/str/bool)
    - coerce: Accept strings that parse as the type (default: True except for string)
    """

    TYPE_MAPPING = {
        "numeric": float,
        "float": float,
        "integer": int,
        "int": int,
        "string": str,
        "str": str,
        "boolean": bool,
        "bool": bool,
    }

    BOOLEAN_STRINGS = {"true": True, "1": True, "false": False, "0": False}

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        name = str(self.parameters.get("expected_type") or "").lower()
        if not name:
            raise ValueError("TypeValidator requires 'expected_type' parameter")
        if name not in self.TYPE_MAPPING:
            raise ValueError(f"Unsupported type: {name}")

        self.expected_type: type = self.TYPE_MAPPING[name]
        self.coerce = bool(self.parameters.get("coerce", self.expected_type is not str))

    def check(self, value: Any, record: dict[str, Any]) -> None:
        if self._is_instance(value):
            return

        if self.coerce and isinstance(value, str) and self._parses(value.strip()):
            return

        raise self.violation(f"Expected {self.expected_type.__name__}, got {type(value).__name__} {value!r}")

    def _is_instance(self, value: Any) -> bool:
        if isinstance(value, bool):
            return self.expected_type is bool
        if self.expected_type is float:
            return isinstance(value, int | float)
        return isinstance(value, self.expected_type)

    def _parses(self, text: str) -> bool:
        if self.expected_type is bool:
            return text.lower() in self.BOOLEAN_STRINGS
        try:
            self.expected_type(text)
        except ValueError:
            return False
        return True

    @property
    def rule_type(self) -> str:
        return "type_check"

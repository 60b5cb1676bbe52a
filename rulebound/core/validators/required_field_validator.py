"""
RequiredFieldValidator - implements the "required" rule.
"""

from collections.abc import Collection
from typing import Any

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Fails when the field is absent, None, blank text or an empty collection.

    Zero and False count as provided. Set ``allow_empty_string`` to accept
    blank strings.
    """

    skips_null = False

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.allow_empty_string = bool(self.parameters.get("allow_empty_string", False))

    def check(self, value: Any, record: dict[str, Any]) -> None:
        if self.field_name not in record:
            raise self.violation("Field is missing from payload")

        if value is None:
            raise self.violation("Field value is null")

        if isinstance(value, str):
            if not value.strip() and not self.allow_empty_string:
                raise self.violation("Field value is empty string")
        elif isinstance(value, Collection) and not value:
            raise self.violation(f"Field value is an empty {type(value).__name__}")

    @property
    def rule_type(self) -> str:
        return "required"

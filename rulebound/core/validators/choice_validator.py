"""
ChoiceValidator - implements the "in" rule.
"""

from typing import Any

from .base_validator import BaseValidator


class ChoiceValidator(BaseValidator):
    """
    Validates that a field value is one of a fixed list of choices.

    Values are compared by their string form, so "in:1,2,3" accepts both
    2 and "2".

    Parameters:
    - choices: List of accepted values
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        choices = self.parameters.get("choices")
        if not choices:
            raise ValueError("ChoiceValidator requires a non-empty 'choices' parameter")

        self.choices = [str(choice) for choice in choices]

    def check(self, value: Any, record: dict[str, Any]) -> None:
        if str(value) not in self.choices:
            raise self.violation(
                f"Value '{value}' is not one of {', '.join(self.choices)}",
                values=", ".join(self.choices),
            )

    @property
    def rule_type(self) -> str:
        return "in"

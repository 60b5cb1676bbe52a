"""
Base class for the rule validators used by RuleEngine.

A validator checks one rule keyword for one field. Subclasses implement
check(); validate() adds the shared null handling in front of it.
"""

from abc import ABC, abstractmethod
from typing import Any


class RuleViolation(Exception):
    """
    A single rule failing for a single value.

    ``params`` carries the placeholder values (":min", ":values", ...) used to
    render the user-facing message; ``message`` is the diagnostic detail.
    """

    def __init__(self, rule_name: str, field_name: str, message: str, params: dict[str, Any] | None = None):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        self.params = params or {}
        super().__init__(f"[{rule_name}] {field_name}: {message}")


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Several keywords may share one class (numeric/integer/string/boolean all
    use TypeValidator), so violations are reported under the "rule_name"
    parameter when the engine passes one, else under rule_type.
    """

    # Only "required" looks at null values; every other rule lets them through
    skips_null = True

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Args:
            field_name: Name of the field to validate
            parameters: Rule-specific parameters (e.g., min/max for range)
        """
        self.field_name = field_name
        self.parameters = parameters or {}
        self.rule_name = self.parameters.get("rule_name", self.rule_type)

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        """
        Check a value against this rule.

        Args:
            value: The field value
            record: The whole payload

        Raises:
            RuleViolation: If the rule fails
        """
        if value is None and self.skips_null:
            return
        self.check(value, record)

    @abstractmethod
    def check(self, value: Any, record: dict[str, Any]) -> None:
        ...

    @property
    @abstractmethod
    def rule_type(self) -> str:
        ...

    def violation(self, message: str, **params: Any) -> RuleViolation:
        return RuleViolation(self.rule_name, self.field_name, message, params)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, rule={self.rule_name})"

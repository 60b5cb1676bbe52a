"""
Result models: what an engine reports and what a Validator returns.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class EngineResult(BaseModel):
    """
    Outcome of evaluating a payload against a rule set (ephemeral).

    Attributes:
        passed: Overall validation status
        errors: Field -> messages, fields in declaration order, messages in rule order
        failed_rules: Field -> names of the rules that failed, same ordering as errors
    """

    passed: bool
    errors: dict[str, list[str]] = Field(default_factory=dict)
    failed_rules: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("errors")
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies errors is empty."""
        if info.data.get("passed") and any(v.values()):
            raise ValueError("passed=True but errors is not empty")
        return v

    def first_error(self) -> str | None:
        """Return the first message of the first failing field"""
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return None

    def has(self, field_name: str) -> bool:
        return bool(self.errors.get(field_name))


class ValidationOutcome(BaseModel):
    """
    What Validator.validate returns.

    Attributes:
        passed: Whether the payload satisfied every rule
        error_message: The single representative error when validation failed
        entity: The materialized entity when validation passed
    """

    passed: bool
    error_message: str | None = None
    entity: Any = None

    def __bool__(self) -> bool:
        return self.passed

"""
CustomValidator - runs a rule registered with RuleEngine.extend().
"""

from collections.abc import Callable
from typing import Any

from .base_validator import BaseValidator


class CustomValidator(BaseValidator):
    """
    Delegates to a user function that raises to reject a value.

    The function receives the value and the whole payload, plus the rule
    argument when the token has one ("starts_with:AB" passes "AB"):

        def starts_with(value, record, prefix):
            if not str(value).startswith(prefix):
                raise ValueError(f"must start with {prefix}")

    Parameters:
    - validator_func: The rule function
    - argument: Text after the keyword in the rule token, if any
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        func = self.parameters.get("validator_func")
        if not callable(func):
            raise ValueError("CustomValidator requires a callable 'validator_func' parameter")

        self.validator_func: Callable[..., Any] = func
        self.argument: str | None = self.parameters.get("argument")

    def check(self, value: Any, record: dict[str, Any]) -> None:
        args = (value, record) if self.argument is None else (value, record, self.argument)
        try:
            self.validator_func(*args)
        except Exception as e:
            raise self.violation(f"{type(e).__name__}: {e}") from e

    @property
    def rule_type(self) -> str:
        return "custom"

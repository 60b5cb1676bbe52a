"""
Exception types raised by rulebound.

Validation failures are reported through ValidationOutcome and never raised.
The exceptions below signal programming or configuration mistakes.
"""


class RuleboundError(Exception):
    """Base class for all rulebound errors."""


class ConfigurationError(RuleboundError, ValueError):
    """Raised when fields, rules or model parameters are declared incorrectly."""


class UnknownRuleError(ConfigurationError):
    """Raised when the engine cannot resolve a rule token."""

    def __init__(self, field_name: str, token: str):
        self.field_name = field_name
        self.token = token
        super().__init__(f"Unknown rule '{token}' declared for field '{field_name}'")


class NoFieldsDeclaredError(RuleboundError):
    """Raised when validation is requested before any field was declared."""

    def __init__(self, message: str = "You have not created any field with its validation rules"):
        super().__init__(message)

"""
Validator implementations backing the default rule engine.

Provides validators for required fields, types, sizes, patterns, choices,
persistence checks and custom rules.
"""

from .base_validator import BaseValidator, RuleViolation
from .choice_validator import ChoiceValidator
from .custom_validator import CustomValidator
from .persistence_validator import PersistenceValidator
from .range_validator import RangeValidator
from .regex_validator import EMAIL_PATTERN, RegexValidator
from .required_field_validator import RequiredFieldValidator
from .type_validator import TypeValidator

__all__ = [
    "BaseValidator",
    "RuleViolation",
    "RequiredFieldValidator",
    "TypeValidator",
    "RangeValidator",
    "RegexValidator",
    "EMAIL_PATTERN",
    "ChoiceValidator",
    "PersistenceValidator",
    "CustomValidator",
]

"""
Core data models for rulebound.

All models use Pydantic for runtime validation and type safety.
"""

from .field_spec import FieldSpec
from .rule import PersistenceCheck, Rule, SimpleRule
from .validation_config import ValidationConfig
from .validation_result import EngineResult, ValidationOutcome

__all__ = [
    "SimpleRule",
    "PersistenceCheck",
    "Rule",
    "FieldSpec",
    "ValidationConfig",
    "EngineResult",
    "ValidationOutcome",
]

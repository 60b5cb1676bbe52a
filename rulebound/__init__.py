"""
rulebound - declarative payload validation and entity materialization.
"""

from rulebound.core.exceptions import (
    ConfigurationError,
    NoFieldsDeclaredError,
    RuleboundError,
    UnknownRuleError,
)
from rulebound.core.materializer import EntityMaterializer, FieldSettable
from rulebound.core.models import (
    EngineResult,
    FieldSpec,
    PersistenceCheck,
    SimpleRule,
    ValidationConfig,
    ValidationOutcome,
)
from rulebound.core.payload import MappingPayload, PayloadSource
from rulebound.core.rules import RuleBuilder, RuleConfigLoader, RuleEngine, ValidationEngine
from rulebound.core.validator import Validator
from rulebound.warehouse.predicates import InMemoryPredicates, PersistencePredicates

__all__ = [
    "RuleboundError",
    "ConfigurationError",
    "UnknownRuleError",
    "NoFieldsDeclaredError",
    "SimpleRule",
    "PersistenceCheck",
    "FieldSpec",
    "ValidationConfig",
    "EngineResult",
    "ValidationOutcome",
    "RuleBuilder",
    "RuleConfigLoader",
    "RuleEngine",
    "ValidationEngine",
    "Validator",
    "EntityMaterializer",
    "FieldSettable",
    "MappingPayload",
    "PayloadSource",
    "InMemoryPredicates",
    "PersistencePredicates",
]

"""
Rule parsing, configuration loading and the default validation engine.
"""

from .rule_builder import RuleBuilder
from .rule_config import RuleConfigLoader
from .rule_engine import RuleEngine, ValidationEngine

__all__ = [
    "RuleBuilder",
    "RuleConfigLoader",
    "RuleEngine",
    "ValidationEngine",
]

"""
Default validation engine.

Turns parsed rules into validator instances, applies them to a payload and
reports errors per field, in field order and then rule order.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from rulebound.core.exceptions import ConfigurationError, UnknownRuleError
from rulebound.core.models import EngineResult, PersistenceCheck, Rule, SimpleRule
from rulebound.core.validators import (
    EMAIL_PATTERN,
    BaseValidator,
    ChoiceValidator,
    CustomValidator,
    PersistenceValidator,
    RangeValidator,
    RegexValidator,
    RequiredFieldValidator,
    RuleViolation,
    TypeValidator,
)
from rulebound.observability.logger import get_logger
from rulebound.warehouse.predicates import InMemoryPredicates, PersistencePredicates

from .messages import render_message, resolve_template

logger = get_logger(__name__)

# Keywords that change how a field is evaluated but check nothing themselves
MARKER_RULES = {"nullable", "bail"}

# Fields carrying one of these are sized by value rather than by length
NUMERIC_RULES = {"numeric", "integer"}

PERSISTENCE_RULES = {"exists", "unique"}


class ValidationEngine(Protocol):
    """Capability consumed by Validator."""

    def evaluate(
        self,
        payload: Mapping[str, Any],
        rules: dict[str, list[Rule]],
        messages: dict[str, str] | None = None,
        attributes: dict[str, str] | None = None,
    ) -> EngineResult:
        ...


class RuleEngine:
    """
    Evaluates rule sets against payloads.

    Every rule of a field runs (unless the field carries "bail") and each
    failing rule contributes one message, so the first message of the first
    failing field is deterministic for a given declaration order.
    """

    VALIDATOR_REGISTRY: dict[str, type[BaseValidator]] = {
        "required": RequiredFieldValidator,
        "numeric": TypeValidator,
        "integer": TypeValidator,
        "string": TypeValidator,
        "boolean": TypeValidator,
        "min": RangeValidator,
        "max": RangeValidator,
        "between": RangeValidator,
        "regex": RegexValidator,
        "email": RegexValidator,
        "in": ChoiceValidator,
    }

    def __init__(self, predicates: PersistencePredicates | None = None):
        """
        Initialize the rule engine.

        Args:
            predicates: Answers exists/unique rules (defaults to an empty
                        InMemoryPredicates)
        """
        self.predicates = predicates if predicates is not None else InMemoryPredicates()
        self.custom_rules: dict[str, Callable[..., Any]] = {}
        self.custom_messages: dict[str, str] = {}

    def extend(self, keyword: str, func: Callable[..., Any], message: str | None = None) -> "RuleEngine":
        """
        Register a custom rule keyword.

        Args:
            keyword: Rule keyword used in rule spec strings
            func: Callable (value, record[, argument]) raising on failure
            message: Default message template for the rule

        Raises:
            ConfigurationError: If the keyword is already built in
        """
        if keyword in self.VALIDATOR_REGISTRY or keyword in MARKER_RULES or keyword in PERSISTENCE_RULES:
            raise ConfigurationError(f"Rule '{keyword}' is built in and cannot be replaced")

        self.custom_rules[keyword] = func
        if message:
            self.custom_messages[keyword] = message
        return self

    def evaluate(
        self,
        payload: Mapping[str, Any],
        rules: dict[str, list[Rule]],
        messages: dict[str, str] | None = None,
        attributes: dict[str, str] | None = None,
    ) -> EngineResult:
        """
        Validate a payload against a rule set.

        Args:
            payload: Field values keyed by name
            rules: Field name -> parsed rules, in declaration order
            messages: Custom message overrides
            attributes: Field name -> display label

        Returns:
            EngineResult with ordered errors

        Raises:
            UnknownRuleError: If a token names no known rule
            ConfigurationError: If a rule argument is malformed
        """
        templates = {**self.custom_messages, **(messages or {})}
        attributes = attributes or {}
        errors: dict[str, list[str]] = {}
        failed_rules: dict[str, list[str]] = {}

        for field_name, field_rules in rules.items():
            validators = self.build_validators(field_name, field_rules)
            bail = any(_keyword(rule) == "bail" for rule in field_rules)
            value = payload.get(field_name)

            for validator in validators:
                try:
                    validator.validate(value, payload)
                except RuleViolation as violation:
                    template = resolve_template(field_name, violation.rule_name, templates)
                    label = attributes.get(field_name) or field_name
                    errors.setdefault(field_name, []).append(
                        render_message(template, label, violation.params)
                    )
                    failed_rules.setdefault(field_name, []).append(violation.rule_name)
                    if bail:
                        break

        logger.debug(
            "Payload evaluated",
            extra={"field_count": len(rules), "failed_fields": list(errors)},
        )
        return EngineResult(passed=not errors, errors=errors, failed_rules=failed_rules)

    def build_validators(self, field_name: str, field_rules: list[Rule]) -> list[BaseValidator]:
        """Instantiate validators for one field's rules, in rule order."""
        numeric = any(_keyword(rule) in NUMERIC_RULES for rule in field_rules)
        validators = []
        for rule in field_rules:
            validator = self._build_validator(field_name, rule, numeric)
            if validator is not None:
                validators.append(validator)
        return validators

    def _build_validator(self, field_name: str, rule: Rule, numeric: bool) -> BaseValidator | None:
        if isinstance(rule, PersistenceCheck):
            return PersistenceValidator(field_name, {"check": rule, "predicates": self.predicates})

        keyword, argument = rule.keyword, rule.argument

        if keyword in MARKER_RULES:
            return None

        if keyword in self.custom_rules:
            return CustomValidator(field_name, {
                "rule_name": keyword,
                "validator_func": self.custom_rules[keyword],
                "argument": argument,
            })

        validator_class = self.VALIDATOR_REGISTRY.get(keyword)
        if validator_class is None:
            raise UnknownRuleError(field_name, rule.token)

        try:
            parameters = self._parameters(keyword, argument, numeric)
            return validator_class(field_name, parameters)
        except ValueError as e:
            raise ConfigurationError(f"Invalid rule '{rule.token}' for field '{field_name}': {e}") from e

    @staticmethod
    def _parameters(keyword: str, argument: str | None, numeric: bool) -> dict[str, Any]:
        parameters: dict[str, Any] = {"rule_name": keyword}

        if keyword in TypeValidator.TYPE_MAPPING:
            parameters["expected_type"] = keyword
        elif keyword in ("min", "max"):
            parameters[keyword] = argument
            parameters["numeric"] = numeric
        elif keyword == "between":
            bounds = (argument or "").split(",")
            if len(bounds) != 2:
                raise ValueError("between requires two bounds, e.g. between:1,10")
            parameters["min"], parameters["max"] = bounds
            parameters["numeric"] = numeric
        elif keyword == "regex":
            parameters["pattern"] = argument
        elif keyword == "email":
            parameters["pattern"] = EMAIL_PATTERN
        elif keyword == "in":
            parameters["choices"] = [choice.strip() for choice in (argument or "").split(",") if choice.strip()]

        return parameters


def _keyword(rule: Rule) -> str:
    if isinstance(rule, SimpleRule):
        return rule.keyword
    return rule.kind

"""
Rule builder: turns compact rule spec strings into a ValidationConfig.

Rule spec strings separate rules with "|" and rule arguments with ":":

    builder = RuleBuilder()
    builder.field("email", "required|email|unique:users")
    builder.field("role_id", "required|integer|exists:roles,id", "role")
    config = builder.build()
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from rulebound.core.exceptions import ConfigurationError
from rulebound.core.models import FieldSpec, PersistenceCheck, Rule, SimpleRule, ValidationConfig

RULE_DELIMITER = "|"
ARGUMENT_DELIMITER = ":"
PERSISTENCE_KEYWORDS = ("exists", "unique")


class RuleBuilder:
    """
    Accumulates field declarations for one validation request.

    The bound instance (the record being updated) must be set before the
    first field is declared: uniqueness exclusions are resolved when a field
    is declared, so binding later would leave earlier fields unexcluded.
    """

    def __init__(self):
        """Initialize an empty declaration set."""
        self._fields: dict[str, FieldSpec] = {}
        self._messages: dict[str, str] = {}
        self._bound_instance: Any = None
        self._identity_column = "id"
        self._model_class: type | None = None
        self._object_name: str | None = None

    def set_bound_instance(self, instance: Any, identity_column: str = "id") -> "RuleBuilder":
        """
        Bind the existing record being updated.

        Args:
            instance: Object (or mapping) being updated
            identity_column: Attribute/key holding the record identity

        Raises:
            ConfigurationError: If fields were already declared
        """
        if self._fields:
            raise ConfigurationError(
                "The bound instance must be set before any field is declared "
                f"(already declared: {', '.join(self._fields)})"
            )
        self._bound_instance = instance
        self._identity_column = identity_column
        return self

    @property
    def bound_identity(self) -> Any:
        """Identity of the bound instance, or None"""
        instance = self._bound_instance
        if instance is None:
            return None
        if isinstance(instance, Mapping):
            return instance.get(self._identity_column)
        return getattr(instance, self._identity_column, None)

    def declare_field(self, name: str, rule_spec: str, attribute: str | None = None) -> FieldSpec:
        """
        Declare a field and its rules.

        Args:
            name: Field name in the payload
            rule_spec: Rules separated by "|", e.g. "required|min:3"
            attribute: Display name used in messages (defaults to the name)

        Returns:
            The declared FieldSpec

        Raises:
            ConfigurationError: If the name or spec is empty, a persistence
                                rule has no collection, or the field exists
        """
        if not name or not name.strip():
            raise ConfigurationError("Field name must be a non-empty string")

        if name in self._fields:
            raise ConfigurationError(f"Field '{name}' is already declared")

        rules = self.parse_rules(name, rule_spec)
        try:
            spec = FieldSpec(name=name, rules=rules, attribute=attribute or None)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid declaration for field '{name}': {e}") from e
        self._fields[name] = spec
        return spec

    def field(self, name: str, rule_spec: str, attribute: str | None = None) -> "RuleBuilder":
        """Chaining form of declare_field()."""
        self.declare_field(name, rule_spec, attribute)
        return self

    def parse_rules(self, field_name: str, rule_spec: str) -> list[Rule]:
        """
        Parse a rule spec string.

        Parsing is deterministic: the same spec and bound instance always
        produce an equal list.

        Raises:
            ConfigurationError: If the spec contains no rules
        """
        if not rule_spec or not rule_spec.strip():
            raise ConfigurationError(f"Field '{field_name}' must declare at least one rule")

        rules = [self._parse_token(field_name, token.strip())
                 for token in rule_spec.split(RULE_DELIMITER) if token.strip()]

        if not rules:
            raise ConfigurationError(f"Field '{field_name}' must declare at least one rule")
        return rules

    def _parse_token(self, field_name: str, token: str) -> Rule:
        parts = token.split(ARGUMENT_DELIMITER)
        keyword = parts[0].strip()

        if keyword not in PERSISTENCE_KEYWORDS:
            return SimpleRule(token=token)

        target = parts[1].strip() if len(parts) > 1 else ""
        collection, _, column = target.partition(",")
        collection, column = collection.strip(), column.strip()

        if not collection:
            raise ConfigurationError(
                f"Rule '{token}' for field '{field_name}' must name a collection, e.g. {keyword}:users"
            )

        exclude_identity = None
        if keyword == "unique" and self._bound_instance is not None:
            exclude_identity = self.bound_identity

        return PersistenceCheck(
            kind=keyword,
            collection=collection,
            column=column or None,
            exclude_identity=exclude_identity,
            identity_column=self._identity_column,
        )

    def set_messages(self, messages: Mapping[str, str]) -> "RuleBuilder":
        """Set custom messages keyed by "field.rule", "field" or "rule"."""
        self._messages = dict(messages)
        return self

    def set_model_params(self, model_class: type, object_name: str | None = None) -> "RuleBuilder":
        """
        Set the entity type created on success and its alias.

        Args:
            model_class: Type instantiated (without arguments) when no bound instance is set
            object_name: Attribute name under which the validator exposes the entity

        Raises:
            ConfigurationError: If object_name is not a valid identifier
        """
        if object_name and not object_name.isidentifier():
            raise ConfigurationError(f"Object name '{object_name}' is not a valid attribute name")
        self._model_class = model_class
        self._object_name = object_name or None
        return self

    def build(self) -> ValidationConfig:
        """Return an immutable snapshot of the declarations."""
        return ValidationConfig(
            fields=dict(self._fields),
            messages=dict(self._messages),
            bound_instance=self._bound_instance,
            model_class=self._model_class,
            object_name=self._object_name,
        )

    def validator(self, engine=None):
        """Build the config and wrap it in a Validator."""
        from rulebound.core.validator import Validator

        return Validator(self.build(), engine=engine)

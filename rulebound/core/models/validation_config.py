"""
ValidationConfig model: the immutable result of declaring fields.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .field_spec import FieldSpec
from .rule import Rule


class ValidationConfig(BaseModel):
    """
    Everything a Validator needs to validate one payload.

    Built once per request by RuleBuilder and consumed by Validator.

    Attributes:
        fields: Declared fields keyed by name, in declaration order
        messages: Custom message overrides ("email.unique", "email" or "unique")
        bound_instance: Existing object being updated (excluded from unique checks)
        model_class: Type instantiated on success when no bound instance is set
        object_name: Alias under which the entity is exposed on the validator
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, protected_namespaces=())

    fields: dict[str, FieldSpec] = Field(default_factory=dict)
    messages: dict[str, str] = Field(default_factory=dict)
    bound_instance: Any = None
    model_class: type | None = None
    object_name: str | None = None

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)

    @property
    def rules(self) -> dict[str, list[Rule]]:
        """Field name -> rules, as handed to a validation engine"""
        return {name: list(spec.rules) for name, spec in self.fields.items()}

    @property
    def attributes(self) -> dict[str, str]:
        """Field name -> display label"""
        return {name: spec.label for name, spec in self.fields.items()}

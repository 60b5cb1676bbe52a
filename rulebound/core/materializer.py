"""
Entity materialization: copying validated fields onto the result entity.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from rulebound.core.exceptions import ConfigurationError
from rulebound.core.models import ValidationConfig


@runtime_checkable
class FieldSettable(Protocol):
    """
    Targets implementing set_field() control how each field is assigned
    (type conversion, renamed attributes, read-only guards).
    """

    def set_field(self, name: str, value: Any) -> None:
        ...


class EntityMaterializer:
    """
    Builds the entity for a successful validation.

    Only declared fields are copied. A declared field missing from the
    payload is copied as None.
    """

    def materialize(self, config: ValidationConfig, payload: Mapping[str, Any]) -> Any:
        """
        Build or update the entity.

        Args:
            config: Declarations (fields, model class, bound instance)
            payload: Validated payload

        Returns:
            A dict of declared fields when no model class is configured,
            otherwise the bound instance (or a new model_class()) with the
            declared fields assigned

        Raises:
            ConfigurationError: If model_class cannot be instantiated without arguments
        """
        values = {name: payload.get(name) for name in config.field_names}

        if config.model_class is None:
            return values

        entity = config.bound_instance
        if entity is None:
            try:
                entity = config.model_class()
            except (TypeError, ValidationError) as e:
                raise ConfigurationError(
                    f"{config.model_class.__name__} must be constructible without arguments: {e}"
                ) from e

        for name, value in values.items():
            assign_field(entity, name, value)
        return entity


def assign_field(entity: Any, name: str, value: Any) -> None:
    """Assign one field through set_field(), item assignment or setattr."""
    if isinstance(entity, FieldSettable):
        entity.set_field(name, value)
    elif isinstance(entity, MutableMapping):
        entity[name] = value
    else:
        setattr(entity, name, value)

"""
PersistenceValidator - implements the "exists" and "unique" rules.
"""

from typing import Any

from .base_validator import BaseValidator


class PersistenceValidator(BaseValidator):
    """
    Validates a value against an external collection.

    The lookup itself is delegated to a PersistencePredicates implementation;
    this class only decides which predicate to ask and how to read the answer.

    Parameters:
    - check: The PersistenceCheck rule being enforced
    - predicates: Object answering exists()/unique()
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.rule = self.parameters.get("check")
        if self.rule is None:
            raise ValueError("PersistenceValidator requires 'check' parameter")

        self.predicates = self.parameters.get("predicates")
        if self.predicates is None:
            raise ValueError("PersistenceValidator requires 'predicates' parameter")

        self.rule_name = self.rule.kind

    def check(self, value: Any, record: dict[str, Any]) -> None:
        column = self.rule.column_for(self.field_name)

        if self.rule.kind == "exists":
            if not self.predicates.exists(self.rule.collection, column, value):
                raise self.violation(
                    f"No {self.rule.collection}.{column} matches {value!r}",
                    collection=self.rule.collection,
                )
            return

        if not self.predicates.unique(
            self.rule.collection,
            column,
            value,
            exclude_identity=self.rule.exclude_identity,
            identity_column=self.rule.identity_column,
        ):
            raise self.violation(
                f"{self.rule.collection}.{column} already contains {value!r}",
                collection=self.rule.collection,
            )

    @property
    def rule_type(self) -> str:
        return "persistence"

"""
Rule models produced by parsing a rule spec string.

A rule is either an opaque token handed to the engine as-is ("required",
"min:3", "regex:^[a-z]+$") or a persistence check backed by an external
collection ("exists:roles", "unique:users,email").
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SimpleRule(BaseModel):
    """
    An opaque rule token.

    Attributes:
        token: The token exactly as declared
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["simple"] = "simple"
    token: str = Field(..., min_length=1)

    @property
    def keyword(self) -> str:
        """Token text before the first ':'"""
        return self.token.split(":", 1)[0].strip()

    @property
    def argument(self) -> str | None:
        """Token text after the first ':' (None when there is no argument)"""
        if ":" not in self.token:
            return None
        return self.token.split(":", 1)[1]


class PersistenceCheck(BaseModel):
    """
    A rule whose outcome depends on an external durable collection.

    Attributes:
        kind: "exists" or "unique"
        collection: Target collection (table) name
        column: Column to compare against (None means the field name)
        exclude_identity: Identity of a record ignored by a uniqueness check
        identity_column: Column holding record identities
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["persistence"] = "persistence"
    kind: Literal["exists", "unique"]
    collection: str = Field(..., min_length=1)
    column: str | None = None
    exclude_identity: Any = None
    identity_column: str = "id"

    @property
    def keyword(self) -> str:
        return self.kind

    def column_for(self, field_name: str) -> str:
        """Return the column checked for ``field_name``"""
        return self.column or field_name


Rule = Annotated[Union[SimpleRule, PersistenceCheck], Field(discriminator="type")]

"""
Persistence predicates answering "exists" and "unique" rules.

The core never queries storage itself; the default engine asks one of these
objects. InMemoryPredicates is used for tests and local development,
PostgresPredicates checks real tables through a DatabaseConnectionPool.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from psycopg import sql

from rulebound.observability.logger import get_logger

from .connection import DatabaseConnectionPool

logger = get_logger(__name__)


@runtime_checkable
class PersistencePredicates(Protocol):
    """Capability used by PersistenceValidator."""

    def exists(self, collection: str, column: str, value: Any) -> bool:
        ...

    def unique(
        self,
        collection: str,
        column: str,
        value: Any,
        exclude_identity: Any = None,
        identity_column: str = "id",
    ) -> bool:
        ...


class InMemoryPredicates:
    """
    Predicates over collections of row dictionaries held in memory.

    Usage:
        predicates = InMemoryPredicates({"users": [{"id": 7, "email": "a@b.io"}]})
        predicates.unique("users", "email", "a@b.io", exclude_identity=7)  # True
    """

    def __init__(self, collections: Mapping[str, Iterable[Mapping[str, Any]]] | None = None):
        self.collections: dict[str, list[dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (collections or {}).items()
        }

    def add(self, collection: str, row: Mapping[str, Any]) -> "InMemoryPredicates":
        """Add a row to a collection (created on first use)."""
        self.collections.setdefault(collection, []).append(dict(row))
        return self

    def exists(self, collection: str, column: str, value: Any) -> bool:
        return any(row.get(column) == value for row in self.collections.get(collection, []))

    def unique(
        self,
        collection: str,
        column: str,
        value: Any,
        exclude_identity: Any = None,
        identity_column: str = "id",
    ) -> bool:
        for row in self.collections.get(collection, []):
            if row.get(column) != value:
                continue
            if exclude_identity is not None and row.get(identity_column) == exclude_identity:
                continue
            return False
        return True


class PostgresPredicates:
    """
    Predicates backed by PostgreSQL tables.

    Collection names may be schema-qualified ("billing.accounts"). Identifiers
    are quoted with psycopg.sql so rule strings cannot inject SQL.
    """

    def __init__(self, pool: DatabaseConnectionPool):
        """
        Initialize predicates.

        Args:
            pool: Open database connection pool
        """
        self.pool = pool

    def exists(self, collection: str, column: str, value: Any) -> bool:
        query = sql.SQL("SELECT 1 FROM {table} WHERE {column} = %s LIMIT 1").format(
            table=_table(collection),
            column=sql.Identifier(column),
        )
        rows = self.pool.execute_query(query, (value,))
        logger.debug(
            "exists check",
            extra={"collection": collection, "column": column, "found": bool(rows)},
        )
        return bool(rows)

    def unique(
        self,
        collection: str,
        column: str,
        value: Any,
        exclude_identity: Any = None,
        identity_column: str = "id",
    ) -> bool:
        query = sql.SQL("SELECT 1 FROM {table} WHERE {column} = %s").format(
            table=_table(collection),
            column=sql.Identifier(column),
        )
        params: tuple = (value,)

        if exclude_identity is not None:
            query = sql.Composed([
                query,
                sql.SQL(" AND {identity} <> %s").format(identity=sql.Identifier(identity_column)),
            ])
            params = (value, exclude_identity)

        query = sql.Composed([query, sql.SQL(" LIMIT 1")])
        rows = self.pool.execute_query(query, params)
        logger.debug(
            "unique check",
            extra={"collection": collection, "column": column, "taken": bool(rows)},
        )
        return not rows


def _table(collection: str) -> sql.Identifier:
    return sql.Identifier(*collection.split("."))

"""
PostgreSQL connection pool for persistence lookups

PostgresPredicates borrows one pooled connection per exists/unique check.
Connection parameters default to the RULEBOUND_DB_* settings.
"""
import time
from contextlib import contextmanager
from typing import Any

from psycopg import OperationalError
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from rulebound.config import Settings, get_settings
from rulebound.core.exceptions import ConfigurationError
from rulebound.observability.logger import get_logger

logger = get_logger(__name__)


class DatabaseConnectionPool:
    """
    psycopg3 connection pool returning rows as dictionaries

    Usage:
        with DatabaseConnectionPool(password="secret") as pool:
            rows = pool.execute_query("SELECT 1 AS one")
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        database: str | None = None,
        user: str | None = None,
        password: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Args:
            host / port / database / user / password: Override the matching
                db_* setting
            settings: Settings instance (defaults to get_settings())

        Raises:
            ConfigurationError: If no password is configured
        """
        settings = settings or get_settings()

        self.host = host or settings.db_host
        self.port = port or settings.db_port
        self.database = database or settings.db_name
        self.user = user or settings.db_user
        password = password or settings.db_password
        if not password:
            raise ConfigurationError(
                "No database password configured. "
                "Set RULEBOUND_DB_PASSWORD or pass password= explicitly."
            )

        self.min_size = settings.pool_min_size
        self.max_size = max(settings.pool_max_size, settings.pool_min_size)
        self.timeout = settings.db_timeout

        self.conninfo = make_conninfo(
            host=self.host,
            port=self.port,
            dbname=self.database,
            user=self.user,
            password=password,
            connect_timeout=int(self.timeout),
        )

        self._pool: ConnectionPool | None = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self, max_retries: int = 3, retry_delay: float = 2.0) -> None:
        """
        Open the pool, retrying while the server is unreachable.

        Raises:
            OperationalError: If every attempt fails
        """
        if self.is_open:
            return

        pool = ConnectionPool(
            conninfo=self.conninfo,
            min_size=self.min_size,
            max_size=self.max_size,
            timeout=self.timeout,
            kwargs={"row_factory": dict_row},
            open=False,
        )

        attempt = 1
        while True:
            try:
                pool.open(wait=True, timeout=self.timeout)
                break
            except OperationalError as e:
                if attempt >= max_retries:
                    pool.close()
                    raise OperationalError(
                        f"Could not reach {self.host}:{self.port}/{self.database} "
                        f"after {max_retries} attempts: {e}"
                    ) from e
                logger.warning(
                    "Database not reachable, retrying",
                    extra={"attempt": attempt, "retry_delay": retry_delay, "error_message": str(e)},
                )
                attempt += 1
                time.sleep(retry_delay)

        self._pool = pool
        logger.info("Connection pool opened", extra={"host": self.host, "database": self.database})

    def close(self) -> None:
        if self._pool is not None:
            self._pool.close()
            self._pool = None

    @contextmanager
    def get_cursor(self):
        """
        Yield a cursor on a pooled connection; the connection is returned on exit.

        Raises:
            RuntimeError: If open() has not been called
        """
        if self._pool is None:
            raise RuntimeError("Connection pool is not open. Call open() first.")

        with self._pool.connection() as conn, conn.cursor() as cur:
            yield cur

    def execute_query(self, query: Any, params: tuple | None = None) -> list[dict]:
        """Run a read query (string or psycopg.sql composable) and fetch every row."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def __enter__(self) -> "DatabaseConnectionPool":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

"""
Pytest configuration and fixtures for rulebound tests

This module provides shared fixtures for unit and integration tests.
"""
from typing import Generator

import pytest

from rulebound.core.rules import RuleEngine
from rulebound.observability.metrics import ValidationMetrics
from rulebound.warehouse.predicates import InMemoryPredicates


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )


# =======================
# ENGINE FIXTURES
# =======================

@pytest.fixture
def predicates() -> InMemoryPredicates:
    """
    In-memory collections with two users and two roles

    Returns:
        InMemoryPredicates instance
    """
    return InMemoryPredicates({
        "users": [
            {"id": 7, "email": "taken@example.com", "name": "Ada"},
            {"id": 8, "email": "other@example.com", "name": "Grace"},
        ],
        "roles": [
            {"id": 1, "alias": "admin"},
            {"id": 2, "alias": "editor"},
        ],
    })


@pytest.fixture
def engine(predicates) -> RuleEngine:
    """Rule engine backed by the in-memory predicates"""
    return RuleEngine(predicates)


@pytest.fixture
def metrics() -> ValidationMetrics:
    """Metrics with a private registry so counts start at zero"""
    return ValidationMetrics()


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container() -> Generator:
    """
    Start PostgreSQL container for integration tests

    Skips when testcontainers is not installed or Docker is unavailable.

    Yields:
        PostgresContainer instance with users/roles tables
    """
    postgres_module = pytest.importorskip("testcontainers.postgres")
    import psycopg

    try:
        container = postgres_module.PostgresContainer(
            image="postgres:16.2-alpine",
            username="test_rulebound",
            password="test_password",
            dbname="test_rulebound",
        )
        container.start()
    except Exception as e:
        pytest.skip(f"Docker is not available: {e}")

    try:
        conninfo = (
            f"host={container.get_container_host_ip()} "
            f"port={container.get_exposed_port(5432)} "
            "dbname=test_rulebound user=test_rulebound password=test_password"
        )
        with psycopg.connect(conninfo) as conn:
            with conn.cursor() as cur:
                cur.execute("CREATE TABLE users (id integer PRIMARY KEY, email text NOT NULL)")
                cur.execute("CREATE SCHEMA auth")
                cur.execute("CREATE TABLE auth.roles (id integer PRIMARY KEY, alias text NOT NULL)")
                cur.execute(
                    "INSERT INTO users (id, email) VALUES (7, 'taken@example.com'), (8, 'other@example.com')"
                )
                cur.execute("INSERT INTO auth.roles (id, alias) VALUES (1, 'admin'), (2, 'editor')")
            conn.commit()

        yield container
    finally:
        container.stop()

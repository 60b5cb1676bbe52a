"""
Command-line interface for validating JSON payloads against a rule file.

Usage:
    python -m rulebound.cli.validate_cli check --rules <rules.yaml> --payload <payload.json> [options]
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from psycopg import OperationalError

from rulebound.core.exceptions import ConfigurationError
from rulebound.core.rules import RuleConfigLoader, RuleEngine
from rulebound.core.validator import Validator
from rulebound.observability.logger import get_logger, setup_logger
from rulebound.warehouse.predicates import InMemoryPredicates

logger = get_logger("rulebound.cli")

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_CONFIGURATION = 2


def read_json(path: str) -> Any:
    """Read JSON from a file path, or from stdin when path is '-'."""
    if path == "-":
        return json.load(sys.stdin)
    with open(path) as f:
        return json.load(f)


def build_engine(args) -> tuple[RuleEngine, Any]:
    """
    Create the engine and, when --database is given, the pool it borrows.

    Returns:
        (engine, pool or None)
    """
    if args.database:
        from rulebound.warehouse.connection import DatabaseConnectionPool
        from rulebound.warehouse.predicates import PostgresPredicates

        pool = DatabaseConnectionPool()
        pool.open()
        return RuleEngine(PostgresPredicates(pool)), pool

    collections = read_json(args.seed) if args.seed else {}
    if not isinstance(collections, dict):
        raise ConfigurationError("--seed must contain an object mapping collection names to row lists")
    return RuleEngine(InMemoryPredicates(collections)), None


def check_command(args) -> int:
    """
    Validate one payload and print a JSON report.

    Returns:
        Process exit code
    """
    if not Path(args.payload).exists() and args.payload != "-":
        logger.error(f"Payload file not found: {args.payload}")
        return EXIT_CONFIGURATION

    pool = None
    try:
        builder = RuleConfigLoader(args.rules).load()
        payload = read_json(args.payload)
        if not isinstance(payload, dict):
            raise ConfigurationError("Payload must be a JSON object")

        engine, pool = build_engine(args)
        validator = Validator(builder.build(), engine=engine)

        if args.valid_fields:
            report = {"valid_fields": validator.get_valid_fields(payload), "errors": validator.errors}
            print(json.dumps(report, indent=2, default=str))
            return EXIT_PASSED

        outcome = validator.validate(payload)
        report = {
            "passed": outcome.passed,
            "error": outcome.error_message,
            "entity": outcome.entity,
        }
        print(json.dumps(report, indent=2, default=str))
        return EXIT_PASSED if outcome.passed else EXIT_FAILED

    except (ConfigurationError, FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(f"Configuration error: {e}")
        print(json.dumps({"passed": False, "error": str(e)}, indent=2))
        return EXIT_CONFIGURATION
    except OperationalError as e:
        logger.error(f"Database unavailable: {e}")
        print(json.dumps({"passed": False, "error": str(e)}, indent=2))
        return EXIT_CONFIGURATION
    finally:
        if pool is not None:
            pool.close()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Validate JSON payloads against declarative field rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a payload
  python -m rulebound.cli.validate_cli check --rules rules/user.yaml --payload request.json

  # Report only the fields that are currently valid
  python -m rulebound.cli.validate_cli check --rules rules/user.yaml --payload request.json --valid-fields

  # Check exists/unique rules against seeded collections
  python -m rulebound.cli.validate_cli check --rules rules/user.yaml --payload request.json \\
      --seed fixtures/collections.json

  # Check exists/unique rules against PostgreSQL (RULEBOUND_DB_* settings)
  python -m rulebound.cli.validate_cli check --rules rules/user.yaml --payload request.json --database
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Validate a JSON payload")
    check_parser.add_argument(
        "--rules",
        required=True,
        help="Path to rule configuration YAML file"
    )
    check_parser.add_argument(
        "--payload",
        required=True,
        help="Path to JSON payload ('-' reads stdin)"
    )
    check_parser.add_argument(
        "--valid-fields",
        action="store_true",
        help="Print the currently valid fields instead of a pass/fail report"
    )
    source_group = check_parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--seed",
        help="JSON file of collections used for exists/unique rules"
    )
    source_group.add_argument(
        "--database",
        action="store_true",
        help="Check exists/unique rules against PostgreSQL"
    )
    check_parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: RULEBOUND_LOG_LEVEL or INFO)"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_CONFIGURATION

    if args.log_level:
        setup_logger("rulebound", level=args.log_level)

    if args.command == "check":
        return check_command(args)

    return EXIT_CONFIGURATION


if __name__ == "__main__":
    sys.exit(main())

"""
Unit tests for the validate CLI.
"""

import io
import json

import pytest
from psycopg import OperationalError

from rulebound.cli.validate_cli import EXIT_CONFIGURATION, EXIT_FAILED, EXIT_PASSED, main
from rulebound.config import reset_settings
from rulebound.warehouse.connection import DatabaseConnectionPool

RULES = """
fields:
  name: "required|string|min:2"
  email:
    rules: "required|email|unique:users"
    attribute: "email address"
  role: "required|exists:roles,alias"
"""

SEED = {
    "users": [{"id": 7, "email": "taken@example.com"}],
    "roles": [{"id": 1, "alias": "admin"}],
}


@pytest.fixture
def files(tmp_path):
    """Write the rules and seed files and return a payload writer"""
    rules = tmp_path / "rules.yaml"
    rules.write_text(RULES)
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps(SEED))

    def _payload(data) -> list[str]:
        path = tmp_path / "payload.json"
        path.write_text(json.dumps(data))
        return ["check", "--rules", str(rules), "--payload", str(path), "--seed", str(seed)]

    return _payload


class TestCheckCommand:
    """Tests for the check command"""

    def test_valid_payload_exits_zero(self, files, capsys):
        argv = files({"name": "Ada", "email": "ada@example.com", "role": "admin", "extra": 1})

        assert main(argv) == EXIT_PASSED

        report = json.loads(capsys.readouterr().out)
        assert report["passed"] is True
        assert report["error"] is None
        assert report["entity"] == {"name": "Ada", "email": "ada@example.com", "role": "admin"}

    def test_invalid_payload_exits_one(self, files, capsys):
        argv = files({"name": "Ada", "email": "taken@example.com", "role": "admin"})

        assert main(argv) == EXIT_FAILED

        report = json.loads(capsys.readouterr().out)
        assert report["passed"] is False
        assert report["error"] == "The email address has already been taken."

    def test_valid_fields_report(self, files, capsys):
        argv = files({"name": "A", "email": "ada@example.com", "role": "owner"})

        assert main(argv + ["--valid-fields"]) == EXIT_PASSED

        report = json.loads(capsys.readouterr().out)
        assert report["valid_fields"] == {"email": "ada@example.com"}
        assert list(report["errors"]) == ["name", "role"]

    def test_payload_from_stdin(self, files, capsys, monkeypatch):
        argv = files({})
        argv[argv.index("--payload") + 1] = "-"
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps({"name": "Ada", "email": "a@b.io", "role": "admin"})))

        assert main(argv) == EXIT_PASSED

    def test_without_seed_persistence_rules_see_empty_collections(self, files, capsys):
        argv = files({"name": "Ada", "email": "ada@example.com", "role": "admin"})
        argv = argv[:argv.index("--seed")]

        assert main(argv) == EXIT_FAILED
        assert json.loads(capsys.readouterr().out)["error"] == "The selected role is invalid."


class TestConfigurationFailures:
    """Tests for exit code 2"""

    def test_missing_payload_file(self, files, tmp_path):
        argv = files({})
        argv[argv.index("--payload") + 1] = str(tmp_path / "missing.json")

        assert main(argv) == EXIT_CONFIGURATION

    def test_missing_rules_file(self, files, tmp_path, capsys):
        argv = files({})
        argv[argv.index("--rules") + 1] = str(tmp_path / "missing.yaml")

        assert main(argv) == EXIT_CONFIGURATION
        assert "not found" in json.loads(capsys.readouterr().out)["error"]

    def test_unknown_rule(self, tmp_path, capsys):
        rules = tmp_path / "rules.yaml"
        rules.write_text("fields:\n  name: required|shiny\n")
        payload = tmp_path / "payload.json"
        payload.write_text('{"name": "Ada"}')

        assert main(["check", "--rules", str(rules), "--payload", str(payload)]) == EXIT_CONFIGURATION
        assert "shiny" in json.loads(capsys.readouterr().out)["error"]

    def test_payload_must_be_object(self, files, capsys):
        assert main(files(["Ada"])) == EXIT_CONFIGURATION

    def test_invalid_json_payload(self, files, tmp_path):
        argv = files({})
        (tmp_path / "payload.json").write_text("{not json")

        assert main(argv) == EXIT_CONFIGURATION

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_CONFIGURATION
        assert "check" in capsys.readouterr().out


class TestDatabaseFailures:
    """Tests for --database failures reported as exit code 2"""

    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        reset_settings()
        yield
        reset_settings()

    @staticmethod
    def database_argv(argv: list[str]) -> list[str]:
        # --seed and --database are mutually exclusive
        return argv[:argv.index("--seed")] + ["--database"]

    def test_missing_password(self, files, monkeypatch, capsys):
        monkeypatch.delenv("RULEBOUND_DB_PASSWORD", raising=False)
        monkeypatch.setattr("rulebound.config.load_dotenv", lambda env_file=None: False)

        assert main(self.database_argv(files({"name": "Ada"}))) == EXIT_CONFIGURATION
        assert "RULEBOUND_DB_PASSWORD" in json.loads(capsys.readouterr().out)["error"]

    def test_unreachable_server(self, files, monkeypatch, capsys):
        monkeypatch.setenv("RULEBOUND_DB_PASSWORD", "secret")

        def refuse(self, max_retries=3, retry_delay=2.0):
            raise OperationalError("connection refused")

        monkeypatch.setattr(DatabaseConnectionPool, "open", refuse)

        assert main(self.database_argv(files({"name": "Ada"}))) == EXIT_CONFIGURATION
        assert "connection refused" in json.loads(capsys.readouterr().out)["error"]

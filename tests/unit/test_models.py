"""
Unit tests for pydantic models.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from rulebound.core.models import (
    EngineResult,
    FieldSpec,
    PersistenceCheck,
    Rule,
    SimpleRule,
    ValidationConfig,
    ValidationOutcome,
)
from rulebound.core.payload import MappingPayload, PayloadSource, as_mapping


class TestSimpleRule:
    """Tests for SimpleRule model"""

    def test_keyword_and_argument(self):
        rule = SimpleRule(token="between:1,10")

        assert rule.keyword == "between"
        assert rule.argument == "1,10"

    def test_argument_keeps_later_colons(self):
        """Test regex arguments may contain ':'"""
        rule = SimpleRule(token="regex:^\\d{2}:\\d{2}$")

        assert rule.keyword == "regex"
        assert rule.argument == "^\\d{2}:\\d{2}$"

    def test_no_argument(self):
        assert SimpleRule(token="required").argument is None

    def test_empty_token_rejected(self):
        with pytest.raises(ValidationError):
            SimpleRule(token="")

    def test_frozen(self):
        rule = SimpleRule(token="required")

        with pytest.raises(ValidationError):
            rule.token = "string"


class TestPersistenceCheck:
    """Tests for PersistenceCheck model"""

    def test_defaults(self):
        check = PersistenceCheck(kind="unique", collection="users")

        assert check.keyword == "unique"
        assert check.column is None
        assert check.exclude_identity is None
        assert check.identity_column == "id"
        assert check.column_for("email") == "email"

    def test_invalid_kind_rejected(self):
        with pytest.raises(ValidationError):
            PersistenceCheck(kind="missing", collection="users")

    def test_empty_collection_rejected(self):
        with pytest.raises(ValidationError):
            PersistenceCheck(kind="exists", collection="")

    def test_discriminated_union(self):
        """Test plain dicts resolve to the right rule model"""
        adapter = TypeAdapter(list[Rule])

        rules = adapter.validate_python([
            {"type": "simple", "token": "required"},
            {"type": "persistence", "kind": "exists", "collection": "roles"},
        ])

        assert isinstance(rules[0], SimpleRule)
        assert isinstance(rules[1], PersistenceCheck)


class TestFieldSpec:
    """Tests for FieldSpec model"""

    def test_rules_required(self):
        with pytest.raises(ValidationError):
            FieldSpec(name="email", rules=[])

    def test_label(self):
        spec = FieldSpec(name="dob", rules=[SimpleRule(token="required")], attribute="date of birth")

        assert spec.label == "date of birth"


class TestValidationConfig:
    """Tests for ValidationConfig model"""

    def test_empty_config(self):
        config = ValidationConfig()

        assert config.field_names == []
        assert config.rules == {}
        assert config.bound_instance is None
        assert config.model_class is None


class TestEngineResult:
    """Tests for EngineResult model"""

    def test_passed_with_errors_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            EngineResult(passed=True, errors={"name": ["The name field is required."]})

        assert "passed=True but errors is not empty" in str(exc_info.value)

    def test_first_error_skips_empty_lists(self):
        result = EngineResult(passed=False, errors={"name": [], "email": ["bad", "worse"]})

        assert result.first_error() == "bad"
        assert result.has("email")
        assert not result.has("name")


class TestValidationOutcome:
    """Tests for ValidationOutcome model"""

    def test_truthiness_follows_passed(self):
        assert ValidationOutcome(passed=True)
        assert not ValidationOutcome(passed=False, error_message="The name field is required.")

    def test_entity_passed_through(self):
        entity = object()

        assert ValidationOutcome(passed=True, entity=entity).entity is entity


class TestPayload:
    """Tests for payload sources"""

    def test_mapping_payload_is_payload_source(self):
        payload = MappingPayload({"name": "Ada"})

        assert isinstance(payload, PayloadSource)
        assert payload.get("name") == "Ada"
        assert payload.get("age", 0) == 0

    def test_as_mapping_copies(self):
        data = {"name": "Ada"}
        mapped = as_mapping(data)
        mapped["name"] = "Grace"

        assert data == {"name": "Ada"}
        assert as_mapping(MappingPayload(data)) == {"name": "Ada"}

    def test_as_mapping_rejects_other_types(self):
        with pytest.raises(TypeError):
            as_mapping("name=Ada")

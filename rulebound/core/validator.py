"""
Validator: runs a ValidationConfig against payloads.

Usage:
    builder = RuleBuilder().set_model_params(User, "user")
    builder.field("name", "required|string").field("email", "required|email|unique:users")
    validator = Validator(builder.build(), engine=RuleEngine(predicates))

    if validator.validate(request_data):
        save(validator.user)
    else:
        respond(400, validator.error_message)
"""

from collections.abc import Mapping
from typing import Any

from rulebound.core.exceptions import ConfigurationError, NoFieldsDeclaredError
from rulebound.core.materializer import EntityMaterializer
from rulebound.core.models import EngineResult, ValidationConfig, ValidationOutcome
from rulebound.core.payload import PayloadSource, as_mapping
from rulebound.core.rules.rule_engine import RuleEngine, ValidationEngine
from rulebound.observability.logger import get_logger
from rulebound.observability.metrics import ValidationMetrics, get_metrics

logger = get_logger(__name__)


class Validator:
    """
    Validates payloads and materializes the entity on success.

    A Validator is meant for a single request on a single thread: the last
    entity, error message and error mapping are kept on the instance.
    """

    def __init__(
        self,
        config: ValidationConfig,
        engine: ValidationEngine | None = None,
        materializer: EntityMaterializer | None = None,
        metrics: ValidationMetrics | None = None,
    ):
        """
        Initialize the validator.

        Args:
            config: Field declarations built by RuleBuilder
            engine: Validation engine (defaults to RuleEngine())
            materializer: Entity builder (defaults to EntityMaterializer())
            metrics: Metrics sink (defaults to the process-wide instance)

        Raises:
            ConfigurationError: If config.object_name would shadow a Validator attribute
        """
        self.config = config
        self.engine = engine if engine is not None else RuleEngine()
        self.materializer = materializer or EntityMaterializer()
        self.metrics = metrics or get_metrics()

        self.entity: Any = None
        self.error_message: str | None = None
        self.errors: dict[str, list[str]] = {}

        object_name = config.object_name
        if object_name and (object_name in vars(self) or hasattr(type(self), object_name)):
            raise ConfigurationError(f"Object name '{object_name}' collides with a Validator attribute")

    def validate(self, payload: Mapping[str, Any] | PayloadSource) -> ValidationOutcome:
        """
        Validate a payload.

        Args:
            payload: Mapping or PayloadSource

        Returns:
            ValidationOutcome: passed with the entity, or failed with the
            first error of the first failing field

        Raises:
            NoFieldsDeclaredError: If the config declares no fields
        """
        data = self._payload(payload)
        result = self._evaluate(data)

        if not result.passed:
            self.error_message = result.first_error()
            self.metrics.record_outcome("failed")
            logger.info(
                "Validation failed",
                extra={"failed_fields": list(result.errors), "error_message": self.error_message},
            )
            return ValidationOutcome(passed=False, error_message=self.error_message)

        self.error_message = None
        self.entity = self.materializer.materialize(self.config, data)
        if self.config.object_name:
            setattr(self, self.config.object_name, self.entity)

        self.metrics.record_outcome("passed")
        logger.debug("Validation passed", extra={"fields": self.config.field_names})
        return ValidationOutcome(passed=True, entity=self.entity)

    def get_valid_fields(self, payload: Mapping[str, Any] | PayloadSource) -> dict[str, Any]:
        """
        Return declared fields whose rules all passed, even if others failed.

        The entity is left untouched.

        Raises:
            NoFieldsDeclaredError: If the config declares no fields
        """
        data = self._payload(payload)
        result = self._evaluate(data)

        valid = {name: data.get(name) for name in self.config.field_names if not result.has(name)}
        self.metrics.record_outcome("partial")
        return valid

    def _payload(self, payload: Mapping[str, Any] | PayloadSource) -> dict[str, Any]:
        if not self.config.fields:
            raise NoFieldsDeclaredError()
        return as_mapping(payload)

    def _evaluate(self, data: dict[str, Any]) -> EngineResult:
        result = self.engine.evaluate(
            data,
            self.config.rules,
            self.config.messages,
            self.config.attributes,
        )
        self.errors = {name: list(messages) for name, messages in result.errors.items()}
        self.metrics.record_failures(result.failed_rules)
        return result

"""
Unit tests for logging and metrics.
"""

import json
import logging

from rulebound.observability.logger import CustomJsonFormatter, get_logger, setup_logger
from rulebound.observability.metrics import ValidationMetrics, get_metrics


class TestLogger:
    """Tests for structured logging setup"""

    def test_module_loggers_share_package_handler(self):
        logger = get_logger("rulebound.core.validator")

        assert logger.name == "rulebound.core.validator"
        assert logging.getLogger("rulebound").handlers
        assert logging.getLogger("rulebound").propagate is False

    def test_setup_logger_replaces_handlers(self):
        logger = setup_logger("rulebound.test_setup", level="WARNING", format_type="text")
        logger = setup_logger("rulebound.test_setup", level="DEBUG", format_type="json")

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0].formatter, CustomJsonFormatter)

    def test_json_formatter_fields(self):
        formatter = CustomJsonFormatter(fmt="%(timestamp)s %(level)s %(logger)s %(message)s")
        record = logging.LogRecord(
            name="rulebound.core.validator",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Validation failed",
            args=(),
            exc_info=None,
        )
        record.failed_fields = ["email"]

        output = json.loads(formatter.format(record))

        assert output["level"] == "INFO"
        assert output["logger"] == "rulebound.core.validator"
        assert output["message"] == "Validation failed"
        assert output["failed_fields"] == ["email"]
        assert output["timestamp"]


class TestValidationMetrics:
    """Tests for Prometheus counters"""

    def test_unknown_series_reads_zero(self):
        metrics = ValidationMetrics()

        assert metrics.value("rulebound_validations_total", {"outcome": "passed"}) == 0.0

    def test_record_outcome(self):
        metrics = ValidationMetrics()
        metrics.record_outcome("passed")
        metrics.record_outcome("passed")

        assert metrics.value("rulebound_validations_total", {"outcome": "passed"}) == 2.0

    def test_record_failures(self):
        metrics = ValidationMetrics()
        metrics.record_failures({"email": ["email", "unique"], "name": ["required"]})

        assert metrics.value("rulebound_rule_failures_total", {"field_name": "email", "rule": "unique"}) == 1.0
        assert metrics.value("rulebound_rule_failures_total", {"field_name": "name", "rule": "required"}) == 1.0

    def test_export_text_format(self):
        metrics = ValidationMetrics()
        metrics.record_outcome("failed")

        exported = metrics.export().decode()

        assert 'rulebound_validations_total{outcome="failed"} 1.0' in exported

    def test_instances_are_isolated(self):
        first, second = ValidationMetrics(), ValidationMetrics()
        first.record_outcome("passed")

        assert second.value("rulebound_validations_total", {"outcome": "passed"}) == 0.0

    def test_global_instance(self):
        assert get_metrics() is get_metrics()

"""
Prometheus metrics for rulebound

Counts validation outcomes and rule failures so services embedding the
validator can expose them on their own metrics endpoint.
"""
from prometheus_client import CollectorRegistry, Counter, generate_latest


class ValidationMetrics:
    """
    Counters for validation activity, kept in their own registry.

    Usage:
        metrics = ValidationMetrics()
        metrics.record_outcome("passed")
        payload = metrics.export()
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        # outcome: passed, failed, partial
        self.validations_total = Counter(
            name="rulebound_validations_total",
            documentation="Total number of payload validations",
            labelnames=["outcome"],
            registry=self.registry,
        )

        self.rule_failures_total = Counter(
            name="rulebound_rule_failures_total",
            documentation="Total number of failed rule checks",
            labelnames=["field_name", "rule"],
            registry=self.registry,
        )

    def record_outcome(self, outcome: str) -> None:
        self.validations_total.labels(outcome=outcome).inc()

    def record_failures(self, failed_rules: dict[str, list[str]]) -> None:
        """Count every failed rule reported by an engine."""
        for field_name, rules in failed_rules.items():
            for rule in rules:
                self.rule_failures_total.labels(field_name=field_name, rule=rule).inc()

    def value(self, name: str, labels: dict[str, str]) -> float:
        """Read a sample value (0.0 when the series does not exist yet)."""
        sample = self.registry.get_sample_value(name, labels)
        return sample or 0.0

    def export(self) -> bytes:
        """Render all metrics in the Prometheus text format."""
        return generate_latest(self.registry)


_default_metrics: ValidationMetrics | None = None


def get_metrics() -> ValidationMetrics:
    """Return the process-wide metrics instance."""
    global _default_metrics
    if _default_metrics is None:
        _default_metrics = ValidationMetrics()
    return _default_metrics

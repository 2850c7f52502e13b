"""Metrics collection for the model initializer injector.

Provides a thin convenience wrapper around ``prometheus_client`` so injection
outcomes are recorded consistently.

Design notes
- Metrics and labels are predeclared to avoid cardinality explosions
- A registry is kept per collector (can be injected, e.g. for testing)
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest
import structlog

logger = structlog.get_logger("metrics")

INJECTION_OUTCOMES = ("injected", "skipped", "failed")


class MetricsCollector:
    """Centralized metrics collection for the injector.

    Parameters
    - service_name: Logical name used for scoping
    - registry: Optional custom ``CollectorRegistry`` (e.g. for testing)
    """

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry or CollectorRegistry()

        self.injections = Counter(
            'model_initializer_injections_total',
            'Model initializer injection attempts partitioned by outcome.',
            ['outcome'],
            registry=self.registry
        )

        self.injection_duration = Histogram(
            'model_initializer_injection_duration_seconds',
            'Model initializer injection duration seconds.',
            registry=self.registry
        )

    def record_injection(self, outcome: str, duration: float) -> None:
        """Record one injection attempt.

        duration is expected in seconds to match Prometheus histogram units.
        """
        if outcome not in INJECTION_OUTCOMES:
            raise ValueError(f"Unknown injection outcome: {outcome}")
        self.injections.labels(outcome=outcome).inc()
        self.injection_duration.observe(duration)

    def get_metrics(self) -> str:
        """Return metrics in the Prometheus text exposition format."""
        return generate_latest(self.registry).decode("utf-8")

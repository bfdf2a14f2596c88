"""Prometheus metrics helpers for pricing record validation."""

from __future__ import annotations

import threading

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from prguard.core.exceptions.codes import REJECTION_CODES, ErrorCode


class MetricsCollector:
    """Collects and exposes Prometheus metrics for admissibility decisions."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.verdicts_total = Counter(
            "prguard_verdicts_total",
            "Pricing record admissibility verdicts grouped by outcome and rejection reason.",
            ("outcome", "reason"),
            registry=self.registry,
        )
        self.signature_checks_total = Counter(
            "prguard_signature_checks_total",
            "Signature verification outcomes.",
            ("status",),
            registry=self.registry,
        )
        self.signature_verification_seconds = Histogram(
            "prguard_signature_verification_seconds",
            "Latency distribution for pricing record signature verification.",
            buckets=(0.0001, 0.0005, 0.001, 0.0025, 0.005, 0.01, 0.05, 0.1, float("inf")),
            registry=self.registry,
        )

    def record_verdict(self, accepted: bool, reason: ErrorCode | None = None) -> None:
        """Track a verdict with constrained reason labels."""

        if accepted:
            self.verdicts_total.labels(outcome="accepted", reason="none").inc()
            return
        label = reason.value if reason in REJECTION_CODES else "__other__"
        self.verdicts_total.labels(outcome="rejected", reason=label).inc()

    def observe_signature_check(self, status: str, latency_seconds: float) -> None:
        label = status if status in _ALLOWED_SIGNATURE_STATUSES else "__other__"
        self.signature_checks_total.labels(status=label).inc()
        self.signature_verification_seconds.observe(latency_seconds)

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_COLLECTOR: MetricsCollector | None = None
_DEFAULT_COLLECTOR_LOCK = threading.Lock()


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance, creating it once across threads."""

    global _DEFAULT_COLLECTOR
    collector = _DEFAULT_COLLECTOR
    if collector is None:
        with _DEFAULT_COLLECTOR_LOCK:
            if _DEFAULT_COLLECTOR is None:
                _DEFAULT_COLLECTOR = MetricsCollector()
            collector = _DEFAULT_COLLECTOR
    return collector


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    with _DEFAULT_COLLECTOR_LOCK:
        _DEFAULT_COLLECTOR = collector


_ALLOWED_SIGNATURE_STATUSES = {
    "valid",
    "mismatch",
    "backend_failure",
}

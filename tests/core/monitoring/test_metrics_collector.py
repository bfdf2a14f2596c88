"""Tests for the Prometheus metrics collector."""

import threading
import time

from prometheus_client import CollectorRegistry

from prguard.core.exceptions import ErrorCode
from prguard.core.monitoring import metrics as metrics_module
from prguard.core.monitoring.metrics import (
    MetricsCollector,
    configure_metrics_collector,
    get_metrics_collector,
)


def test_record_verdict_groups_by_outcome_and_reason() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.record_verdict(True)
    collector.record_verdict(False, ErrorCode.INVALID_SIGNATURE)
    collector.record_verdict(False, ErrorCode.INVALID_SIGNATURE)

    assert registry.get_sample_value("prguard_verdicts_total", {"outcome": "accepted", "reason": "none"}) == 1.0
    assert (
        registry.get_sample_value("prguard_verdicts_total", {"outcome": "rejected", "reason": "INVALID_SIGNATURE"})
        == 2.0
    )


def test_unknown_labels_are_constrained() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.record_verdict(False, ErrorCode.TRUNCATED_INPUT)
    collector.observe_signature_check("exploded", 0.002)

    assert registry.get_sample_value("prguard_verdicts_total", {"outcome": "rejected", "reason": "__other__"}) == 1.0
    assert registry.get_sample_value("prguard_signature_checks_total", {"status": "__other__"}) == 1.0


def test_observe_signature_check_updates_histogram() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.observe_signature_check("valid", 0.25)
    collector.observe_signature_check("mismatch", 0.5)

    assert registry.get_sample_value("prguard_signature_verification_seconds_count") == 2.0
    assert registry.get_sample_value("prguard_signature_verification_seconds_sum") == 0.75


def test_render_exposes_metric_names() -> None:
    collector = MetricsCollector(registry=CollectorRegistry())
    collector.record_verdict(True)

    assert b"prguard_verdicts_total" in collector.render()


def test_global_collector_can_be_overridden() -> None:
    replacement = MetricsCollector(registry=CollectorRegistry())
    configure_metrics_collector(replacement)
    try:
        assert get_metrics_collector() is replacement
    finally:
        configure_metrics_collector(None)

    assert get_metrics_collector() is not replacement


def test_global_collector_is_created_once_under_concurrency(monkeypatch) -> None:
    created: list[MetricsCollector] = []

    class SlowCollector(MetricsCollector):
        def __init__(self, **kwargs) -> None:
            time.sleep(0.01)
            super().__init__(**kwargs)
            created.append(self)

    monkeypatch.setattr(metrics_module, "MetricsCollector", SlowCollector)
    configure_metrics_collector(None)
    barrier = threading.Barrier(8)
    seen: list[MetricsCollector] = []

    def worker() -> None:
        barrier.wait()
        seen.append(get_metrics_collector())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    try:
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(created) == 1
        assert len(seen) == 8
        assert all(collector is created[0] for collector in seen)
    finally:
        configure_metrics_collector(None)

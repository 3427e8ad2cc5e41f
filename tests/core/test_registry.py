"""Tests for metric definitions and the process-wide registry."""

from __future__ import annotations

import threading

import pytest
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from iam_metrics.core import registry as registry_module
from iam_metrics.core.metrics import CATALOG, REQUEST_DURATION, MetricKind
from iam_metrics.core.registry import (
    MetricsRegistrationError,
    MetricsRegistry,
    get_registry,
)

# ---- catalog ----


def test_catalog_has_eight_uniquely_named_metrics() -> None:
    names = [d.name for d in CATALOG]
    assert len(names) == 8
    assert len(set(names)) == 8


def test_request_duration_buckets_are_milliseconds() -> None:
    assert REQUEST_DURATION.kind is MetricKind.HISTOGRAM
    assert REQUEST_DURATION.buckets == (2, 10, 100, 1000)


def test_only_histograms_declare_buckets() -> None:
    for definition in CATALOG:
        if definition.kind is not MetricKind.HISTOGRAM:
            assert definition.buckets == ()


def test_every_catalog_entry_is_built_as_its_kind() -> None:
    built = MetricsRegistry(CollectorRegistry())
    expected = {
        MetricKind.COUNTER: Counter,
        MetricKind.GAUGE: Gauge,
        MetricKind.HISTOGRAM: Histogram,
    }
    assert list(built.collectors) == [d.name for d in CATALOG]
    for definition in CATALOG:
        assert isinstance(built.collectors[definition.name], expected[definition.kind])
    assert built.request_duration is built.collectors[REQUEST_DURATION.name]


# ---- singleton ----


def test_get_registry_returns_same_instance() -> None:
    assert get_registry() is get_registry()


def test_get_registry_registers_into_global_registry() -> None:
    assert get_registry().collector_registry is REGISTRY


def test_concurrent_first_calls_build_one_instance(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # Pretend this is a fresh process with an empty default registry.
    monkeypatch.setattr(registry_module, "_instance", None)
    monkeypatch.setattr(registry_module, "REGISTRY", CollectorRegistry())

    barrier = threading.Barrier(8)
    seen: list[MetricsRegistry] = []
    errors: list[Exception] = []

    def first_call() -> None:
        barrier.wait()
        try:
            seen.append(get_registry())
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=first_call) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(seen) == 8
    assert all(r is seen[0] for r in seen)


# ---- duplicate registration ----


def test_duplicate_registration_is_fatal() -> None:
    collector_registry = CollectorRegistry()
    MetricsRegistry(collector_registry)
    with pytest.raises(MetricsRegistrationError, match="keycloak_logins"):
        MetricsRegistry(collector_registry)


def test_second_registry_on_global_registry_is_rejected() -> None:
    get_registry()
    with pytest.raises(MetricsRegistrationError) as exc_info:
        MetricsRegistry()
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_isolated_registries_do_not_share_state() -> None:
    a = MetricsRegistry(CollectorRegistry())
    b = MetricsRegistry(CollectorRegistry())
    a.logins.labels("r", "keycloak").inc()
    assert (
        b.collector_registry.get_sample_value(
            "keycloak_logins_total", {"realm": "r", "provider": "keycloak"}
        )
        is None
    )

"""Process-wide metrics registry.

Owns the live prometheus_client collectors built from the definitions in
iam_metrics.core.metrics.  There is exactly ONE of these per process:

  get_registry()  →  same MetricsRegistry object, every call, every thread

WHY A SINGLETON
-----------------
prometheus_client refuses to register two collectors that expose the same
series name.  If every caller built its own set of counters, the second
construction would fail (or, with separate registries, each caller would
count into its own private copy that nobody scrapes).  One instance, built
lazily on first use, avoids both.

The lazy construction is guarded by a lock with a double check: the fast
path (already built) takes no lock at all, and two threads racing on the
very first call cannot both build the registry.

FATAL DUPLICATES
------------------
A duplicate metric name means two conflicting definitions would share one
exposition block.  Scrapes would be ambiguous, so construction raises
MetricsRegistrationError and the process should refuse to start.

ISOLATED INSTANCES
--------------------
MetricsRegistry(CollectorRegistry()) builds a private instance that is NOT
the singleton.  Tests use this to get fresh, zeroed counters; the global
instance always registers into prometheus_client.REGISTRY, which also
carries the standard process/platform/GC collectors.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from iam_metrics.core.metrics import (
    ACTIVE_SESSIONS,
    ADMIN_EVENTS,
    CATALOG,
    FAILED_LOGIN_ATTEMPTS,
    LOGINS,
    REGISTRATIONS,
    REQUEST_DURATION,
    RESPONSE_ERRORS,
    USER_EVENTS,
    MetricDefinition,
    MetricKind,
)

logger = logging.getLogger(__name__)


class MetricsRegistrationError(RuntimeError):
    """A metric could not be registered (almost always a duplicate name)."""


@contextmanager
def _registering(definition: MetricDefinition) -> Iterator[None]:
    # prometheus_client signals a duplicate series name with ValueError
    try:
        yield
    except ValueError as exc:
        raise MetricsRegistrationError(
            f"cannot register metric {definition.name!r}: {exc}"
        ) from exc


def _counter(definition: MetricDefinition, registry: CollectorRegistry) -> Counter:
    with _registering(definition):
        return Counter(
            definition.name,
            definition.help,
            definition.label_names,
            registry=registry,
        )


def _gauge(definition: MetricDefinition, registry: CollectorRegistry) -> Gauge:
    with _registering(definition):
        return Gauge(
            definition.name,
            definition.help,
            definition.label_names,
            registry=registry,
        )


def _histogram(definition: MetricDefinition, registry: CollectorRegistry) -> Histogram:
    with _registering(definition):
        return Histogram(
            definition.name,
            definition.help,
            definition.label_names,
            buckets=definition.buckets,
            registry=registry,
        )


_BUILDERS = {
    MetricKind.COUNTER: _counter,
    MetricKind.GAUGE: _gauge,
    MetricKind.HISTOGRAM: _histogram,
}


class MetricsRegistry:
    """The eight fixed metrics, registered into one CollectorRegistry.

    Collectors are built in CATALOG order, so a duplicate name fails on the
    first definition that collides.
    """

    def __init__(self, collector_registry: CollectorRegistry = REGISTRY) -> None:
        self.collector_registry = collector_registry
        self.collectors = {
            definition.name: _BUILDERS[definition.kind](definition, collector_registry)
            for definition in CATALOG
        }

        self.logins = self.collectors[LOGINS.name]
        self.failed_login_attempts = self.collectors[FAILED_LOGIN_ATTEMPTS.name]
        self.registrations = self.collectors[REGISTRATIONS.name]
        self.response_errors = self.collectors[RESPONSE_ERRORS.name]
        self.request_duration = self.collectors[REQUEST_DURATION.name]
        self.user_events = self.collectors[USER_EVENTS.name]
        self.admin_events = self.collectors[ADMIN_EVENTS.name]
        self.active_sessions = self.collectors[ACTIVE_SESSIONS.name]


_instance: MetricsRegistry | None = None
_instance_lock = threading.Lock()


def get_registry() -> MetricsRegistry:
    """Return the process-wide registry, building it on first call."""
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = MetricsRegistry(REGISTRY)
                logger.info("Metrics registry initialized")
    return _instance

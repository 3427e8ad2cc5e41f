"""Exposition writer: serializes every registered metric for a scrape.

Output is the Prometheus text format (version 0.0.4):

  # HELP keycloak_logins_total Total successful logins
  # TYPE keycloak_logins_total counter
  keycloak_logins_total{provider="keycloak",realm="myrealm"} 3.0

The text is produced by prometheus_client.generate_latest(), which walks
the CollectorRegistry.  That includes the eight IAM metrics AND whatever
else is registered there (the default registry also carries process and
platform metrics).

Export is a pure read: it never modifies counters, and two exports with no
recordings in between produce the same bytes.  The only exception is the
session-aware variant, which first re-sets the active-sessions gauge.
"""

from __future__ import annotations

from typing import BinaryIO

from prometheus_client import generate_latest

from iam_metrics.core.registry import MetricsRegistry, get_registry
from iam_metrics.services.session_gauge import SessionContext, refresh_active_sessions


def export(
    sink: BinaryIO,
    session_context: SessionContext | None = None,
    *,
    registry: MetricsRegistry | None = None,
) -> None:
    """Write the current metric snapshot to sink and flush it.

    With a session_context, the active-sessions gauge is recomputed first.
    Write/flush errors propagate to the caller unchanged.
    """
    registry = registry or get_registry()
    if session_context is not None:
        refresh_active_sessions(session_context, registry=registry)

    sink.write(generate_latest(registry.collector_registry))
    sink.flush()

"""Metric definitions for the IAM server (the fixed metrics schema).

This module declares every metric the service exposes, in one place.  It
holds NO logic and creates NO prometheus_client objects: it is a plain
inventory that iam_metrics.core.registry turns into live collectors.

WHY DECLARE INSTEAD OF INSTANTIATE
------------------------------------
prometheus_client registers a metric the moment you construct it:

  Counter("keycloak_logins", "...", ["realm", "provider"])
  # → already in prometheus_client.REGISTRY

Doing that at import time means importing this module twice (e.g. under
two different module names in a test run) registers twice and crashes.
Keeping the schema as data lets the registry decide WHEN and WHERE to
register, exactly once.

LABEL ORDER IS PART OF THE CONTRACT
-------------------------------------
Recording calls pass label values positionally:

  logins.labels("myrealm", "github").inc()

so the order of label_names below is fixed forever.  Reordering would
silently swap realm and provider in every stored series.

COUNTER NAMING
----------------
Counters are declared WITHOUT the _total suffix.  The client library
appends it when rendering:

  keycloak_logins  →  keycloak_logins_total{realm="...",provider="..."}
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class MetricKind(enum.Enum):
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"


@dataclass(frozen=True, slots=True)
class MetricDefinition:
    """Static declaration of one metric.

    name:        Metric family name as registered (no _total suffix)
    help:        HELP text shown in the exposition output
    label_names: Ordered label schema; every recording supplies exactly these
    kind:        counter, gauge or histogram
    buckets:     Upper bounds for histograms (ms); empty for other kinds
    """

    name: str
    help: str
    label_names: tuple[str, ...]
    kind: MetricKind
    buckets: tuple[float, ...] = ()


# ---------------------------------------------------------------------------
# Authentication events
# ---------------------------------------------------------------------------

LOGINS = MetricDefinition(
    name="keycloak_logins",
    help="Total successful logins",
    label_names=("realm", "provider"),
    kind=MetricKind.COUNTER,
)

FAILED_LOGIN_ATTEMPTS = MetricDefinition(
    name="keycloak_failed_login_attempts",
    help="Total failed login attempts",
    label_names=("realm", "provider", "error", "client_id"),
    kind=MetricKind.COUNTER,
)

REGISTRATIONS = MetricDefinition(
    name="keycloak_registrations",
    help="Total registered users",
    label_names=("realm", "provider"),
    kind=MetricKind.COUNTER,
)

# ---------------------------------------------------------------------------
# HTTP layer (populated by the MetricsRequestMiddleware)
# ---------------------------------------------------------------------------

RESPONSE_ERRORS = MetricDefinition(
    name="keycloak_response_errors",
    help="Total number of error responses",
    label_names=("code", "method", "route"),
    kind=MetricKind.COUNTER,
)

REQUEST_DURATION = MetricDefinition(
    name="keycloak_request_duration",
    help="Request duration",
    label_names=("method", "route"),
    kind=MetricKind.HISTOGRAM,
    # Milliseconds, not seconds:
    #   2ms     static/cached responses
    #   10ms    simple lookups
    #   100ms   typical token/login flows
    #   1000ms  slow (password hashing, federated providers)
    buckets=(2, 10, 100, 1000),
)

# ---------------------------------------------------------------------------
# Generic lifecycle / administrative events
# ---------------------------------------------------------------------------

USER_EVENTS = MetricDefinition(
    name="keycloak_user_event",
    help="Keycloak event",
    label_names=("realm", "event_name"),
    kind=MetricKind.COUNTER,
)

ADMIN_EVENTS = MetricDefinition(
    name="keycloak_admin_event",
    help="Keycloak admin event",
    label_names=("realm", "event_name", "resource"),
    kind=MetricKind.COUNTER,
)

# ---------------------------------------------------------------------------
# Sessions (recomputed on scrape by the session gauge refresh)
# ---------------------------------------------------------------------------

ACTIVE_SESSIONS = MetricDefinition(
    name="keycloak_active_sessions_count",
    help="Active user sessions count",
    label_names=("realm", "client_id"),
    kind=MetricKind.GAUGE,
)

# Registration order == exposition order.
CATALOG: tuple[MetricDefinition, ...] = (
    LOGINS,
    FAILED_LOGIN_ATTEMPTS,
    REGISTRATIONS,
    RESPONSE_ERRORS,
    REQUEST_DURATION,
    USER_EVENTS,
    ADMIN_EVENTS,
    ACTIVE_SESSIONS,
)

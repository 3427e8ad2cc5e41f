"""Recording API: turns domain events into metric increments.

Every function here does the same two things:

  1. Work out the label vector for the event (realm, provider, ...)
  2. Apply ONE accumulation to ONE metric (inc() or observe())

There is no state in this module.  All state lives in the MetricsRegistry,
and prometheus_client guards each labeled child with its own lock, so
concurrent callers need no locking of their own: two threads recording
the same login both land in the count.

PASSING THE REGISTRY
----------------------
Callers normally use the process-wide registry:

  record_login(event)

Tests (or a host embedding its own CollectorRegistry) pass one explicitly:

  record_login(event, registry=my_registry)

Either way, the functions only ever talk to the handle they were given.

PROVIDER RESOLUTION
---------------------
Logins and registrations can arrive via a federated identity provider
("github", "google", a corporate SAML IdP, ...).  The host puts that name
in the event details under "identity_provider".  Local username/password
logins carry no such detail and are counted under the default provider
"keycloak".
"""

from __future__ import annotations

from iam_metrics.core.registry import MetricsRegistry, get_registry
from iam_metrics.models.event import AdminDomainEvent, DomainEvent

PROVIDER_KEYCLOAK_OPENID = "keycloak"
IDENTITY_PROVIDER_DETAIL = "identity_provider"


def resolve_provider(event: DomainEvent) -> str:
    """Identity provider name from the event details, or the default."""
    if event.details is not None:
        provider = event.details.get(IDENTITY_PROVIDER_DETAIL)
        if provider is not None:
            return provider
    return PROVIDER_KEYCLOAK_OPENID


def record_login(event: DomainEvent, *, registry: MetricsRegistry | None = None) -> None:
    registry = registry or get_registry()
    registry.logins.labels(event.realm_id, resolve_provider(event)).inc()


def record_registration(
    event: DomainEvent, *, registry: MetricsRegistry | None = None
) -> None:
    registry = registry or get_registry()
    registry.registrations.labels(event.realm_id, resolve_provider(event)).inc()


def record_login_error(
    event: DomainEvent, *, registry: MetricsRegistry | None = None
) -> None:
    """Count a failed login attempt.

    The event must carry error and client_id.  They are not checked here;
    a LOGIN_ERROR without them is a bug in the event source.
    """
    registry = registry or get_registry()
    registry.failed_login_attempts.labels(
        event.realm_id,
        resolve_provider(event),
        event.error,
        event.client_id,
    ).inc()


def record_generic_event(
    event: DomainEvent, *, registry: MetricsRegistry | None = None
) -> None:
    """Count any user event without a dedicated metric, keyed by type name."""
    registry = registry or get_registry()
    registry.user_events.labels(event.realm_id, event.type.name).inc()


def record_generic_admin_event(
    event: AdminDomainEvent, *, registry: MetricsRegistry | None = None
) -> None:
    registry = registry or get_registry()
    registry.admin_events.labels(
        event.realm_id,
        event.operation_type.name,
        event.resource_type.name,
    ).inc()


def record_request_duration(
    amount_ms: float,
    method: str,
    route: str,
    *,
    registry: MetricsRegistry | None = None,
) -> None:
    """Observe one request's duration, in milliseconds."""
    registry = registry or get_registry()
    registry.request_duration.labels(method, route).observe(amount_ms)


def record_response_error(
    code: int,
    method: str,
    route: str,
    *,
    registry: MetricsRegistry | None = None,
) -> None:
    registry = registry or get_registry()
    registry.response_errors.labels(str(code), method, route).inc()

"""Event listener: the seam between the host's event bus and the recorder.

The host calls on_event / on_admin_event for every event it emits.  The
listener only decides WHICH recording to make:

  LOGIN        → record_login
  REGISTER     → record_registration
  LOGIN_ERROR  → record_login_error
  anything else → record_generic_event  (counted by type name)

Admin events all go to record_generic_admin_event.
"""

from __future__ import annotations

import logging

from iam_metrics.core.registry import MetricsRegistry
from iam_metrics.models.event import AdminDomainEvent, DomainEvent, EventType
from iam_metrics.services import recorder

logger = logging.getLogger(__name__)


class MetricsEventListener:
    def __init__(self, registry: MetricsRegistry | None = None) -> None:
        # None → each recording resolves the process-wide registry
        self._registry = registry

    def on_event(self, event: DomainEvent) -> None:
        logger.debug(
            "Received user event  type=%s realm=%s",
            event.type.name,
            event.realm_id,
            extra={"event_type": event.type.name, "realm": event.realm_id},
        )

        if event.type is EventType.LOGIN:
            recorder.record_login(event, registry=self._registry)
        elif event.type is EventType.REGISTER:
            recorder.record_registration(event, registry=self._registry)
        elif event.type is EventType.LOGIN_ERROR:
            recorder.record_login_error(event, registry=self._registry)
        else:
            recorder.record_generic_event(event, registry=self._registry)

    def on_admin_event(self, event: AdminDomainEvent) -> None:
        logger.debug(
            "Received admin event  operation=%s resource=%s realm=%s",
            event.operation_type.name,
            event.resource_type.name,
            event.realm_id,
            extra={"event_type": event.operation_type.name, "realm": event.realm_id},
        )
        recorder.record_generic_admin_event(event, registry=self._registry)

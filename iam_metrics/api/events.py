"""Event webhook endpoints (/events, /admin-events).

Hosts that can't call the Python listener in-process (a separate IAM
server, a message-bus bridge) POST each event here instead.  The body is
validated by pydantic, converted to the domain dataclass, and handed to
the same MetricsEventListener an in-process host would use.

An unknown event type is rejected with 422 by pydantic's enum validation,
so typos never turn into new metric series.
"""

from __future__ import annotations

from fastapi import APIRouter, status
from pydantic import BaseModel

from iam_metrics.models.event import (
    AdminDomainEvent,
    DomainEvent,
    EventType,
    OperationType,
    ResourceType,
)
from iam_metrics.services.event_listener import MetricsEventListener

router = APIRouter(tags=["events"])

listener = MetricsEventListener()


# --- Request schemas -------------------------------------------------------


class EventIn(BaseModel):
    type: EventType
    realmId: str
    clientId: str | None = None
    error: str | None = None
    details: dict[str, str | None] | None = None

    def to_domain(self) -> DomainEvent:
        return DomainEvent(
            type=self.type,
            realm_id=self.realmId,
            client_id=self.clientId,
            error=self.error,
            details=self.details,
        )


class AdminEventIn(BaseModel):
    operationType: OperationType
    resourceType: ResourceType
    realmId: str

    def to_domain(self) -> AdminDomainEvent:
        return AdminDomainEvent(
            operation_type=self.operationType,
            resource_type=self.resourceType,
            realm_id=self.realmId,
        )


# --- POST /events ----------------------------------------------------------


@router.post("/events", status_code=status.HTTP_202_ACCEPTED)
def post_event(payload: EventIn) -> dict[str, str]:
    listener.on_event(payload.to_domain())
    return {"status": "accepted"}


# --- POST /admin-events ----------------------------------------------------


@router.post("/admin-events", status_code=status.HTTP_202_ACCEPTED)
def post_admin_event(payload: AdminEventIn) -> dict[str, str]:
    listener.on_admin_event(payload.to_domain())
    return {"status": "accepted"}

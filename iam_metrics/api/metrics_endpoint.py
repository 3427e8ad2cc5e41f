"""Prometheus scrape endpoint.

Prometheus GETs /metrics every N seconds and parses the plain-text
exposition format (NOT JSON):

  # HELP keycloak_logins_total Total successful logins
  # TYPE keycloak_logins_total counter
  keycloak_logins_total{provider="keycloak",realm="master"} 1432.0

When the host has configured a SessionContext on app.state, the
active-sessions gauge is recomputed from the realm and session directories
on every scrape; otherwise it reports whatever was last set.

WHY A SYNC HANDLER
--------------------
The session refresh calls into host directories that may block (database
lookups).  A plain `def` endpoint runs in FastAPI's threadpool, so a slow
scrape never stalls the event loop.

SECURITY NOTE: restrict access to /metrics in production (network policy
or a separate internal port).  Realm and client names are visible in the
labels.
"""

from __future__ import annotations

import io

from fastapi import APIRouter, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from iam_metrics.services.exporter import export

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
def metrics(request: Request) -> Response:
    """Expose all metrics in text exposition format."""
    buffer = io.BytesIO()
    export(buffer, getattr(request.app.state, "session_context", None))
    return Response(content=buffer.getvalue(), media_type=CONTENT_TYPE_LATEST)

"""Request metrics middleware: duration and error-code recording.

For each request (except the /metrics scrape itself), this middleware:
  1. Times the request, in milliseconds
  2. Records the duration in keycloak_request_duration, unless the
     response is static content (images, fonts, stylesheets, scripts)
  3. Records a keycloak_response_errors increment when the status is
     4xx or 5xx.  Successful responses are not counted there.

ROUTE LABEL
-------------
Labels are a cardinality trap: using the raw URL path would create one
series per realm name, user id, client id...

  /realms/acme/users/7f3c...   → one series per user (BAD)
  /realms/{realm}/users/{id}   → one series per endpoint (GOOD)

So the route label is the matched route TEMPLATE.  A path that exists but
not for this method (405) uses that template, and a path that matches no
route at all (404s, scanners) is labeled "<unmatched>".
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match

from iam_metrics.services.recorder import record_request_duration, record_response_error

METRICS_PATH = "/metrics"
UNMATCHED_ROUTE = "<unmatched>"

_STATIC_CONTENT_TYPES = (
    "image/",
    "font/",
    "text/css",
    "text/javascript",
    "application/javascript",
)


def _route_template(request: Request) -> str:
    partial: str | None = None
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_ROUTE)
        if match == Match.PARTIAL and partial is None:
            partial = getattr(route, "path", None)
    return partial or UNMATCHED_ROUTE


def _is_static(response: Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return content_type.startswith(_STATIC_CONTENT_TYPES)


class MetricsRequestMiddleware(BaseHTTPMiddleware):
    """Record request duration and error responses for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Don't let Prometheus scrapes show up in the metrics they read.
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        start = time.monotonic()
        method = request.method
        route = _route_template(request)

        try:
            response = await call_next(request)
        except Exception:
            # Unhandled → Starlette answers 500; count it before re-raising.
            record_response_error(500, method, route)
            raise

        duration_ms = (time.monotonic() - start) * 1000
        if response.status_code >= 400:
            record_response_error(response.status_code, method, route)
        if not _is_static(response):
            record_request_duration(duration_ms, method, route)

        return response

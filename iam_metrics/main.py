from __future__ import annotations

import logging

from fastapi import FastAPI
from prometheus_client import disable_created_metrics

from iam_metrics.api.events import router as events_router
from iam_metrics.api.metrics_endpoint import router as metrics_router
from iam_metrics.core.config import SETTINGS
from iam_metrics.core.logging import setup_logging
from iam_metrics.core.registry import get_registry
from iam_metrics.middleware.metrics import MetricsRequestMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

if SETTINGS.metrics_disable_created:
    disable_created_metrics()

# Build (and register) the metrics now: a duplicate registration must stop
# the process here, not on the first login.
get_registry()

app = FastAPI(
    title="iam-metrics",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Hosts that own realm/session directories set a SessionContext here to
# get live keycloak_active_sessions_count values on every scrape.
app.state.session_context = None

if SETTINGS.request_metrics_enabled:
    app.add_middleware(MetricsRequestMiddleware)

app.include_router(metrics_router)
app.include_router(events_router)

logger.info(
    "iam-metrics started  env=%s log_level=%s port=%d request_metrics=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.request_metrics_enabled else "off",
)

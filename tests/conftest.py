from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY, CollectorRegistry

# Ensure repo root is on sys.path so `import iam_metrics` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from iam_metrics.core.registry import MetricsRegistry  # noqa: E402
from iam_metrics.main import app  # noqa: E402
from iam_metrics.models.event import DomainEvent, EventType  # noqa: E402

DEFAULT_REALM = "myrealm"


@pytest.fixture(autouse=True)
def reset_session_context() -> Iterator[None]:
    """Scrapes default to the bare export unless a test opts in."""
    app.state.session_context = None
    yield
    app.state.session_context = None


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def registry() -> MetricsRegistry:
    """A private, zeroed set of the eight metrics.

    The process-wide registry can't be reset between tests (counters only
    go up), so tests that assert absolute values use one of these.
    """
    return MetricsRegistry(CollectorRegistry())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def sample(registry: MetricsRegistry, name: str, labels: dict[str, str]) -> float:
    """Current value of one series in an isolated registry (0 if absent)."""
    value = registry.collector_registry.get_sample_value(name, labels=labels)
    return value if value is not None else 0.0


def global_sample(name: str, labels: dict[str, str] | None = None) -> float:
    """Current value of one series in the global prometheus_client registry."""
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def make_event(
    type: EventType,
    realm: str = DEFAULT_REALM,
    *,
    error: str | None = None,
    client_id: str | None = None,
    **details: str,
) -> DomainEvent:
    return DomainEvent(
        type=type,
        realm_id=realm,
        client_id=client_id,
        error=error,
        details=dict(details),
    )

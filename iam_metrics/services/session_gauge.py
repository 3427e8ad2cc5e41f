"""Active-session gauge refresh: run just before a scrape is serialized.

Session counts are not events: nobody tells us "a session expired".  So
instead of counting, we ASK the host on every scrape:

  for each realm:
      stats = sessions.active_client_session_stats(realm)
      for each client in the realm:
          gauge[realm.name, client.client_id] = stats.get(client.internal_id, 0)

A client with no active sessions is usually absent from the stats map.
Setting it to 0 (instead of skipping it) matters: otherwise the gauge
would keep showing the last non-zero value forever.

PARTIAL DATA BEATS NO DATA
----------------------------
The directories are external code and can fail for one realm (e.g. a
broken client store) while the rest are fine.  Failing the whole scrape
would blank EVERY dashboard because of one realm.  So each realm is
processed on its own; failures are collected into a RefreshReport and
logged once, with the full error, after the batch.

A failure listing the realms themselves is not per-realm and propagates.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass, field

from iam_metrics.core.registry import MetricsRegistry, get_registry
from iam_metrics.models.realm import Realm
from iam_metrics.repos.realm_repo import RealmDirectory
from iam_metrics.repos.session_repo import SessionDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionContext:
    """The two host directories a session-aware export needs."""

    realms: RealmDirectory
    sessions: SessionDirectory


@dataclass(frozen=True, slots=True)
class RealmRefreshResult:
    realm: str
    clients_updated: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class RefreshReport:
    results: list[RealmRefreshResult] = field(default_factory=list)

    @property
    def failures(self) -> list[RealmRefreshResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


def _refresh_realm(
    registry: MetricsRegistry, context: SessionContext, realm: Realm
) -> int:
    stats = context.sessions.active_client_session_stats(realm)
    updated = 0
    for client in realm.clients:
        registry.active_sessions.labels(realm.name, client.client_id).set(
            stats.get(client.internal_id, 0)
        )
        updated += 1
    return updated


def refresh_active_sessions(
    context: SessionContext, *, registry: MetricsRegistry | None = None
) -> RefreshReport:
    """Recompute the active-sessions gauge for every realm."""
    registry = registry or get_registry()
    report = RefreshReport()

    for realm in context.realms.list_realms():
        try:
            updated = _refresh_realm(registry, context, realm)
        except Exception as exc:
            report.results.append(RealmRefreshResult(realm=realm.name, error=exc))
        else:
            report.results.append(
                RealmRefreshResult(realm=realm.name, clients_updated=updated)
            )

    failures = report.failures
    if failures:
        # One entry for the whole batch, each realm with its full traceback.
        logger.error(
            "Active session refresh incomplete  failed=%d of %d realms\n%s",
            len(failures),
            len(report.results),
            "\n".join(
                f"realm={f.realm}: {f.error!r}\n"
                + "".join(traceback.format_exception(f.error)).rstrip()
                for f in failures
                if f.error is not None
            ),
            extra={"realm": ",".join(f.realm for f in failures)},
        )
    else:
        logger.debug("Active session refresh done  realms=%d", len(report.results))

    return report

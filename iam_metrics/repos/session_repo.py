from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from iam_metrics.models.realm import Realm


@runtime_checkable
class SessionDirectory(Protocol):
    def active_client_session_stats(self, realm: Realm) -> Mapping[str, int]:
        """Active session count per client internal id, for one realm.

        Clients with no active sessions may be missing from the mapping.
        """
        ...


class InMemorySessionDirectory:
    def __init__(self) -> None:
        # realm name -> {client internal id -> active session count}
        self._stats: dict[str, dict[str, int]] = {}

    def active_client_session_stats(self, realm: Realm) -> Mapping[str, int]:
        return dict(self._stats.get(realm.name, {}))

    def set_count(self, realm_name: str, internal_id: str, count: int) -> None:
        if count < 0:
            raise ValueError("session count cannot be negative")
        self._stats.setdefault(realm_name, {})[internal_id] = count

    def clear(self, realm_name: str | None = None) -> None:
        if realm_name is None:
            self._stats.clear()
        else:
            self._stats.pop(realm_name, None)

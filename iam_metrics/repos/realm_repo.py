from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Protocol, runtime_checkable

from iam_metrics.models.realm import Client, Realm


@runtime_checkable
class RealmDirectory(Protocol):
    def list_realms(self) -> Sequence[Realm]:
        """Every realm known to the host, with its clients."""
        ...


class InMemoryRealmDirectory:
    """Realm directory backed by a dict (tests, local dev, embedded hosts)."""

    def __init__(self, realms: Sequence[Realm] = ()) -> None:
        self._by_name: dict[str, Realm] = {r.name: r for r in realms}

    def list_realms(self) -> Sequence[Realm]:
        return list(self._by_name.values())

    def add(self, realm: Realm) -> None:
        if realm.name in self._by_name:
            raise ValueError("realm already exists")
        self._by_name[realm.name] = realm

    def add_client(self, realm_name: str, client: Client) -> None:
        r = self._by_name.get(realm_name)
        if r is None:
            raise KeyError("realm not found")
        self._by_name[realm_name] = replace(r, clients=(*r.clients, client))

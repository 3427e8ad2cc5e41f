from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Client:
    # client_id is the public identifier used as a metric label;
    # internal_id is the key the session directory reports stats under.
    client_id: str
    internal_id: str


@dataclass(frozen=True, slots=True)
class Realm:
    name: str
    clients: tuple[Client, ...] = ()

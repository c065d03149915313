from __future__ import annotations

from threading import Lock

from beachguard.contexts.verification.application.ports import NgoStore
from beachguard.contexts.verification.domain.entities import NgoEntry


class InMemoryNgoStore(NgoStore):
    """
    InMemoryNgoStore — process-local NGO directory rows keyed by admin uid.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._rows: dict[str, NgoEntry] = {}

    def upsert_entry(self, *, entry: NgoEntry) -> None:
        with self._lock:
            self._rows[entry.uid] = entry

    def get_entry(self, *, uid: str) -> NgoEntry | None:
        with self._lock:
            return self._rows.get(uid)

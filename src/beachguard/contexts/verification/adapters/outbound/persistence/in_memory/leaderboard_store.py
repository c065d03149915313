from __future__ import annotations

from threading import Lock

from beachguard.contexts.verification.application.ports import LeaderboardStore
from beachguard.contexts.verification.domain.entities import LeaderboardEntry


class InMemoryLeaderboardStore(LeaderboardStore):
    """
    InMemoryLeaderboardStore — process-local leaderboard rows keyed by volunteer id.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._rows: dict[str, LeaderboardEntry] = {}

    def upsert_entry(self, *, entry: LeaderboardEntry) -> None:
        with self._lock:
            self._rows[entry.volunteer_id] = entry

    def get_entry(self, *, volunteer_id: str) -> LeaderboardEntry | None:
        with self._lock:
            return self._rows.get(volunteer_id)

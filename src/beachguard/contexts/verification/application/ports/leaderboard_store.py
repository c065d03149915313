from __future__ import annotations

from typing import Protocol

from beachguard.contexts.verification.domain.entities import LeaderboardEntry


class LeaderboardStore(Protocol):
    """
    LeaderboardStore — write-path port for the denormalized leaderboard.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/sync_leaderboard_entry.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/
        leaderboard_store.py
    """

    def upsert_entry(self, *, entry: LeaderboardEntry) -> None:
        """
        Create or merge one leaderboard row.

        Args:
            entry: Row to write.
        Returns:
            None.
        Assumptions:
            Last writer wins per `volunteer_id`.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Writes one record.
        """
        ...

from __future__ import annotations

from typing import Protocol

from beachguard.contexts.verification.domain.entities import NgoEntry


class NgoStore(Protocol):
    """
    NgoStore — write-path port for the public NGO directory.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/mirror_ngo_entry.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/ngo_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/ngo_store.py
    """

    def upsert_entry(self, *, entry: NgoEntry) -> None:
        """
        Create or merge one NGO directory row keyed by admin uid.

        Args:
            entry: Row to write.
        Returns:
            None.
        Assumptions:
            Last writer wins per `uid`; fields absent from the entry are kept.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Writes one record.
        """
        ...

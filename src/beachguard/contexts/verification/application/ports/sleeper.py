from __future__ import annotations

from typing import Protocol


class RetrySleeper(Protocol):
    """
    RetrySleeper — sleep abstraction for profile read retry backoff.

    Related:
      - src/beachguard/contexts/verification/application/services/profile_replication_reader.py
      - src/beachguard/contexts/verification/adapters/outbound/time/system_sleeper.py
    """

    def sleep(self, *, seconds: float) -> None:
        """
        Block current thread for the backoff duration.

        Args:
            seconds: Non-negative sleep duration in seconds.
        Returns:
            None.
        Assumptions:
            Callers use bounded retries.
        Raises:
            ValueError: If implementation rejects negative durations.
        Side Effects:
            Blocks current execution context.
        """
        ...

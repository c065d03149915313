from __future__ import annotations

from datetime import datetime, timezone

from beachguard.contexts.verification.application.ports import VerificationClock


class SystemVerificationClock(VerificationClock):
    """
    SystemVerificationClock — system UTC implementation of `VerificationClock`.

    Related:
      - src/beachguard/contexts/verification/application/ports/clock.py
      - apps/api/wiring/modules/verification.py
    """

    def now(self) -> datetime:
        """
        Return current timezone-aware UTC datetime.

        Args:
            None.
        Returns:
            datetime: Current UTC datetime.
        Assumptions:
            System clock is reasonably synchronized.
        Raises:
            None.
        Side Effects:
            Reads system wall clock.
        """
        return datetime.now(timezone.utc)

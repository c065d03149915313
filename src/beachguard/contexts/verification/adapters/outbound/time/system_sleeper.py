from __future__ import annotations

import time

from beachguard.contexts.verification.application.ports import RetrySleeper


class SystemRetrySleeper(RetrySleeper):
    """
    SystemRetrySleeper — wall-clock sleeper for profile read backoff.

    Related:
      - src/beachguard/contexts/verification/application/ports/sleeper.py
      - src/beachguard/contexts/verification/application/services/profile_replication_reader.py
    """

    def sleep(self, *, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("SystemRetrySleeper.seconds must be non-negative")
        if seconds == 0:
            return
        time.sleep(seconds)

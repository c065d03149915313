from __future__ import annotations

from datetime import datetime
from typing import Protocol


class VerificationClock(Protocol):
    """
    VerificationClock — port of current UTC time for OTP expiry and profile timestamps.

    Related:
      - src/beachguard/contexts/verification/adapters/outbound/time/system_clock.py
      - src/beachguard/contexts/verification/application/services/otp_code_generator.py
      - src/beachguard/contexts/verification/application/use_cases/verify_otp_challenge.py
    """

    def now(self) -> datetime:
        """
        Return current UTC timestamp.

        Args:
            None.
        Returns:
            datetime: Timezone-aware UTC datetime.
        Assumptions:
            Implementations return wall-clock progression for request flow.
        Raises:
            None.
        Side Effects:
            None.
        """
        ...

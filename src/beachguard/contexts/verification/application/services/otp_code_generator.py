from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta

from beachguard.contexts.verification.application.ports import VerificationClock

_CODE_MIN = 100000
_CODE_MAX = 999999
DEFAULT_OTP_TTL = timedelta(minutes=10)


@dataclass(frozen=True, slots=True)
class GeneratedOtpCode:
    """
    GeneratedOtpCode — fresh code plus absolute validity window in epoch milliseconds.

    Related:
      - src/beachguard/contexts/verification/application/services/otp_code_generator.py
      - src/beachguard/contexts/verification/domain/entities/otp_challenge.py
    """

    code: str
    created_at_ms: int
    expires_at_ms: int


class OtpCodeGenerator:
    """
    OtpCodeGenerator — uniform 6-digit code source with absolute expiry.

    Codes are drawn from a non-cryptographic `random.Random`; they are single-use and
    short-lived, and the generator is injectable for deterministic tests.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
      - src/beachguard/contexts/verification/application/ports/clock.py
    """

    def __init__(
        self,
        *,
        clock: VerificationClock,
        rng: random.Random | None = None,
        ttl: timedelta = DEFAULT_OTP_TTL,
    ) -> None:
        """
        Initialize generator with time source, RNG and code lifetime.

        Args:
            clock: UTC time source.
            rng: Optional random source, defaults to fresh `random.Random()`.
            ttl: Code lifetime, strictly positive.
        Returns:
            None.
        Assumptions:
            Clock returns timezone-aware UTC datetimes.
        Raises:
            ValueError: If clock is missing or ttl is not positive.
        Side Effects:
            None.
        """
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("OtpCodeGenerator requires clock")
        if ttl <= timedelta(0):
            raise ValueError("OtpCodeGenerator.ttl must be > 0")
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._ttl = ttl

    @property
    def ttl_minutes(self) -> int:
        return int(self._ttl.total_seconds() // 60)

    def generate(self) -> GeneratedOtpCode:
        """
        Draw a code and compute its validity window from the current clock instant.

        Args:
            None.
        Returns:
            GeneratedOtpCode: Code in `100000..999999` and `[created, expires]` window.
        Assumptions:
            None.
        Raises:
            None.
        Side Effects:
            Advances RNG state.
        """
        now = self._clock.now()
        created_at_ms = datetime_to_epoch_ms(now)
        expires_at_ms = datetime_to_epoch_ms(now + self._ttl)
        code = self._rng.randint(_CODE_MIN, _CODE_MAX)
        return GeneratedOtpCode(
            code=str(code),
            created_at_ms=created_at_ms,
            expires_at_ms=expires_at_ms,
        )


def datetime_to_epoch_ms(value: datetime) -> int:
    """
    Convert timezone-aware datetime to integer epoch milliseconds.

    Args:
        value: Timezone-aware datetime.
    Returns:
        int: Milliseconds since Unix epoch.
    Assumptions:
        Naive datetimes are rejected to avoid local-time ambiguity.
    Raises:
        ValueError: If datetime is naive.
    Side Effects:
        None.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")
    return int(value.timestamp() * 1000)

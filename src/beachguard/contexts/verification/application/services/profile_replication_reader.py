from __future__ import annotations

import logging
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import StoreUnavailableError
from beachguard.contexts.verification.application.ports import ProfileStore, RetrySleeper
from beachguard.contexts.verification.domain.entities import UserProfile

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileReadRetryPolicy:
    """
    ProfileReadRetryPolicy — bounded linear backoff for replication-lagged profile reads.

    Related:
      - src/beachguard/contexts/verification/application/services/profile_replication_reader.py
      - apps/api/wiring/modules/verification.py
    """

    max_attempts: int = 3
    base_delay_seconds: float = 0.3

    def __post_init__(self) -> None:
        if self.max_attempts <= 0:
            raise ValueError("ProfileReadRetryPolicy.max_attempts must be > 0")
        if self.base_delay_seconds < 0:
            raise ValueError("ProfileReadRetryPolicy.base_delay_seconds must be >= 0")

    def delay_after(self, *, attempt_number: int) -> float:
        """
        Return wait before the attempt following `attempt_number` (1-based).
        """
        return self.base_delay_seconds * attempt_number


class ProfileReplicationReader:
    """
    ProfileReplicationReader — session-start profile read tolerating replication lag.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/load_session_profile.py
      - src/beachguard/contexts/verification/application/ports/profile_store.py
      - src/beachguard/contexts/verification/application/ports/sleeper.py
    """

    def __init__(
        self,
        *,
        profile_store: ProfileStore,
        sleeper: RetrySleeper,
        policy: ProfileReadRetryPolicy,
    ) -> None:
        if profile_store is None:  # type: ignore[truthy-bool]
            raise ValueError("ProfileReplicationReader requires profile_store")
        if sleeper is None:  # type: ignore[truthy-bool]
            raise ValueError("ProfileReplicationReader requires sleeper")
        if policy is None:  # type: ignore[truthy-bool]
            raise ValueError("ProfileReplicationReader requires policy")
        self._profile_store = profile_store
        self._sleeper = sleeper
        self._policy = policy

    def read(self, *, uid: str) -> UserProfile | None:
        """
        Read profile, retrying absent results with linear backoff.

        Args:
            uid: Authenticated user id.
        Returns:
            UserProfile | None: Profile, or `None` when every attempt saw no record.
        Assumptions:
            Authenticated-with-null-profile is a valid degraded session state.
        Raises:
            None.
        Side Effects:
            Reads profile store up to `max_attempts` times and sleeps between attempts.
        """
        max_attempts = self._policy.max_attempts
        for attempt_number in range(1, max_attempts + 1):
            profile = self._read_once(uid=uid, attempt_number=attempt_number)
            if profile is not None:
                return profile
            if attempt_number < max_attempts:
                self._sleeper.sleep(
                    seconds=self._policy.delay_after(attempt_number=attempt_number)
                )
        log.warning("profile not visible after retries uid=%s attempts=%s", uid, max_attempts)
        return None

    def _read_once(self, *, uid: str, attempt_number: int) -> UserProfile | None:
        try:
            return self._profile_store.get_profile(uid=uid)
        except StoreUnavailableError as error:
            log.warning(
                "profile read failed uid=%s attempt=%s error=%s",
                uid,
                attempt_number,
                error.message,
            )
            return None

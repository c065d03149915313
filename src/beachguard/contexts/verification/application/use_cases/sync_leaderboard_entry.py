from __future__ import annotations

import logging
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import (
    StoreUnavailableError,
    SubjectNotFoundError,
    ValidationError,
)
from beachguard.contexts.verification.application.ports import (
    LeaderboardStore,
    ProfileStore,
    VerificationClock,
)
from beachguard.contexts.verification.domain.entities import LeaderboardEntry

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncLeaderboardEntryResult:
    """
    SyncLeaderboardEntryResult — written entry, or skip marker when stores are unavailable.
    """

    entry: LeaderboardEntry | None
    skipped: bool = False
    reason: str | None = None


class SyncLeaderboardEntryUseCase:
    """
    SyncLeaderboardEntryUseCase — mirror one volunteer profile into the leaderboard table.

    Related:
      - src/beachguard/contexts/verification/application/ports/leaderboard_store.py
      - src/beachguard/contexts/verification/domain/entities/leaderboard_entry.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/leaderboard.py
    """

    def __init__(
        self,
        *,
        profile_store: ProfileStore,
        leaderboard_store: LeaderboardStore,
        clock: VerificationClock,
    ) -> None:
        if profile_store is None:  # type: ignore[truthy-bool]
            raise ValueError("SyncLeaderboardEntryUseCase requires profile_store")
        if leaderboard_store is None:  # type: ignore[truthy-bool]
            raise ValueError("SyncLeaderboardEntryUseCase requires leaderboard_store")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("SyncLeaderboardEntryUseCase requires clock")
        self._profile_store = profile_store
        self._leaderboard_store = leaderboard_store
        self._clock = clock

    def sync(self, *, user_id: str) -> SyncLeaderboardEntryResult:
        """
        Read profile and upsert its leaderboard row.

        Args:
            user_id: Volunteer user id.
        Returns:
            SyncLeaderboardEntryResult: Written entry or `skipped=True` with reason.
        Assumptions:
            Store outages are non-fatal for this denormalized mirror.
        Raises:
            ValidationError: If user id is missing.
            SubjectNotFoundError: If profile does not exist.
        Side Effects:
            Reads profile and writes one leaderboard row.
        """
        if user_id is None or not user_id.strip():
            raise ValidationError("Missing userId")
        normalized_user_id = user_id.strip()

        try:
            profile = self._profile_store.get_profile(uid=normalized_user_id)
            if profile is None:
                raise SubjectNotFoundError()
            entry = LeaderboardEntry.from_profile(profile=profile, updated_at=self._clock.now())
            self._leaderboard_store.upsert_entry(entry=entry)
        except StoreUnavailableError as error:
            log.warning(
                "leaderboard sync skipped user_id=%s error=%s",
                normalized_user_id,
                error.message,
            )
            return SyncLeaderboardEntryResult(entry=None, skipped=True, reason=error.code)
        return SyncLeaderboardEntryResult(entry=entry)

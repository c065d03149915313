from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from beachguard.contexts.verification.domain.entities.user_profile import UserProfile


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    """
    LeaderboardEntry — denormalized leaderboard row mirrored from a volunteer profile.

    Related:
      - src/beachguard/contexts/verification/application/ports/leaderboard_store.py
      - src/beachguard/contexts/verification/application/use_cases/sync_leaderboard_entry.py
    """

    volunteer_id: str
    name: str
    email: str | None
    avatar_url: str | None
    points: int
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.volunteer_id.strip():
            raise ValueError("LeaderboardEntry.volunteer_id must be non-empty")
        if self.points < 0:
            raise ValueError("LeaderboardEntry.points must be >= 0")

    @classmethod
    def from_profile(cls, *, profile: UserProfile, updated_at: datetime) -> LeaderboardEntry:
        """
        Project a profile into its leaderboard row.

        Args:
            profile: Durable profile snapshot.
            updated_at: UTC timestamp of the mirror write.
        Returns:
            LeaderboardEntry: Denormalized row.
        Assumptions:
            Blank names fall back to `Unknown`; blank email/avatar are stored as `None`.
        Raises:
            ValueError: If profile fields break entry invariants.
        Side Effects:
            None.
        """
        return cls(
            volunteer_id=profile.uid,
            name=profile.full_name.strip() or "Unknown",
            email=profile.email.strip() or None,
            avatar_url=profile.avatar_url.strip() or None,
            points=profile.points,
            updated_at=updated_at,
        )

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from beachguard.contexts.verification.adapters.outbound import (
    InMemoryLeaderboardStore,
    InMemoryProfileStore,
)
from beachguard.contexts.verification.application import (
    StoreUnavailableError,
    SubjectNotFoundError,
    ValidationError,
    VerificationClock,
)
from beachguard.contexts.verification.application.use_cases import SyncLeaderboardEntryUseCase
from beachguard.contexts.verification.domain import ProfileRole, UserProfile
from beachguard.contexts.verification.domain.entities import LeaderboardEntry

_NOW = datetime(2026, 10, 17, 9, 0, 0, tzinfo=timezone.utc)


class _FixedClock(VerificationClock):
    def now(self) -> datetime:
        return _NOW


class _UnavailableLeaderboardStore:
    def upsert_entry(self, *, entry: LeaderboardEntry) -> None:
        raise StoreUnavailableError(store="profile_store", detail="connection reset")


def _volunteer(*, points: int = 120) -> UserProfile:
    return UserProfile(
        uid="v-7",
        email="v7@beach.org",
        full_name="Vera",
        role=ProfileRole.VOLUNTEER,
        is_verified=True,
        is_admin_verified=False,
        points=points,
        avatar_url="https://cdn.example/v7.png",
        created_at=_NOW,
        updated_at=_NOW,
    )


def test_sync_upserts_leaderboard_row_from_profile() -> None:
    leaderboard = InMemoryLeaderboardStore()
    use_case = SyncLeaderboardEntryUseCase(
        profile_store=InMemoryProfileStore(profiles=(_volunteer(),)),
        leaderboard_store=leaderboard,
        clock=_FixedClock(),
    )

    result = use_case.sync(user_id=" v-7 ")

    assert result.skipped is False
    stored = leaderboard.get_entry(volunteer_id="v-7")
    assert stored == result.entry
    assert stored is not None
    assert stored.points == 120
    assert stored.avatar_url == "https://cdn.example/v7.png"
    assert stored.updated_at == _NOW


def test_sync_is_idempotent_and_overwrites_points() -> None:
    leaderboard = InMemoryLeaderboardStore()
    profile_store = InMemoryProfileStore(profiles=(_volunteer(points=5),))
    use_case = SyncLeaderboardEntryUseCase(
        profile_store=profile_store,
        leaderboard_store=leaderboard,
        clock=_FixedClock(),
    )

    first = use_case.sync(user_id="v-7")
    second = use_case.sync(user_id="v-7")

    assert first == second
    stored = leaderboard.get_entry(volunteer_id="v-7")
    assert stored is not None
    assert stored.points == 5


def test_sync_skips_when_leaderboard_store_is_down() -> None:
    use_case = SyncLeaderboardEntryUseCase(
        profile_store=InMemoryProfileStore(profiles=(_volunteer(),)),
        leaderboard_store=_UnavailableLeaderboardStore(),
        clock=_FixedClock(),
    )

    result = use_case.sync(user_id="v-7")

    assert result.skipped is True
    assert result.reason == "store_unavailable"
    assert result.entry is None


def test_sync_rejects_blank_user_and_unknown_profile() -> None:
    use_case = SyncLeaderboardEntryUseCase(
        profile_store=InMemoryProfileStore(),
        leaderboard_store=InMemoryLeaderboardStore(),
        clock=_FixedClock(),
    )

    with pytest.raises(ValidationError, match="Missing userId"):
        use_case.sync(user_id="")
    with pytest.raises(SubjectNotFoundError):
        use_case.sync(user_id="nobody")

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from beachguard.contexts.verification.adapters.outbound import (
    InMemoryProfileMirrorStore,
    InMemoryProfileStore,
)
from beachguard.contexts.verification.application import (
    StoreUnavailableError,
    VerificationClock,
)
from beachguard.contexts.verification.application.services import (
    PrimaryWithFallbackWriteTarget,
    ProfileMirrorWriteTarget,
    ProfileStoreWriteTarget,
    VerificationMirror,
)
from beachguard.contexts.verification.domain import ProfileRole, UserProfile, VerificationFlags

_NOW = datetime(2026, 10, 17, 9, 0, 0, tzinfo=timezone.utc)


class _FixedClock(VerificationClock):
    def now(self) -> datetime:
        return _NOW


class _RecordingTarget:
    """
    Write target double recording calls and optionally raising configured error.
    """

    def __init__(self, *, name: str, error: Exception | None = None) -> None:
        self._name = name
        self._error = error
        self.calls: list[tuple[str, VerificationFlags]] = []

    @property
    def name(self) -> str:
        return self._name

    def write_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        self.calls.append((uid, flags))
        if self._error is not None:
            raise self._error


def _admin_profile(uid: str) -> UserProfile:
    return UserProfile(
        uid=uid,
        email="admin@beach.org",
        full_name="Admin",
        role=ProfileRole.ADMIN,
        is_verified=False,
        is_admin_verified=False,
        points=0,
        avatar_url="",
        created_at=_NOW,
        updated_at=_NOW,
    )


def test_primary_success_skips_fallback() -> None:
    primary = _RecordingTarget(name="primary")
    fallback = _RecordingTarget(name="fallback")
    target = PrimaryWithFallbackWriteTarget(primary=primary, fallback=fallback)

    outcome = target.write(uid="123", flags=VerificationFlags(is_verified=True))

    assert outcome.target == "primary"
    assert outcome.written is True
    assert outcome.fallback_used is False
    assert fallback.calls == []
    assert target.name == "primary+fallback"


def test_primary_outage_writes_identical_merge_to_fallback() -> None:
    """
    Verify primary store outage routes the exact same flag merge to fallback target.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Fallback target is reachable.
    Raises:
        AssertionError: If fallback receives different payload or outcome is wrong.
    Side Effects:
        None.
    """
    flags = VerificationFlags(is_verified=True, is_admin_verified=True)
    primary = _RecordingTarget(
        name="primary",
        error=StoreUnavailableError(store="profile_store", detail="timeout"),
    )
    fallback = _RecordingTarget(name="fallback")
    target = PrimaryWithFallbackWriteTarget(primary=primary, fallback=fallback)

    outcome = target.write(uid="123", flags=flags)

    assert fallback.calls == [("123", flags)]
    assert outcome.target == "fallback"
    assert outcome.fallback_used is True
    assert outcome.fields == ("is_verified", "is_admin_verified")


def test_fallback_failure_is_absorbed_and_reported_as_unwritten() -> None:
    primary = _RecordingTarget(
        name="primary",
        error=StoreUnavailableError(store="profile_store"),
    )
    fallback = _RecordingTarget(name="fallback", error=RuntimeError("mirror down"))
    target = PrimaryWithFallbackWriteTarget(primary=primary, fallback=fallback)

    outcome = target.write(uid="123", flags=VerificationFlags(is_verified=True))

    assert outcome.written is False
    assert outcome.target is None
    assert len(fallback.calls) == 1


def test_unexpected_primary_error_is_not_masked() -> None:
    primary = _RecordingTarget(name="primary", error=RuntimeError("bug"))
    fallback = _RecordingTarget(name="fallback")
    target = PrimaryWithFallbackWriteTarget(primary=primary, fallback=fallback)

    with pytest.raises(RuntimeError, match="bug"):
        target.write(uid="123", flags=VerificationFlags(is_verified=True))
    assert fallback.calls == []


def test_mirror_writes_admin_flags_to_profile_store() -> None:
    profile_store = InMemoryProfileStore(profiles=(_admin_profile("123"),))
    mirror_store = InMemoryProfileMirrorStore()
    mirror = VerificationMirror(
        write_target=PrimaryWithFallbackWriteTarget(
            primary=ProfileStoreWriteTarget(profile_store=profile_store, clock=_FixedClock()),
            fallback=ProfileMirrorWriteTarget(mirror_store=mirror_store),
        )
    )

    outcome = mirror.mirror(uid="123", role=ProfileRole.ADMIN)
    repeated = mirror.mirror(uid="123", role=ProfileRole.ADMIN)

    assert outcome == repeated
    profile = profile_store.get_profile(uid="123")
    assert profile is not None
    assert profile.is_verified is True
    assert profile.is_admin_verified is True
    assert mirror_store.get_mirror(uid="123") is None


def test_mirror_falls_back_when_profile_record_does_not_exist_yet() -> None:
    profile_store = InMemoryProfileStore()
    mirror_store = InMemoryProfileMirrorStore()
    mirror = VerificationMirror(
        write_target=PrimaryWithFallbackWriteTarget(
            primary=ProfileStoreWriteTarget(profile_store=profile_store, clock=_FixedClock()),
            fallback=ProfileMirrorWriteTarget(mirror_store=mirror_store),
        )
    )

    outcome = mirror.mirror(uid="new-user", role=None)

    assert outcome.target == "profile_mirror"
    record = mirror_store.get_mirror(uid="new-user")
    assert record is not None
    assert record.is_verified is True

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from beachguard.contexts.verification.adapters.outbound import (
    InMemoryOtpChallengeStore,
    InMemoryProfileMirrorStore,
    InMemoryProfileStore,
    LogOnlyVerificationNotifier,
)
from beachguard.contexts.verification.application import (
    ChallengeNotFoundError,
    ExpiredError,
    MismatchError,
    StoreUnavailableError,
    SubjectNotFoundError,
    ValidationError,
    VerificationClock,
)
from beachguard.contexts.verification.application.services import (
    OtpCodeGenerator,
    PrimaryWithFallbackWriteTarget,
    ProfileMirrorWriteTarget,
    ProfileStoreWriteTarget,
    VerificationMirror,
)
from beachguard.contexts.verification.application.use_cases import (
    IssueOtpChallengeUseCase,
    VerifyOtpChallengeUseCase,
)
from beachguard.contexts.verification.domain import (
    ChallengeSubject,
    OtpChallenge,
    ProfileRole,
    UserProfile,
    VerificationFlags,
)

_START = datetime(2026, 10, 17, 9, 0, 0, tzinfo=timezone.utc)


class _MutableClock(VerificationClock):
    """
    Mutable deterministic UTC clock for expiry scenarios.
    """

    def __init__(self, *, now_value: datetime) -> None:
        self._now_value = now_value

    def advance(self, *, delta: timedelta) -> None:
        self._now_value = self._now_value + delta

    def now(self) -> datetime:
        return self._now_value


class _UnavailableProfileStore:
    def get_profile(self, *, uid: str) -> UserProfile | None:
        raise StoreUnavailableError(store="profile_store", detail="timeout")

    def merge_profile(
        self,
        *,
        uid: str,
        flags: VerificationFlags | None,
        role: ProfileRole | None,
        updated_at: datetime,
    ) -> tuple[str, ...]:
        raise StoreUnavailableError(store="profile_store", detail="timeout")

    def create_profile_if_absent(self, *, profile: UserProfile) -> UserProfile:
        raise StoreUnavailableError(store="profile_store", detail="timeout")


class _ReissueBeforeDeleteStore(InMemoryOtpChallengeStore):
    """
    Challenge store double simulating a concurrent re-issue landing between check and delete.
    """

    def __init__(self) -> None:
        super().__init__()
        self.reissued: OtpChallenge | None = None

    def delete_if_unchanged(self, *, challenge: OtpChallenge) -> bool:
        if self.reissued is None:
            self.reissued = OtpChallenge(
                subject=challenge.subject,
                code="777777",
                expires_at_ms=challenge.expires_at_ms + 1000,
                created_at_ms=challenge.created_at_ms + 1000,
            )
            self.put(challenge=self.reissued)
        return super().delete_if_unchanged(challenge=challenge)


@dataclass(slots=True)
class _Harness:
    clock: _MutableClock
    challenge_store: InMemoryOtpChallengeStore
    profile_store: InMemoryProfileStore
    mirror_store: InMemoryProfileMirrorStore
    issue: IssueOtpChallengeUseCase
    verify: VerifyOtpChallengeUseCase

    def stored_code(self, *, subject: ChallengeSubject) -> str:
        challenge = self.challenge_store.get(subject=subject)
        assert challenge is not None
        return challenge.code


def _profile(*, uid: str, role: ProfileRole) -> UserProfile:
    return UserProfile(
        uid=uid,
        email=f"{uid}@beach.org",
        full_name="Test User",
        role=role,
        is_verified=False,
        is_admin_verified=False,
        points=0,
        avatar_url="",
        created_at=_START,
        updated_at=_START,
    )


def _build_harness(
    *,
    profiles: tuple[UserProfile, ...] = (),
    challenge_store: InMemoryOtpChallengeStore | None = None,
    profile_store: object | None = None,
) -> _Harness:
    clock = _MutableClock(now_value=_START)
    effective_challenge_store = challenge_store or InMemoryOtpChallengeStore()
    memory_profile_store = InMemoryProfileStore(profiles=profiles)
    effective_profile_store = profile_store if profile_store is not None else memory_profile_store
    mirror_store = InMemoryProfileMirrorStore()
    mirror = VerificationMirror(
        write_target=PrimaryWithFallbackWriteTarget(
            primary=ProfileStoreWriteTarget(
                profile_store=effective_profile_store,  # type: ignore[arg-type]
                clock=clock,
            ),
            fallback=ProfileMirrorWriteTarget(mirror_store=mirror_store),
        )
    )
    return _Harness(
        clock=clock,
        challenge_store=effective_challenge_store,
        profile_store=memory_profile_store,
        mirror_store=mirror_store,
        issue=IssueOtpChallengeUseCase(
            challenge_store=effective_challenge_store,
            code_generator=OtpCodeGenerator(clock=clock, rng=random.Random(11)),
            notifier=LogOnlyVerificationNotifier(),
        ),
        verify=VerifyOtpChallengeUseCase(
            challenge_store=effective_challenge_store,
            profile_store=effective_profile_store,  # type: ignore[arg-type]
            mirror=mirror,
            clock=clock,
        ),
    )


def test_admin_verification_consumes_challenge_and_sets_both_flags() -> None:
    """
    Verify admin code match consumes challenge and raises both verification flags.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Admin profile exists in primary profile store.
    Raises:
        AssertionError: If flags or challenge state differ after verification.
    Side Effects:
        None.
    """
    harness = _build_harness(profiles=(_profile(uid="123", role=ProfileRole.ADMIN),))
    subject = ChallengeSubject.for_admin("123")
    harness.issue.issue_for_admin(user_id="123", email="admin@beach.org")
    code = harness.stored_code(subject=subject)

    harness.clock.advance(delta=timedelta(minutes=2))
    result = harness.verify.verify_admin(user_id="123", code=code)

    assert result.role is ProfileRole.ADMIN
    assert result.mirror is not None
    assert result.mirror.target == "profile_store"
    assert result.mirror.fallback_used is False
    assert harness.challenge_store.get(subject=subject) is None
    profile = harness.profile_store.get_profile(uid="123")
    assert profile is not None
    assert profile.is_verified is True
    assert profile.is_admin_verified is True
    assert profile.updated_at == _START + timedelta(minutes=2)


def test_second_submission_of_consumed_code_is_not_found() -> None:
    harness = _build_harness(profiles=(_profile(uid="123", role=ProfileRole.ADMIN),))
    harness.issue.issue_for_admin(user_id="123", email="admin@beach.org")
    code = harness.stored_code(subject=ChallengeSubject.for_admin("123"))
    harness.verify.verify_admin(user_id="123", code=code)

    with pytest.raises(ChallengeNotFoundError) as error_info:
        harness.verify.verify_admin(user_id="123", code=code)

    assert error_info.value.code == "challenge_not_found"
    assert error_info.value.status_code == 400


def test_expired_challenge_is_removed_and_reported_once() -> None:
    """
    Verify expired volunteer challenge yields `ExpiredError` then `ChallengeNotFoundError`.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Submission happens eleven minutes after issuance with ten-minute TTL.
    Raises:
        AssertionError: If expired challenge survives or errors differ.
    Side Effects:
        None.
    """
    harness = _build_harness()
    subject = ChallengeSubject.for_volunteer("a@b.com")
    harness.issue.issue_for_volunteer(email="a@b.com", name="Ana")
    code = harness.stored_code(subject=subject)

    harness.clock.advance(delta=timedelta(minutes=11))
    with pytest.raises(ExpiredError) as error_info:
        harness.verify.verify_volunteer(email="a@b.com", code=code)

    assert error_info.value.code == "challenge_expired"
    assert harness.challenge_store.get(subject=subject) is None
    with pytest.raises(ChallengeNotFoundError):
        harness.verify.verify_volunteer(email="a@b.com", code=code)


def test_challenge_is_valid_exactly_at_expiry_instant() -> None:
    harness = _build_harness()
    subject = ChallengeSubject.for_volunteer("a@b.com")
    harness.issue.issue_for_volunteer(email="a@b.com", name="Ana")
    code = harness.stored_code(subject=subject)

    harness.clock.advance(delta=timedelta(minutes=10))
    result = harness.verify.verify_volunteer(email="A@B.com", code=code)

    assert result.mirror is None
    assert harness.challenge_store.get(subject=subject) is None


def test_mismatch_keeps_challenge_for_retry_within_window() -> None:
    harness = _build_harness(profiles=(_profile(uid="123", role=ProfileRole.ADMIN),))
    subject = ChallengeSubject.for_admin("123")
    harness.issue.issue_for_admin(user_id="123", email="admin@beach.org")
    code = harness.stored_code(subject=subject)

    with pytest.raises(MismatchError) as error_info:
        harness.verify.verify_admin(user_id="123", code="000000")

    assert error_info.value.code == "code_mismatch"
    assert harness.challenge_store.get(subject=subject) is not None
    profile = harness.profile_store.get_profile(uid="123")
    assert profile is not None
    assert profile.is_verified is False

    harness.verify.verify_admin(user_id="123", code=code)
    assert harness.challenge_store.get(subject=subject) is None


def test_reissue_invalidates_previous_code() -> None:
    harness = _build_harness()
    subject = ChallengeSubject.for_volunteer("a@b.com")
    harness.issue.issue_for_volunteer(email="a@b.com", name="Ana")
    first_code = harness.stored_code(subject=subject)
    harness.clock.advance(delta=timedelta(seconds=30))
    harness.issue.issue_for_volunteer(email="a@b.com", name="Ana")
    second_code = harness.stored_code(subject=subject)
    assert first_code != second_code

    with pytest.raises(MismatchError):
        harness.verify.verify_volunteer(email="a@b.com", code=first_code)
    harness.verify.verify_volunteer(email="a@b.com", code=second_code)


def test_volunteer_verification_with_account_sets_only_general_flag() -> None:
    harness = _build_harness(profiles=(_profile(uid="v-1", role=ProfileRole.VOLUNTEER),))
    harness.issue.issue_for_volunteer(email="V-1@Beach.org", name="Vic")
    code = harness.stored_code(subject=ChallengeSubject.for_volunteer("v-1@beach.org"))

    result = harness.verify.verify_volunteer(email="v-1@beach.org", code=code, user_id="v-1")

    assert result.user_id == "v-1"
    assert result.mirror is not None
    assert result.mirror.fields == ("is_verified",)
    profile = harness.profile_store.get_profile(uid="v-1")
    assert profile is not None
    assert profile.is_verified is True
    assert profile.is_admin_verified is False


def test_missing_admin_profile_is_not_found_and_keeps_challenge() -> None:
    harness = _build_harness()
    subject = ChallengeSubject.for_admin("ghost")
    harness.issue.issue_for_admin(user_id="ghost", email="ghost@beach.org")
    code = harness.stored_code(subject=subject)

    with pytest.raises(SubjectNotFoundError) as error_info:
        harness.verify.verify_admin(user_id="ghost", code=code)

    assert error_info.value.status_code == 404
    assert harness.challenge_store.get(subject=subject) is not None


def test_profile_store_outage_mirrors_admin_flags_to_fallback() -> None:
    """
    Verify unreachable profile store leaves role unknown and routes write to mirror store.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Admin subject class still yields both admin flags when role is unknown.
    Raises:
        AssertionError: If verification fails or fallback record differs.
    Side Effects:
        None.
    """
    harness = _build_harness(profile_store=_UnavailableProfileStore())
    subject = ChallengeSubject.for_admin("123")
    harness.issue.issue_for_admin(user_id="123", email="admin@beach.org")
    code = harness.stored_code(subject=subject)

    result = harness.verify.verify_admin(user_id="123", code=code)

    assert result.role is None
    assert result.mirror is not None
    assert result.mirror.fallback_used is True
    assert result.mirror.target == "profile_mirror"
    record = harness.mirror_store.get_mirror(uid="123")
    assert record is not None
    assert record.is_verified is True
    assert record.is_admin_verified is True
    assert record.role is None
    assert harness.challenge_store.get(subject=subject) is None


def test_concurrent_reissue_between_check_and_delete_is_not_consumed() -> None:
    store = _ReissueBeforeDeleteStore()
    harness = _build_harness(
        profiles=(_profile(uid="123", role=ProfileRole.ADMIN),),
        challenge_store=store,
    )
    subject = ChallengeSubject.for_admin("123")
    harness.issue.issue_for_admin(user_id="123", email="admin@beach.org")
    code = harness.stored_code(subject=subject)

    with pytest.raises(ChallengeNotFoundError):
        harness.verify.verify_admin(user_id="123", code=code)

    assert store.get(subject=subject) == store.reissued
    profile = harness.profile_store.get_profile(uid="123")
    assert profile is not None
    assert profile.is_verified is False


@pytest.mark.parametrize(("user_id", "code"), [("", "123456"), ("123", ""), ("123", None)])
def test_admin_verify_requires_uid_and_code(user_id: str, code: str | None) -> None:
    harness = _build_harness()

    with pytest.raises(ValidationError, match="UID and OTP are required"):
        harness.verify.verify_admin(user_id=user_id, code=code)  # type: ignore[arg-type]


def test_volunteer_verify_requires_email_and_code() -> None:
    harness = _build_harness()

    with pytest.raises(ValidationError, match="Email and OTP are required"):
        harness.verify.verify_volunteer(email=" ", code="123456")


def test_volunteer_code_submitted_with_foreign_admin_uid_changes_no_profile() -> None:
    """
    Verify a volunteer code cannot raise flags on an account owned by another address.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Account ownership is proven only by profile email equal to the delivery address.
    Raises:
        AssertionError: If the foreign admin profile or the fallback mirror is touched.
    Side Effects:
        None.
    """
    harness = _build_harness(profiles=(_profile(uid="admin-1", role=ProfileRole.ADMIN),))
    harness.issue.issue_for_volunteer(email="someone@else.org", name="Sam")
    subject = ChallengeSubject.for_volunteer("someone@else.org")
    code = harness.stored_code(subject=subject)

    result = harness.verify.verify_volunteer(
        email="someone@else.org",
        code=code,
        user_id="admin-1",
    )

    assert result.user_id is None
    assert result.mirror is None
    admin = harness.profile_store.get_profile(uid="admin-1")
    assert admin is not None
    assert admin.is_verified is False
    assert admin.is_admin_verified is False
    assert harness.mirror_store.get_mirror(uid="admin-1") is None
    assert harness.challenge_store.get(subject=subject) is None


def test_volunteer_code_for_owned_admin_account_sets_only_general_flag() -> None:
    harness = _build_harness(profiles=(_profile(uid="admin-2", role=ProfileRole.ADMIN),))
    harness.issue.issue_for_volunteer(email="admin-2@beach.org", name="Ada")
    code = harness.stored_code(subject=ChallengeSubject.for_volunteer("admin-2@beach.org"))

    result = harness.verify.verify_volunteer(
        email="admin-2@beach.org",
        code=code,
        user_id="admin-2",
    )

    assert result.mirror is not None
    assert result.mirror.fields == ("is_verified",)
    profile = harness.profile_store.get_profile(uid="admin-2")
    assert profile is not None
    assert profile.is_verified is True
    assert profile.is_admin_verified is False


def test_volunteer_verification_skips_mirror_when_profile_store_is_unreachable() -> None:
    harness = _build_harness(profile_store=_UnavailableProfileStore())
    harness.issue.issue_for_volunteer(email="v@b.com", name="Vic")
    subject = ChallengeSubject.for_volunteer("v@b.com")
    code = harness.stored_code(subject=subject)

    result = harness.verify.verify_volunteer(email="v@b.com", code=code, user_id="v-9")

    assert result.mirror is None
    assert harness.mirror_store.get_mirror(uid="v-9") is None
    assert harness.challenge_store.get(subject=subject) is None

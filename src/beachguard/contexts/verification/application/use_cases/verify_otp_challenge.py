from __future__ import annotations

import logging
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import (
    ChallengeNotFoundError,
    ExpiredError,
    MismatchError,
    StoreUnavailableError,
    SubjectNotFoundError,
    ValidationError,
)
from beachguard.contexts.verification.application.ports import (
    OtpChallengeStore,
    ProfileStore,
    VerificationClock,
)
from beachguard.contexts.verification.application.services import (
    MirrorWriteOutcome,
    VerificationMirror,
    datetime_to_epoch_ms,
)
from beachguard.contexts.verification.domain.entities import OtpChallenge, UserProfile
from beachguard.contexts.verification.domain.value_objects import (
    ChallengeSubject,
    ProfileRole,
    VerificationFlags,
)

log = logging.getLogger(__name__)

_UNRESOLVED = object()


@dataclass(frozen=True, slots=True)
class VerifyOtpChallengeResult:
    """
    VerifyOtpChallengeResult — outcome of a consumed challenge.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/verify_otp_challenge.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/otp_verification.py
    """

    subject: ChallengeSubject
    user_id: str | None
    role: ProfileRole | None
    mirror: MirrorWriteOutcome | None


class VerifyOtpChallengeUseCase:
    """
    VerifyOtpChallengeUseCase — check submitted code, consume the challenge, mirror flags.

    A challenge is consumed exactly on match or on detected expiry; it survives mismatches
    and store read failures. Consumption is a compare-and-delete against the checked
    instance, so a double submit verifies once and a concurrent re-issue is never removed.

    Related:
      - src/beachguard/contexts/verification/application/ports/otp_challenge_store.py
      - src/beachguard/contexts/verification/application/services/verification_mirror.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/otp_verification.py
    """

    def __init__(
        self,
        *,
        challenge_store: OtpChallengeStore,
        profile_store: ProfileStore,
        mirror: VerificationMirror,
        clock: VerificationClock,
    ) -> None:
        """
        Initialize verification dependencies.

        Args:
            challenge_store: Verification store port.
            profile_store: Primary profile store used for role resolution.
            mirror: Consistency mirror invoked after consumption.
            clock: UTC time source for expiry checks.
        Returns:
            None.
        Assumptions:
            Dependencies are initialized and non-null.
        Raises:
            ValueError: If required dependency is missing.
        Side Effects:
            None.
        """
        if challenge_store is None:  # type: ignore[truthy-bool]
            raise ValueError("VerifyOtpChallengeUseCase requires challenge_store")
        if profile_store is None:  # type: ignore[truthy-bool]
            raise ValueError("VerifyOtpChallengeUseCase requires profile_store")
        if mirror is None:  # type: ignore[truthy-bool]
            raise ValueError("VerifyOtpChallengeUseCase requires mirror")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("VerifyOtpChallengeUseCase requires clock")
        self._challenge_store = challenge_store
        self._profile_store = profile_store
        self._mirror = mirror
        self._clock = clock

    def verify_admin(self, *, user_id: str, code: str) -> VerifyOtpChallengeResult:
        """
        Verify admin challenge and mirror admin verification flags.

        Args:
            user_id: Admin user id owning the challenge.
            code: Submitted code.
        Returns:
            VerifyOtpChallengeResult: Consumed subject with mirror outcome.
        Assumptions:
            Admin profile must exist. When the profile store is unreachable the role
            stays unknown, but the subject class is admin, so both admin flags are
            mirrored; `is_admin_verified` alone grants nothing without role `admin`.
        Raises:
            ValidationError: If user id or code is missing.
            ChallengeNotFoundError: If no challenge is outstanding or it was already used.
            ExpiredError: If challenge expired; it is removed.
            MismatchError: If code differs; challenge is kept.
            SubjectNotFoundError: If profile store has no such user.
            StoreUnavailableError: If verification store cannot be reached.
        Side Effects:
            Deletes consumed challenge and writes verification flags.
        """
        normalized_user_id = _require(value=user_id, message="UID and OTP are required")
        submitted_code = _require(value=code, message="UID and OTP are required")
        try:
            subject = ChallengeSubject.for_admin(normalized_user_id)
        except ValueError as error:
            raise ValidationError("Invalid user id.") from error

        challenge = self._load_matching_challenge(subject=subject, submitted_code=submitted_code)
        profile = self._lookup_profile(uid=normalized_user_id)
        if profile is None:
            raise SubjectNotFoundError()
        role = profile.role if isinstance(profile, UserProfile) else None
        self._consume(challenge=challenge)
        flags = VerificationFlags.for_role(role if role is not None else ProfileRole.ADMIN)
        outcome = self._mirror.mirror(uid=normalized_user_id, role=role, flags=flags)
        return VerifyOtpChallengeResult(
            subject=subject,
            user_id=normalized_user_id,
            role=role,
            mirror=outcome,
        )

    def verify_volunteer(
        self,
        *,
        email: str,
        code: str,
        user_id: str | None = None,
    ) -> VerifyOtpChallengeResult:
        """
        Verify volunteer challenge keyed by email, mirroring `is_verified` into an owned account.

        Args:
            email: Volunteer email the challenge was issued to.
            code: Submitted code.
            user_id: Optional account id; pre-account verification passes `None`.
        Returns:
            VerifyOtpChallengeResult: Consumed subject with optional mirror outcome.
        Assumptions:
            Only `is_verified` is ever mirrored, and only into a profile whose email is
            the address the code was delivered to. Without `user_id`, with an unknown
            or unreachable profile, or with a foreign profile nothing is mirrored.
        Raises:
            ValidationError: If email or code is missing.
            ChallengeNotFoundError: If no challenge is outstanding or it was already used.
            ExpiredError: If challenge expired; it is removed.
            MismatchError: If code differs; challenge is kept.
            StoreUnavailableError: If verification store cannot be reached.
        Side Effects:
            Deletes consumed challenge and optionally writes verification flags.
        """
        recipient = _require(value=email, message="Email and OTP are required")
        submitted_code = _require(value=code, message="Email and OTP are required")
        subject = ChallengeSubject.for_volunteer(recipient)
        normalized_user_id = None
        if user_id is not None and user_id.strip():
            normalized_user_id = user_id.strip()

        challenge = self._load_matching_challenge(subject=subject, submitted_code=submitted_code)
        owner = None
        if normalized_user_id is not None:
            owner = self._resolve_owner(uid=normalized_user_id, challenge=challenge)
        self._consume(challenge=challenge)

        outcome = None
        role: ProfileRole | None = None
        if owner is not None:
            role = owner.role
            outcome = self._mirror.mirror(
                uid=owner.uid,
                role=role,
                flags=VerificationFlags(is_verified=True),
            )
        return VerifyOtpChallengeResult(
            subject=subject,
            user_id=owner.uid if owner is not None else None,
            role=role,
            mirror=outcome,
        )

    def _load_matching_challenge(
        self,
        *,
        subject: ChallengeSubject,
        submitted_code: str,
    ) -> OtpChallenge:
        """
        Fetch challenge and run expiry and code checks in order.

        Args:
            subject: Challenge subject.
            submitted_code: Trimmed submitted code.
        Returns:
            OtpChallenge: Live challenge whose code matches.
        Assumptions:
            Expiry is checked before comparison, so an expired code is never accepted.
        Raises:
            ChallengeNotFoundError: If no challenge is stored.
            ExpiredError: If challenge expired.
            MismatchError: If code differs.
            StoreUnavailableError: If verification store cannot be reached.
        Side Effects:
            Removes the challenge when it is found expired.
        """
        challenge = self._challenge_store.get(subject=subject)
        if challenge is None:
            raise ChallengeNotFoundError()

        now_ms = datetime_to_epoch_ms(self._clock.now())
        if challenge.is_expired(now_ms=now_ms):
            self._challenge_store.delete_if_unchanged(challenge=challenge)
            log.info(
                "otp challenge expired subject_class=%s subject_key=%s",
                subject.subject_class.value,
                subject.key,
            )
            raise ExpiredError()

        if not challenge.matches(submitted_code=submitted_code):
            log.info(
                "otp code mismatch subject_class=%s subject_key=%s",
                subject.subject_class.value,
                subject.key,
            )
            raise MismatchError()
        return challenge

    def _lookup_profile(self, *, uid: str) -> UserProfile | object | None:
        """
        Resolve profile for role lookup, mapping store failure to an unresolved marker.

        Args:
            uid: Stable user id.
        Returns:
            UserProfile | object | None: Profile, `None` when absent, or an opaque
                marker when the store could not answer.
        Assumptions:
            Role lookup failure must not block verification.
        Raises:
            None.
        Side Effects:
            Reads profile store and logs warning on failure.
        """
        try:
            return self._profile_store.get_profile(uid=uid)
        except StoreUnavailableError as error:
            log.warning("role lookup failed, role unknown uid=%s error=%s", uid, error.message)
            return _UNRESOLVED

    def _resolve_owner(self, *, uid: str, challenge: OtpChallenge) -> UserProfile | None:
        """
        Return profile for `uid` only when it belongs to the challenge recipient.

        Args:
            uid: Account id submitted with the volunteer code.
            challenge: Matched volunteer challenge.
        Returns:
            UserProfile | None: Owning profile, `None` when ownership is not proven.
        Assumptions:
            Profile email is the only link between an account and a delivered code.
        Raises:
            None.
        Side Effects:
            Reads profile store; logs skipped mirrors.
        """
        profile = self._lookup_profile(uid=uid)
        if isinstance(profile, UserProfile) and challenge.issued_to(profile.email):
            return profile
        log.warning(
            "volunteer verification not mirrored, account not owned by recipient "
            "uid=%s subject_key=%s",
            uid,
            challenge.subject.key,
        )
        return None

    def _consume(self, *, challenge: OtpChallenge) -> None:
        if not self._challenge_store.delete_if_unchanged(challenge=challenge):
            log.info(
                "otp challenge already consumed or re-issued subject_class=%s subject_key=%s",
                challenge.subject.subject_class.value,
                challenge.subject.key,
            )
            raise ChallengeNotFoundError()
        log.info(
            "otp challenge verified subject_class=%s subject_key=%s",
            challenge.subject.subject_class.value,
            challenge.subject.key,
        )


def _require(*, value: str | None, message: str) -> str:
    """
    Return trimmed value or raise validation error for missing input.
    """
    if value is None:
        raise ValidationError(message)
    normalized = value.strip()
    if not normalized:
        raise ValidationError(message)
    return normalized

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import (
    DeliveryError,
    ValidationError,
)
from beachguard.contexts.verification.application.ports import (
    OtpChallengeStore,
    VerificationEmail,
    VerificationNotifier,
)
from beachguard.contexts.verification.application.services import (
    OtpCodeGenerator,
    render_admin_verification_email,
    render_volunteer_verification_email,
)
from beachguard.contexts.verification.domain.entities import ChallengeMetadata, OtpChallenge
from beachguard.contexts.verification.domain.value_objects import ChallengeSubject

log = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True, slots=True)
class IssueOtpChallengeResult:
    """
    IssueOtpChallengeResult — confirmation that a challenge was stored and dispatched.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/otp_verification.py
    """

    subject: ChallengeSubject
    expires_at_ms: int


class IssueOtpChallengeUseCase:
    """
    IssueOtpChallengeUseCase — generate, store (overwrite) and dispatch an OTP challenge.

    Exactly one store write and at most one notification happen per call. A store failure
    aborts before dispatch; a dispatch failure leaves the stored challenge valid.

    Related:
      - src/beachguard/contexts/verification/application/ports/otp_challenge_store.py
      - src/beachguard/contexts/verification/application/ports/verification_notifier.py
      - src/beachguard/contexts/verification/application/services/otp_code_generator.py
    """

    def __init__(
        self,
        *,
        challenge_store: OtpChallengeStore,
        code_generator: OtpCodeGenerator,
        notifier: VerificationNotifier,
    ) -> None:
        """
        Initialize issuance dependencies.

        Args:
            challenge_store: Verification store port.
            code_generator: Code and expiry source.
            notifier: Outbound email dispatcher.
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
            raise ValueError("IssueOtpChallengeUseCase requires challenge_store")
        if code_generator is None:  # type: ignore[truthy-bool]
            raise ValueError("IssueOtpChallengeUseCase requires code_generator")
        if notifier is None:  # type: ignore[truthy-bool]
            raise ValueError("IssueOtpChallengeUseCase requires notifier")
        self._challenge_store = challenge_store
        self._code_generator = code_generator
        self._notifier = notifier

    def issue_for_admin(self, *, user_id: str, email: str) -> IssueOtpChallengeResult:
        """
        Issue challenge for an admin account keyed by user id.

        Args:
            user_id: Admin user id.
            email: Recipient address.
        Returns:
            IssueOtpChallengeResult: Stored subject and expiry.
        Assumptions:
            Caller owns the account referenced by `user_id`.
        Raises:
            ValidationError: If user id or email is missing.
            StoreUnavailableError: If challenge cannot be stored.
            DeliveryError: If email dispatch fails.
        Side Effects:
            Overwrites stored challenge and sends one email.
        """
        normalized_user_id = _require(value=user_id, message="Email and UID are required")
        recipient = _require(value=email, message="Email and UID are required")
        try:
            subject = ChallengeSubject.for_admin(normalized_user_id)
        except ValueError as error:
            raise ValidationError("Invalid user id.") from error
        challenge = self._store_new_challenge(subject=subject, metadata=None)
        message = render_admin_verification_email(
            recipient=recipient,
            code=challenge.code,
            ttl_minutes=self._code_generator.ttl_minutes,
        )
        self._dispatch(subject=subject, email=message)
        return IssueOtpChallengeResult(subject=subject, expires_at_ms=challenge.expires_at_ms)

    def issue_for_volunteer(self, *, email: str, name: str) -> IssueOtpChallengeResult:
        """
        Issue challenge for a prospective volunteer keyed by normalized email.

        Args:
            email: Volunteer email address.
            name: Display name used in the email greeting.
        Returns:
            IssueOtpChallengeResult: Stored subject and expiry.
        Assumptions:
            Volunteer has no account yet, so email is the only stable key.
        Raises:
            ValidationError: If email or name is missing, or email is malformed.
            StoreUnavailableError: If challenge cannot be stored.
            DeliveryError: If email dispatch fails.
        Side Effects:
            Overwrites stored challenge and sends one email.
        """
        recipient = _require(value=email, message="Email and name are required")
        display_name = _require(value=name, message="Email and name are required")
        if _EMAIL_PATTERN.match(recipient) is None:
            raise ValidationError("Invalid email address.")

        subject = ChallengeSubject.for_volunteer(recipient)
        challenge = self._store_new_challenge(
            subject=subject,
            metadata=ChallengeMetadata(email=recipient, name=display_name),
        )
        message = render_volunteer_verification_email(
            recipient=recipient,
            name=display_name,
            code=challenge.code,
            ttl_minutes=self._code_generator.ttl_minutes,
        )
        self._dispatch(subject=subject, email=message)
        return IssueOtpChallengeResult(subject=subject, expires_at_ms=challenge.expires_at_ms)

    def _store_new_challenge(
        self,
        *,
        subject: ChallengeSubject,
        metadata: ChallengeMetadata | None,
    ) -> OtpChallenge:
        generated = self._code_generator.generate()
        challenge = OtpChallenge(
            subject=subject,
            code=generated.code,
            expires_at_ms=generated.expires_at_ms,
            created_at_ms=generated.created_at_ms,
            metadata=metadata,
        )
        self._challenge_store.put(challenge=challenge)
        log.info(
            "otp challenge issued subject_class=%s subject_key=%s expires_at_ms=%s",
            subject.subject_class.value,
            subject.key,
            challenge.expires_at_ms,
        )
        return challenge

    def _dispatch(self, *, subject: ChallengeSubject, email: VerificationEmail) -> None:
        try:
            self._notifier.send(email=email)
        except DeliveryError:
            log.warning(
                "otp dispatch failed subject_class=%s subject_key=%s",
                subject.subject_class.value,
                subject.key,
            )
            raise
        except Exception as error:  # noqa: BLE001
            log.exception(
                "otp dispatch crashed subject_class=%s subject_key=%s",
                subject.subject_class.value,
                subject.key,
            )
            raise DeliveryError(str(error)) from error


def _require(*, value: str | None, message: str) -> str:
    """
    Return trimmed value or raise validation error for missing input.

    Args:
        value: Raw request value.
        message: Human-readable validation message.
    Returns:
        str: Trimmed non-empty value.
    Assumptions:
        Whitespace-only input counts as missing.
    Raises:
        ValidationError: If value is missing or blank.
    Side Effects:
        None.
    """
    if value is None:
        raise ValidationError(message)
    normalized = value.strip()
    if not normalized:
        raise ValidationError(message)
    return normalized

from __future__ import annotations

from dataclasses import dataclass

from beachguard.contexts.verification.domain.value_objects import ChallengeSubject, SubjectClass

OTP_CODE_DIGITS = 6


@dataclass(frozen=True, slots=True)
class ChallengeMetadata:
    """
    ChallengeMetadata — volunteer contact data carried with a pre-account challenge.
    """

    email: str
    name: str

    def __post_init__(self) -> None:
        if not self.email.strip():
            raise ValueError("ChallengeMetadata.email must be non-empty")
        if not self.name.strip():
            raise ValueError("ChallengeMetadata.name must be non-empty")


@dataclass(frozen=True, slots=True)
class OtpChallenge:
    """
    OtpChallenge — one outstanding verification attempt for a subject.

    At most one challenge exists per subject: issuance overwrites, verification
    consumes on match or on detected expiry, and nothing updates it in place.

    Related:
      - src/beachguard/contexts/verification/application/ports/otp_challenge_store.py
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
      - src/beachguard/contexts/verification/application/use_cases/verify_otp_challenge.py
    """

    subject: ChallengeSubject
    code: str
    expires_at_ms: int
    created_at_ms: int
    metadata: ChallengeMetadata | None = None

    def __post_init__(self) -> None:
        """
        Validate code shape, timestamps, and metadata ownership.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Timestamps are epoch milliseconds.
        Raises:
            ValueError: If code is not six digits, expiry is not after creation, or
                metadata is attached to a non-volunteer challenge.
        Side Effects:
            None.
        """
        if len(self.code) != OTP_CODE_DIGITS or not self.code.isdigit():
            raise ValueError("OtpChallenge.code must be a 6-digit numeric string")
        if self.created_at_ms < 0:
            raise ValueError("OtpChallenge.created_at_ms must be >= 0")
        if self.expires_at_ms <= self.created_at_ms:
            raise ValueError("OtpChallenge.expires_at_ms must be after created_at_ms")
        if self.metadata is not None and self.subject.subject_class is not SubjectClass.VOLUNTEER:
            raise ValueError("OtpChallenge.metadata is only valid for volunteer challenges")

    def is_expired(self, *, now_ms: int) -> bool:
        """
        Return whether challenge is past its absolute expiry.

        Args:
            now_ms: Current time in epoch milliseconds.
        Returns:
            bool: `True` strictly after `expires_at_ms`.
        Assumptions:
            Expiry instant itself is still inside the validity window.
        Raises:
            None.
        Side Effects:
            None.
        """
        return now_ms > self.expires_at_ms

    def matches(self, *, submitted_code: str) -> bool:
        """
        Compare submitted code with exact string equality.
        """
        return submitted_code == self.code

    def same_instance(self, other: OtpChallenge) -> bool:
        """
        Return whether `other` is the same issued challenge (not a re-issuance).

        Args:
            other: Challenge currently held by the store.
        Returns:
            bool: `True` when subject, code and creation timestamp are identical.
        Assumptions:
            Re-issuance always produces a new `(code, created_at_ms)` pair in practice;
            an identical pair is indistinguishable and treated as the same challenge.
        Raises:
            None.
        Side Effects:
            None.
        """
        return (
            self.subject == other.subject
            and self.code == other.code
            and self.created_at_ms == other.created_at_ms
        )

    def issued_to(self, email: str) -> bool:
        """
        Return whether this volunteer challenge was delivered to `email`.

        Args:
            email: Address recorded on an account profile.
        Returns:
            bool: `True` when the challenge metadata address equals `email` after
                trimming and case folding.
        Assumptions:
            Admin challenges carry no delivery address and never match.
        Raises:
            None.
        Side Effects:
            None.
        """
        if self.metadata is None:
            return False
        candidate = email.strip().casefold()
        return bool(candidate) and candidate == self.metadata.email.strip().casefold()

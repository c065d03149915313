from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_RESERVED_KEY_CHARS = re.compile(r"[.#$\[\]/]")


class SubjectClass(str, Enum):
    """
    SubjectClass — verification audience owning an OTP challenge.

    Related:
      - src/beachguard/contexts/verification/domain/entities/otp_challenge.py
      - src/beachguard/contexts/verification/application/services/email_templates.py
    """

    ADMIN = "admin"
    VOLUNTEER = "volunteer"


@dataclass(frozen=True, slots=True)
class ChallengeSubject:
    """
    ChallengeSubject — normalized identifier an OTP challenge is filed under.

    Admin subjects are keyed by user id. Volunteer subjects are keyed by email with
    key/value reserved characters substituted, since a prospective volunteer has no
    account yet and emails are not valid key segments.

    Related:
      - src/beachguard/contexts/verification/domain/entities/otp_challenge.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/
        otp_challenge_store.py
    """

    subject_class: SubjectClass
    key: str

    def __post_init__(self) -> None:
        """
        Validate subject class and key shape.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Keys are produced by `for_admin` / `for_volunteer` factories.
        Raises:
            ValueError: If key is blank or contains reserved key characters.
        Side Effects:
            None.
        """
        if not isinstance(self.subject_class, SubjectClass):
            raise ValueError(
                f"ChallengeSubject.subject_class must be SubjectClass, got {self.subject_class!r}"
            )
        if not self.key or self.key != self.key.strip():
            raise ValueError("ChallengeSubject.key must be non-empty and trimmed")
        if _RESERVED_KEY_CHARS.search(self.key):
            raise ValueError(f"ChallengeSubject.key contains reserved characters: {self.key!r}")

    @classmethod
    def for_admin(cls, user_id: str) -> ChallengeSubject:
        """
        Build admin subject keyed by stable user id.

        Args:
            user_id: Authenticated admin user id.
        Returns:
            ChallengeSubject: Admin subject.
        Assumptions:
            User ids never contain key/value reserved characters.
        Raises:
            ValueError: If user id is blank or malformed.
        Side Effects:
            None.
        """
        return cls(subject_class=SubjectClass.ADMIN, key=user_id.strip())

    @classmethod
    def for_volunteer(cls, email: str) -> ChallengeSubject:
        """
        Build volunteer subject keyed by normalized email.

        Args:
            email: Raw volunteer email.
        Returns:
            ChallengeSubject: Volunteer subject with sanitized key.
        Assumptions:
            Email addresses are case-insensitive for verification purposes.
        Raises:
            ValueError: If email is blank.
        Side Effects:
            None.
        """
        return cls(subject_class=SubjectClass.VOLUNTEER, key=sanitize_email_key(email))

    def __str__(self) -> str:
        return f"{self.subject_class.value}:{self.key}"


def sanitize_email_key(email: str) -> str:
    """
    Normalize email into a key segment safe for the verification store.

    Args:
        email: Raw email address.
    Returns:
        str: Lower-cased email with `. # $ [ ] /` replaced by `_`.
    Assumptions:
        Format validation happens before key derivation.
    Raises:
        None.
    Side Effects:
        None.
    """
    return _RESERVED_KEY_CHARS.sub("_", email.strip().lower())

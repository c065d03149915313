from __future__ import annotations

from typing import Protocol

from beachguard.contexts.verification.domain.entities import OtpChallenge
from beachguard.contexts.verification.domain.value_objects import ChallengeSubject


class OtpChallengeStore(Protocol):
    """
    OtpChallengeStore — key/value port holding at most one OTP challenge per subject.

    Related:
      - src/beachguard/contexts/verification/domain/entities/otp_challenge.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/
        otp_challenge_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/in_memory/
        otp_challenge_store.py
    """

    def get(self, *, subject: ChallengeSubject) -> OtpChallenge | None:
        """
        Read the live challenge for a subject.

        Args:
            subject: Challenge subject.
        Returns:
            OtpChallenge | None: Stored challenge or `None`.
        Assumptions:
            Expiry is evaluated by the caller, not by the store.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Reads one key.
        """
        ...

    def put(self, *, challenge: OtpChallenge) -> None:
        """
        Overwrite the subject's challenge with a fresh one.

        Args:
            challenge: Newly issued challenge.
        Returns:
            None.
        Assumptions:
            Overwrite semantics are intentional; no read-before-write.
        Raises:
            StoreUnavailableError: If the write is not durably recorded.
        Side Effects:
            Writes one key.
        """
        ...

    def delete_if_unchanged(self, *, challenge: OtpChallenge) -> bool:
        """
        Atomically delete the subject's challenge only if it is still `challenge`.

        Args:
            challenge: Challenge instance the caller checked.
        Returns:
            bool: `True` when this call removed the challenge, `False` when the key was
                already gone or holds a newer re-issued challenge.
        Assumptions:
            Identity is compared with `OtpChallenge.same_instance`.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Deletes at most one key.
        """
        ...

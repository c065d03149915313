from __future__ import annotations

from threading import Lock

from beachguard.contexts.verification.application.ports import OtpChallengeStore
from beachguard.contexts.verification.domain.entities import OtpChallenge
from beachguard.contexts.verification.domain.value_objects import ChallengeSubject


class InMemoryOtpChallengeStore(OtpChallengeStore):
    """
    InMemoryOtpChallengeStore — process-local challenge storage for dev and tests.

    Related:
      - src/beachguard/contexts/verification/application/ports/otp_challenge_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/
        otp_challenge_store.py
      - tests/unit/contexts/verification/application/test_verify_otp_challenge.py
    """

    def __init__(self) -> None:
        """
        Initialize empty storage guarded by a lock.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Instance is shared by request threads of one process.
        Raises:
            None.
        Side Effects:
            None.
        """
        self._lock = Lock()
        self._rows: dict[ChallengeSubject, OtpChallenge] = {}

    def get(self, *, subject: ChallengeSubject) -> OtpChallenge | None:
        with self._lock:
            return self._rows.get(subject)

    def put(self, *, challenge: OtpChallenge) -> None:
        with self._lock:
            self._rows[challenge.subject] = challenge

    def delete_if_unchanged(self, *, challenge: OtpChallenge) -> bool:
        """
        Delete stored challenge only when it is the same issued instance.

        Args:
            challenge: Challenge instance checked by the caller.
        Returns:
            bool: `True` when removed by this call.
        Assumptions:
            Lock makes check-and-delete atomic within the process.
        Raises:
            None.
        Side Effects:
            Mutates in-memory dictionary.
        """
        with self._lock:
            current = self._rows.get(challenge.subject)
            if current is None or not challenge.same_instance(current):
                return False
            del self._rows[challenge.subject]
            return True

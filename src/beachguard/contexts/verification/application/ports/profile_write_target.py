from __future__ import annotations

from typing import Protocol

from beachguard.contexts.verification.domain.value_objects import VerificationFlags


class ProfileWriteTarget(Protocol):
    """
    ProfileWriteTarget — destination of verification-flag merge writes.

    Related:
      - src/beachguard/contexts/verification/application/services/profile_write_targets.py
      - src/beachguard/contexts/verification/application/services/verification_mirror.py
    """

    @property
    def name(self) -> str:
        """
        Return stable target label used in logs and mirror outcomes.
        """
        ...

    def write_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        """
        Merge-write verification flags for one user.

        Args:
            uid: Stable user id.
            flags: Set-only flags.
        Returns:
            None.
        Assumptions:
            Writes are idempotent.
        Raises:
            StoreUnavailableError: If the target cannot be reached.
        Side Effects:
            Writes one record.
        """
        ...

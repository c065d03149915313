from __future__ import annotations

from typing import Protocol

from beachguard.contexts.verification.domain.entities import ProfileMirrorRecord
from beachguard.contexts.verification.domain.value_objects import VerificationFlags


class ProfileMirrorStore(Protocol):
    """
    ProfileMirrorStore — advisory per-user profile mirror in the verification store.

    Related:
      - src/beachguard/contexts/verification/domain/entities/profile_mirror_record.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/
        profile_mirror_store.py
      - src/beachguard/contexts/verification/application/services/profile_write_targets.py
    """

    def get_mirror(self, *, uid: str) -> ProfileMirrorRecord | None:
        """
        Read the mirror record for a user.

        Args:
            uid: Stable user id.
        Returns:
            ProfileMirrorRecord | None: Partial record or `None` when absent.
        Assumptions:
            Missing fields map to `None`.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Reads one key.
        """
        ...

    def merge_mirror_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        """
        Raise flags on the mirror record, creating it when absent.

        Args:
            uid: Stable user id.
            flags: Flags to raise.
        Returns:
            None.
        Assumptions:
            Only `True` values are written; existing fields are preserved.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Writes one key.
        """
        ...

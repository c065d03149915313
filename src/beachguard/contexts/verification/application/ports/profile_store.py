from __future__ import annotations

from datetime import datetime
from typing import Protocol

from beachguard.contexts.verification.domain.entities import UserProfile
from beachguard.contexts.verification.domain.value_objects import ProfileRole, VerificationFlags


class ProfileStore(Protocol):
    """
    ProfileStore — primary document-store port for durable profiles.

    Related:
      - src/beachguard/contexts/verification/domain/entities/user_profile.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/
        profile_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/in_memory/
        profile_store.py
    """

    def get_profile(self, *, uid: str) -> UserProfile | None:
        """
        Read one profile.

        Args:
            uid: Stable user id.
        Returns:
            UserProfile | None: Profile snapshot or `None` when not (yet) visible.
        Assumptions:
            Reads may lag behind account creation writes.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Reads one record.
        """
        ...

    def merge_profile(
        self,
        *,
        uid: str,
        flags: VerificationFlags | None,
        role: ProfileRole | None,
        updated_at: datetime,
    ) -> tuple[str, ...]:
        """
        Merge flags (set-only) and role (upgrade-only) into an existing profile.

        Args:
            uid: Stable user id.
            flags: Flags to raise, `None` to leave flags untouched.
            role: Role to apply, `None` to leave role untouched.
            updated_at: UTC timestamp of the write.
        Returns:
            tuple[str, ...]: Names of fields carried by the merge.
        Assumptions:
            Merge is idempotent; absent profiles are left absent.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
            SubjectNotFoundError: If no profile exists for `uid`.
        Side Effects:
            Writes at most one record.
        """
        ...

    def create_profile_if_absent(self, *, profile: UserProfile) -> UserProfile:
        """
        Insert profile unless one already exists, returning the stored snapshot.

        Args:
            profile: Candidate profile.
        Returns:
            UserProfile: Existing profile if present, otherwise `profile`.
        Assumptions:
            Concurrent creators converge on the first inserted row.
        Raises:
            StoreUnavailableError: If the store cannot be reached.
        Side Effects:
            Writes at most one record.
        """
        ...

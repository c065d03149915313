from __future__ import annotations

from datetime import datetime
from threading import Lock

from beachguard.contexts.verification.application.errors import SubjectNotFoundError
from beachguard.contexts.verification.application.ports import ProfileStore
from beachguard.contexts.verification.domain.entities import UserProfile
from beachguard.contexts.verification.domain.value_objects import (
    ProfileRole,
    VerificationFlags,
    merged_field_names,
)


class InMemoryProfileStore(ProfileStore):
    """
    InMemoryProfileStore — process-local profile storage with merge semantics.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/
        profile_store.py
    """

    def __init__(self, *, profiles: tuple[UserProfile, ...] = ()) -> None:
        self._lock = Lock()
        self._rows: dict[str, UserProfile] = {profile.uid: profile for profile in profiles}

    def get_profile(self, *, uid: str) -> UserProfile | None:
        with self._lock:
            return self._rows.get(uid)

    def merge_profile(
        self,
        *,
        uid: str,
        flags: VerificationFlags | None,
        role: ProfileRole | None,
        updated_at: datetime,
    ) -> tuple[str, ...]:
        """
        Apply set-only flag merge and upgrade-only role merge to an existing profile.

        Args:
            uid: Stable user id.
            flags: Flags to raise or `None`.
            role: Role to apply or `None`.
            updated_at: UTC write timestamp.
        Returns:
            tuple[str, ...]: Field names carried by the merge.
        Assumptions:
            None.
        Raises:
            SubjectNotFoundError: If profile is absent.
        Side Effects:
            Replaces stored snapshot.
        """
        with self._lock:
            existing = self._rows.get(uid)
            if existing is None:
                raise SubjectNotFoundError()
            self._rows[uid] = existing.merged(flags=flags, role=role, updated_at=updated_at)
        return merged_field_names(flags=flags, role=role)

    def create_profile_if_absent(self, *, profile: UserProfile) -> UserProfile:
        with self._lock:
            existing = self._rows.get(profile.uid)
            if existing is not None:
                return existing
            self._rows[profile.uid] = profile
            return profile

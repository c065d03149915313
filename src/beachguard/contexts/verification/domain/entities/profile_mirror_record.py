from __future__ import annotations

from dataclasses import dataclass

from beachguard.contexts.verification.domain.value_objects import ProfileRole


@dataclass(frozen=True, slots=True)
class ProfileMirrorRecord:
    """
    ProfileMirrorRecord — advisory per-user profile copy held in the verification store.

    Written by signup flows and by the mirror fallback path. Every field is optional
    because the record is partial by nature; reconciliation only copies what is set.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_mirror_store.py
      - src/beachguard/contexts/verification/application/use_cases/sync_verification_mirror.py
      - src/beachguard/contexts/verification/application/use_cases/ensure_profile.py
    """

    uid: str
    role: ProfileRole | None = None
    is_verified: bool | None = None
    is_admin_verified: bool | None = None
    email: str | None = None
    full_name: str | None = None

    def __post_init__(self) -> None:
        if not self.uid.strip():
            raise ValueError("ProfileMirrorRecord.uid must be non-empty")

    def is_empty(self) -> bool:
        return (
            self.role is None
            and self.is_verified is None
            and self.is_admin_verified is None
            and not self.email
            and not self.full_name
        )

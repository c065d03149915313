from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from beachguard.contexts.verification.domain.entities.user_profile import UserProfile

_DEFAULT_NGO_NAME = "Unknown NGO"


@dataclass(frozen=True, slots=True)
class NgoEntry:
    """
    NgoEntry — public NGO directory row mirrored from a verified admin profile.

    Related:
      - src/beachguard/contexts/verification/application/ports/ngo_store.py
      - src/beachguard/contexts/verification/application/use_cases/mirror_ngo_entry.py
      - alembic/versions/20261017_0002_ngo_directory.py
    """

    uid: str
    ngo_name: str
    admin_name: str
    avatar_url: str
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.uid.strip():
            raise ValueError("NgoEntry.uid must be non-empty")
        if not self.ngo_name.strip():
            raise ValueError("NgoEntry.ngo_name must be non-empty")

    @classmethod
    def from_admin_profile(cls, *, profile: UserProfile, updated_at: datetime) -> NgoEntry:
        """
        Project an admin profile into its NGO directory row.

        Args:
            profile: Admin profile snapshot.
            updated_at: UTC timestamp of the mirror write.
        Returns:
            NgoEntry: Directory row keyed by the admin uid.
        Assumptions:
            Blank `ngo_name` falls back to the admin full name, then to `Unknown NGO`.
            Admin name and avatar are stored as empty strings when unset.
        Raises:
            ValueError: If profile uid is blank.
        Side Effects:
            None.
        """
        return cls(
            uid=profile.uid,
            ngo_name=(
                profile.ngo_name.strip() or profile.full_name.strip() or _DEFAULT_NGO_NAME
            ),
            admin_name=profile.full_name.strip(),
            avatar_url=profile.avatar_url.strip(),
            updated_at=updated_at,
        )

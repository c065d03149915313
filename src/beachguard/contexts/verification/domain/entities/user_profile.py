from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from beachguard.contexts.verification.domain.value_objects import (
    ProfileRole,
    VerificationFlags,
    merge_roles,
)


@dataclass(frozen=True, slots=True)
class UserProfile:
    """
    UserProfile — durable profile snapshot owned by the primary profile store.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/
        profile_store.py
      - alembic/versions/20261017_0001_verification_profiles_v1.py
    """

    uid: str
    email: str
    full_name: str
    role: ProfileRole
    is_verified: bool
    is_admin_verified: bool
    points: int
    avatar_url: str
    created_at: datetime
    updated_at: datetime
    ngo_name: str = ""

    def __post_init__(self) -> None:
        """
        Validate profile invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Timestamps are timezone-aware UTC datetimes.
        Raises:
            ValueError: If uid is blank, admin verification is set without general
                verification, points are negative, or timestamps are invalid.
        Side Effects:
            None.
        """
        if not self.uid.strip():
            raise ValueError("UserProfile.uid must be non-empty")
        if not isinstance(self.role, ProfileRole):
            raise ValueError(f"UserProfile.role must be ProfileRole, got {self.role!r}")
        if self.is_admin_verified and not self.is_verified:
            raise ValueError("UserProfile.is_admin_verified requires is_verified")
        if self.points < 0:
            raise ValueError("UserProfile.points must be >= 0")
        _ensure_utc_datetime(name="created_at", value=self.created_at)
        _ensure_utc_datetime(name="updated_at", value=self.updated_at)
        if self.updated_at < self.created_at:
            raise ValueError("UserProfile.updated_at cannot be before created_at")

    def flags(self) -> VerificationFlags:
        return VerificationFlags(
            is_verified=self.is_verified,
            is_admin_verified=self.is_admin_verified,
        )

    def grants_admin_access(self) -> bool:
        """
        Return whether this profile may use admin-only endpoints.

        Args:
            None.
        Returns:
            bool: `True` only for role `admin` with `is_admin_verified` set.
        Assumptions:
            `is_admin_verified` on a volunteer profile grants nothing.
        Raises:
            None.
        Side Effects:
            None.
        """
        return self.role is ProfileRole.ADMIN and self.is_admin_verified

    def merged(
        self,
        *,
        flags: VerificationFlags | None = None,
        role: ProfileRole | None = None,
        updated_at: datetime,
    ) -> UserProfile:
        """
        Return copy with set-only flag merge and upgrade-only role merge applied.

        Args:
            flags: Flags carried by the write, `None` to keep flags untouched.
            role: Role carried by the write, `None` to keep role untouched.
            updated_at: UTC timestamp of this write.
        Returns:
            UserProfile: Merged profile snapshot.
        Assumptions:
            Merge never lowers a flag and never downgrades `admin`.
        Raises:
            ValueError: If `updated_at` breaks timestamp invariants.
        Side Effects:
            None.
        """
        is_verified = self.is_verified
        is_admin_verified = self.is_admin_verified
        if flags is not None:
            is_verified = is_verified or flags.is_verified
            is_admin_verified = is_admin_verified or bool(flags.is_admin_verified)
        effective_role = merge_roles(current=self.role, incoming=role) or self.role
        return replace(
            self,
            role=effective_role,
            is_verified=is_verified,
            is_admin_verified=is_admin_verified,
            updated_at=max(updated_at, self.created_at),
        )


def _ensure_utc_datetime(*, name: str, value: datetime) -> None:
    """
    Validate timezone awareness and UTC offset for datetime fields.

    Args:
        name: Field name for deterministic error messages.
        value: Datetime value to validate.
    Returns:
        None.
    Assumptions:
        UTC datetimes are represented with timezone info and zero offset.
    Raises:
        ValueError: If datetime is naive or not in UTC.
    Side Effects:
        None.
    """
    offset = value.utcoffset()
    if value.tzinfo is None or offset is None:
        raise ValueError(f"{name} must be timezone-aware UTC datetime")
    if offset.total_seconds() != 0:
        raise ValueError(f"{name} must be UTC datetime")

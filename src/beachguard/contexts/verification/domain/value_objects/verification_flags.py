from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProfileRole(str, Enum):
    """
    ProfileRole — durable profile role.
    """

    VOLUNTEER = "volunteer"
    ADMIN = "admin"

    @classmethod
    def parse(cls, raw_value: object) -> ProfileRole | None:
        """
        Parse role from loosely-typed storage value.

        Args:
            raw_value: Stored role value (string or `None`).
        Returns:
            ProfileRole | None: Parsed role or `None` for absent/unknown values.
        Assumptions:
            Unknown roles are treated as absent rather than errors.
        Raises:
            None.
        Side Effects:
            None.
        """
        if not isinstance(raw_value, str):
            return None
        normalized = raw_value.strip().lower()
        for role in cls:
            if role.value == normalized:
                return role
        return None


def merge_roles(*, current: ProfileRole | None, incoming: ProfileRole | None) -> ProfileRole | None:
    """
    Merge two roles without ever downgrading `admin`.

    Args:
        current: Role already stored.
        incoming: Role carried by the write.
    Returns:
        ProfileRole | None: Effective role after merge.
    Assumptions:
        Revocation of admin role is out of scope for this subsystem.
    Raises:
        None.
    Side Effects:
        None.
    """
    if current is ProfileRole.ADMIN or incoming is None:
        return current
    return incoming


@dataclass(frozen=True, slots=True)
class VerificationFlags:
    """
    VerificationFlags — set-only verification flags merged into profile stores.

    `None` means "not carried by this write"; `True` raises the flag. Merges never
    lower a flag, which makes every write idempotent.

    Related:
      - src/beachguard/contexts/verification/application/services/verification_mirror.py
      - src/beachguard/contexts/verification/application/ports/profile_store.py
      - src/beachguard/contexts/verification/domain/entities/user_profile.py
    """

    is_verified: bool
    is_admin_verified: bool | None = None

    def __post_init__(self) -> None:
        """
        Enforce that admin verification always implies general verification.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            None.
        Raises:
            ValueError: If `is_admin_verified` is true while `is_verified` is false.
        Side Effects:
            None.
        """
        if self.is_admin_verified and not self.is_verified:
            raise ValueError("VerificationFlags.is_admin_verified requires is_verified")

    @classmethod
    def for_role(cls, role: ProfileRole | None) -> VerificationFlags:
        """
        Build the flag set produced by a successful verification for given role.

        Args:
            role: Resolved profile role, `None` when unknown.
        Returns:
            VerificationFlags: `{is_verified, is_admin_verified}` for admins,
                `{is_verified}` otherwise.
        Assumptions:
            Unknown role is mirrored as a plain verified account.
        Raises:
            None.
        Side Effects:
            None.
        """
        if role is ProfileRole.ADMIN:
            return cls(is_verified=True, is_admin_verified=True)
        return cls(is_verified=True)

    def field_names(self) -> tuple[str, ...]:
        """
        Return names of flags carried by this write.
        """
        if self.is_admin_verified is None:
            return ("is_verified",)
        return ("is_verified", "is_admin_verified")


def merged_field_names(
    *,
    flags: VerificationFlags | None,
    role: ProfileRole | None,
) -> tuple[str, ...]:
    """
    Return profile fields written by a merge carrying `flags` and `role`.

    Args:
        flags: Flags carried by the merge or `None`.
        role: Role carried by the merge or `None`.
    Returns:
        tuple[str, ...]: Ordered field names, always ending with `updated_at`.
    Assumptions:
        Every merge refreshes `updated_at`.
    Raises:
        None.
    Side Effects:
        None.
    """
    fields: tuple[str, ...] = ()
    if role is not None:
        fields += ("role",)
    if flags is not None:
        fields += flags.field_names()
    return fields + ("updated_at",)

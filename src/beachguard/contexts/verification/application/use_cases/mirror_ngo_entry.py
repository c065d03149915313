from __future__ import annotations

import logging
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import (
    AdminAccessDeniedError,
    StoreUnavailableError,
    SubjectNotFoundError,
    ValidationError,
)
from beachguard.contexts.verification.application.ports import (
    NgoStore,
    ProfileStore,
    VerificationClock,
)
from beachguard.contexts.verification.domain.entities import NgoEntry, UserProfile
from beachguard.contexts.verification.domain.value_objects import ProfileRole

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MirrorNgoEntryResult:
    """
    MirrorNgoEntryResult — written directory row and the store that accepted it.
    """

    entry: NgoEntry
    fallback_used: bool


class MirrorNgoEntryUseCase:
    """
    MirrorNgoEntryUseCase — publish a verified admin profile into the NGO directory.

    Only profiles with role `admin` and `is_admin_verified` may publish. The row is
    written to the primary directory store; when that store is unreachable the same
    row is written to the fallback store instead.

    Related:
      - src/beachguard/contexts/verification/application/ports/ngo_store.py
      - src/beachguard/contexts/verification/domain/entities/ngo_entry.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/ngo_directory.py
    """

    def __init__(
        self,
        *,
        profile_store: ProfileStore,
        primary_store: NgoStore,
        fallback_store: NgoStore,
        clock: VerificationClock,
    ) -> None:
        if profile_store is None:  # type: ignore[truthy-bool]
            raise ValueError("MirrorNgoEntryUseCase requires profile_store")
        if primary_store is None:  # type: ignore[truthy-bool]
            raise ValueError("MirrorNgoEntryUseCase requires primary_store")
        if fallback_store is None:  # type: ignore[truthy-bool]
            raise ValueError("MirrorNgoEntryUseCase requires fallback_store")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("MirrorNgoEntryUseCase requires clock")
        self._profile_store = profile_store
        self._primary_store = primary_store
        self._fallback_store = fallback_store
        self._clock = clock

    def mirror(self, *, uid: str) -> MirrorNgoEntryResult:
        """
        Check admin access for `uid` and upsert its NGO directory row.

        Args:
            uid: Authenticated admin user id.
        Returns:
            MirrorNgoEntryResult: Written row and whether the fallback store took it.
        Assumptions:
            Access is decided on the durable profile only; the advisory mirror
            record never grants admin access.
        Raises:
            ValidationError: If uid is missing.
            SubjectNotFoundError: If no profile exists for uid.
            AdminAccessDeniedError: If the profile is not a verified admin.
            StoreUnavailableError: If the profile store or both directory stores fail.
        Side Effects:
            Reads one profile and writes one directory row.
        """
        if uid is None or not uid.strip():
            raise ValidationError("uid is required")
        normalized_uid = uid.strip()

        profile = self._profile_store.get_profile(uid=normalized_uid)
        if profile is None:
            raise SubjectNotFoundError("User profile not found.")
        _ensure_admin_access(profile=profile)

        entry = NgoEntry.from_admin_profile(profile=profile, updated_at=self._clock.now())
        try:
            self._primary_store.upsert_entry(entry=entry)
        except StoreUnavailableError as error:
            log.warning(
                "primary ngo directory write failed, using fallback uid=%s error=%s",
                normalized_uid,
                error.message,
            )
            self._fallback_store.upsert_entry(entry=entry)
            return MirrorNgoEntryResult(entry=entry, fallback_used=True)
        log.info("ngo directory entry mirrored uid=%s", normalized_uid)
        return MirrorNgoEntryResult(entry=entry, fallback_used=False)


def _ensure_admin_access(*, profile: UserProfile) -> None:
    if profile.role is not ProfileRole.ADMIN:
        log.warning("ngo directory write refused, not an admin uid=%s", profile.uid)
        raise AdminAccessDeniedError("Admin access required.")
    if not profile.grants_admin_access():
        log.warning("ngo directory write refused, admin not verified uid=%s", profile.uid)
        raise AdminAccessDeniedError("Admin verification required.")

from __future__ import annotations

import logging
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import (
    StoreUnavailableError,
    ValidationError,
)
from beachguard.contexts.verification.application.ports import (
    ProfileMirrorStore,
    ProfileStore,
    VerificationClock,
)
from beachguard.contexts.verification.domain.entities import ProfileMirrorRecord, UserProfile
from beachguard.contexts.verification.domain.value_objects import ProfileRole

log = logging.getLogger(__name__)

_DEFAULT_FULL_NAME = "User"


@dataclass(frozen=True, slots=True)
class EnsureProfileResult:
    """
    EnsureProfileResult — stored profile plus whether this call created it.
    """

    profile: UserProfile
    created: bool


class EnsureProfileUseCase:
    """
    EnsureProfileUseCase — return existing profile or provision one from the mirror record.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_store.py
      - src/beachguard/contexts/verification/application/ports/profile_mirror_store.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/profile_sync.py
    """

    def __init__(
        self,
        *,
        profile_store: ProfileStore,
        mirror_store: ProfileMirrorStore,
        clock: VerificationClock,
    ) -> None:
        if profile_store is None:  # type: ignore[truthy-bool]
            raise ValueError("EnsureProfileUseCase requires profile_store")
        if mirror_store is None:  # type: ignore[truthy-bool]
            raise ValueError("EnsureProfileUseCase requires mirror_store")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("EnsureProfileUseCase requires clock")
        self._profile_store = profile_store
        self._mirror_store = mirror_store
        self._clock = clock

    def ensure(
        self,
        *,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
    ) -> EnsureProfileResult:
        """
        Provision profile if absent using request data and mirror record.

        Args:
            uid: Stable user id.
            email: Optional account email.
            display_name: Optional display name.
        Returns:
            EnsureProfileResult: Existing or newly created profile.
        Assumptions:
            Insert-if-absent makes concurrent calls converge on one record.
        Raises:
            ValidationError: If uid is missing.
            StoreUnavailableError: If the profile store cannot persist the record.
        Side Effects:
            Reads mirror record and inserts at most one profile.
        """
        if uid is None or not uid.strip():
            raise ValidationError("uid is required")
        normalized_uid = uid.strip()

        try:
            existing = self._profile_store.get_profile(uid=normalized_uid)
        except StoreUnavailableError as error:
            log.warning(
                "profile existence check failed uid=%s error=%s",
                normalized_uid,
                error.message,
            )
            existing = None
        if existing is not None:
            return EnsureProfileResult(profile=existing, created=False)

        record = self._read_mirror(uid=normalized_uid)
        candidate = self._build_profile(
            uid=normalized_uid,
            email=email,
            display_name=display_name,
            record=record,
        )
        stored = self._profile_store.create_profile_if_absent(profile=candidate)
        created = stored == candidate
        log.info(
            "profile ensured uid=%s role=%s created=%s",
            normalized_uid,
            stored.role.value,
            created,
        )
        return EnsureProfileResult(profile=stored, created=created)

    def _read_mirror(self, *, uid: str) -> ProfileMirrorRecord | None:
        try:
            record = self._mirror_store.get_mirror(uid=uid)
        except StoreUnavailableError as error:
            log.warning("profile mirror read failed uid=%s error=%s", uid, error.message)
            return None
        if record is None:
            log.warning("no profile mirror record, creating volunteer profile uid=%s", uid)
        return record

    def _build_profile(
        self,
        *,
        uid: str,
        email: str | None,
        display_name: str | None,
        record: ProfileMirrorRecord | None,
    ) -> UserProfile:
        """
        Build candidate profile preferring request values over mirror values.

        Args:
            uid: Stable user id.
            email: Optional request email.
            display_name: Optional request display name.
            record: Mirror record or `None`.
        Returns:
            UserProfile: Candidate profile with normalized flags.
        Assumptions:
            Missing role defaults to volunteer; admin verification implies verified.
        Raises:
            ValueError: If assembled values break profile invariants.
        Side Effects:
            None.
        """
        now = self._clock.now()
        role = ProfileRole.VOLUNTEER
        is_admin_verified = False
        is_verified = False
        mirror_email = None
        mirror_name = None
        if record is not None:
            role = record.role or ProfileRole.VOLUNTEER
            is_admin_verified = record.is_admin_verified is True
            is_verified = record.is_verified is True or is_admin_verified
            mirror_email = record.email
            mirror_name = record.full_name
        return UserProfile(
            uid=uid,
            email=_first_non_blank(email, mirror_email) or "",
            full_name=_first_non_blank(display_name, mirror_name) or _DEFAULT_FULL_NAME,
            role=role,
            is_verified=is_verified,
            is_admin_verified=is_admin_verified,
            points=0,
            avatar_url="",
            created_at=now,
            updated_at=now,
        )


def _first_non_blank(*values: str | None) -> str | None:
    for value in values:
        if value is not None and value.strip():
            return value.strip()
    return None

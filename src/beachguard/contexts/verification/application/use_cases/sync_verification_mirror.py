from __future__ import annotations

import logging
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import ValidationError
from beachguard.contexts.verification.application.ports import (
    ProfileMirrorStore,
    ProfileStore,
    VerificationClock,
)
from beachguard.contexts.verification.domain.entities import ProfileMirrorRecord
from beachguard.contexts.verification.domain.value_objects import VerificationFlags

log = logging.getLogger(__name__)

NO_MIRROR_RECORD = "no_mirror_record"
NO_FIELDS_TO_SYNC = "no_fields_to_sync"


@dataclass(frozen=True, slots=True)
class SyncVerificationMirrorResult:
    """
    SyncVerificationMirrorResult — reconciliation outcome for one user.

    Related:
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/profile_sync.py
    """

    success: bool
    patched: tuple[str, ...] = ()
    reason: str | None = None


class SyncVerificationMirrorUseCase:
    """
    SyncVerificationMirrorUseCase — reconcile advisory mirror flags back into profile store.

    Carries over writes that landed on the fallback target while the profile store was
    unreachable. Only raising merges are applied: flags that are `True` and a role that
    does not downgrade `admin`.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_mirror_store.py
      - src/beachguard/contexts/verification/application/services/profile_write_targets.py
      - src/beachguard/contexts/verification/application/use_cases/load_session_profile.py
    """

    def __init__(
        self,
        *,
        mirror_store: ProfileMirrorStore,
        profile_store: ProfileStore,
        clock: VerificationClock,
    ) -> None:
        if mirror_store is None:  # type: ignore[truthy-bool]
            raise ValueError("SyncVerificationMirrorUseCase requires mirror_store")
        if profile_store is None:  # type: ignore[truthy-bool]
            raise ValueError("SyncVerificationMirrorUseCase requires profile_store")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("SyncVerificationMirrorUseCase requires clock")
        self._mirror_store = mirror_store
        self._profile_store = profile_store
        self._clock = clock

    def sync(self, *, uid: str) -> SyncVerificationMirrorResult:
        """
        Copy role and raised flags from mirror record into the profile store.

        Args:
            uid: Stable user id.
        Returns:
            SyncVerificationMirrorResult: Patched field names or skip reason.
        Assumptions:
            A `False` flag in the mirror is never propagated.
        Raises:
            ValidationError: If uid is missing.
            StoreUnavailableError: If either store cannot be reached.
            SubjectNotFoundError: If profile store has no record for uid.
        Side Effects:
            Reads mirror record and merge-writes the profile.
        """
        if uid is None or not uid.strip():
            raise ValidationError("uid is required")
        normalized_uid = uid.strip()

        record = self._mirror_store.get_mirror(uid=normalized_uid)
        if record is None:
            return SyncVerificationMirrorResult(success=False, reason=NO_MIRROR_RECORD)

        flags = _raised_flags(record=record)
        if record.role is None and flags is None:
            return SyncVerificationMirrorResult(success=False, reason=NO_FIELDS_TO_SYNC)

        patched = self._profile_store.merge_profile(
            uid=normalized_uid,
            flags=flags,
            role=record.role,
            updated_at=self._clock.now(),
        )
        log.info(
            "verification mirror reconciled uid=%s patched=%s",
            normalized_uid,
            ",".join(patched),
        )
        return SyncVerificationMirrorResult(success=True, patched=patched)


def _raised_flags(*, record: ProfileMirrorRecord) -> VerificationFlags | None:
    """
    Extract set-only flags from mirror record.

    Args:
        record: Mirror record.
    Returns:
        VerificationFlags | None: Raised flags, or `None` when none are `True`.
    Assumptions:
        Admin verification implies general verification.
    Raises:
        None.
    Side Effects:
        None.
    """
    if record.is_admin_verified is True:
        return VerificationFlags(is_verified=True, is_admin_verified=True)
    if record.is_verified is True:
        return VerificationFlags(is_verified=True)
    return None

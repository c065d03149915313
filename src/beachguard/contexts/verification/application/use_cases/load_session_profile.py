from __future__ import annotations

import logging

from beachguard.contexts.verification.application.errors import VerificationOperationError
from beachguard.contexts.verification.application.services import ProfileReplicationReader
from beachguard.contexts.verification.application.use_cases.ensure_profile import (
    EnsureProfileUseCase,
)
from beachguard.contexts.verification.application.use_cases.sync_verification_mirror import (
    SyncVerificationMirrorUseCase,
)
from beachguard.contexts.verification.domain.entities import UserProfile

log = logging.getLogger(__name__)


class LoadSessionProfileUseCase:
    """
    LoadSessionProfileUseCase — session-start profile resolution with degraded fallback.

    Steps: best-effort mirror reconciliation, bounded-retry read, then a final
    provisioning attempt. Returning `None` is a valid "authenticated without profile"
    state and never an error.

    Related:
      - src/beachguard/contexts/verification/application/services/profile_replication_reader.py
      - src/beachguard/contexts/verification/application/use_cases/sync_verification_mirror.py
      - src/beachguard/contexts/verification/application/use_cases/ensure_profile.py
    """

    def __init__(
        self,
        *,
        sync_use_case: SyncVerificationMirrorUseCase,
        reader: ProfileReplicationReader,
        ensure_use_case: EnsureProfileUseCase,
    ) -> None:
        if sync_use_case is None:  # type: ignore[truthy-bool]
            raise ValueError("LoadSessionProfileUseCase requires sync_use_case")
        if reader is None:  # type: ignore[truthy-bool]
            raise ValueError("LoadSessionProfileUseCase requires reader")
        if ensure_use_case is None:  # type: ignore[truthy-bool]
            raise ValueError("LoadSessionProfileUseCase requires ensure_use_case")
        self._sync_use_case = sync_use_case
        self._reader = reader
        self._ensure_use_case = ensure_use_case

    def load(
        self,
        *,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
    ) -> UserProfile | None:
        """
        Resolve profile for a freshly authenticated session.

        Args:
            uid: Authenticated user id.
            email: Optional account email forwarded to provisioning.
            display_name: Optional display name forwarded to provisioning.
        Returns:
            UserProfile | None: Profile or `None` in degraded state.
        Assumptions:
            Uid was validated by the inbound adapter.
        Raises:
            None.
        Side Effects:
            May merge-write, read with sleeps, and insert a profile.
        """
        try:
            self._sync_use_case.sync(uid=uid)
        except VerificationOperationError as error:
            log.info("session sync skipped uid=%s error=%s", uid, error.code)

        profile = self._reader.read(uid=uid)
        if profile is not None:
            return profile

        try:
            return self._ensure_use_case.ensure(
                uid=uid,
                email=email,
                display_name=display_name,
            ).profile
        except VerificationOperationError as error:
            log.warning("session profile provisioning failed uid=%s error=%s", uid, error.code)
            return None

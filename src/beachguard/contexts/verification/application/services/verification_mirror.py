from __future__ import annotations

import logging

from beachguard.contexts.verification.application.services.profile_write_targets import (
    MirrorWriteOutcome,
    PrimaryWithFallbackWriteTarget,
)
from beachguard.contexts.verification.domain.value_objects import ProfileRole, VerificationFlags

log = logging.getLogger(__name__)


class VerificationMirror:
    """
    VerificationMirror — propagates a successful verification into profile storage.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/verify_otp_challenge.py
      - src/beachguard/contexts/verification/application/services/profile_write_targets.py
      - src/beachguard/contexts/verification/domain/value_objects/verification_flags.py
    """

    def __init__(self, *, write_target: PrimaryWithFallbackWriteTarget) -> None:
        if write_target is None:  # type: ignore[truthy-bool]
            raise ValueError("VerificationMirror requires write_target")
        self._write_target = write_target

    def mirror(
        self,
        *,
        uid: str,
        role: ProfileRole | None,
        flags: VerificationFlags | None = None,
    ) -> MirrorWriteOutcome:
        """
        Merge-write verification flags, by default the ones implied by role.

        Args:
            uid: Verified user id.
            role: Resolved profile role, `None` when lookup failed.
            flags: Explicit flag set overriding the role-derived one.
        Returns:
            MirrorWriteOutcome: Write result, never raises for store failures.
        Assumptions:
            Verification already consumed the challenge; this write is best-effort.
        Raises:
            None.
        Side Effects:
            Writes verification flags into primary or fallback profile record.
        """
        effective_flags = flags if flags is not None else VerificationFlags.for_role(role)
        outcome = self._write_target.write(uid=uid, flags=effective_flags)
        log.info(
            "verification mirrored uid=%s role=%s target=%s fallback_used=%s",
            uid,
            role.value if role is not None else "unknown",
            outcome.target,
            outcome.fallback_used,
        )
        return outcome

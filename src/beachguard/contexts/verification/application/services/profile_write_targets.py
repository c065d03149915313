from __future__ import annotations

import logging
from dataclasses import dataclass

from beachguard.contexts.verification.application.errors import (
    StoreUnavailableError,
    SubjectNotFoundError,
)
from beachguard.contexts.verification.application.ports import (
    ProfileMirrorStore,
    ProfileStore,
    ProfileWriteTarget,
    VerificationClock,
)
from beachguard.contexts.verification.domain.value_objects import VerificationFlags

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MirrorWriteOutcome:
    """
    MirrorWriteOutcome — which target accepted a flag merge, if any.

    Related:
      - src/beachguard/contexts/verification/application/services/verification_mirror.py
    """

    uid: str
    fields: tuple[str, ...]
    target: str | None
    fallback_used: bool

    @property
    def written(self) -> bool:
        return self.target is not None


class ProfileStoreWriteTarget:
    """
    ProfileStoreWriteTarget — primary target merging flags into the durable profile store.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_store.py
      - src/beachguard/contexts/verification/application/services/verification_mirror.py
    """

    def __init__(self, *, profile_store: ProfileStore, clock: VerificationClock) -> None:
        if profile_store is None:  # type: ignore[truthy-bool]
            raise ValueError("ProfileStoreWriteTarget requires profile_store")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("ProfileStoreWriteTarget requires clock")
        self._profile_store = profile_store
        self._clock = clock

    @property
    def name(self) -> str:
        return "profile_store"

    def write_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        self._profile_store.merge_profile(
            uid=uid,
            flags=flags,
            role=None,
            updated_at=self._clock.now(),
        )


class ProfileMirrorWriteTarget:
    """
    ProfileMirrorWriteTarget — secondary target raising flags on the advisory mirror record.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_mirror_store.py
      - src/beachguard/contexts/verification/application/use_cases/sync_verification_mirror.py
    """

    def __init__(self, *, mirror_store: ProfileMirrorStore) -> None:
        if mirror_store is None:  # type: ignore[truthy-bool]
            raise ValueError("ProfileMirrorWriteTarget requires mirror_store")
        self._mirror_store = mirror_store

    @property
    def name(self) -> str:
        return "profile_mirror"

    def write_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        self._mirror_store.merge_mirror_flags(uid=uid, flags=flags)


class PrimaryWithFallbackWriteTarget:
    """
    PrimaryWithFallbackWriteTarget — write composition retrying one merge on a secondary.

    The primary write is attempted first. When the primary is unreachable, or does not
    hold the profile yet, the identical merge is written to the fallback so that a
    later reconciliation can carry it over. Fallback failures are logged and absorbed.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_write_target.py
      - src/beachguard/contexts/verification/application/services/verification_mirror.py
      - src/beachguard/contexts/verification/application/use_cases/sync_verification_mirror.py
    """

    def __init__(self, *, primary: ProfileWriteTarget, fallback: ProfileWriteTarget) -> None:
        """
        Initialize composition with primary and fallback targets.

        Args:
            primary: Authoritative write target.
            fallback: Advisory write target used when primary rejects the write.
        Returns:
            None.
        Assumptions:
            Both targets implement idempotent set-only merges.
        Raises:
            ValueError: If one of targets is missing.
        Side Effects:
            None.
        """
        if primary is None:  # type: ignore[truthy-bool]
            raise ValueError("PrimaryWithFallbackWriteTarget requires primary")
        if fallback is None:  # type: ignore[truthy-bool]
            raise ValueError("PrimaryWithFallbackWriteTarget requires fallback")
        self._primary = primary
        self._fallback = fallback

    @property
    def name(self) -> str:
        return f"{self._primary.name}+{self._fallback.name}"

    def write_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        self.write(uid=uid, flags=flags)

    def write(self, *, uid: str, flags: VerificationFlags) -> MirrorWriteOutcome:
        """
        Merge flags into primary, falling back to secondary on store failure.

        Args:
            uid: Stable user id.
            flags: Set-only verification flags.
        Returns:
            MirrorWriteOutcome: Accepting target, or `target=None` when both failed.
        Assumptions:
            Only store unavailability and a missing primary record trigger fallback.
        Raises:
            None.
        Side Effects:
            Writes one or two records, emits warning/exception logs on fallback paths.
        """
        fields = flags.field_names()
        try:
            self._primary.write_flags(uid=uid, flags=flags)
            return MirrorWriteOutcome(
                uid=uid,
                fields=fields,
                target=self._primary.name,
                fallback_used=False,
            )
        except (StoreUnavailableError, SubjectNotFoundError) as error:
            log.warning(
                "primary profile write failed, using fallback uid=%s primary=%s fallback=%s "
                "error=%s",
                uid,
                self._primary.name,
                self._fallback.name,
                error.code,
            )

        try:
            self._fallback.write_flags(uid=uid, flags=flags)
        except Exception:  # noqa: BLE001
            log.exception(
                "fallback profile write failed uid=%s fallback=%s fields=%s",
                uid,
                self._fallback.name,
                ",".join(fields),
            )
            return MirrorWriteOutcome(uid=uid, fields=fields, target=None, fallback_used=True)
        return MirrorWriteOutcome(
            uid=uid,
            fields=fields,
            target=self._fallback.name,
            fallback_used=True,
        )

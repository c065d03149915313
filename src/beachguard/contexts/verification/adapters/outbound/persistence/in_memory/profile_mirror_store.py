from __future__ import annotations

from dataclasses import replace
from threading import Lock

from beachguard.contexts.verification.application.ports import ProfileMirrorStore
from beachguard.contexts.verification.domain.entities import ProfileMirrorRecord
from beachguard.contexts.verification.domain.value_objects import VerificationFlags


class InMemoryProfileMirrorStore(ProfileMirrorStore):
    """
    InMemoryProfileMirrorStore — process-local advisory profile mirror for dev and tests.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_mirror_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/
        profile_mirror_store.py
    """

    def __init__(self, *, records: tuple[ProfileMirrorRecord, ...] = ()) -> None:
        self._lock = Lock()
        self._rows: dict[str, ProfileMirrorRecord] = {record.uid: record for record in records}

    def get_mirror(self, *, uid: str) -> ProfileMirrorRecord | None:
        with self._lock:
            return self._rows.get(uid)

    def merge_mirror_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        with self._lock:
            existing = self._rows.get(uid) or ProfileMirrorRecord(uid=uid)
            merged = existing
            if flags.is_verified:
                merged = replace(merged, is_verified=True)
            if flags.is_admin_verified:
                merged = replace(merged, is_admin_verified=True)
            self._rows[uid] = merged

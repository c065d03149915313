from __future__ import annotations

from typing import Any, Mapping

from redis import Redis
from redis.exceptions import RedisError

from beachguard.contexts.verification.application.errors import StoreUnavailableError
from beachguard.contexts.verification.application.ports import ProfileMirrorStore
from beachguard.contexts.verification.domain.entities import ProfileMirrorRecord
from beachguard.contexts.verification.domain.value_objects import ProfileRole, VerificationFlags

_STORE_NAME = "verification_store"
_TRUE = "true"
_FALSE = "false"


class RedisProfileMirrorStore(ProfileMirrorStore):
    """
    RedisProfileMirrorStore — advisory profile mirror kept as Redis hash per user.

    Key layout: `<prefix>:users:<uid>` with hash fields `role`, `is_verified`,
    `is_admin_verified`, `email` and `full_name`. Flag writes use `HSET` of `true`
    values only, so concurrent writers never lower a flag.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_mirror_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/client.py
      - tests/unit/contexts/verification/adapters/test_redis_profile_mirror_store.py
    """

    def __init__(self, *, redis_client: Redis, key_prefix: str = "beachguard") -> None:
        if redis_client is None:  # type: ignore[truthy-bool]
            raise ValueError("RedisProfileMirrorStore requires redis_client")
        normalized_prefix = key_prefix.strip()
        if not normalized_prefix:
            raise ValueError("RedisProfileMirrorStore requires non-empty key_prefix")
        self._redis = redis_client
        self._prefix = normalized_prefix

    def get_mirror(self, *, uid: str) -> ProfileMirrorRecord | None:
        """
        Read mirror hash for user.

        Args:
            uid: Stable user id.
        Returns:
            ProfileMirrorRecord | None: Partial record or `None` when key is absent.
        Assumptions:
            Unknown role values and unparsable flags map to `None`.
        Raises:
            StoreUnavailableError: If Redis fails.
        Side Effects:
            Executes one `HGETALL`.
        """
        try:
            raw = self._redis.hgetall(self._key(uid=uid))
        except RedisError as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error
        if not raw:
            return None
        return _map_record(uid=uid, raw=raw)

    def merge_mirror_flags(self, *, uid: str, flags: VerificationFlags) -> None:
        """
        Raise flags on mirror hash, creating it when absent.

        Args:
            uid: Stable user id.
            flags: Flags to raise.
        Returns:
            None.
        Assumptions:
            Other hash fields are left untouched.
        Raises:
            StoreUnavailableError: If Redis fails.
        Side Effects:
            Executes one `HSET`.
        """
        fields = {"is_verified": _TRUE} if flags.is_verified else {}
        if flags.is_admin_verified:
            fields["is_admin_verified"] = _TRUE
        if not fields:
            return
        try:
            self._redis.hset(self._key(uid=uid), mapping=fields)
        except RedisError as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error

    def _key(self, *, uid: str) -> str:
        return f"{self._prefix}:users:{uid}"


def _map_record(*, uid: str, raw: Mapping[Any, Any]) -> ProfileMirrorRecord:
    return ProfileMirrorRecord(
        uid=uid,
        role=ProfileRole.parse(raw.get("role")),
        is_verified=_parse_flag(raw.get("is_verified")),
        is_admin_verified=_parse_flag(raw.get("is_admin_verified")),
        email=_optional_text(raw.get("email")),
        full_name=_optional_text(raw.get("full_name")),
    )


def _parse_flag(raw: object) -> bool | None:
    """
    Parse stored flag literal.

    Args:
        raw: Hash field value.
    Returns:
        bool | None: Parsed flag or `None` when absent or unknown.
    Assumptions:
        Signup flows may write `1`/`0` as well as `true`/`false`.
    Raises:
        None.
    Side Effects:
        None.
    """
    if not isinstance(raw, str):
        return None
    normalized = raw.strip().lower()
    if normalized in {_TRUE, "1"}:
        return True
    if normalized in {_FALSE, "0"}:
        return False
    return None


def _optional_text(raw: object) -> str | None:
    if not isinstance(raw, str):
        return None
    normalized = raw.strip()
    return normalized or None

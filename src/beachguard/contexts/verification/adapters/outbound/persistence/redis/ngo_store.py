from __future__ import annotations

from redis import Redis
from redis.exceptions import RedisError

from beachguard.contexts.verification.application.errors import StoreUnavailableError
from beachguard.contexts.verification.application.ports import NgoStore
from beachguard.contexts.verification.domain.entities import NgoEntry

_STORE_NAME = "ngo_directory"


class RedisNgoStore(NgoStore):
    """
    RedisNgoStore — NGO directory rows kept as one Redis hash per admin uid.

    Key layout: `<prefix>:ngos:<uid>` with hash fields `ngo_name`, `admin_name`,
    `avatar_url` and `updated_at` (ISO-8601 UTC). `HSET` overwrites only these fields.

    Related:
      - src/beachguard/contexts/verification/application/ports/ngo_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/client.py
      - tests/unit/contexts/verification/adapters/test_ngo_directory_stores.py
    """

    def __init__(self, *, redis_client: Redis, key_prefix: str = "beachguard") -> None:
        if redis_client is None:  # type: ignore[truthy-bool]
            raise ValueError("RedisNgoStore requires redis_client")
        normalized_prefix = key_prefix.strip()
        if not normalized_prefix:
            raise ValueError("RedisNgoStore requires non-empty key_prefix")
        self._redis = redis_client
        self._prefix = normalized_prefix

    def upsert_entry(self, *, entry: NgoEntry) -> None:
        try:
            self._redis.hset(
                f"{self._prefix}:ngos:{entry.uid}",
                mapping={
                    "ngo_name": entry.ngo_name,
                    "admin_name": entry.admin_name,
                    "avatar_url": entry.avatar_url,
                    "updated_at": entry.updated_at.isoformat(),
                },
            )
        except RedisError as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error

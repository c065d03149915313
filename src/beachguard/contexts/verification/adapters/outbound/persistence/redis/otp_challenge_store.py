from __future__ import annotations

import logging
from typing import Any, Mapping

from redis import Redis
from redis.exceptions import RedisError, WatchError

from beachguard.contexts.verification.application.errors import StoreUnavailableError
from beachguard.contexts.verification.application.ports import OtpChallengeStore
from beachguard.contexts.verification.domain.entities import ChallengeMetadata, OtpChallenge
from beachguard.contexts.verification.domain.value_objects import ChallengeSubject

log = logging.getLogger(__name__)

_STORE_NAME = "verification_store"
_DEFAULT_RETENTION_MS = 60 * 60 * 1000
_MAX_WATCH_RETRIES = 3


class RedisOtpChallengeStore(OtpChallengeStore):
    """
    RedisOtpChallengeStore — Redis hash storage for OTP challenges.

    Key layout: `<prefix>:otp:<subject_class>:<key>` with hash fields `code`,
    `expires_at_ms`, `created_at_ms` and, for volunteers, `email` and `name`. Keys are
    retained for a grace period past expiry so that expiry is observed and reported
    by the verification flow before Redis evicts the record.

    Related:
      - src/beachguard/contexts/verification/application/ports/otp_challenge_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/redis/client.py
      - tests/unit/contexts/verification/adapters/test_redis_otp_challenge_store.py
    """

    def __init__(
        self,
        *,
        redis_client: Redis,
        key_prefix: str = "beachguard",
        retention_after_expiry_ms: int = _DEFAULT_RETENTION_MS,
    ) -> None:
        """
        Initialize store with Redis client and key namespace.

        Args:
            redis_client: redis-py client created with `decode_responses=True`.
            key_prefix: Key namespace prefix.
            retention_after_expiry_ms: Grace period before Redis drops expired keys.
        Returns:
            None.
        Assumptions:
            Client is shared with other verification store adapters.
        Raises:
            ValueError: If client is missing, prefix is blank, or retention is negative.
        Side Effects:
            None.
        """
        if redis_client is None:  # type: ignore[truthy-bool]
            raise ValueError("RedisOtpChallengeStore requires redis_client")
        normalized_prefix = key_prefix.strip()
        if not normalized_prefix:
            raise ValueError("RedisOtpChallengeStore requires non-empty key_prefix")
        if retention_after_expiry_ms < 0:
            raise ValueError("RedisOtpChallengeStore retention_after_expiry_ms must be >= 0")
        self._redis = redis_client
        self._prefix = normalized_prefix
        self._retention_ms = retention_after_expiry_ms

    def get(self, *, subject: ChallengeSubject) -> OtpChallenge | None:
        """
        Read challenge hash for subject.

        Args:
            subject: Challenge subject.
        Returns:
            OtpChallenge | None: Parsed challenge or `None` when key is absent.
        Assumptions:
            Expiry is evaluated by caller.
        Raises:
            StoreUnavailableError: If Redis fails or the stored hash is malformed.
        Side Effects:
            Executes one `HGETALL`.
        """
        key = self._key(subject=subject)
        try:
            raw = self._redis.hgetall(key)
        except RedisError as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error
        if not raw:
            return None
        return _map_challenge(subject=subject, raw=raw)

    def put(self, *, challenge: OtpChallenge) -> None:
        """
        Replace challenge hash and set absolute key expiry.

        Args:
            challenge: Freshly issued challenge.
        Returns:
            None.
        Assumptions:
            `MULTI` makes delete, write and expiry one atomic replacement.
        Raises:
            StoreUnavailableError: If Redis fails.
        Side Effects:
            Executes one transactional pipeline.
        """
        key = self._key(subject=challenge.subject)
        try:
            with self._redis.pipeline(transaction=True) as pipe:
                pipe.delete(key)
                pipe.hset(key, mapping=_challenge_fields(challenge=challenge))
                pipe.pexpireat(key, challenge.expires_at_ms + self._retention_ms)
                pipe.execute()
        except RedisError as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error

    def delete_if_unchanged(self, *, challenge: OtpChallenge) -> bool:
        """
        Delete challenge hash only if it still holds the checked instance.

        Args:
            challenge: Challenge checked by caller.
        Returns:
            bool: `True` when removed by this call.
        Assumptions:
            `WATCH` aborts the transaction if a concurrent issuance or delete touched
            the key; the check is then repeated a bounded number of times.
        Raises:
            StoreUnavailableError: If Redis fails.
        Side Effects:
            Executes `WATCH`/`HMGET`/`MULTI`/`DEL`.
        """
        key = self._key(subject=challenge.subject)
        try:
            with self._redis.pipeline(transaction=True) as pipe:
                for _ in range(_MAX_WATCH_RETRIES):
                    try:
                        pipe.watch(key)
                        code, created_at_ms = pipe.hmget(key, ["code", "created_at_ms"])
                        if code != challenge.code or created_at_ms != str(
                            challenge.created_at_ms
                        ):
                            pipe.unwatch()
                            return False
                        pipe.multi()
                        pipe.delete(key)
                        pipe.execute()
                        return True
                    except WatchError:
                        log.info("otp challenge changed during delete, retrying key=%s", key)
                        continue
        except RedisError as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error
        return False

    def _key(self, *, subject: ChallengeSubject) -> str:
        return f"{self._prefix}:otp:{subject.subject_class.value}:{subject.key}"


def _challenge_fields(*, challenge: OtpChallenge) -> dict[str, str]:
    fields = {
        "code": challenge.code,
        "expires_at_ms": str(challenge.expires_at_ms),
        "created_at_ms": str(challenge.created_at_ms),
    }
    if challenge.metadata is not None:
        fields["email"] = challenge.metadata.email
        fields["name"] = challenge.metadata.name
    return fields


def _map_challenge(*, subject: ChallengeSubject, raw: Mapping[Any, Any]) -> OtpChallenge:
    """
    Map Redis hash into challenge entity.

    Args:
        subject: Subject the key belongs to.
        raw: Decoded hash fields.
    Returns:
        OtpChallenge: Parsed challenge.
    Assumptions:
        Hash was written by `RedisOtpChallengeStore.put`.
    Raises:
        StoreUnavailableError: If required fields are missing or malformed.
    Side Effects:
        None.
    """
    try:
        metadata = None
        if raw.get("email") and raw.get("name"):
            metadata = ChallengeMetadata(email=str(raw["email"]), name=str(raw["name"]))
        return OtpChallenge(
            subject=subject,
            code=str(raw["code"]),
            expires_at_ms=int(raw["expires_at_ms"]),
            created_at_ms=int(raw["created_at_ms"]),
            metadata=metadata,
        )
    except (KeyError, TypeError, ValueError) as error:
        raise StoreUnavailableError(
            store=_STORE_NAME,
            detail=f"malformed challenge record for {subject}",
        ) from error

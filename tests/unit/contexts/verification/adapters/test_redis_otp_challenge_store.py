from __future__ import annotations

from typing import Callable

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import WatchError

from beachguard.contexts.verification.adapters.outbound.persistence.redis import (
    RedisOtpChallengeStore,
    RedisVerificationStoreConfig,
)
from beachguard.contexts.verification.application import StoreUnavailableError
from beachguard.contexts.verification.domain import (
    ChallengeMetadata,
    ChallengeSubject,
    OtpChallenge,
)


class _FakeRedis:
    """
    In-process Redis double supporting hashes, absolute expiry and optimistic transactions.
    """

    def __init__(self, *, error: Exception | None = None) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.expire_at_ms: dict[str, int] = {}
        self.versions: dict[str, int] = {}
        self.after_hmget: Callable[[], None] | None = None
        self._error = error

    def _check(self) -> None:
        if self._error is not None:
            raise self._error

    def _touch(self, key: str) -> None:
        self.versions[key] = self.versions.get(key, 0) + 1

    def hgetall(self, key: str) -> dict[str, str]:
        self._check()
        return dict(self.hashes.get(key, {}))

    def hmget(self, key: str, fields: list[str]) -> list[str | None]:
        self._check()
        stored = self.hashes.get(key, {})
        values = [stored.get(field) for field in fields]
        if self.after_hmget is not None:
            hook = self.after_hmget
            self.after_hmget = None
            hook()
        return values

    def hset(self, key: str, *, mapping: dict[str, str]) -> int:
        self._check()
        self.hashes.setdefault(key, {}).update(mapping)
        self._touch(key)
        return len(mapping)

    def delete(self, key: str) -> int:
        self._check()
        existed = key in self.hashes
        self.hashes.pop(key, None)
        self.expire_at_ms.pop(key, None)
        self._touch(key)
        return int(existed)

    def pexpireat(self, key: str, when_ms: int) -> bool:
        self._check()
        self.expire_at_ms[key] = when_ms
        return True

    def pipeline(self, *, transaction: bool = True) -> _FakePipeline:
        self._check()
        return _FakePipeline(redis=self)


class _FakePipeline:
    """
    Pipeline double: immediate mode after `watch`, buffered mode after `multi`.
    """

    def __init__(self, *, redis: _FakeRedis) -> None:
        self._redis = redis
        self._buffer: list[Callable[[], object]] = []
        self._watched: dict[str, int] = {}
        self._immediate = False

    def __enter__(self) -> _FakePipeline:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._reset()

    def _reset(self) -> None:
        self._buffer = []
        self._watched = {}
        self._immediate = False

    def watch(self, key: str) -> None:
        self._watched[key] = self._redis.versions.get(key, 0)
        self._immediate = True

    def unwatch(self) -> None:
        self._watched = {}
        self._immediate = False

    def multi(self) -> None:
        self._immediate = False

    def hmget(self, key: str, fields: list[str]) -> list[str | None]:
        return self._redis.hmget(key, fields)

    def delete(self, key: str) -> None:
        self._queue(lambda: self._redis.delete(key))

    def hset(self, key: str, *, mapping: dict[str, str]) -> None:
        self._queue(lambda: self._redis.hset(key, mapping=mapping))

    def pexpireat(self, key: str, when_ms: int) -> None:
        self._queue(lambda: self._redis.pexpireat(key, when_ms))

    def execute(self) -> list[object]:
        for key, version in self._watched.items():
            if self._redis.versions.get(key, 0) != version:
                self._reset()
                raise WatchError("watched key changed")
        results = [command() for command in self._buffer]
        self._reset()
        return results

    def _queue(self, command: Callable[[], object]) -> None:
        if self._immediate:
            command()
            return
        self._buffer.append(command)


_VOLUNTEER = ChallengeSubject.for_volunteer("a@b.com")


def _challenge(*, code: str = "482913", created_at_ms: int = 1_000) -> OtpChallenge:
    return OtpChallenge(
        subject=_VOLUNTEER,
        code=code,
        expires_at_ms=created_at_ms + 600_000,
        created_at_ms=created_at_ms,
        metadata=ChallengeMetadata(email="a@b.com", name="Ana"),
    )


def test_put_writes_hash_with_absolute_expiry_and_get_reads_it_back() -> None:
    """
    Verify challenge hash layout, key naming, and expiry retention window.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Default retention after expiry is one hour.
    Raises:
        AssertionError: If stored layout or read-back challenge differs.
    Side Effects:
        None.
    """
    redis = _FakeRedis()
    store = RedisOtpChallengeStore(redis_client=redis, key_prefix="bg")  # type: ignore[arg-type]
    challenge = _challenge()

    store.put(challenge=challenge)

    key = "bg:otp:volunteer:a@b_com"
    assert redis.hashes[key] == {
        "code": "482913",
        "expires_at_ms": "601000",
        "created_at_ms": "1000",
        "email": "a@b.com",
        "name": "Ana",
    }
    assert redis.expire_at_ms[key] == 601_000 + 3_600_000
    assert store.get(subject=_VOLUNTEER) == challenge


def test_put_replaces_previous_fields_of_reissued_challenge() -> None:
    redis = _FakeRedis()
    store = RedisOtpChallengeStore(redis_client=redis)  # type: ignore[arg-type]
    admin = ChallengeSubject.for_admin("123")
    redis.hashes["beachguard:otp:admin:123"] = {"stale": "x"}

    store.put(
        challenge=OtpChallenge(subject=admin, code="111111", expires_at_ms=10, created_at_ms=1)
    )

    assert "stale" not in redis.hashes["beachguard:otp:admin:123"]
    stored = store.get(subject=admin)
    assert stored is not None
    assert stored.metadata is None


def test_get_returns_none_for_absent_key_and_fails_on_malformed_hash() -> None:
    redis = _FakeRedis()
    store = RedisOtpChallengeStore(redis_client=redis)  # type: ignore[arg-type]

    assert store.get(subject=_VOLUNTEER) is None

    redis.hashes["beachguard:otp:volunteer:a@b_com"] = {"code": "482913"}
    with pytest.raises(StoreUnavailableError, match="malformed"):
        store.get(subject=_VOLUNTEER)


def test_delete_if_unchanged_removes_checked_instance_once() -> None:
    redis = _FakeRedis()
    store = RedisOtpChallengeStore(redis_client=redis)  # type: ignore[arg-type]
    challenge = _challenge()
    store.put(challenge=challenge)

    assert store.delete_if_unchanged(challenge=challenge) is True
    assert store.get(subject=_VOLUNTEER) is None
    assert store.delete_if_unchanged(challenge=challenge) is False


def test_delete_if_unchanged_keeps_reissued_challenge() -> None:
    redis = _FakeRedis()
    store = RedisOtpChallengeStore(redis_client=redis)  # type: ignore[arg-type]
    checked = _challenge(code="482913", created_at_ms=1_000)
    reissued = _challenge(code="482913", created_at_ms=2_000)
    store.put(challenge=reissued)

    assert store.delete_if_unchanged(challenge=checked) is False
    assert store.get(subject=_VOLUNTEER) == reissued


def test_delete_if_unchanged_retries_after_concurrent_write() -> None:
    """
    Verify WATCH conflict triggers re-check, which then sees the re-issued challenge.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Concurrent issuance lands between `HMGET` and `EXEC`.
    Raises:
        AssertionError: If stale challenge deletes the re-issued one.
    Side Effects:
        None.
    """
    redis = _FakeRedis()
    store = RedisOtpChallengeStore(redis_client=redis)  # type: ignore[arg-type]
    checked = _challenge(code="482913", created_at_ms=1_000)
    reissued = _challenge(code="555555", created_at_ms=3_000)
    store.put(challenge=checked)
    redis.after_hmget = lambda: store.put(challenge=reissued)

    assert store.delete_if_unchanged(challenge=checked) is False
    assert store.get(subject=_VOLUNTEER) == reissued


def test_redis_errors_map_to_store_unavailable() -> None:
    redis = _FakeRedis(error=RedisConnectionError("connection refused"))
    store = RedisOtpChallengeStore(redis_client=redis)  # type: ignore[arg-type]

    with pytest.raises(StoreUnavailableError) as error_info:
        store.get(subject=_VOLUNTEER)
    assert error_info.value.code == "store_unavailable"
    assert error_info.value.store == "verification_store"
    assert error_info.value.status_code == 500

    with pytest.raises(StoreUnavailableError):
        store.put(challenge=_challenge())
    with pytest.raises(StoreUnavailableError):
        store.delete_if_unchanged(challenge=_challenge())


def test_store_config_rejects_separator_in_prefix() -> None:
    with pytest.raises(ValueError, match="must not contain"):
        RedisVerificationStoreConfig(url="redis://localhost:6379/0", key_prefix="bg:dev")
    with pytest.raises(ValueError, match="url"):
        RedisVerificationStoreConfig(url=" ")

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from beachguard.contexts.verification.adapters.outbound.persistence.postgres import (
    PostgresNgoStore,
)
from beachguard.contexts.verification.adapters.outbound.persistence.redis import RedisNgoStore
from beachguard.contexts.verification.application import StoreUnavailableError
from beachguard.contexts.verification.domain import NgoEntry

_NOW = datetime(2026, 10, 17, 9, 0, 0, tzinfo=timezone.utc)
_ENTRY = NgoEntry(
    uid="admin-1",
    ngo_name="Shoreline Trust",
    admin_name="Ada Admin",
    avatar_url="",
    updated_at=_NOW,
)


class _RecordingGateway:
    def __init__(self) -> None:
        self.execute_calls: list[tuple[str, Mapping[str, Any]]] = []

    def fetch_one(self, *, query: str, parameters: Mapping[str, Any]) -> Mapping[str, Any] | None:
        return None

    def execute(self, *, query: str, parameters: Mapping[str, Any]) -> None:
        self.execute_calls.append((query, dict(parameters)))


class _FakeRedis:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self._error = error

    def hset(self, key: str, *, mapping: dict[str, str]) -> int:
        if self._error is not None:
            raise self._error
        self.hashes.setdefault(key, {}).update(mapping)
        return len(mapping)


def test_postgres_ngo_upsert_merges_on_admin_uid() -> None:
    gateway = _RecordingGateway()
    store = PostgresNgoStore(gateway=gateway)

    store.upsert_entry(entry=_ENTRY)

    query, parameters = gateway.execute_calls[0]
    assert "INSERT INTO ngos" in query
    assert "ON CONFLICT (uid)" in query
    assert parameters == {
        "uid": "admin-1",
        "ngo_name": "Shoreline Trust",
        "admin_name": "Ada Admin",
        "avatar_url": "",
        "updated_at": _NOW,
    }


def test_redis_ngo_upsert_overwrites_directory_fields_only() -> None:
    redis = _FakeRedis()
    redis.hashes["bg:ngos:admin-1"] = {"ngo_name": "Old Name", "region": "north"}
    store = RedisNgoStore(redis_client=redis, key_prefix="bg")  # type: ignore[arg-type]

    store.upsert_entry(entry=_ENTRY)

    assert redis.hashes["bg:ngos:admin-1"] == {
        "ngo_name": "Shoreline Trust",
        "admin_name": "Ada Admin",
        "avatar_url": "",
        "updated_at": "2026-10-17T09:00:00+00:00",
        "region": "north",
    }


def test_redis_ngo_store_maps_connection_errors() -> None:
    store = RedisNgoStore(
        redis_client=_FakeRedis(error=RedisConnectionError("refused")),  # type: ignore[arg-type]
    )

    with pytest.raises(StoreUnavailableError) as error:
        store.upsert_entry(entry=_ENTRY)

    assert error.value.store == "ngo_directory"


def test_ngo_stores_validate_constructor_arguments() -> None:
    with pytest.raises(ValueError, match="table"):
        PostgresNgoStore(gateway=_RecordingGateway(), ngos_table=" ")
    with pytest.raises(ValueError, match="key_prefix"):
        RedisNgoStore(redis_client=_FakeRedis(), key_prefix="")  # type: ignore[arg-type]

from __future__ import annotations

from typing import Any, Mapping, Protocol, cast

import psycopg
from psycopg.rows import dict_row

from beachguard.contexts.verification.application.errors import StoreUnavailableError

_STORE_NAME = "profile_store"


class VerificationPostgresGateway(Protocol):
    """
    VerificationPostgresGateway — minimal SQL gateway for profile and leaderboard adapters.

    Related:
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/
        profile_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/
        leaderboard_store.py
      - alembic/versions/20261017_0001_verification_profiles_v1.py
    """

    def fetch_one(self, *, query: str, parameters: Mapping[str, Any]) -> Mapping[str, Any] | None:
        """
        Execute SQL query and return one row as mapping.

        Args:
            query: SQL text.
            parameters: Bind parameters mapping.
        Returns:
            Mapping[str, Any] | None: One row or `None`.
        Assumptions:
            Query may include `RETURNING` clause.
        Raises:
            StoreUnavailableError: If the database cannot execute the statement.
        Side Effects:
            Executes one SQL statement.
        """
        ...

    def execute(self, *, query: str, parameters: Mapping[str, Any]) -> None:
        """
        Execute SQL query without row return value.

        Args:
            query: SQL text.
            parameters: Bind parameters mapping.
        Returns:
            None.
        Assumptions:
            Query is side-effecting write statement.
        Raises:
            StoreUnavailableError: If the database cannot execute the statement.
        Side Effects:
            Executes one SQL statement.
        """
        ...


class PsycopgVerificationPostgresGateway(VerificationPostgresGateway):
    """
    PsycopgVerificationPostgresGateway — psycopg3 implementation of verification SQL gateway.

    Related:
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/gateway.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/
        profile_store.py
      - apps/api/wiring/modules/verification.py
    """

    def __init__(self, *, dsn: str, connect_timeout_s: int = 5) -> None:
        """
        Initialize gateway with DSN connection string.

        Args:
            dsn: PostgreSQL DSN.
            connect_timeout_s: Connection timeout in seconds.
        Returns:
            None.
        Assumptions:
            DSN points to database migrated to alembic head.
        Raises:
            ValueError: If DSN is blank or timeout is not positive.
        Side Effects:
            None.
        """
        normalized_dsn = dsn.strip()
        if not normalized_dsn:
            raise ValueError("PsycopgVerificationPostgresGateway requires non-empty dsn")
        if connect_timeout_s <= 0:
            raise ValueError("PsycopgVerificationPostgresGateway connect_timeout_s must be > 0")
        self._dsn = normalized_dsn
        self._connect_timeout_s = connect_timeout_s

    def fetch_one(self, *, query: str, parameters: Mapping[str, Any]) -> Mapping[str, Any] | None:
        try:
            with psycopg.connect(
                self._dsn,
                connect_timeout=self._connect_timeout_s,
                row_factory=cast(Any, dict_row),
            ) as connection:
                with connection.cursor() as cursor:
                    cursor.execute(cast(Any, query), parameters)
                    row = cursor.fetchone()
        except psycopg.Error as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error
        if row is None:
            return None
        return dict(row)

    def execute(self, *, query: str, parameters: Mapping[str, Any]) -> None:
        try:
            with psycopg.connect(
                self._dsn,
                connect_timeout=self._connect_timeout_s,
                row_factory=cast(Any, dict_row),
            ) as connection:
                with connection.cursor() as cursor:
                    cursor.execute(cast(Any, query), parameters)
        except psycopg.Error as error:
            raise StoreUnavailableError(store=_STORE_NAME, detail=str(error)) from error

from __future__ import annotations

from beachguard.contexts.verification.adapters.outbound.persistence.postgres.gateway import (
    VerificationPostgresGateway,
)
from beachguard.contexts.verification.application.ports import NgoStore
from beachguard.contexts.verification.domain.entities import NgoEntry


class PostgresNgoStore(NgoStore):
    """
    PostgresNgoStore — upsert-only Postgres adapter for NGO directory rows.

    Related:
      - src/beachguard/contexts/verification/application/ports/ngo_store.py
      - alembic/versions/20261017_0002_ngo_directory.py
    """

    def __init__(
        self,
        *,
        gateway: VerificationPostgresGateway,
        ngos_table: str = "ngos",
    ) -> None:
        if gateway is None:  # type: ignore[truthy-bool]
            raise ValueError("PostgresNgoStore requires gateway")
        normalized_table = ngos_table.strip()
        if not normalized_table:
            raise ValueError("PostgresNgoStore requires non-empty table name")
        self._gateway = gateway
        self._table = normalized_table

    def upsert_entry(self, *, entry: NgoEntry) -> None:
        query = f"""
        INSERT INTO {self._table}
        (
            uid,
            ngo_name,
            admin_name,
            avatar_url,
            updated_at
        )
        VALUES
        (
            %(uid)s,
            %(ngo_name)s,
            %(admin_name)s,
            %(avatar_url)s,
            %(updated_at)s
        )
        ON CONFLICT (uid)
        DO UPDATE
        SET
            ngo_name = EXCLUDED.ngo_name,
            admin_name = EXCLUDED.admin_name,
            avatar_url = EXCLUDED.avatar_url,
            updated_at = EXCLUDED.updated_at
        """
        self._gateway.execute(
            query=query,
            parameters={
                "uid": entry.uid,
                "ngo_name": entry.ngo_name,
                "admin_name": entry.admin_name,
                "avatar_url": entry.avatar_url,
                "updated_at": entry.updated_at,
            },
        )

from __future__ import annotations

from beachguard.contexts.verification.adapters.outbound.persistence.postgres.gateway import (
    VerificationPostgresGateway,
)
from beachguard.contexts.verification.application.ports import LeaderboardStore
from beachguard.contexts.verification.domain.entities import LeaderboardEntry


class PostgresLeaderboardStore(LeaderboardStore):
    """
    PostgresLeaderboardStore — upsert-only Postgres adapter for leaderboard rows.

    Related:
      - src/beachguard/contexts/verification/application/ports/leaderboard_store.py
      - alembic/versions/20261017_0001_verification_profiles_v1.py
    """

    def __init__(
        self,
        *,
        gateway: VerificationPostgresGateway,
        leaderboard_table: str = "leaderboard",
    ) -> None:
        if gateway is None:  # type: ignore[truthy-bool]
            raise ValueError("PostgresLeaderboardStore requires gateway")
        normalized_table = leaderboard_table.strip()
        if not normalized_table:
            raise ValueError("PostgresLeaderboardStore requires non-empty table name")
        self._gateway = gateway
        self._table = normalized_table

    def upsert_entry(self, *, entry: LeaderboardEntry) -> None:
        query = f"""
        INSERT INTO {self._table}
        (
            volunteer_id,
            name,
            email,
            avatar_url,
            points,
            updated_at
        )
        VALUES
        (
            %(volunteer_id)s,
            %(name)s,
            %(email)s,
            %(avatar_url)s,
            %(points)s,
            %(updated_at)s
        )
        ON CONFLICT (volunteer_id)
        DO UPDATE
        SET
            name = EXCLUDED.name,
            email = EXCLUDED.email,
            avatar_url = EXCLUDED.avatar_url,
            points = EXCLUDED.points,
            updated_at = EXCLUDED.updated_at
        """
        self._gateway.execute(
            query=query,
            parameters={
                "volunteer_id": entry.volunteer_id,
                "name": entry.name,
                "email": entry.email,
                "avatar_url": entry.avatar_url,
                "points": entry.points,
                "updated_at": entry.updated_at,
            },
        )

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from beachguard.contexts.verification.adapters.outbound.persistence.postgres.gateway import (
    VerificationPostgresGateway,
)
from beachguard.contexts.verification.application.errors import SubjectNotFoundError
from beachguard.contexts.verification.application.ports import ProfileStore
from beachguard.contexts.verification.domain.entities import UserProfile
from beachguard.contexts.verification.domain.value_objects import (
    ProfileRole,
    VerificationFlags,
    merged_field_names,
)

_PROFILE_COLUMNS = """
            uid,
            email,
            full_name,
            role,
            is_verified,
            is_admin_verified,
            points,
            avatar_url,
            created_at,
            updated_at,
            ngo_name
"""


class PostgresProfileStore(ProfileStore):
    """
    PostgresProfileStore — Postgres adapter for the durable profile store port.

    Merges are single `UPDATE` statements: flags are OR-ed with stored values and role
    only changes when the stored role is not `admin`, so concurrent writers converge.

    Related:
      - src/beachguard/contexts/verification/application/ports/profile_store.py
      - src/beachguard/contexts/verification/adapters/outbound/persistence/postgres/gateway.py
      - alembic/versions/20261017_0001_verification_profiles_v1.py
      - alembic/versions/20261017_0002_ngo_directory.py
    """

    def __init__(
        self,
        *,
        gateway: VerificationPostgresGateway,
        users_table: str = "users",
    ) -> None:
        """
        Initialize store with SQL gateway and target table name.

        Args:
            gateway: SQL gateway abstraction.
            users_table: Target profile table name.
        Returns:
            None.
        Assumptions:
            Table schema follows migrations `20261017_0001` and `20261017_0002`.
        Raises:
            ValueError: If dependencies are invalid.
        Side Effects:
            None.
        """
        if gateway is None:  # type: ignore[truthy-bool]
            raise ValueError("PostgresProfileStore requires gateway")
        normalized_table = users_table.strip()
        if not normalized_table:
            raise ValueError("PostgresProfileStore requires non-empty table name")
        self._gateway = gateway
        self._table = normalized_table

    def get_profile(self, *, uid: str) -> UserProfile | None:
        query = f"""
        SELECT
{_PROFILE_COLUMNS}
        FROM {self._table}
        WHERE uid = %(uid)s
        """
        row = self._gateway.fetch_one(query=query, parameters={"uid": uid})
        if row is None:
            return None
        return _map_profile_row(row=row)

    def merge_profile(
        self,
        *,
        uid: str,
        flags: VerificationFlags | None,
        role: ProfileRole | None,
        updated_at: datetime,
    ) -> tuple[str, ...]:
        """
        Apply set-only flag merge and upgrade-only role merge with one `UPDATE`.

        Args:
            uid: Stable user id.
            flags: Flags to raise or `None`.
            role: Role to apply or `None`.
            updated_at: UTC write timestamp.
        Returns:
            tuple[str, ...]: Field names carried by the merge.
        Assumptions:
            Missing profile is reported, not created.
        Raises:
            SubjectNotFoundError: If no row exists for uid.
            StoreUnavailableError: If database fails.
        Side Effects:
            Executes one SQL UPDATE statement.
        """
        query = f"""
        UPDATE {self._table}
        SET
            is_verified = {self._table}.is_verified OR %(is_verified)s,
            is_admin_verified = {self._table}.is_admin_verified OR %(is_admin_verified)s,
            role = CASE
                WHEN {self._table}.role = 'admin' OR CAST(%(role)s AS TEXT) IS NULL
                    THEN {self._table}.role
                ELSE CAST(%(role)s AS TEXT)
            END,
            updated_at = GREATEST(%(updated_at)s, {self._table}.created_at)
        WHERE uid = %(uid)s
        RETURNING uid
        """
        row = self._gateway.fetch_one(
            query=query,
            parameters={
                "uid": uid,
                "is_verified": bool(flags is not None and flags.is_verified),
                "is_admin_verified": bool(flags is not None and flags.is_admin_verified),
                "role": role.value if role is not None else None,
                "updated_at": updated_at,
            },
        )
        if row is None:
            raise SubjectNotFoundError()
        return merged_field_names(flags=flags, role=role)

    def create_profile_if_absent(self, *, profile: UserProfile) -> UserProfile:
        """
        Insert profile unless uid already exists and return the stored row.

        Args:
            profile: Candidate profile.
        Returns:
            UserProfile: Inserted candidate or concurrently existing row.
        Assumptions:
            `uid` is primary key of profile table.
        Raises:
            ValueError: If neither insert nor follow-up select return a row.
            StoreUnavailableError: If database fails.
        Side Effects:
            Executes one SQL INSERT and optional fallback SELECT.
        """
        query = f"""
        INSERT INTO {self._table}
        (
{_PROFILE_COLUMNS}
        )
        VALUES
        (
            %(uid)s,
            %(email)s,
            %(full_name)s,
            %(role)s,
            %(is_verified)s,
            %(is_admin_verified)s,
            %(points)s,
            %(avatar_url)s,
            %(created_at)s,
            %(updated_at)s,
            %(ngo_name)s
        )
        ON CONFLICT (uid) DO NOTHING
        RETURNING
{_PROFILE_COLUMNS}
        """
        row = self._gateway.fetch_one(
            query=query,
            parameters={
                "uid": profile.uid,
                "email": profile.email,
                "full_name": profile.full_name,
                "role": profile.role.value,
                "is_verified": profile.is_verified,
                "is_admin_verified": profile.is_admin_verified,
                "points": profile.points,
                "avatar_url": profile.avatar_url,
                "created_at": profile.created_at,
                "updated_at": profile.updated_at,
                "ngo_name": profile.ngo_name,
            },
        )
        if row is None:
            existing = self.get_profile(uid=profile.uid)
            if existing is None:
                raise ValueError("PostgresProfileStore insert returned no row")
            return existing
        return _map_profile_row(row=row)


def _map_profile_row(*, row: Mapping[str, Any]) -> UserProfile:
    """
    Map SQL row mapping into immutable `UserProfile` entity.

    Args:
        row: SQL result mapping.
    Returns:
        UserProfile: Domain profile snapshot.
    Assumptions:
        Row follows schema of the `users` table.
    Raises:
        ValueError: If required fields are missing or malformed.
    Side Effects:
        None.
    """
    try:
        role = ProfileRole.parse(row["role"])
        if role is None:
            raise ValueError(f"unknown role {row['role']!r}")
        return UserProfile(
            uid=str(row["uid"]),
            email=str(row["email"] or ""),
            full_name=str(row["full_name"] or ""),
            role=role,
            is_verified=bool(row["is_verified"]),
            is_admin_verified=bool(row["is_admin_verified"]),
            points=int(row["points"]),
            avatar_url=str(row["avatar_url"] or ""),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            ngo_name=str(row.get("ngo_name") or ""),
        )
    except (KeyError, TypeError, ValueError) as error:
        raise ValueError("PostgresProfileStore cannot map profile row") from error

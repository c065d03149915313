"""Create verification v1 tables for durable user profiles and leaderboard mirror."""

from __future__ import annotations

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Apply verification v1 storage schema.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Migration is additive and safe on fresh environments.
    Raises:
        Exception: Postgres execution errors from Alembic runtime.
    Side Effects:
        Creates `users` and `leaderboard` tables, constraints, and indexes.
    """
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            uid TEXT PRIMARY KEY,
            email TEXT NOT NULL DEFAULT '',
            full_name TEXT NOT NULL DEFAULT '',
            role TEXT NOT NULL DEFAULT 'volunteer',
            is_verified BOOLEAN NOT NULL DEFAULT FALSE,
            is_admin_verified BOOLEAN NOT NULL DEFAULT FALSE,
            points INTEGER NOT NULL DEFAULT 0,
            avatar_url TEXT NOT NULL DEFAULT '',
            created_at TIMESTAMPTZ NOT NULL,
            updated_at TIMESTAMPTZ NOT NULL,
            CONSTRAINT users_role_chk
                CHECK (role IN ('admin', 'volunteer')),
            CONSTRAINT users_admin_verified_implies_verified_chk
                CHECK (NOT is_admin_verified OR is_verified),
            CONSTRAINT users_points_non_negative_chk
                CHECK (points >= 0)
        )
        """
    )
    op.execute(
        """
        CREATE INDEX IF NOT EXISTS idx_users_email
            ON users (email)
        """
    )

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS leaderboard (
            volunteer_id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NULL,
            avatar_url TEXT NULL,
            points INTEGER NOT NULL DEFAULT 0,
            updated_at TIMESTAMPTZ NOT NULL,
            CONSTRAINT leaderboard_points_non_negative_chk
                CHECK (points >= 0)
        )
        """
    )
    op.execute(
        """
        CREATE INDEX IF NOT EXISTS idx_leaderboard_points
            ON leaderboard (points DESC, volunteer_id)
        """
    )


def downgrade() -> None:
    """
    Drop verification v1 storage schema.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Downgrade is used only on disposable environments.
    Raises:
        Exception: Postgres execution errors from Alembic runtime.
    Side Effects:
        Drops `leaderboard` and `users` tables.
    """
    op.execute("DROP TABLE IF EXISTS leaderboard")
    op.execute("DROP TABLE IF EXISTS users")

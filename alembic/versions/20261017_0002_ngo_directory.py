"""Add NGO directory table and profile NGO name."""

from __future__ import annotations

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261017_0002"
down_revision = "20261017_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Apply NGO directory storage schema.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Existing profiles get an empty `ngo_name`.
    Raises:
        Exception: Postgres execution errors from Alembic runtime.
    Side Effects:
        Adds `users.ngo_name` and creates the `ngos` table.
    """
    op.execute(
        """
        ALTER TABLE users
            ADD COLUMN IF NOT EXISTS ngo_name TEXT NOT NULL DEFAULT ''
        """
    )
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS ngos (
            uid TEXT PRIMARY KEY,
            ngo_name TEXT NOT NULL,
            admin_name TEXT NOT NULL DEFAULT '',
            avatar_url TEXT NOT NULL DEFAULT '',
            updated_at TIMESTAMPTZ NOT NULL,
            CONSTRAINT ngos_name_non_blank_chk
                CHECK (length(btrim(ngo_name)) > 0)
        )
        """
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ngos")
    op.execute("ALTER TABLE users DROP COLUMN IF EXISTS ngo_name")

"""
Fail-fast Alembic runner for verification profile, leaderboard and NGO directory tables.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Mapping

from psycopg.conninfo import conninfo_to_dict
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection
from sqlalchemy.engine.url import make_url

from alembic import command
from alembic.config import Config

log = logging.getLogger(__name__)

_DSN_ENV_KEYS: tuple[str, ...] = ("VERIFICATION_PG_DSN", "POSTGRES_DSN")
_DEFAULT_LOCK_KEY = 71402355190
_URL_SCHEMES: tuple[str, ...] = ("postgresql+psycopg://", "postgresql://", "postgres://")
_URL_DRIVERS = frozenset({"postgresql", "postgres", "postgresql+psycopg"})
_CONNINFO_URL_FIELDS = frozenset({"host", "hostaddr", "password", "user", "port", "dbname"})
_REPO_ROOT = Path(__file__).resolve().parents[2]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="beachguard-migrations")
    parser.add_argument(
        "--dsn",
        default="",
        help="Postgres DSN. Falls back to $VERIFICATION_PG_DSN, then $POSTGRES_DSN.",
    )
    parser.add_argument(
        "--lock-key",
        type=int,
        default=_DEFAULT_LOCK_KEY,
        help="pg_advisory_lock key shared by all migration runners.",
    )
    return parser


def resolve_dsn(*, arg_dsn: str, environ: Mapping[str, str]) -> str:
    """
    Pick migration DSN from `--dsn` or the first non-empty environment key.

    Args:
        arg_dsn: Value of `--dsn`.
        environ: Process environment.
    Returns:
        str: Trimmed DSN.
    Assumptions:
        `VERIFICATION_PG_DSN` is the same DSN the API uses for profile storage.
    Raises:
        ValueError: If no DSN source is set.
    Side Effects:
        None.
    """
    candidates = [arg_dsn] + [environ.get(key, "") for key in _DSN_ENV_KEYS]
    for candidate in candidates:
        if candidate.strip():
            return candidate.strip()
    raise ValueError("Migration DSN is required via --dsn, VERIFICATION_PG_DSN or POSTGRES_DSN")


def to_sqlalchemy_psycopg_url(*, dsn: str) -> URL:
    """
    Convert URL or libpq keyword DSN into a `postgresql+psycopg` SQLAlchemy URL.

    Args:
        dsn: Raw DSN.
    Returns:
        URL: Parsed URL object; passwords stay unescaped inside the object.
    Assumptions:
        The URL object is handed to SQLAlchemy directly and never rendered into
        `alembic.ini`, so `%` in passwords cannot break ConfigParser interpolation.
    Raises:
        ValueError: If DSN is blank, uses a foreign scheme or is malformed conninfo.
    Side Effects:
        None.
    """
    normalized = dsn.strip()
    if not normalized:
        raise ValueError("Postgres DSN cannot be empty")
    if not normalized.startswith(_URL_SCHEMES):
        return _conninfo_to_url(conninfo=normalized)
    parsed = make_url(normalized)
    if parsed.drivername not in _URL_DRIVERS:
        raise ValueError("Postgres URL DSN must use postgresql:// or postgres:// scheme")
    return parsed.set(drivername="postgresql+psycopg")


def _conninfo_to_url(*, conninfo: str) -> URL:
    """
    Map `host=... user=... password=...` conninfo onto SQLAlchemy URL parts.

    Args:
        conninfo: libpq keyword/value DSN.
    Returns:
        URL: URL with remaining keywords (for example `sslmode`) as sorted query items.
    Assumptions:
        `psycopg.conninfo.conninfo_to_dict` owns conninfo syntax and quoting rules.
    Raises:
        ValueError: If conninfo cannot be parsed or port is not numeric.
    Side Effects:
        None.
    """
    try:
        fields = {key: str(value) for key, value in conninfo_to_dict(conninfo).items()}
    except Exception as error:  # noqa: BLE001
        raise ValueError("Postgres DSN must be URL or libpq conninfo format") from error

    port: int | None = None
    if fields.get("port", "").strip():
        try:
            port = int(fields["port"].strip())
        except ValueError as error:
            raise ValueError("Conninfo port must be numeric when provided") from error

    return URL.create(
        "postgresql+psycopg",
        username=fields.get("user", "").strip() or None,
        password=fields.get("password", "").strip() or None,
        host=(fields.get("host") or fields.get("hostaddr") or "").strip() or None,
        port=port,
        database=fields.get("dbname", "").strip() or None,
        query={
            key: value
            for key, value in sorted(fields.items())
            if key not in _CONNINFO_URL_FIELDS and value
        },
    )


def _build_alembic_config(*, repo_root: Path) -> Config:
    alembic_ini = repo_root / "alembic.ini"
    if not alembic_ini.exists():
        raise ValueError(f"Missing Alembic config file: {alembic_ini}")
    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(repo_root / "alembic"))
    return config


def _upgrade_head_under_lock(*, config: Config, sqlalchemy_url: URL, lock_key: int) -> None:
    """
    Upgrade schema to head while this connection holds the advisory lock.

    Args:
        config: Alembic config; receives the locked connection in `attributes`.
        sqlalchemy_url: Target database URL.
        lock_key: `pg_advisory_lock` key.
    Returns:
        None.
    Assumptions:
        Concurrent API replicas may start runners at once; only one migrates at a time.
    Raises:
        Exception: Database and Alembic failures propagate after rollback.
    Side Effects:
        Applies pending revisions and always releases the lock.
    """
    engine = create_engine(sqlalchemy_url, pool_pre_ping=True)
    with engine.connect() as connection:
        _advisory_lock(connection=connection, lock_key=lock_key, acquire=True)
        try:
            config.attributes["connection"] = connection
            log.info("running alembic upgrade head")
            command.upgrade(config, "head")
            connection.commit()
            log.info("migration success")
        except Exception:  # noqa: BLE001
            connection.rollback()
            raise
        finally:
            _advisory_lock(connection=connection, lock_key=lock_key, acquire=False)
            connection.commit()


def _advisory_lock(*, connection: Connection, lock_key: int, acquire: bool) -> None:
    function = "pg_advisory_lock" if acquire else "pg_advisory_unlock"
    log.info("%s lock_key=%s", function, lock_key)
    connection.execute(text(f"SELECT {function}(:lock_key)"), {"lock_key": lock_key})


def main(argv: list[str] | None = None) -> int:
    """
    Run the migration CLI.

    Args:
        argv: CLI arguments without program name.
    Returns:
        int: `0` on success, `1` on any failure.
    Assumptions:
        Deployment treats a non-zero exit as a failed release step.
    Raises:
        None.
    Side Effects:
        Configures logging, connects to Postgres and applies migrations.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = _build_parser().parse_args(argv)

    try:
        sqlalchemy_url = to_sqlalchemy_psycopg_url(
            dsn=resolve_dsn(arg_dsn=args.dsn, environ=os.environ)
        )
        _upgrade_head_under_lock(
            config=_build_alembic_config(repo_root=_REPO_ROOT),
            sqlalchemy_url=sqlalchemy_url,
            lock_key=args.lock_key,
        )
    except Exception:  # noqa: BLE001
        log.exception("migration failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

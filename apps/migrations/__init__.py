"""Migrations application package."""

from apps.migrations.main import main as run_migrations_main

__all__ = [
    "run_migrations_main",
]

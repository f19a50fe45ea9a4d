"""
Apply the database schema migrations to the backend project.

Migrations under MIGRATIONS_DIR are applied in file-name order, over
DATABASE_URL when set, otherwise through the management API
(SUPABASE_ACCESS_TOKEN). Without either, or when a migration fails, the
dashboard URL and the SQL to paste are printed instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.exc import SQLAlchemyError

from backend.config import get_settings
from backend.dependencies import get_admin_client
from backend.errors import BackendError, BackendRequestError, is_missing_relation
from backend.migrations import (
    ALREADY_APPLIED,
    APPLIED,
    SKIPPED,
    Migration,
    discover_migrations,
    manual_instructions,
    run_migrations,
    select_runner,
)
from backend.rest import RestClient

logger = logging.getLogger(__name__)


def check_migration_status(client: RestClient, sentinel_table: str) -> bool:
    """Returns True when the sentinel table already exists."""
    try:
        client.table(sentinel_table).exists()
    except BackendRequestError as exc:
        if is_missing_relation(exc):
            return False
        raise
    return True


def print_manual_instructions(migrations: list[Migration], project_ref) -> None:
    for migration in migrations:
        print("-" * 60)
        print(manual_instructions(migration, project_ref))
    print("-" * 60)


def _already_migrated(settings) -> bool:
    if not settings.supabase_url or not settings.admin_key:
        return False
    try:
        return check_migration_status(
            get_admin_client(), settings.migration_sentinel_table
        )
    except BackendError as exc:
        logger.warning("Could not check migration status: %s", exc)
        return False


def main() -> int:
    parser = argparse.ArgumentParser(description="Apply database schema migrations")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    settings = get_settings()

    try:
        migrations = discover_migrations(settings.migrations_dir)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    if not migrations:
        logger.error("No .sql files found in %s", settings.migrations_dir)
        return 1

    try:
        runner = select_runner(settings)
    except SQLAlchemyError as exc:
        logger.error("Could not connect to the database: %s", exc)
        print("Check DATABASE_URL (password, host) and that the project is active.")
        print_manual_instructions(migrations, settings.project_ref)
        return 1

    if runner is None:
        if _already_migrated(settings):
            print(
                f"Database is already migrated ({settings.migration_sentinel_table} exists)."
            )
            print("To re-run the migration, drop the tables in the dashboard first.")
            return 0
        logger.warning(
            "Neither DATABASE_URL nor SUPABASE_ACCESS_TOKEN is set; "
            "SQL cannot be executed from here."
        )
        print_manual_instructions(migrations, settings.project_ref)
        return 1

    report = run_migrations(migrations, runner)

    print("-" * 60)
    print(f"Applied:         {report.count(APPLIED)}")
    print(f"Already applied: {report.count(ALREADY_APPLIED) + report.count(SKIPPED)}")
    failed = report.failed
    if failed is None:
        print("✅ All migrations applied successfully.")
        return 0

    print(f"❌ Failed: {failed.migration.name}")
    print(f"   {failed.error}")
    remaining = migrations[migrations.index(failed.migration) :]
    print_manual_instructions(remaining, settings.project_ref)
    return 1


if __name__ == "__main__":
    sys.exit(main())

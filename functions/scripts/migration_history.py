"""
Show which migrations are recorded in the schema_migrations ledger and
which files under MIGRATIONS_DIR are still pending.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.exc import SQLAlchemyError

from backend.config import get_settings
from backend.migrations import DirectSqlRunner, discover_migrations

logger = logging.getLogger(__name__)


def _format_timestamp(value: float) -> str:
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def main() -> int:
    parser = argparse.ArgumentParser(description="List applied database migrations")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    settings = get_settings()
    if not settings.database_url:
        logger.error("DATABASE_URL is not set; the migration ledger cannot be read.")
        return 1

    try:
        history = DirectSqlRunner(settings.database_url).history()
    except SQLAlchemyError as exc:
        logger.error("Could not read schema_migrations: %s", exc)
        return 1

    print("📋 Applied migrations:")
    print("-" * 80)
    if not history:
        print("No migrations recorded in schema_migrations.")
    for i, row in enumerate(history, start=1):
        print(f"{i:>3}. {row.version}  {row.name}  ({_format_timestamp(row.applied_at)})")

    try:
        migrations = discover_migrations(settings.migrations_dir)
    except FileNotFoundError:
        return 0
    recorded = {row.version for row in history}
    pending = [m for m in migrations if m.version not in recorded]
    print("-" * 80)
    if pending:
        print(f"⏳ {len(pending)} pending:")
        for migration in pending:
            print(f"     {migration.name}")
    else:
        print("✅ No pending migrations.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

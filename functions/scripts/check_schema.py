"""
Check that columns added by later migrations exist on the remote tables.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.dependencies import get_admin_client
from backend.errors import BackendError, BackendRequestError
from backend.rest import RestClient

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS: dict[str, tuple[str, ...]] = {
    "articles": ("source_idea_id",),
    "content_queue": ("featured_image_url",),
}


def missing_columns(
    client: RestClient, expected: dict[str, tuple[str, ...]] = EXPECTED_COLUMNS
) -> list[tuple[str, str, str]]:
    """Returns (table, column, error) for every column that cannot be selected."""
    missing = []
    for table_name, columns in expected.items():
        for column in columns:
            try:
                client.table(table_name).exists((column,))
            except BackendRequestError as exc:
                missing.append((table_name, column, exc.message))
    return missing


def main() -> int:
    parser = argparse.ArgumentParser(description="Check expected table columns")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    try:
        client = get_admin_client()
        missing = missing_columns(client)
    except BackendError as exc:
        logger.error("%s", exc)
        return 1

    print("🔍 Checking table columns...")
    print("-" * 60)
    if not missing:
        total = sum(len(columns) for columns in EXPECTED_COLUMNS.values())
        print(f"✅ All {total} expected columns exist.")
        return 0

    for table_name, column, error in missing:
        print(f"❌ {table_name}.{column} does NOT exist")
        print(f"   {error}")
    print("Apply the pending migrations: python scripts/migrate_database.py")
    return 1


if __name__ == "__main__":
    sys.exit(main())

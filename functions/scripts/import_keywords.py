"""
Import keywords from a CSV export into the keywords table.

Expected header:
    Keyword,Search Volume,Difficulty,Priority,Status,Current Ranking,Category

Rows are attached to the first auth user and inserted in batches. The import
only adds rows; existing keywords are left alone.
"""

from __future__ import annotations

import argparse
import csv
import logging
import re
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.dependencies import get_admin_client
from backend.entities import get_entity
from backend.errors import BackendError
from backend.rest import EntityClient

logger = logging.getLogger(__name__)

BATCH_SIZE = 100
BATCH_DELAY = 0.1  # seconds between batches, keeps clear of rate limits
DEFAULT_PRIORITY = 3
DEFAULT_STATUS = "queued"
LIST_TYPE = "currently_ranked"

LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class ImportSummary:
    success_count: int = 0
    error_count: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)


def parse_int(value: Optional[str]) -> Optional[int]:
    """Leading integer of a cell ("1,200" -> 1, "12.5" -> 12); None when absent."""
    match = LEADING_INT.match(value or "")
    return int(match.group(1)) if match else None


def _repair_lines(lines: Iterable[str]) -> Iterator[str]:
    # A data line with an odd number of quotes cannot be parsed; drop its quotes.
    for index, line in enumerate(lines):
        if index and line.count('"') % 2:
            line = line.replace('"', "")
        yield line


def read_keyword_rows(csv_path: Path) -> list[dict]:
    with csv_path.open(encoding="utf-8", newline="") as fh:
        return list(csv.DictReader(_repair_lines(fh)))


def _cell(row: dict, column: str) -> str:
    return (row.get(column) or "").strip()


def transform_keyword(row: dict, user_id: str, now: str) -> dict:
    return {
        "keyword": _cell(row, "Keyword"),
        "search_volume": parse_int(_cell(row, "Search Volume")) or 0,
        "difficulty": parse_int(_cell(row, "Difficulty")) or 0,
        "priority": parse_int(_cell(row, "Priority")) or DEFAULT_PRIORITY,
        "status": _cell(row, "Status").lower() or DEFAULT_STATUS,
        "current_ranking": parse_int(_cell(row, "Current Ranking")) or None,
        "category": _cell(row, "Category") or None,
        "list_type": LIST_TYPE,
        "user_id": user_id,
        "created_date": now,
        "updated_date": now,
    }


def prepare_keywords(rows: Iterable[dict], user_id: str) -> list[dict]:
    now = datetime.now(timezone.utc).isoformat()
    keywords = [transform_keyword(row, user_id, now) for row in rows]
    return [k for k in keywords if k["keyword"]]


def import_keywords(
    table: EntityClient,
    keywords: list[dict],
    *,
    batch_size: int = BATCH_SIZE,
    delay: float = BATCH_DELAY,
) -> ImportSummary:
    """Inserts keywords batch by batch; a failed batch is counted and skipped."""
    summary = ImportSummary()
    total_batches = (len(keywords) + batch_size - 1) // batch_size
    for start in range(0, len(keywords), batch_size):
        batch = keywords[start : start + batch_size]
        batch_num = start // batch_size + 1
        logger.info("Processing batch %d/%d", batch_num, total_batches)
        try:
            inserted = table.create_many(batch)
        except BackendError as exc:
            summary.error_count += len(batch)
            summary.errors.append((batch_num, str(exc)))
        else:
            summary.success_count += len(inserted)
        if delay and batch_num < total_batches:
            time.sleep(delay)
    return summary


def main() -> int:
    parser = argparse.ArgumentParser(description="Import keywords from a CSV file")
    parser.add_argument("csv_path", type=Path, help="Path to the keywords CSV export")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    if not args.csv_path.is_file():
        print(f"❌ File not found: {args.csv_path}")
        return 1

    try:
        client = get_admin_client()
        print("🔍 Finding user account...")
        users = client.list_users()
        if not users:
            print("❌ No users found. Please create a user account first.")
            return 1
        user = users[0]
        print(f"✅ Using user ID: {user['id']} ({user.get('email')})")

        print(f"📖 Reading CSV file: {args.csv_path}")
        keywords = prepare_keywords(read_keyword_rows(args.csv_path), user["id"])
        print(f"✅ Prepared {len(keywords)} keywords for import")

        table = get_entity("Keyword", client)
        existing = table.count({"user_id": user["id"]})
        if existing:
            print(f"⚠️  Warning: Found {existing} existing keywords for this user")
            print("   This import will ADD to existing keywords (not replace)")

        summary = import_keywords(table, keywords)
    except BackendError as exc:
        logger.error("Import failed: %s", exc)
        return 1

    print("=" * 60)
    print(f"✅ Successfully imported: {summary.success_count} keywords")
    print(f"❌ Failed to import: {summary.error_count} keywords")
    print("=" * 60)
    for batch_num, error in summary.errors:
        print(f"   Batch {batch_num}: {error}")
    return 1 if summary.error_count else 0


if __name__ == "__main__":
    sys.exit(main())

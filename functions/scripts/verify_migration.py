"""
Verify that the migrated schema is in place: tables, storage buckets and
seeded agents.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.dependencies import get_admin_client
from backend.errors import BackendError
from backend.rest import RestClient

logger = logging.getLogger(__name__)

EXPECTED_TABLES = [
    "keywords",
    "content_queue",
    "performance_metrics",
    "wordpress_connections",
    "automation_settings",
    "page_optimizations",
    "blog_posts",
    "social_posts",
    "knowledge_base_documents",
    "agent_feedback",
    "file_documents",
    "chat_channels",
    "chat_messages",
    "agent_definitions",
    "agent_conversations",
    "agent_messages",
]

EXPECTED_BUCKETS = [
    "knowledge-base",
    "content-images",
    "social-media",
    "uploads",
]


@dataclass
class CheckResult:
    name: str
    exists: bool
    detail: str = ""
    error: Optional[str] = None


def check_table(client: RestClient, table_name: str) -> CheckResult:
    try:
        count = client.table(table_name).count()
    except BackendError as exc:
        return CheckResult(table_name, False, error=str(exc))
    return CheckResult(table_name, True, detail=f"{count} rows")


def check_bucket(client: RestClient, bucket_name: str) -> CheckResult:
    try:
        bucket = client.get_bucket(bucket_name)
    except BackendError as exc:
        return CheckResult(bucket_name, False, error=str(exc))
    return CheckResult(
        bucket_name, True, detail="public" if bucket.get("public") else "private"
    )


def _print_results(results: list[CheckResult], label: str) -> int:
    for result in results:
        if result.exists:
            print(f"✅ {result.name.ljust(30)} ({result.detail})")
        else:
            print(f"❌ {result.name.ljust(30)} - {result.error}")
    ok = sum(1 for r in results if r.exists)
    print("-" * 60)
    print(f"{label}: {ok}/{len(results)} OK")
    return len(results) - ok


def report_agents(client: RestClient) -> None:
    try:
        agents = client.table("agent_definitions").find(
            {"is_active": True},
            order_by=None,
            columns="agent_name,display_name",
        )
    except BackendError as exc:
        print(f"❌ Failed to query agents: {exc}")
        return
    if not agents:
        print("⚠️  No agents found - run: python scripts/seed_agents.py")
        return
    print(f"✅ Found {len(agents)} active agents:")
    for agent in agents:
        print(f"   - {agent.get('display_name')} ({agent.get('agent_name')})")


def verify(client: RestClient) -> int:
    print("🔍 Checking database tables...")
    tables_failed = _print_results(
        [check_table(client, name) for name in EXPECTED_TABLES], "Tables"
    )

    print("🔍 Checking storage buckets...")
    buckets_failed = _print_results(
        [check_bucket(client, name) for name in EXPECTED_BUCKETS], "Buckets"
    )

    print("🔍 Checking AI agents...")
    report_agents(client)

    print("=" * 60)
    if not tables_failed and not buckets_failed:
        print("✅ MIGRATION VERIFIED SUCCESSFULLY!")
        return 0

    print("❌ MIGRATION INCOMPLETE")
    if tables_failed:
        print(f"⚠️  {tables_failed} tables missing or inaccessible")
    if buckets_failed:
        print(f"⚠️  {buckets_failed} storage buckets missing")
    print("Please review the migration SQL and try again.")
    return 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Verify the database migration")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    try:
        client = get_admin_client()
    except BackendError as exc:
        logger.error("%s", exc)
        return 1
    return verify(client)


if __name__ == "__main__":
    sys.exit(main())

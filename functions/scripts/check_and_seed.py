"""
Check whether the agent definitions have been seeded.
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
from backend.entities import get_entity
from backend.errors import BackendError
from backend.rest import RestClient

logger = logging.getLogger(__name__)


def check_agents(client: RestClient) -> int:
    try:
        agents = get_entity("AgentDefinition", client).find(
            {"is_active": True},
            order_by=None,
            columns="agent_name,display_name",
        )
    except BackendError as exc:
        logger.error("Error checking database: %s", exc)
        print("The agent_definitions table might not exist yet.")
        print("Run migrations first: python scripts/migrate_database.py")
        return 1

    if not agents:
        print("⚠️  No agents found in database.")
        print("Run the seeding script: python scripts/seed_agents.py")
        return 1

    print(f"✅ Found {len(agents)} agents in database:")
    for i, agent in enumerate(agents, start=1):
        print(f"   {i}. {agent.get('display_name')} ({agent.get('agent_name')})")
    print("Database is already seeded! No action needed.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Check agent definitions are seeded")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    try:
        client = get_admin_client()
    except BackendError as exc:
        logger.error("%s", exc)
        return 1
    return check_agents(client)


if __name__ == "__main__":
    sys.exit(main())

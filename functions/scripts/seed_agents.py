"""
Seed (or reset) the AI agent definitions.

Each catalogue agent is matched by agent_name: existing rows are updated,
missing ones are created.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.dependencies import get_admin_client
from backend.entities import get_entity
from backend.errors import BackendError
from backend.rest import EntityClient
from shared.agents import AGENT_DEFINITIONS, AgentDefinition

logger = logging.getLogger(__name__)


def seed_agents(
    table: EntityClient, agents: Sequence[AgentDefinition] = AGENT_DEFINITIONS
) -> tuple[int, int]:
    """Upserts agents one by one; returns (succeeded, failed)."""
    succeeded = 0
    failed = 0
    for agent in agents:
        row = agent.as_row()
        try:
            existing = table.find(
                {"agent_name": agent.agent_name},
                order_by=None,
                limit=1,
                columns="id",
            )
            if existing:
                table.update_where({"agent_name": agent.agent_name}, row)
                print(f"✅ Updated: {agent.display_name}")
            else:
                table.create(row)
                print(f"✅ Created: {agent.display_name}")
            succeeded += 1
        except BackendError as exc:
            print(f"❌ Failed: {agent.display_name}")
            logger.error("%s: %s", agent.agent_name, exc)
            failed += 1
    return succeeded, failed


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed AI agent definitions")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    try:
        client = get_admin_client()
    except BackendError as exc:
        logger.error("%s", exc)
        return 1

    print(f"🌱 Seeding {len(AGENT_DEFINITIONS)} AI agents...")
    succeeded, failed = seed_agents(get_entity("AgentDefinition", client))

    print("-" * 60)
    print(f"✅ Success: {succeeded} agents")
    if failed:
        print(f"❌ Errors: {failed} agents")
        return 1
    print("🎉 All agents seeded successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())

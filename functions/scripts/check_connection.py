"""
Check that the backend project is reachable with the configured anon key.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import get_settings
from backend.dependencies import get_rest_client
from backend.errors import BackendError, BackendRequestError, is_auth_error
from backend.management import dashboard_api_settings_url
from backend.rest import RestClient

logger = logging.getLogger(__name__)


def mask_key(key: Optional[str]) -> str:
    if not key:
        return "MISSING"
    return f"{key[: min(20, len(key) // 2)]}..."


def check_project_status(client: RestClient, project_ref: Optional[str]) -> bool:
    print("Test 1: Checking project status...")
    try:
        status = client.check_reachable()
    except BackendError as exc:
        print(f"❌ Network error: {exc}")
        print("   The project URL might be incorrect or unreachable.")
        return False

    print(f"   Response status: {status}")
    if status == 401:
        print("❌ Authentication failed (401 Unauthorized)")
        print("   Possible issues:")
        print("   1. The anon key is incorrect")
        print("   2. The project is paused or disabled")
        print("   3. The project URL is wrong")
        print("   To fix:")
        print(f"   1. Go to: {dashboard_api_settings_url(project_ref)}")
        print('   2. Copy the "anon" public key')
        print("   3. Update SUPABASE_ANON_KEY in .env.local")
        return False
    if 200 <= status < 300 or status == 404:
        print("✅ Project is reachable!")
        return True

    print(f"❌ Unexpected response: {status}")
    return False


def check_database(client: RestClient, project_ref: Optional[str]) -> bool:
    print("Test 2: Querying agent_definitions table...")
    try:
        client.table("agent_definitions").find(order_by=None, limit=1, columns="id")
    except BackendRequestError as exc:
        print(f"❌ Database query failed: {exc.message}")
        print(f"   Error code: {exc.code}")
        print(f"   Details: {exc.details}")
        if is_auth_error(exc):
            print("   The API key appears to be invalid or expired.")
            print(f"   Verify your credentials at: {dashboard_api_settings_url(project_ref)}")
        return False
    except BackendError as exc:
        print(f"❌ Connection test failed: {exc}")
        return False

    print("✅ Database query successful!")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Test the backend connection")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    settings = get_settings()

    print("🔍 Testing backend connection...")
    print(f"URL: {settings.supabase_url}")
    print(f"Anon Key: {mask_key(settings.supabase_anon_key)}")

    try:
        client = get_rest_client()
    except BackendError as exc:
        logger.error("%s", exc)
        return 1

    project_ref = settings.project_ref
    if check_project_status(client, project_ref) and check_database(client, project_ref):
        print("🎉 All tests passed! Your backend connection is working.")
        return 0

    print("❌ Some tests failed. Please check your credentials.")
    return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Client for the provider's management API (used to run raw SQL).
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from backend.errors import BackendConnectionError, BackendRequestError

logger = logging.getLogger(__name__)

MANAGEMENT_API_URL = "https://api.supabase.com"
DASHBOARD_URL = "https://supabase.com/dashboard"
REQUEST_TIMEOUT = 120  # seconds; migrations can be slow


def dashboard_sql_url(project_ref: Optional[str]) -> str:
    if not project_ref:
        return DASHBOARD_URL
    return f"{DASHBOARD_URL}/project/{project_ref}/sql/new"


def dashboard_api_settings_url(project_ref: Optional[str]) -> str:
    if not project_ref:
        return DASHBOARD_URL
    return f"{DASHBOARD_URL}/project/{project_ref}/settings/api"


class ManagementClient:
    def __init__(
        self,
        access_token: str,
        project_ref: str,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = MANAGEMENT_API_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.project_ref = project_ref
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json",
            }
        )

    def execute_sql(self, sql: str) -> list:
        """Run ``sql`` against the project database and return the result rows."""
        url = f"{self.base_url}/v1/projects/{self.project_ref}/database/query"
        try:
            response = self.session.post(
                url, json={"query": sql}, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise BackendConnectionError(f"POST {url} failed: {exc}") from exc

        if not response.ok:
            raise BackendRequestError.from_response(response)

        try:
            result = response.json()
        except ValueError:
            return []
        if isinstance(result, dict):
            # Older API versions wrap rows in {"result": [...]}
            result = result.get("result") or []
        logger.debug("Management query returned %d rows", len(result))
        return result

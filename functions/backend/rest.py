"""
Thin client for the provider's REST (PostgREST) and storage endpoints.

Only the calls the app and the admin scripts need are implemented; query
planning, row-level security and auth validation all happen remotely.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import requests

from backend.errors import BackendConnectionError, BackendRequestError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_filters(filters: Optional[dict]) -> dict[str, str]:
    """Translate {column: value} into PostgREST query params.

    Lists become ``in.(...)`` filters and ``None`` values are skipped.
    """
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set)):
            joined = ",".join(_format_value(v) for v in value)
            params[column] = f"in.({joined})"
        else:
            params[column] = f"eq.{_format_value(value)}"
    return params


def parse_order(order: str) -> tuple[str, bool]:
    """``"-created_date"`` -> ``("created_date", False)``."""
    if order.startswith("-"):
        return order[1:], False
    return order, True


def _count_from_content_range(header: Optional[str]) -> int:
    # e.g. "0-24/3573" or "*/0"
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class RestClient:
    """Authenticated session against ``{base_url}/rest/v1`` and ``/storage/v1``."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            }
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        headers: Optional[dict] = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise BackendConnectionError(f"{method} {url} failed: {exc}") from exc
        if not response.ok:
            error = BackendRequestError.from_response(response)
            logger.debug("%s %s -> %s %s", method, path, response.status_code, error)
            raise error
        return response

    def check_reachable(self) -> int:
        """Return the status code of the REST root without raising on 4xx/5xx."""
        url = f"{self.base_url}/rest/v1/"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise BackendConnectionError(f"GET {url} failed: {exc}") from exc
        return response.status_code

    def table(self, name: str) -> "EntityClient":
        return EntityClient(name, self)

    def get_bucket(self, name: str) -> dict:
        return self.request("GET", f"/storage/v1/bucket/{name}").json()

    def list_users(self) -> list[dict]:
        """Auth users, via the admin endpoint (needs the service role key)."""
        body = self.request("GET", "/auth/v1/admin/users").json()
        if isinstance(body, dict):
            return body.get("users") or []
        return body or []


class EntityClient:
    """CRUD handle for one remote table."""

    def __init__(self, table_name: str, client: RestClient):
        self.table_name = table_name
        self.client = client

    @property
    def path(self) -> str:
        return f"/rest/v1/{self.table_name}"

    def find(
        self,
        filters: Optional[dict] = None,
        *,
        order_by: Optional[str] = "created_date",
        ascending: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        columns: str = "*",
    ) -> list[dict]:
        params = {"select": columns, **build_filters(filters)}
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = str(limit)
        if offset:
            params["offset"] = str(offset)
        return self.client.request("GET", self.path, params=params).json() or []

    def find_one(self, record_id: str) -> Optional[dict]:
        rows = self.find({"id": record_id}, order_by=None, limit=1)
        return rows[0] if rows else None

    def list(
        self,
        order: str = "-created_date",
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[dict]:
        column, ascending = parse_order(order)
        return self.find(
            order_by=column, ascending=ascending, limit=limit, offset=offset
        )

    def create(self, data: dict) -> dict:
        rows = self.client.request(
            "POST",
            self.path,
            json=data,
            headers={"Prefer": "return=representation"},
        ).json()
        return rows[0] if isinstance(rows, list) and rows else rows

    def create_many(self, rows: list[dict]) -> list[dict]:
        """Bulk insert in one request; returns the inserted rows."""
        return (
            self.client.request(
                "POST",
                self.path,
                json=rows,
                headers={"Prefer": "return=representation"},
            ).json()
            or []
        )

    def update(self, record_id: str, data: dict) -> Optional[dict]:
        rows = self.update_where({"id": record_id}, data)
        return rows[0] if rows else None

    def update_where(self, filters: dict, data: dict) -> list[dict]:
        params = build_filters(filters)
        if not params:
            raise ValueError("update_where requires at least one filter")
        return (
            self.client.request(
                "PATCH",
                self.path,
                params=params,
                json=data,
                headers={"Prefer": "return=representation"},
            ).json()
            or []
        )

    def delete(self, record_id: str) -> bool:
        self.client.request("DELETE", self.path, params=build_filters({"id": record_id}))
        return True

    def count(self, filters: Optional[dict] = None) -> int:
        params = {"select": "*", **build_filters(filters)}
        response = self.client.request(
            "HEAD",
            self.path,
            params=params,
            headers={"Prefer": "count=exact"},
        )
        return _count_from_content_range(response.headers.get("Content-Range"))

    def exists(self, columns: Iterable[str] = ("*",)) -> None:
        """Zero-row probe; raises BackendRequestError if the table/columns are missing."""
        self.client.request(
            "GET", self.path, params={"select": ",".join(columns), "limit": "0"}
        )

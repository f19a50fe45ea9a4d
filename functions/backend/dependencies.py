"""
Dependency wiring for the FastAPI app and the admin scripts.
"""

from __future__ import annotations

import requests

from backend.config import get_settings
from backend.errors import MissingConfigError
from backend.rest import RestClient

_http_session: requests.Session | None = None
_rest_client: RestClient | None = None
_admin_client: RestClient | None = None


def get_http_session() -> requests.Session:
    """
    Return a singleton session for outbound calls to third-party APIs.
    """
    global _http_session
    if _http_session:
        return _http_session
    _http_session = requests.Session()
    return _http_session


def get_rest_client() -> RestClient:
    """
    Return a singleton REST client authenticated with the public anon key.
    """
    global _rest_client
    if _rest_client:
        return _rest_client

    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise MissingConfigError("SUPABASE_URL", "SUPABASE_ANON_KEY")
    _rest_client = RestClient(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.request_timeout,
    )
    return _rest_client


def get_admin_client() -> RestClient:
    """
    Return a singleton REST client using the service role key when present,
    falling back to the anon key.
    """
    global _admin_client
    if _admin_client:
        return _admin_client

    settings = get_settings()
    if not settings.supabase_url or not settings.admin_key:
        raise MissingConfigError("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")
    _admin_client = RestClient(
        settings.supabase_url,
        settings.admin_key,
        timeout=settings.request_timeout,
    )
    return _admin_client


def reset_clients() -> None:
    """Drop cached clients (useful in tests)."""
    global _http_session, _rest_client, _admin_client
    _http_session = None
    _rest_client = None
    _admin_client = None

"""
Exceptions raised by the provider API clients.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

MISSING_RELATION_CODES = {"42P01", "PGRST205"}


class BackendError(Exception):
    """Base class for failures talking to the backend-as-a-service."""


class MissingConfigError(BackendError):
    """Raised when required credentials are not configured."""

    def __init__(self, *names: str):
        self.names = names
        super().__init__(f"Missing required settings: {', '.join(names)}")


class BackendConnectionError(BackendError):
    """The provider could not be reached at all."""


class BackendRequestError(BackendError):
    """The provider answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: Optional[str] = None,
        details: Any = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        self.hint = hint

    @classmethod
    def from_response(cls, response: requests.Response) -> "BackendRequestError":
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = (
                body.get("message")
                or body.get("error_description")
                or body.get("error")
                or body.get("msg")
                or response.reason
            )
            return cls(
                str(message),
                status_code=response.status_code,
                code=body.get("code"),
                details=body.get("details"),
                hint=body.get("hint"),
            )
        text = (response.text or "").strip()
        return cls(
            text or response.reason or f"HTTP {response.status_code}",
            status_code=response.status_code,
        )


def is_missing_relation(error: BackendRequestError) -> bool:
    if error.code in MISSING_RELATION_CODES:
        return True
    message = error.message.lower()
    return (
        "relation" in message and "does not exist" in message
    ) or "could not find the table" in message


def is_auth_error(error: BackendRequestError) -> bool:
    if error.status_code == 401:
        return True
    message = error.message.lower()
    return "jwt" in message or "api key" in message

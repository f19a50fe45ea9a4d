"""
Pydantic schemas for the serverless function endpoints.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class TrackDownloadResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: Literal["ok"]

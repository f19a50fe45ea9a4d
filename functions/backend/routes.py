"""
HTTP routes for the serverless functions.
"""

from __future__ import annotations

import logging

import requests
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from backend.config import Settings, get_settings
from backend.dependencies import get_http_session
from backend.schemas import ErrorResponse, HealthResponse, TrackDownloadResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@router.post(
    "/track-unsplash-download",
    response_model=TrackDownloadResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
async def track_unsplash_download(
    request: Request,
    settings: Settings = Depends(get_settings),
    session: requests.Session = Depends(get_http_session),
):
    """
    Report an image download to the stock image API, as its terms require.

    Tracking is best effort: every outcome other than a missing
    ``downloadLocation`` is answered with 200 so the caller's flow continues.
    """
    try:
        payload = await request.json()
    except ValueError as exc:
        logger.error("[track-unsplash-download] Invalid request body: %s", exc)
        return TrackDownloadResponse(success=False, error=str(exc))

    download_location = (
        payload.get("downloadLocation") if isinstance(payload, dict) else None
    )
    if not download_location:
        return JSONResponse(
            status_code=400, content={"error": "Missing downloadLocation"}
        )

    if not settings.unsplash_access_key:
        logger.warning("[track-unsplash-download] Unsplash API key not configured")
        return TrackDownloadResponse(success=False, message="API key not configured")

    try:
        response = await run_in_threadpool(
            session.get,
            download_location,
            headers={"Authorization": f"Client-ID {settings.unsplash_access_key}"},
            timeout=settings.request_timeout,
        )
    except requests.RequestException as exc:
        logger.error("[track-unsplash-download] Error: %s", exc)
        return TrackDownloadResponse(success=False, error=str(exc))

    if not response.ok:
        logger.error(
            "[track-unsplash-download] Failed to track download: %s %s",
            response.status_code,
            response.text[:500],
        )
        return TrackDownloadResponse(
            success=False,
            message=f"Tracking request failed with status {response.status_code}",
        )

    return TrackDownloadResponse(success=True)

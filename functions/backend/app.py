"""
FastAPI application entry point for the serverless functions.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import get_settings
from backend.routes import router

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Perdia Functions (FastAPI)", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=CORS_ALLOW_HEADERS,
        max_age=86400,
    )
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()

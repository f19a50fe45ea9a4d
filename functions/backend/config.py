"""
Configuration and settings for the Perdia backend and admin scripts.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional
from urllib.parse import urlparse

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings shared by the FastAPI service and scripts."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/functions/v1")
    request_timeout: float = Field(default=30.0)

    # Backend-as-a-service project (accepts the frontend's VITE_ names too)
    supabase_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "VITE_SUPABASE_URL"),
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "SUPABASE_SERVICE_ROLE_KEY", "VITE_SUPABASE_SERVICE_ROLE_KEY"
        ),
    )

    # Management API (raw SQL execution)
    supabase_access_token: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUPABASE_ACCESS_TOKEN")
    )
    supabase_project_ref: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUPABASE_PROJECT_REF")
    )

    # Direct Postgres connection for migrations
    database_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("DATABASE_URL")
    )
    migrations_dir: str = Field(
        default="supabase/migrations",
        validation_alias=AliasChoices("MIGRATIONS_DIR"),
    )
    # Table queried to decide whether the base schema is already in place
    migration_sentinel_table: str = Field(
        default="keywords",
        validation_alias=AliasChoices("MIGRATION_SENTINEL_TABLE"),
    )

    # Stock image API
    unsplash_access_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("UNSPLASH_ACCESS_KEY")
    )

    @property
    def project_ref(self) -> Optional[str]:
        """Explicit project ref, or the first label of a *.supabase.co host."""
        if self.supabase_project_ref:
            return self.supabase_project_ref
        if not self.supabase_url:
            return None
        host = urlparse(self.supabase_url).hostname or ""
        if host.endswith(".supabase.co"):
            return host.split(".", 1)[0]
        return None

    @property
    def admin_key(self) -> Optional[str]:
        return self.supabase_service_role_key or self.supabase_anon_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

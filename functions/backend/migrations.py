"""
Schema migration runners.

Migrations are plain ``.sql`` files applied in file-name order, either through
the management API or over a direct database connection. There is no retry:
the first failure stops the run and the operator falls back to pasting the
SQL into the dashboard by hand.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from sqlalchemy import Column, Float, String, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from backend.config import Settings
from backend.errors import BackendError
from backend.management import ManagementClient, dashboard_sql_url

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MARKERS = ("already exists", "duplicate")
VERSION_PATTERN = re.compile(r"^(\d+)")

APPLIED = "applied"
ALREADY_APPLIED = "already_applied"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class Migration:
    version: str
    name: str
    path: Path

    @property
    def sql(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass
class MigrationResult:
    migration: Migration
    status: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != FAILED


@dataclass
class MigrationReport:
    results: list[MigrationResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failed(self) -> Optional[MigrationResult]:
        for result in self.results:
            if not result.ok:
                return result
        return None

    def count(self, status: str) -> int:
        return sum(1 for result in self.results if result.status == status)


class MigrationRunner(Protocol):
    def apply(self, migration: Migration) -> MigrationResult:
        ...


def is_already_applied_error(message: str) -> bool:
    lowered = (message or "").lower()
    return any(marker in lowered for marker in ALREADY_APPLIED_MARKERS)


def discover_migrations(directory: str | Path) -> list[Migration]:
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Migrations directory not found: {root}")
    migrations = []
    for path in sorted(root.glob("*.sql")):
        match = VERSION_PATTERN.match(path.stem)
        version = match.group(1) if match else path.stem
        migrations.append(Migration(version=version, name=path.stem, path=path))
    return migrations


def _read_sql(migration: Migration) -> tuple[Optional[str], Optional[MigrationResult]]:
    try:
        return migration.sql, None
    except OSError as exc:
        return None, MigrationResult(migration, FAILED, f"Cannot read {migration.path}: {exc}")


class ManagementApiRunner:
    """Executes each migration as a single management API query."""

    def __init__(self, client: ManagementClient):
        self.client = client

    def apply(self, migration: Migration) -> MigrationResult:
        sql, failure = _read_sql(migration)
        if failure:
            return failure
        try:
            self.client.execute_sql(sql)
        except BackendError as exc:
            if is_already_applied_error(str(exc)):
                return MigrationResult(migration, ALREADY_APPLIED, str(exc))
            return MigrationResult(migration, FAILED, str(exc))
        return MigrationResult(migration, APPLIED)


Base = declarative_base()


class SchemaMigrationRow(Base):
    __tablename__ = "schema_migrations"

    version = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    applied_at = Column(Float, nullable=False)


class DirectSqlRunner:
    """
    SQLAlchemy-backed runner. Accepts any SQLAlchemy URL (Postgres in
    production, SQLite for tests) and keeps a ``schema_migrations`` ledger.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for DirectSqlRunner")
        self.engine = create_engine(database_url, future=True, pool_pre_ping=True)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def applied_versions(self) -> list[str]:
        with self.Session() as session:
            stmt = select(SchemaMigrationRow.version).order_by(
                SchemaMigrationRow.version.asc()
            )
            return list(session.execute(stmt).scalars())

    def history(self) -> list[SchemaMigrationRow]:
        with self.Session() as session:
            stmt = select(SchemaMigrationRow).order_by(SchemaMigrationRow.version.asc())
            return list(session.execute(stmt).scalars())

    def _record(self, migration: Migration) -> None:
        with self.Session() as session:
            session.merge(
                SchemaMigrationRow(
                    version=migration.version,
                    name=migration.name,
                    applied_at=time.time(),
                )
            )
            session.commit()

    def apply(self, migration: Migration) -> MigrationResult:
        with self.Session() as session:
            if session.get(SchemaMigrationRow, migration.version) is not None:
                return MigrationResult(migration, SKIPPED)

        sql, failure = _read_sql(migration)
        if failure:
            return failure
        try:
            with self.engine.begin() as conn:
                conn.exec_driver_sql(sql)
        except SQLAlchemyError as exc:
            message = str(getattr(exc, "orig", None) or exc)
            if not is_already_applied_error(message):
                return MigrationResult(migration, FAILED, message)
            # Only committed files reach the ledger; this one is retried next run.
            return MigrationResult(migration, ALREADY_APPLIED, message)

        self._record(migration)
        return MigrationResult(migration, APPLIED)


def run_migrations(
    migrations: list[Migration], runner: MigrationRunner
) -> MigrationReport:
    """Apply migrations in order, stopping at the first failure."""
    report = MigrationReport()
    for migration in migrations:
        logger.info("Applying %s", migration.name)
        result = runner.apply(migration)
        report.results.append(result)
        if result.status == ALREADY_APPLIED:
            logger.warning("%s: objects already exist, treating as applied", migration.name)
        elif result.status == SKIPPED:
            logger.info("%s: already recorded, skipping", migration.name)
        elif not result.ok:
            logger.error("%s failed: %s", migration.name, result.error)
            break
    return report


def select_runner(settings: Settings) -> Optional[MigrationRunner]:
    """Pick the most direct way to run SQL with the configured credentials."""
    if settings.database_url:
        return DirectSqlRunner(settings.database_url)
    if settings.supabase_access_token and settings.project_ref:
        return ManagementApiRunner(
            ManagementClient(settings.supabase_access_token, settings.project_ref)
        )
    return None


def manual_instructions(migration: Migration, project_ref: Optional[str]) -> str:
    """Dashboard URL plus the raw SQL to paste into the SQL editor."""
    sql, failure = _read_sql(migration)
    lines = [
        "MANUAL MIGRATION REQUIRED",
        "",
        f"1. Open the SQL editor: {dashboard_sql_url(project_ref)}",
        f"2. Paste the contents of {migration.path}",
        '3. Click "Run"',
        "",
    ]
    if failure:
        lines.append(failure.error)
    else:
        lines.extend(["-- " + migration.name, sql.rstrip()])
    return "\n".join(lines)

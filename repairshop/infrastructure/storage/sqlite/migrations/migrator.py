"""
Versioned schema migrations for the shop database.

Migration files live next to this module as ``vNNN_<name>.sql`` and are
applied in version order. Each applied file is recorded in
``schema_migrations`` together with a short content hash; a recorded file
that has since been edited stops the run instead of being re-applied.

An existing database file is copied aside before migrating. The copy is
dropped after a clean run and restored if the run dies on a database or
filesystem error.

Run from the command line with ``repairshop-migrate`` (``--status`` and
``--verify`` inspect without changing anything).
"""

import argparse
import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from repairshop.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = [
    "categories",
    "units",
    "products",
    "purchase_records",
    "customers",
    "sales",
    "sale_items",
    "repairs",
    "repair_used_parts",
    "business_profile",
    "schema_migrations",
]

_FILENAME = re.compile(r"^v(\d+)_(\w+)\.sql$")

_TRACKING_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    execution_time_ms INTEGER NOT NULL DEFAULT 0,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
)
"""


@dataclass(frozen=True)
class MigrationInfo:
    """One ``vNNN_<name>.sql`` file."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=digest)


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in ``directory``, lowest version first."""
    found = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        # No tracking table yet
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await _applied_checksums(conn)
    return max(applied, key=int) if applied else None


async def _foreign_key_violations(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    return len(await cursor.fetchall())


async def _apply(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
            "VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, elapsed_ms()),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            migration.version, migration.name, False, elapsed_ms(), error=str(e)
        )

    violations = await _foreign_key_violations(conn)
    if violations:
        logger.error("migration_left_fk_violations", version=migration.version, count=violations)
        return MigrationResult(
            migration.version,
            migration.name,
            False,
            elapsed_ms(),
            error=f"{violations} foreign key violations",
        )

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed_ms())
    return MigrationResult(migration.version, migration.name, True, elapsed_ms())


async def _migrate(conn: aiosqlite.Connection, migrations_dir: Path) -> list[MigrationResult]:
    await conn.execute(_TRACKING_TABLE_SQL)
    await conn.commit()

    applied = await _applied_checksums(conn)
    results: list[MigrationResult] = []
    for migration in discover_migrations(migrations_dir):
        recorded = applied.get(migration.version)
        if recorded == migration.checksum:
            continue
        if recorded is not None:
            logger.error(
                "migration_checksum_mismatch",
                version=migration.version,
                recorded=recorded,
                on_disk=migration.checksum,
            )
            break

        result = await _apply(conn, migration)
        results.append(result)
        if not result.success:
            break
    return results


def create_backup(db_path: Path) -> Path:
    """Copy ``db_path`` to a timestamped sibling file."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> list[MigrationResult]:
    """
    Apply every pending migration to ``db_path``.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Copy an existing file aside first
        migrations_dir: Where the ``vNNN_*.sql`` files live

    Returns:
        One result per migration attempted; empty when already current
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            results = await _migrate(conn, migrations_dir)
    except (aiosqlite.Error, OSError) as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()
    return results


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Applied and pending migration versions of a database file."""
    db_path = db_path or get_settings().storage.db_path
    discovered = discover_migrations()

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [m.version for m in discovered],
            "total_migrations": len(discovered),
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await _applied_checksums(conn)
        current = await get_current_version(conn)

    return {
        "exists": True,
        "current_version": current,
        "applied_migrations": sorted(applied, key=int),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """Foreign key, page integrity and required-table checks."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        violations = await _foreign_key_violations(conn)
        integrity = (await (await conn.execute("PRAGMA integrity_check")).fetchone())[0]
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in tables]
    return [
        {
            "check": "foreign_keys",
            "status": "FAIL" if violations else "PASS",
            "violations": violations,
        },
        {
            "check": "integrity",
            "status": "PASS" if integrity == "ok" else "FAIL",
            "result": integrity,
        },
        {
            "check": "required_tables",
            "status": "FAIL" if missing else "PASS",
            "missing": missing,
        },
    ]


async def _run_cli(args: argparse.Namespace) -> int:
    if args.status:
        status = await get_migration_status(args.db_path)
        print(f"Database exists:    {status['exists']}")
        print(f"Current version:    {status['current_version'] or 'none'}")
        print(f"Applied migrations: {', '.join(status['applied_migrations']) or '-'}")
        print(f"Pending migrations: {', '.join(status['pending_migrations']) or '-'}")
        return 0

    if args.verify:
        checks = await verify_schema_integrity(args.db_path)
        for check in checks:
            extra = {k: v for k, v in check.items() if k not in ("check", "status")}
            print(f"[{check['status']}] {check['check']} {extra}")
        return 0 if all(c["status"] == "PASS" for c in checks) else 1

    results = await initialize_database(args.db_path, create_backup_before=not args.no_backup)
    if not results:
        print("Database is up to date.")
    for r in results:
        outcome = "OK" if r.success else "FAILED"
        print(f"[{outcome}] v{r.version} {r.name} ({r.execution_time_ms}ms)")
        if r.error:
            print(f"    {r.error}")
    return 0 if all(r.success for r in results) else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Repair shop database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--verify", action="store_true", help="Verify schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    raise SystemExit(asyncio.run(_run_cli(parser.parse_args())))


if __name__ == "__main__":
    main()

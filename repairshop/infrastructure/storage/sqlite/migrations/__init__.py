"""Database migrations module."""

from repairshop.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    create_backup,
    discover_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "create_backup",
    "discover_migrations",
    "get_current_version",
    "get_migration_status",
    "initialize_database",
    "restore_backup",
    "verify_schema_integrity",
]

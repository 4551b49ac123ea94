"""Versioned preference migrations."""

from .manager import (
    Migration,
    MigrationManager,
    MigrationStep,
    PreferenceSnapshot,
    create_migration,
)
from .helpers import (
    rename_key,
    remove_key,
    add_key,
    transform_value,
    split_key,
    merge_keys,
)

__all__ = [
    "Migration",
    "MigrationManager",
    "MigrationStep",
    "PreferenceSnapshot",
    "create_migration",
    "rename_key",
    "remove_key",
    "add_key",
    "transform_value",
    "split_key",
    "merge_keys",
]

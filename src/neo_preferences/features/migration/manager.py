"""Versioned preference migrations.

A migration transforms a ``{key: PreferenceMetadata}`` snapshot from one
schema version to the next (``up``) or back (``down``). Migrating up from
version ``a`` to ``b`` applies ``a+1 .. b``; migrating down applies
``a .. b+1`` in reverse.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Union

from ...core.entities import PreferenceMetadata
from ...core.exceptions import ConfigurationError, MigrationError

logger = logging.getLogger(__name__)

PreferenceSnapshot = Dict[str, PreferenceMetadata]
MigrationStep = Callable[
    [PreferenceSnapshot],
    Union[PreferenceSnapshot, Awaitable[PreferenceSnapshot]],
]


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    up: MigrationStep
    down: MigrationStep


def create_migration(version: int, name: str, up: MigrationStep, down: MigrationStep) -> Migration:
    return Migration(version=version, name=name, up=up, down=down)


class MigrationManager:
    """Registry of migrations keyed by version."""

    def __init__(self):
        self._migrations: Dict[int, Migration] = {}
        self._current_version = 0

    def register(self, migration: Migration) -> None:
        if migration.version in self._migrations:
            raise ConfigurationError(
                f"Migration for version {migration.version} already exists",
                details={"version": migration.version},
            )

        self._migrations[migration.version] = migration
        self._current_version = max(self._current_version, migration.version)

    @property
    def current_version(self) -> int:
        """Highest registered version."""
        return self._current_version

    def get_migrations(self) -> List[Migration]:
        return [self._migrations[version] for version in sorted(self._migrations)]

    @staticmethod
    def _path(from_version: int, to_version: int) -> List[int]:
        if from_version < to_version:
            return list(range(from_version + 1, to_version + 1))
        return list(range(from_version, to_version, -1))

    def can_migrate(self, from_version: int, to_version: int) -> bool:
        return all(version in self._migrations for version in self._path(from_version, to_version))

    async def migrate(
        self,
        preferences: PreferenceSnapshot,
        from_version: int,
        to_version: int,
    ) -> PreferenceSnapshot:
        """Apply every step between the two versions.

        Raises:
            MigrationError: A step is missing or raised
        """
        if from_version == to_version:
            return preferences

        direction = "up" if from_version < to_version else "down"
        current = preferences

        for version in self._path(from_version, to_version):
            migration = self._migrations.get(version)
            if migration is None:
                raise MigrationError(version, direction, LookupError("Migration not found"))

            step = migration.up if direction == "up" else migration.down
            try:
                result = step(current)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                raise MigrationError(version, direction, e) from e

            logger.info(f"Applied migration {version} ({migration.name}) {direction}")
            current = result

        return current

    async def migrate_to_latest(self, preferences: PreferenceSnapshot, from_version: int) -> PreferenceSnapshot:
        return await self.migrate(preferences, from_version, self._current_version)

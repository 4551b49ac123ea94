"""In-memory audit logger."""

import threading
from datetime import datetime
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from ...config.constants import AuditAction, AuditDefaults
from ...core.entities import AuditFilter, AuditLogEntry
from ...core.exceptions import PreferenceError

_ENTRY_LIST = TypeAdapter(List[AuditLogEntry])


class InMemoryAuditLogger:
    """Keeps the newest ``max_entries`` audit entries in memory."""

    def __init__(self, max_entries: int = AuditDefaults.MAX_ENTRIES):
        self._max_entries = max_entries
        self._entries: List[AuditLogEntry] = []
        self._lock = threading.Lock()

    def log(self, entry: AuditLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)
            if len(self._entries) > self._max_entries:
                del self._entries[:-self._max_entries]

    def get_entries(self, filter: Optional[AuditFilter] = None) -> List[AuditLogEntry]:
        with self._lock:
            entries = list(self._entries)

        if filter is None:
            return entries
        return [entry for entry in entries if filter.matches(entry)]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_by_action(self, action: AuditAction) -> List[AuditLogEntry]:
        return self.get_entries(AuditFilter(action=action))

    def get_by_key(self, key: str) -> List[AuditLogEntry]:
        return self.get_entries(AuditFilter(key=key))

    def get_by_provider(self, provider: str) -> List[AuditLogEntry]:
        return self.get_entries(AuditFilter(provider=provider))

    def get_by_time_range(self, start_date: datetime, end_date: datetime) -> List[AuditLogEntry]:
        return self.get_entries(AuditFilter(start_date=start_date, end_date=end_date))

    def export(self) -> str:
        """Serialize all entries as a JSON array."""
        return _ENTRY_LIST.dump_json(self.get_entries(), indent=2).decode("utf-8")

    def import_entries(self, data: str) -> None:
        """Replace the stored entries with a JSON array produced by ``export``."""
        try:
            entries = _ENTRY_LIST.validate_json(data)
        except PydanticValidationError as e:
            raise PreferenceError(
                f"Failed to import audit log: {e}",
                error_code="AUDIT_IMPORT_ERROR",
            )

        with self._lock:
            self._entries = entries[-self._max_entries:]

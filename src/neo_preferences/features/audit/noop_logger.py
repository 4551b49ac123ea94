"""Audit logger used when auditing is disabled."""

from typing import List, Optional

from ...core.entities import AuditFilter, AuditLogEntry


class NoOpAuditLogger:
    def log(self, entry: AuditLogEntry) -> None:
        pass

    def get_entries(self, filter: Optional[AuditFilter] = None) -> List[AuditLogEntry]:
        return []

    def clear(self) -> None:
        pass

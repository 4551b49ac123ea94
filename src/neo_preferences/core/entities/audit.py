"""Audit trail entities.

Entries are pydantic models so that loggers can export and re-import them
as JSON without hand-written (de)serialization.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...config.constants import AuditAction
from .preference import utc_now


class AuditLogEntry(BaseModel):
    """One recorded operation against the preference store."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    timestamp: datetime = Field(default_factory=utc_now)
    action: AuditAction
    key: str
    provider: str
    value: Any = None
    old_value: Any = None
    user_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class AuditFilter(BaseModel):
    """Criteria for selecting audit entries; unset fields match everything."""

    action: Optional[AuditAction] = None
    key: Optional[str] = None
    provider: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    user_id: Optional[str] = None

    def matches(self, entry: AuditLogEntry) -> bool:
        if self.action is not None and entry.action != self.action:
            return False
        if self.key is not None and entry.key != self.key:
            return False
        if self.provider is not None and entry.provider != self.provider:
            return False
        if self.user_id is not None and entry.user_id != self.user_id:
            return False
        if self.start_date is not None and entry.timestamp < self.start_date:
            return False
        if self.end_date is not None and entry.timestamp > self.end_date:
            return False
        return True

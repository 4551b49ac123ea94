"""Audit logger that forwards entries to the ``logging`` module."""

import json
import logging
from typing import List, Optional

from ...config.logging_config import LoggingConfig
from ...core.entities import AuditFilter, AuditLogEntry


class LoggingAuditLogger:
    """Writes one log record per audit entry; stores nothing.

    Records go to the ``neo_preferences.audit`` logger, which
    ``ENABLE_AUDIT_LOGGING=false`` silences.
    """

    def __init__(self, logger_name: str = LoggingConfig.AUDIT_LOGGER_NAME, level: int = logging.INFO):
        self._logger = logging.getLogger(logger_name)
        self._level = level

    def log(self, entry: AuditLogEntry) -> None:
        message = f"[{entry.timestamp.isoformat()}] {entry.action.value.upper()} {entry.key} ({entry.provider})"
        if entry.value is not None:
            message = f"{message} -> {json.dumps(entry.value, default=str)}"
        self._logger.log(self._level, message)

    def get_entries(self, filter: Optional[AuditFilter] = None) -> List[AuditLogEntry]:
        return []

    def clear(self) -> None:
        pass

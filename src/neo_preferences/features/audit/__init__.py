"""Audit loggers for preference operations."""

from .in_memory_logger import InMemoryAuditLogger
from .file_logger import FileAuditLogger
from .logging_logger import LoggingAuditLogger
from .noop_logger import NoOpAuditLogger

__all__ = [
    "InMemoryAuditLogger",
    "FileAuditLogger",
    "LoggingAuditLogger",
    "NoOpAuditLogger",
]

"""Conflict resolution strategies."""

from .conflict_resolver import ConflictResolver

__all__ = ["ConflictResolver"]

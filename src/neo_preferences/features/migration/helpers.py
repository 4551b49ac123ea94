"""Snapshot transforms for writing migrations.

Every helper returns a new dict and leaves its input untouched.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from ...core.entities import PreferenceMetadata
from .manager import PreferenceSnapshot


def rename_key(preferences: PreferenceSnapshot, old_key: str, new_key: str) -> PreferenceSnapshot:
    result = dict(preferences)
    metadata = result.pop(old_key, None)
    if metadata is not None:
        result[new_key] = metadata.with_changes(key=new_key)
    return result


def remove_key(preferences: PreferenceSnapshot, key: str) -> PreferenceSnapshot:
    result = dict(preferences)
    result.pop(key, None)
    return result


def add_key(preferences: PreferenceSnapshot, metadata: PreferenceMetadata) -> PreferenceSnapshot:
    """Add or replace the entry for ``metadata.key``."""
    result = dict(preferences)
    result[metadata.key] = metadata
    return result


def transform_value(
    preferences: PreferenceSnapshot,
    key: str,
    transformer: Callable[[Any], Any],
) -> PreferenceSnapshot:
    result = dict(preferences)
    metadata = result.get(key)
    if metadata is not None:
        result[key] = metadata.with_changes(value=transformer(metadata.value))
    return result


def split_key(
    preferences: PreferenceSnapshot,
    source_key: str,
    splitter: Callable[[Any], Dict[str, Any]],
) -> PreferenceSnapshot:
    """Replace one key with the keys ``splitter`` derives from its value."""
    result = dict(preferences)
    metadata = result.pop(source_key, None)
    if metadata is None:
        return result

    for new_key, new_value in splitter(metadata.value).items():
        result[new_key] = metadata.with_changes(key=new_key, value=new_value)
    return result


def merge_keys(
    preferences: PreferenceSnapshot,
    source_keys: Sequence[str],
    target_key: str,
    merger: Callable[[List[Any]], Any],
) -> PreferenceSnapshot:
    """Collapse several keys into one; the newest source supplies the metadata."""
    result = dict(preferences)
    values: List[Any] = []
    latest: Optional[PreferenceMetadata] = None

    for key in source_keys:
        metadata = result.pop(key, None)
        if metadata is None:
            continue
        values.append(metadata.value)
        if latest is None or metadata.timestamp > latest.timestamp:
            latest = metadata

    if latest is not None:
        result[target_key] = latest.with_changes(key=target_key, value=merger(values))
    return result

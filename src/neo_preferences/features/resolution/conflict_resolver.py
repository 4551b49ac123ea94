"""Conflict resolution between providers holding the same key.

``ConflictResolver.resolve`` is a pure function of its inputs: it never
mutates the records it is given, and a synthesized winner is always derived
through ``PreferenceMetadata.with_changes``.
"""

import logging
from functools import reduce
from typing import List, Sequence, Union

from ...config.constants import ConflictResolution
from ...core.entities import PreferenceMetadata, PreferenceValue
from ...core.exceptions import ConfigurationError, ConflictError
from ...utils.values import is_mapping

logger = logging.getLogger(__name__)


class ConflictResolver:
    """Pick one winning record among same-key provider observations."""

    @classmethod
    def resolve(
        cls,
        records: Sequence[PreferenceMetadata],
        strategy: Union[ConflictResolution, str],
    ) -> PreferenceMetadata:
        """Resolve ``records`` under ``strategy``.

        Args:
            records: Metadata for one key, one per provider that had a value
            strategy: Resolution strategy (enum member or its string value)

        Returns:
            The winning (or merged) metadata record

        Raises:
            ConflictError: Empty input, or any multi-record input under ERROR
            ConfigurationError: Unknown strategy
        """
        if not records:
            raise ConflictError("unknown", [])

        if len(records) == 1:
            return records[0]

        strategy = cls._coerce_strategy(strategy)

        if strategy is ConflictResolution.HIGHEST_PRIORITY:
            return reduce(cls._prefer_highest, records)
        if strategy is ConflictResolution.LOWEST_PRIORITY:
            return reduce(cls._prefer_lowest, records)
        if strategy is ConflictResolution.MERGE:
            return cls._merge(records)
        if strategy is ConflictResolution.OVERRIDE:
            return reduce(cls._prefer_newest, records)

        # ConflictResolution.ERROR
        raise ConflictError(records[0].key, [record.source for record in records])

    @staticmethod
    def _coerce_strategy(strategy: Union[ConflictResolution, str]) -> ConflictResolution:
        if isinstance(strategy, ConflictResolution):
            return strategy
        try:
            return ConflictResolution(strategy)
        except ValueError:
            raise ConfigurationError(
                f"Unknown conflict resolution strategy: {strategy}",
                details={"strategy": str(strategy)},
            )

    @staticmethod
    def _prefer_highest(best: PreferenceMetadata, current: PreferenceMetadata) -> PreferenceMetadata:
        if current.priority > best.priority:
            return current
        if current.priority == best.priority and current.timestamp > best.timestamp:
            return current
        return best

    @staticmethod
    def _prefer_lowest(best: PreferenceMetadata, current: PreferenceMetadata) -> PreferenceMetadata:
        if current.priority < best.priority:
            return current
        if current.priority == best.priority and current.timestamp < best.timestamp:
            return current
        return best

    @staticmethod
    def _prefer_newest(best: PreferenceMetadata, current: PreferenceMetadata) -> PreferenceMetadata:
        return current if current.timestamp > best.timestamp else best

    @classmethod
    def _merge(cls, records: Sequence[PreferenceMetadata]) -> PreferenceMetadata:
        ordered = sorted(records, key=lambda record: (record.priority, record.timestamp))
        merged_value = cls.deep_merge([record.value for record in ordered])
        label = ",".join(record.source for record in records)

        logger.debug(f"Merged {len(records)} values for {records[0].key}")
        return ordered[-1].with_changes(value=merged_value, source=f"merged[{label}]")

    @classmethod
    def deep_merge(cls, values: List[PreferenceValue]) -> PreferenceValue:
        """Merge mappings left to right; later values win on key collisions.

        If any value is not a mapping the merge is abandoned and the last
        value is returned as is.
        """
        if not all(is_mapping(value) for value in values):
            return values[-1]

        result: dict = {}
        for value in values:
            for key, item in value.items():
                if is_mapping(item) and is_mapping(result.get(key)):
                    result[key] = cls.deep_merge([result[key], item])
                else:
                    result[key] = item
        return result

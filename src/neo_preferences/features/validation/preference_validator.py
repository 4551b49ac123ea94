"""Per-key rule validator."""

import inspect
import logging
from typing import Dict, List

from ...core.entities import PreferenceValue, ValidationIssue, ValidationResult, ValidationRule

logger = logging.getLogger(__name__)


async def run_check(rule: ValidationRule, value: PreferenceValue) -> bool:
    """Evaluate a rule whose check may be sync or async."""
    outcome = rule.check(value)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return bool(outcome)


class PreferenceValidator:
    """Holds validation rules per key and evaluates all of them on validate.

    A key without rules always validates. A rule that raises is reported as
    a failure of that rule instead of aborting the remaining rules.
    """

    def __init__(self):
        self._rules: Dict[str, List[ValidationRule]] = {}

    def add_rule(self, key: str, rule: ValidationRule) -> None:
        self._rules.setdefault(key, []).append(rule)

    async def validate(self, key: str, value: PreferenceValue) -> ValidationResult:
        rules = self._rules.get(key)
        if not rules:
            return ValidationResult.success()

        errors: List[ValidationIssue] = []
        for rule in list(rules):
            try:
                valid = await run_check(rule, value)
            except Exception as e:
                logger.warning(f"Validation rule {rule.name} raised for {key}: {e}")
                errors.append(ValidationIssue(rule=rule.name, message=f"Validation error: {e}", value=value))
                continue

            if not valid:
                errors.append(ValidationIssue(rule=rule.name, message=rule.failure_message(), value=value))

        return ValidationResult(valid=not errors, errors=errors)

    def remove_rule(self, key: str, rule_name: str) -> None:
        """Remove every rule with this name from ``key``."""
        rules = self._rules.get(key)
        if rules is None:
            return

        remaining = [rule for rule in rules if rule.name != rule_name]
        if remaining:
            self._rules[key] = remaining
        else:
            del self._rules[key]

    def remove_all_rules(self, key: str) -> None:
        self._rules.pop(key, None)

    def clear(self) -> None:
        self._rules.clear()

    def get_rules(self, key: str) -> List[ValidationRule]:
        return list(self._rules.get(key, []))

"""Validation rule and result entities."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

RuleCheck = Callable[[Any], Union[bool, Awaitable[bool]]]


@dataclass(frozen=True)
class ValidationRule:
    """A named predicate over a preference value; may be sync or async."""

    name: str
    check: RuleCheck
    message: Optional[str] = None

    def failure_message(self) -> str:
        return self.message or f"Validation failed for rule: {self.name}"


@dataclass(frozen=True)
class ValidationIssue:
    """A single rule failure."""

    rule: str
    message: str
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.rule, "message": self.message, "value": self.value}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of running every rule registered for a key."""

    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(valid=True, errors=[])

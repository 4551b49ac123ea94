"""Schema-based preference validation.

A schema maps keys to ``SchemaField`` definitions. Keys absent from the
schema are accepted as is.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Pattern, Union

from ...core.entities import PreferenceValue, ValidationRule
from ...core.exceptions import ConfigurationError, SchemaValidationError
from ...utils.values import value_type_name
from . import rules as common_rules
from .preference_validator import run_check

PreferenceSchema = Dict[str, "SchemaField"]


@dataclass(frozen=True)
class SchemaField:
    """Declared shape of one preference key."""

    type: str
    required: bool = False
    default: Optional[PreferenceValue] = None
    validation: List[ValidationRule] = field(default_factory=list)
    description: Optional[str] = None
    encrypted: bool = False

    def __post_init__(self):
        if self.type not in common_rules.VALUE_TYPES:
            raise ConfigurationError(f"Unsupported schema field type: {self.type}")


class SchemaValidator:
    """Validates values against a ``PreferenceSchema``."""

    def __init__(self, schema: Optional[PreferenceSchema] = None):
        self._schema: PreferenceSchema = dict(schema or {})

    async def validate(self, key: str, value: PreferenceValue) -> None:
        """Raise ``SchemaValidationError`` if ``value`` does not fit ``key``'s field.

        A ``None`` value is rejected for required fields and accepted for
        fields that declare a default.
        """
        schema_field = self._schema.get(key)
        if schema_field is None:
            return

        if value is None:
            if schema_field.required:
                raise SchemaValidationError(key, "required value", "null")
            if schema_field.default is not None:
                return

        actual = value_type_name(value)
        if actual != schema_field.type:
            raise SchemaValidationError(key, schema_field.type, actual)

        for rule in schema_field.validation:
            if not await run_check(rule, value):
                raise SchemaValidationError(key, f"validation rule: {rule.name}", str(value))

    def get_default(self, key: str) -> Optional[PreferenceValue]:
        schema_field = self._schema.get(key)
        return schema_field.default if schema_field else None

    def is_required(self, key: str) -> bool:
        schema_field = self._schema.get(key)
        return bool(schema_field and schema_field.required)

    def should_encrypt(self, key: str) -> bool:
        schema_field = self._schema.get(key)
        return bool(schema_field and schema_field.encrypted)

    def set_schema(self, schema: PreferenceSchema) -> None:
        self._schema = dict(schema)

    def get_schema(self) -> PreferenceSchema:
        return dict(self._schema)

    def add_field(self, key: str, schema_field: SchemaField) -> None:
        self._schema[key] = schema_field

    def remove_field(self, key: str) -> None:
        self._schema.pop(key, None)


class SchemaBuilder:
    """Fluent builder for ``PreferenceSchema`` mappings.

    Example:
        schema = (
            SchemaBuilder()
            .string("theme", required=True, pattern=r"^(light|dark)$")
            .number("fontSize", minimum=8, maximum=72, default=14)
            .build()
        )
    """

    def __init__(self):
        self._schema: PreferenceSchema = {}

    def string(
        self,
        key: str,
        *,
        required: bool = False,
        default: Optional[str] = None,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        pattern: Optional[Union[str, Pattern[str]]] = None,
        encrypted: bool = False,
        description: Optional[str] = None,
    ) -> "SchemaBuilder":
        validation = []
        if min_length is not None or max_length is not None:
            validation.append(common_rules.string_length(min_length, max_length))
        if pattern is not None:
            validation.append(common_rules.pattern(pattern))

        self._schema[key] = SchemaField(
            type="string",
            required=required,
            default=default,
            validation=validation,
            description=description,
            encrypted=encrypted,
        )
        return self

    def number(
        self,
        key: str,
        *,
        required: bool = False,
        default: Optional[float] = None,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        description: Optional[str] = None,
    ) -> "SchemaBuilder":
        validation = []
        if minimum is not None or maximum is not None:
            validation.append(common_rules.number_range(minimum, maximum))

        self._schema[key] = SchemaField(
            type="number",
            required=required,
            default=default,
            validation=validation,
            description=description,
        )
        return self

    def boolean(
        self,
        key: str,
        *,
        required: bool = False,
        default: Optional[bool] = None,
        description: Optional[str] = None,
    ) -> "SchemaBuilder":
        self._schema[key] = SchemaField(
            type="boolean", required=required, default=default, description=description
        )
        return self

    def object(
        self,
        key: str,
        *,
        required: bool = False,
        default: Optional[Dict[str, PreferenceValue]] = None,
        description: Optional[str] = None,
    ) -> "SchemaBuilder":
        self._schema[key] = SchemaField(
            type="object", required=required, default=default, description=description
        )
        return self

    def array(
        self,
        key: str,
        *,
        required: bool = False,
        default: Optional[List[PreferenceValue]] = None,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        description: Optional[str] = None,
    ) -> "SchemaBuilder":
        validation = []
        if min_length is not None or max_length is not None:
            validation.append(common_rules.array_length(min_length, max_length))

        self._schema[key] = SchemaField(
            type="array",
            required=required,
            default=default,
            validation=validation,
            description=description,
        )
        return self

    def rule(self, key: str, rule: ValidationRule) -> "SchemaBuilder":
        """Attach an extra rule to an already declared field."""
        schema_field = self._schema.get(key)
        if schema_field is None:
            raise ConfigurationError(f"No schema field declared for {key}")

        self._schema[key] = replace(schema_field, validation=[*schema_field.validation, rule])
        return self

    def build(self) -> PreferenceSchema:
        return dict(self._schema)

"""Tests for rule based and schema based validation."""

import pytest

from neo_preferences.core.entities import ValidationRule
from neo_preferences.core.exceptions import ConfigurationError, SchemaValidationError
from neo_preferences.features.validation import (
    PreferenceValidator,
    SchemaBuilder,
    SchemaField,
    SchemaValidator,
    rules,
)


class TestPreferenceValidator:

    @pytest.fixture
    def validator(self):
        return PreferenceValidator()

    @pytest.mark.asyncio
    async def test_key_without_rules_is_valid(self, validator):
        result = await validator.validate("anything", object())

        assert result.valid
        assert result.errors == []

    @pytest.mark.asyncio
    async def test_collects_every_failure(self, validator):
        validator.add_rule("name", rules.required())
        validator.add_rule("name", rules.string_length(min_length=3))
        validator.add_rule("name", rules.pattern(r"^\d+$", message="digits only"))

        result = await validator.validate("name", "ab")

        assert not result.valid
        assert [issue.rule for issue in result.errors] == ["stringLength", "pattern"]
        assert result.errors[1].message == "digits only"
        assert result.errors[0].value == "ab"

    @pytest.mark.asyncio
    async def test_async_rule(self, validator):
        async def is_even(value):
            return value % 2 == 0

        validator.add_rule("count", rules.custom(is_even, name="even"))

        assert (await validator.validate("count", 4)).valid
        assert not (await validator.validate("count", 3)).valid

    @pytest.mark.asyncio
    async def test_raising_rule_is_reported(self, validator):
        def explode(value):
            raise RuntimeError("boom")

        validator.add_rule("key", ValidationRule("explosive", explode))
        validator.add_rule("key", rules.required())

        result = await validator.validate("key", "value")

        assert len(result.errors) == 1
        assert result.errors[0].rule == "explosive"
        assert result.errors[0].message == "Validation error: boom"

    @pytest.mark.asyncio
    async def test_default_failure_message(self, validator):
        validator.add_rule("key", ValidationRule("positive", lambda value: value > 0))

        result = await validator.validate("key", -1)

        assert result.errors[0].message == "Validation failed for rule: positive"

    def test_remove_rule_by_name(self, validator):
        validator.add_rule("key", rules.required())
        validator.add_rule("key", rules.email())

        validator.remove_rule("key", "required")

        assert [rule.name for rule in validator.get_rules("key")] == ["email"]

        validator.remove_rule("key", "email")
        assert validator.get_rules("key") == []

    def test_remove_all_and_clear(self, validator):
        validator.add_rule("a", rules.required())
        validator.add_rule("b", rules.required())

        validator.remove_all_rules("a")
        assert validator.get_rules("a") == []
        assert len(validator.get_rules("b")) == 1

        validator.clear()
        assert validator.get_rules("b") == []

    def test_get_rules_returns_copy(self, validator):
        validator.add_rule("key", rules.required())

        validator.get_rules("key").clear()

        assert len(validator.get_rules("key")) == 1


class TestRules:

    @pytest.mark.parametrize(
        "value, expected",
        [("x", True), (0, True), (False, True), (None, False), ("", False), ("   ", False)],
    )
    def test_required(self, value, expected):
        assert rules.required().check(value) is expected

    def test_string_length(self):
        rule = rules.string_length(2, 4)

        assert rule.check("abc")
        assert not rule.check("a")
        assert not rule.check("abcde")
        assert not rule.check(123)
        assert rule.message == "String length must be between 2 and 4"

    def test_number_range(self):
        rule = rules.number_range(minimum=1, maximum=10)

        assert rule.check(1)
        assert rule.check(10.0)
        assert not rule.check(11)
        assert not rule.check(True)
        assert not rule.check("5")

    def test_number_range_open_bounds(self):
        assert rules.number_range(minimum=0).check(10 ** 9)
        assert rules.number_range().message == "Number must be between -inf and inf"

    @pytest.mark.parametrize(
        "value, expected",
        [("user@example.com", True), ("user@example", False), ("a b@c.d", False), (42, False)],
    )
    def test_email(self, value, expected):
        assert rules.email().check(value) is expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("https://example.com/path", True),
            ("mailto:user@example.com", True),
            ("example.com", False),
            ("", False),
            (None, False),
        ],
    )
    def test_url(self, value, expected):
        assert rules.url().check(value) is expected

    def test_one_of(self):
        rule = rules.one_of(["light", "dark"])

        assert rule.name == "enum"
        assert rule.check("dark")
        assert not rule.check("blue")
        assert rule.message == "Value must be one of: light, dark"

    @pytest.mark.parametrize(
        "expected, value",
        [
            ("string", "x"),
            ("number", 1.5),
            ("boolean", True),
            ("object", {"a": 1}),
            ("array", [1, 2]),
        ],
    )
    def test_type_of(self, expected, value):
        assert rules.type_of(expected).check(value)

    def test_type_of_distinguishes_bool_from_number(self):
        assert not rules.type_of("number").check(True)

    def test_type_of_rejects_unknown_type(self):
        with pytest.raises(ConfigurationError):
            rules.type_of("date")

    def test_array_length(self):
        rule = rules.array_length(max_length=2)

        assert rule.check([])
        assert not rule.check([1, 2, 3])
        assert not rule.check("ab")


class TestSchemaValidator:

    @pytest.fixture
    def schema(self):
        return (
            SchemaBuilder()
            .string("theme", required=True, pattern=r"^(light|dark)$")
            .number("fontSize", minimum=8, maximum=72, default=14)
            .boolean("notifications", default=True)
            .object("layout")
            .array("tags", max_length=3)
            .string("apiToken", encrypted=True)
            .build()
        )

    @pytest.fixture
    def validator(self, schema):
        return SchemaValidator(schema)

    @pytest.mark.asyncio
    async def test_valid_values_pass(self, validator):
        await validator.validate("theme", "dark")
        await validator.validate("fontSize", 16)
        await validator.validate("layout", {"sidebar": True})
        await validator.validate("tags", ["a"])

    @pytest.mark.asyncio
    async def test_unknown_key_passes(self, validator):
        await validator.validate("unknown", object())

    @pytest.mark.asyncio
    async def test_type_mismatch(self, validator):
        with pytest.raises(SchemaValidationError) as exc_info:
            await validator.validate("fontSize", "16")

        assert exc_info.value.expected == "number"
        assert exc_info.value.received == "string"

    @pytest.mark.asyncio
    async def test_required_field_rejects_none(self, validator):
        with pytest.raises(SchemaValidationError) as exc_info:
            await validator.validate("theme", None)

        assert exc_info.value.expected == "required value"

    @pytest.mark.asyncio
    async def test_none_allowed_when_default_declared(self, validator):
        await validator.validate("fontSize", None)

    @pytest.mark.asyncio
    async def test_none_without_default_is_type_mismatch(self, validator):
        with pytest.raises(SchemaValidationError) as exc_info:
            await validator.validate("layout", None)

        assert exc_info.value.received == "null"

    @pytest.mark.asyncio
    async def test_field_rules_are_applied(self, validator):
        with pytest.raises(SchemaValidationError) as exc_info:
            await validator.validate("theme", "blue")

        assert exc_info.value.expected == "validation rule: pattern"

        with pytest.raises(SchemaValidationError):
            await validator.validate("fontSize", 100)

        with pytest.raises(SchemaValidationError):
            await validator.validate("tags", ["a", "b", "c", "d"])

    def test_field_accessors(self, validator):
        assert validator.get_default("fontSize") == 14
        assert validator.get_default("missing") is None
        assert validator.is_required("theme")
        assert not validator.is_required("fontSize")
        assert validator.should_encrypt("apiToken")
        assert not validator.should_encrypt("theme")

    def test_schema_mutation(self, validator):
        validator.add_field("lang", SchemaField(type="string", default="en"))
        validator.remove_field("theme")

        schema = validator.get_schema()
        assert "lang" in schema
        assert "theme" not in schema

        validator.set_schema({})
        assert validator.get_schema() == {}

    def test_invalid_field_type(self):
        with pytest.raises(ConfigurationError):
            SchemaField(type="date")


class TestSchemaBuilder:

    @pytest.mark.asyncio
    async def test_rule_appends_to_field(self):
        schema = (
            SchemaBuilder()
            .string("email")
            .rule("email", rules.email())
            .build()
        )

        assert [rule.name for rule in schema["email"].validation] == ["email"]
        with pytest.raises(SchemaValidationError):
            await SchemaValidator(schema).validate("email", "not-an-email")

    def test_rule_requires_declared_field(self):
        with pytest.raises(ConfigurationError):
            SchemaBuilder().rule("missing", rules.required())

    def test_build_returns_independent_mapping(self):
        builder = SchemaBuilder().boolean("flag")

        schema = builder.build()
        schema.clear()

        assert "flag" in builder.build()

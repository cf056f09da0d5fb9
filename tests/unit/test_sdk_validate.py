"""
Unit tests for SDK field validation.

Tests cover:
- Field type validation
- Required field checking
- Unknown field detection with suggestions
- Relation validation
"""

import pytest

from shirokuma_sdk.errors import UnknownFieldError, ValidationError
from shirokuma_sdk.schema import SchemaDef, field
from shirokuma_sdk.validate import (
    validate_fields,
    validate_or_raise,
)


class TestFieldsValidation:
    """Tests for validate_fields."""

    @pytest.fixture
    def profile_schema(self):
        """Profile schema for testing."""
        return SchemaDef(
            schema_id="profile_0020aa",
            name="profile",
            fields=(
                field("name", "str"),
                field("age", "int"),
                field("score", "float"),
                field("active", "bool"),
                field("avatar", "relation"),
                field("friends", "relation_list"),
                field("pinned", "pinned_relation"),
                field("history", "pinned_relation_list"),
            ),
        )

    @pytest.fixture
    def valid_fields(self):
        return {
            "name": "panda",
            "age": 7,
            "score": 1.5,
            "active": True,
            "avatar": "0020aa",
            "friends": ["0020bb"],
            "pinned": "0020cc_0020dd",
            "history": [["0020ee"], "0020ff"],
        }

    def test_valid_fields(self, profile_schema, valid_fields):
        """Valid fields pass validation."""
        is_valid, errors = validate_fields(profile_schema, valid_fields)
        assert is_valid
        assert len(errors) == 0

    def test_required_field_missing(self, profile_schema, valid_fields):
        """Missing field fails unless partial."""
        del valid_fields["age"]

        is_valid, errors = validate_fields(profile_schema, valid_fields)
        assert not is_valid
        assert any("age" in e and "required" in e for e in errors)

        is_valid, _ = validate_fields(profile_schema, valid_fields, partial=True)
        assert is_valid

    def test_empty_fields_invalid(self, profile_schema):
        """Empty fields are never valid."""
        is_valid, errors = validate_fields(profile_schema, {}, partial=True)
        assert not is_valid

    def test_unknown_field_suggests_similar(self, profile_schema):
        """Unknown field suggests similar names."""
        is_valid, errors = validate_fields(profile_schema, {"naem": "panda"}, partial=True)
        assert not is_valid
        assert any("name" in e for e in errors)

    def test_string_type_validation(self, profile_schema):
        """String field rejects non-string."""
        is_valid, errors = validate_fields(profile_schema, {"name": 123}, partial=True)
        assert not is_valid
        assert any("string" in e for e in errors)

    def test_integer_rejects_bool(self, profile_schema):
        """Integer field rejects booleans."""
        is_valid, errors = validate_fields(profile_schema, {"age": True}, partial=True)
        assert not is_valid
        assert any("integer" in e for e in errors)

    def test_float_accepts_int(self, profile_schema):
        """Float field accepts integers."""
        is_valid, _ = validate_fields(profile_schema, {"score": 3}, partial=True)
        assert is_valid

    def test_relation_list_items(self, profile_schema):
        """Relation list items must be document ids."""
        is_valid, errors = validate_fields(
            profile_schema, {"friends": ["0020aa", 3]}, partial=True
        )
        assert not is_valid
        assert any("friends[1]" in e for e in errors)

    def test_pinned_relation_rejects_empty(self, profile_schema):
        """Pinned relations need a view id."""
        is_valid, _ = validate_fields(profile_schema, {"pinned": []}, partial=True)
        assert not is_valid

    def test_null_rejected(self, profile_schema):
        """Fields cannot be null."""
        is_valid, errors = validate_fields(profile_schema, {"name": None}, partial=True)
        assert not is_valid
        assert any("null" in e for e in errors)


class TestValidateOrRaise:
    """Tests for validate_or_raise."""

    @pytest.fixture
    def chat(self):
        return SchemaDef(
            schema_id="chat_0020aa",
            name="chat",
            fields=(field("message", "str"), field("channel", "int")),
        )

    def test_unknown_field_raises_first(self, chat):
        """Unknown fields raise UnknownFieldError."""
        with pytest.raises(UnknownFieldError) as exc:
            validate_or_raise(chat, {"mesage": "hi", "channel": "x"})
        assert exc.value.field_name == "mesage"
        assert exc.value.schema_name == "chat"

    def test_invalid_value_raises(self, chat):
        """Invalid values raise ValidationError listing all errors."""
        with pytest.raises(ValidationError) as exc:
            validate_or_raise(chat, {"message": 1, "channel": "x"})
        assert len(exc.value.errors) == 2

    def test_valid_passes(self, chat):
        """Valid fields do not raise."""
        validate_or_raise(chat, {"message": "hi", "channel": 2})

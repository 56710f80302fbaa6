"""Tests for input validation helpers."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from blogging_api.utils.validation import format_error, format_errors, validate_input


class Sample(BaseModel):
    name: str = Field(min_length=3)
    kind: Literal["a", "b"]

    @field_validator("name")
    @classmethod
    def no_admin(cls, v: str) -> str:
        if v == "admin":
            mssg = "Name is reserved"
            raise ValueError(mssg)
        return v


class TestFormatError:
    def test_strips_request_source(self) -> None:
        error = {"loc": ("body", "title"), "msg": "Field required"}

        assert format_error(error) == "title: Field required"

    def test_nested_path(self) -> None:
        error = {"loc": ("query", "tags", 0), "msg": "Invalid"}

        assert format_error(error) == "tags.0: Invalid"

    def test_model_level_error_has_no_field(self) -> None:
        error = {"loc": ("body",), "msg": "Value error, At least one field must be provided"}

        assert format_error(error) == "At least one field must be provided"

    def test_keeps_order(self) -> None:
        errors = [{"loc": ("b",), "msg": "second"}, {"loc": ("a",), "msg": "first"}]

        assert format_errors(errors) == ["b: second", "a: first"]


class TestValidateInput:
    def test_ok(self) -> None:
        result = validate_input(Sample, {"name": "alice", "kind": "a"})

        assert result.ok
        assert result.value == Sample(name="alice", kind="a")
        assert result.errors == []

    def test_collects_all_errors(self) -> None:
        result = validate_input(Sample, {"name": "al", "kind": "c"})

        assert not result.ok
        assert result.value is None
        assert [error.split(":")[0] for error in result.errors] == ["name", "kind"]

    def test_custom_message_without_prefix(self) -> None:
        result = validate_input(Sample, {"name": "admin", "kind": "b"})

        assert result.errors == ["name: Name is reserved"]

    def test_non_mapping_input(self) -> None:
        result = validate_input(Sample, ["not", "a", "dict"])

        assert not result.ok
        assert len(result.errors) == 1

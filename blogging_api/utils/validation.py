"""Turn pydantic validation failures into ordered, human-readable messages."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

# Location prefixes FastAPI adds in front of the field path
REQUEST_SOURCES = frozenset({"body", "query", "path", "header", "cookie"})
VALUE_ERROR_PREFIX = "Value error, "


def format_error(error: Mapping[str, Any]) -> str:
    """
    Render one pydantic error entry as ``"<field>: <message>"``.

    Args:
        error: An entry of ``ValidationError.errors()``.

    Returns:
        str: The formatted message.
    """
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in REQUEST_SOURCES:
        loc = loc[1:]

    message = str(error.get("msg", "Invalid value")).removeprefix(VALUE_ERROR_PREFIX)
    field_path = ".".join(loc)
    return f"{field_path}: {message}" if field_path else message


def format_errors(errors: Sequence[Mapping[str, Any]]) -> list[str]:
    """Format every error, keeping pydantic's order."""
    return [format_error(error) for error in errors]


@dataclass(frozen=True)
class ValidationResult[ModelT: BaseModel]:
    """Either a parsed value or the list of field-level messages explaining why not."""

    value: ModelT | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_input[ModelT: BaseModel](model: type[ModelT], raw: Any) -> ValidationResult[ModelT]:
    """
    Validate raw input against a pydantic model without raising.

    All failures are collected, never short-circuited.

    Args:
        model: The pydantic model describing the expected input.
        raw: Untrusted input, usually a decoded JSON body.

    Returns:
        ValidationResult: The parsed model, or the ordered error messages.
    """
    try:
        value = model.model_validate(raw)
    except PydanticValidationError as e:
        return ValidationResult(errors=format_errors(e.errors()))
    return ValidationResult(value=value)

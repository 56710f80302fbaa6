"""Utility helper functions."""

from blogging_api.utils.helpers import (
    get_summary,
    host,
    page_offset,
    today_str,
    total_pages,
)
from blogging_api.utils.validation import (
    ValidationResult,
    format_error,
    format_errors,
    validate_input,
)

__all__ = [
    "ValidationResult",
    "format_error",
    "format_errors",
    "get_summary",
    "host",
    "page_offset",
    "today_str",
    "total_pages",
    "validate_input",
]

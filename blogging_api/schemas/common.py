"""Response envelope shared by every endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    """``{status, message?}`` wrapper; subclasses add ``data``."""

    status: Literal["success", "fail", "error"] = "success"
    message: str | None = None


class Pagination(BaseModel):
    """Pagination metadata for list responses."""

    page: int = Field(ge=1, description="Current page (1-based)")
    limit: int = Field(ge=1, description="Page size")
    total: int = Field(ge=0, description="Total matching records")
    pages: int = Field(ge=0, description="Total page count, ceil(total / limit)")


class ErrorResponse(BaseModel):
    """Error envelope, documented on routes that can fail."""

    status: Literal["fail", "error"] = "fail"
    message: str
    errors: list[str] | None = None

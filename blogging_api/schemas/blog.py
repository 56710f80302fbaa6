"""
Blog request and response models.

Tags are normalized on the way in (trimmed, lower-cased, de-duplicated in
first-seen order) so filtering and storage never have to care about case.
Neither ``author``, ``read_count`` nor ``reading_time`` are accepted from
clients; they are owned by the server.
"""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)

from blogging_api.configs.settings import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TAGS,
    MAX_TITLE_LENGTH,
    MIN_BODY_LENGTH,
    MIN_TAG_LENGTH,
    MIN_TITLE_LENGTH,
)
from blogging_api.schemas.common import Envelope, Pagination
from blogging_api.schemas.user import AuthorResponse

type Title = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
    ),
]
type Description = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=MAX_DESCRIPTION_LENGTH),
]
type Body = Annotated[str, StringConstraints(min_length=MIN_BODY_LENGTH)]


def normalize_tags(tags: list[str]) -> list[str]:
    """
    Trim, lower-case and de-duplicate tags, keeping first-seen order.

    Raises
    ------
    ValueError
        If a tag falls outside the allowed length after trimming.
    """
    seen: dict[str, None] = {}
    for raw in tags:
        tag = raw.strip().lower()
        if not MIN_TAG_LENGTH <= len(tag) <= MAX_TAG_LENGTH:
            mssg = f"Each tag must be between {MIN_TAG_LENGTH} and {MAX_TAG_LENGTH} characters"
            raise ValueError(mssg)
        seen.setdefault(tag, None)
    return list(seen)


class BlogCreate(BaseModel):
    """Blog creation payload. New posts always start as drafts."""

    title: Title = Field(
        ...,
        description="Blog title (unique)",
        examples=["Getting Started with FastAPI"],
    )
    description: Description = Field(default="", description="Short description")
    body: Body = Field(
        ...,
        description="Blog body (plain text or markdown)",
        examples=["FastAPI is a modern, fast web framework for building APIs with Python."],
    )
    tags: list[str] = Field(
        default_factory=list,
        max_length=MAX_TAGS,
        description="Tags for categorization",
        examples=[["python", "fastapi"]],
    )

    @field_validator("tags", mode="after")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)


class BlogUpdate(BaseModel):
    """Partial blog update; only the fields sent are applied."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Updated title", "state": "published"}},
    )

    title: Title | None = None
    description: Description | None = None
    body: Body | None = None
    tags: list[str] | None = Field(default=None, max_length=MAX_TAGS)
    state: Literal["draft", "published"] | None = None

    @field_validator("tags", mode="after")
    @classmethod
    def clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return normalize_tags(v) if v is not None else None

    @model_validator(mode="after")
    def require_one_field(self) -> "BlogUpdate":
        """Explicit nulls do not count as changes."""
        if not self.changes():
            mssg = "At least one field must be provided for update"
            raise ValueError(mssg)
        return self

    def changes(self) -> dict[str, object]:
        """Fields the client actually sent, with explicit nulls dropped."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class BlogStateUpdate(BaseModel):
    """Publish / unpublish payload."""

    state: Literal["draft", "published"]


class BlogResponse(BaseModel):
    """Blog as returned by the API, with the author expanded."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    body: str
    author: AuthorResponse | None = None
    state: Literal["draft", "published"]
    read_count: int
    reading_time: int
    tags: list[str]
    created_at: datetime
    updated_at: datetime


class BlogData(BaseModel):
    blog: BlogResponse


class BlogEnvelope(Envelope):
    """``{status, message?, data: {blog}}``."""

    data: BlogData


class BlogListData(BaseModel):
    blogs: list[BlogResponse]
    pagination: Pagination


class BlogListEnvelope(Envelope):
    """``{status, results, data: {blogs, pagination}}``."""

    results: int = Field(ge=0, description="Number of blogs on this page")
    data: BlogListData

from blogging_api.schemas.auth import AuthResponse, TokenData
from blogging_api.schemas.blog import (
    BlogCreate,
    BlogData,
    BlogEnvelope,
    BlogListData,
    BlogListEnvelope,
    BlogResponse,
    BlogStateUpdate,
    BlogUpdate,
    normalize_tags,
)
from blogging_api.schemas.common import Envelope, ErrorResponse, Pagination
from blogging_api.schemas.user import (
    AuthorResponse,
    LoginRequest,
    UserCreate,
    UserData,
    UserEnvelope,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AuthResponse",
    "AuthorResponse",
    "BlogCreate",
    "BlogData",
    "BlogEnvelope",
    "BlogListData",
    "BlogListEnvelope",
    "BlogResponse",
    "BlogStateUpdate",
    "BlogUpdate",
    "Envelope",
    "ErrorResponse",
    "LoginRequest",
    "Pagination",
    "TokenData",
    "UserCreate",
    "UserData",
    "UserEnvelope",
    "UserResponse",
    "UserUpdate",
    "normalize_tags",
]

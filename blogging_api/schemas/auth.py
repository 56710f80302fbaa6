from uuid import UUID

from pydantic import BaseModel, Field

from blogging_api.schemas.user import UserEnvelope


class TokenData(BaseModel):
    """Claims extracted from a verified access token."""

    user_id: UUID


class AuthResponse(UserEnvelope):
    """Registration/login response: the public profile plus a bearer token."""

    token: str = Field(..., description="Signed bearer token")

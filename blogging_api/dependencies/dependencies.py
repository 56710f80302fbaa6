"""Request-scoped dependencies: repositories, authentication and listing queries."""

from typing import Annotated, Literal

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blogging_api.configs.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MAX_SEARCH_LENGTH
from blogging_api.db import get_session
from blogging_api.errors.auth import MissingTokenError, UserAuthenticationError
from blogging_api.models import BlogState, UserDB
from blogging_api.monitoring import get_logger, set_user_id
from blogging_api.repositories import BlogListQuery, BlogRepository, UserRepository, parse_tags
from blogging_api.repositories.blog import SortField, SortOrder
from blogging_api.services import AuthService

logger = get_logger(__name__)

# auto_error=False so a missing header reaches our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)

BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_blog_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def get_auth_service(user_repo: UserRepoDep) -> AuthService:
    return AuthService(user_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user(
    credentials: BearerDep,
    auth_service: AuthServiceDep,
) -> UserDB:
    """
    Resolve the authenticated caller from the ``Authorization: Bearer`` header.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Parsed bearer header, if any.
    auth_service : AuthService
        Service used to verify the token and load the user.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    MissingTokenError
        No bearer token was sent.
    UserAuthenticationError
        The token is invalid, expired, or names a deleted user.
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError

    user = await auth_service.resolve_user(credentials.credentials)
    set_user_id(str(user.id))
    return user


async def get_optional_user(
    credentials: BearerDep,
    auth_service: AuthServiceDep,
) -> UserDB | None:
    """
    Resolve the caller if a valid token was sent; never fails the request.

    Returns
    -------
    UserDB | None
        The viewer, or None for anonymous or badly-authenticated requests.
    """
    if credentials is None or not credentials.credentials:
        return None

    try:
        user = await auth_service.resolve_user(credentials.credentials)
    except UserAuthenticationError as e:
        logger.debug(f"Ignoring optional credentials: {e.detail}")
        return None

    set_user_id(str(user.id))
    return user


CurrentUserDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]


def get_blog_list_query(
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of blogs per page"),
    ] = DEFAULT_PAGE_SIZE,
    sort_by: Annotated[SortField, Query(description="Field to sort by")] = "created_at",
    sort_order: Annotated[SortOrder, Query(description="Sort direction")] = "desc",
    search: Annotated[
        str | None,
        Query(max_length=MAX_SEARCH_LENGTH, description="Search in title and tags"),
    ] = None,
    author: Annotated[
        str | None,
        Query(max_length=MAX_SEARCH_LENGTH, description="Author first or last name fragment"),
    ] = None,
    tags: Annotated[str | None, Query(description="Comma-separated tags")] = None,
) -> BlogListQuery:
    """
    Dependency to construct `BlogListQuery` from query parameters.

    Returns
    -------
    BlogListQuery
        Aggregated query parameters object.
    """
    return BlogListQuery(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search.strip() or None if search else None,
        author=author.strip() or None if author else None,
        tags=parse_tags(tags),
    )


def get_my_blog_query(
    base: Annotated[BlogListQuery, Depends(get_blog_list_query)],
    state: Annotated[
        Literal["draft", "published"] | None,
        Query(description="Only return blogs in this state"),
    ] = None,
) -> BlogListQuery:
    """`BlogListQuery` for the caller's own posts, which may also filter by state."""
    blog_state: BlogState | None = state
    return BlogListQuery(
        page=base.page,
        limit=base.limit,
        sort_by=base.sort_by,
        sort_order=base.sort_order,
        search=base.search,
        author=base.author,
        tags=base.tags,
        state=blog_state,
    )


BlogQueryDep = Annotated[BlogListQuery, Depends(get_blog_list_query)]
MyBlogQueryDep = Annotated[BlogListQuery, Depends(get_my_blog_query)]

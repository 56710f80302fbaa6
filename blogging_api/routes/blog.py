"""
Blog Routes.

CRUD, publishing and listing endpoints for blog posts.

Summary
-------
Endpoints include:
  - List published blogs (search, author, tags, sort, pagination)
  - List the caller's own blogs
  - Get a published blog by id (counts a read)
  - Create blog
  - Update blog
  - Change blog state (publish / unpublish)
  - Delete blog

Authorization
-------------
Reads are public; an optional bearer token only tags the request log with
the viewer. Every mutation requires a token and only the author may modify
or delete a post.
"""

from collections.abc import Mapping
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blogging_api.auth import check_owner
from blogging_api.dependencies import (
    BlogQueryDep,
    BlogRepoDep,
    CurrentUserDep,
    MyBlogQueryDep,
    OptionalUserDep,
)
from blogging_api.errors.database import RecordNotFoundError
from blogging_api.errors.validation import ValidationError
from blogging_api.models import BlogDB, UserDB
from blogging_api.monitoring import get_logger
from blogging_api.repositories import BlogPage
from blogging_api.routes.examples import (
    BLOG_EXAMPLE,
    RATE_LIMITED,
    UNAUTHORIZED,
    error_example,
)
from blogging_api.schemas.blog import (
    BlogCreate,
    BlogData,
    BlogEnvelope,
    BlogListData,
    BlogListEnvelope,
    BlogResponse,
    BlogStateUpdate,
    BlogUpdate,
)
from blogging_api.schemas.common import Pagination
from blogging_api.schemas.user import AuthorResponse
from blogging_api.utils.validation import validate_input

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

logger = get_logger(__name__)

NOT_PUBLISHED = "Blog not found or not published"
INVALID_STATE = "State must be either draft or published"

NOT_FOUND = error_example("Not found", "Blog not found")
FORBIDDEN = error_example("Forbidden", "You can only update your own blogs")
LIST_EXAMPLE = {
    "application/json": {
        "example": {
            "status": "success",
            "results": 1,
            "data": {
                "blogs": [BLOG_EXAMPLE],
                "pagination": {"page": 1, "limit": 20, "total": 1, "pages": 1},
            },
        },
    },
}


def db_blog_to_response(db_blog: BlogDB, author: UserDB | None) -> BlogResponse:
    """
    Convert a `BlogDB` row and its author into a `BlogResponse`.

    Parameters
    ----------
    db_blog : BlogDB
        Database blog entity.
    author : UserDB | None
        The author row, or None if it no longer exists.

    Returns
    -------
    BlogResponse
        Validated response model.
    """
    response = BlogResponse.model_validate(db_blog, from_attributes=True)
    if author is not None:
        response.author = AuthorResponse.model_validate(author, from_attributes=True)
    return response


def blog_envelope(
    db_blog: BlogDB,
    author: UserDB | None,
    message: str | None = None,
) -> BlogEnvelope:
    return BlogEnvelope(message=message, data=BlogData(blog=db_blog_to_response(db_blog, author)))


def page_envelope(page: BlogPage) -> BlogListEnvelope:
    """Render a `BlogPage` as ``{status, results, data: {blogs, pagination}}``."""
    blogs = [db_blog_to_response(blog, page.authors.get(blog.author_id)) for blog in page.blogs]
    return BlogListEnvelope(
        results=len(blogs),
        data=BlogListData(
            blogs=blogs,
            pagination=Pagination(
                page=page.page,
                limit=page.limit,
                total=page.total,
                pages=page.pages,
            ),
        ),
    )


def viewer_ref(viewer: UserDB | None) -> str:
    return str(viewer.id) if viewer is not None else "anonymous"


async def get_own_blog(repo: BlogRepoDep, blog_id: UUID, user: UserDB, action: str) -> BlogDB:
    """
    Load a post the caller is about to modify.

    Raises
    ------
    RecordNotFoundError
        If no post has this id.
    NotOwnerError
        If the caller did not write it.
    """
    db_blog = await repo.get_or_raise(blog_id)
    check_owner(db_blog, user, action)
    return db_blog


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogListEnvelope,
    response_model_exclude_none=True,
    summary="List published blogs",
    description=(
        "Paginated list of published posts. `search` matches title or tags, `author` "
        "matches the author's first or last name, `tags` is a comma-separated list."
    ),
    responses={200: {"content": LIST_EXAMPLE}, 429: RATE_LIMITED},
    operation_id="blogs_list",
)
async def list_blogs(
    query: BlogQueryDep,
    repo: BlogRepoDep,
    viewer: OptionalUserDep,
) -> BlogListEnvelope:
    """
    List published blogs.

    Parameters
    ----------
    query : BlogListQuery
        Filters, sort and pagination.
    repo : BlogRepository
        Blog repository dependency.
    viewer : UserDB | None
        Optional viewer, recorded in the request log; drafts stay hidden
        even from their author here.

    Returns
    -------
    BlogListEnvelope
        One page of posts with pagination metadata.
    """
    page = await repo.list_blogs(query, published_only=True)
    logger.info("Blogs listed", total=page.total, page=page.page, viewer_id=viewer_ref(viewer))
    return page_envelope(page)


@router.get(
    "/user/me",
    response_class=ORJSONResponse,
    response_model=BlogListEnvelope,
    response_model_exclude_none=True,
    summary="List my blogs",
    description="Paginated list of the caller's own posts, optionally filtered by `state`.",
    responses={200: {"content": LIST_EXAMPLE}, 401: UNAUTHORIZED, 429: RATE_LIMITED},
    operation_id="blogs_list_mine",
)
async def list_my_blogs(
    query: MyBlogQueryDep,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> BlogListEnvelope:
    page = await repo.list_blogs(query, published_only=False, author_id=current_user.id)
    return page_envelope(page)


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    summary="Get blog by id",
    description="Fetch a published post. Each successful fetch increments its read count.",
    responses={
        200: {
            "content": {
                "application/json": {"example": {"status": "success", "data": {"blog": BLOG_EXAMPLE}}},
            },
        },
        404: error_example("Not found", NOT_PUBLISHED),
        429: RATE_LIMITED,
    },
    operation_id="blogs_get",
)
async def get_blog(
    blog_id: UUID,
    repo: BlogRepoDep,
    viewer: OptionalUserDep,
) -> BlogEnvelope:
    """
    Get a published blog and count the read.

    Raises
    ------
    RecordNotFoundError
        If the post does not exist or is still a draft.
    """
    db_blog = await repo.increment_read_count(blog_id)
    if db_blog is None:
        raise RecordNotFoundError(NOT_PUBLISHED)

    logger.info("Blog read", blog_id=str(db_blog.id), viewer_id=viewer_ref(viewer))
    authors = await repo.authors_for([db_blog])
    return blog_envelope(db_blog, authors.get(db_blog.author_id))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description="Create a draft owned by the caller. Reading time is derived from the body.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "Blog created successfully",
                        "data": {"blog": {**BLOG_EXAMPLE, "state": "draft", "read_count": 0}},
                    },
                },
            },
        },
        400: error_example(
            "Validation failed",
            "Validation failed",
            ["title: String should have at least 5 characters"],
        ),
        401: UNAUTHORIZED,
        409: error_example("Conflict", "Blog with this title already exists"),
        429: RATE_LIMITED,
    },
    operation_id="blogs_create",
)
async def create_blog(
    blog: BlogCreate,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> BlogEnvelope:
    """
    Create a new blog post.

    Parameters
    ----------
    blog : BlogCreate
        Blog data.
    repo : BlogRepository
        Blog repository dependency.
    current_user : UserDB
        Authenticated author.

    Returns
    -------
    BlogEnvelope
        The created draft.

    Raises
    ------
    DuplicateEntryError
        If another post already has this title.
    """
    db_blog = await repo.create(blog, author_id=current_user.id)
    return blog_envelope(db_blog, current_user, "Blog created successfully")


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    summary="Update blog",
    description="Update title, description, body, tags or state of one of the caller's posts.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "Blog updated successfully",
                        "data": {"blog": BLOG_EXAMPLE},
                    },
                },
            },
        },
        401: UNAUTHORIZED,
        403: FORBIDDEN,
        404: NOT_FOUND,
        409: error_example("Conflict", "Blog with this title already exists"),
        429: RATE_LIMITED,
    },
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: UUID,
    changes: BlogUpdate,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> BlogEnvelope:
    """
    Update a blog post.

    Raises
    ------
    RecordNotFoundError
        If the post does not exist.
    NotOwnerError
        If the caller is not the author.
    DuplicateEntryError
        If the new title is used by another post.
    """
    db_blog = await get_own_blog(repo, blog_id, current_user, "update")
    db_blog = await repo.update(db_blog, changes)
    return blog_envelope(db_blog, current_user, "Blog updated successfully")


@router.put(
    "/{blog_id}/state",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    summary="Publish or unpublish blog",
    description="Move one of the caller's posts between `draft` and `published`.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "Blog published successfully",
                        "data": {"blog": BLOG_EXAMPLE},
                    },
                },
            },
        },
        400: error_example("Bad Request", INVALID_STATE, ["state: Input should be 'draft' or 'published'"]),
        401: UNAUTHORIZED,
        403: error_example("Forbidden", "You can only change the state of your own blogs"),
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_update_state",
)
async def update_blog_state(
    blog_id: UUID,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
    payload: Annotated[Any, Body(examples=[{"state": "published"}])] = None,
) -> BlogEnvelope:
    """
    Change a post's state.

    The body is validated before the post is looked up, so a bad state is
    reported as 400 even for ids that do not exist.

    Raises
    ------
    ValidationError
        If ``state`` is missing or not ``draft`` / ``published``.
    RecordNotFoundError
        If the post does not exist.
    NotOwnerError
        If the caller is not the author.
    """
    result = validate_input(BlogStateUpdate, payload if isinstance(payload, Mapping) else {})
    if not result.ok or result.value is None:
        raise ValidationError(INVALID_STATE, errors=result.errors)

    state = result.value.state
    db_blog = await get_own_blog(repo, blog_id, current_user, "change the state of")
    db_blog = await repo.set_state(db_blog, state)

    logger.info("Blog state changed", blog_id=str(db_blog.id), state=state)
    verb = "published" if state == "published" else "unpublished"
    return blog_envelope(db_blog, current_user, f"Blog {verb} successfully")


@router.delete(
    "/{blog_id}",
    response_class=Response,
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete blog",
    description="Delete one of the caller's posts.",
    responses={
        204: {"description": "No Content"},
        401: UNAUTHORIZED,
        403: error_example("Forbidden", "You can only delete your own blogs"),
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: UUID,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> Response:
    """
    Delete blog by ID.

    Raises
    ------
    RecordNotFoundError
        If the post does not exist.
    NotOwnerError
        If the caller is not the author.
    """
    db_blog = await get_own_blog(repo, blog_id, current_user, "delete")
    await repo.delete(db_blog)
    logger.info("Blog deleted", blog_id=str(blog_id))
    return Response(status_code=HTTP_204_NO_CONTENT)

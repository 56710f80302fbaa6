"""
Blog repository for database operations.

Listing is split in two: ``build_filters`` / ``build_list_statement`` turn a
``BlogListQuery`` into SQLAlchemy statements without touching the database,
and ``BlogRepository.list_blogs`` executes them and fetches the authors of
the page with one extra query.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from math import ceil
from typing import Literal
from uuid import UUID

from sqlalchemy import ColumnElement, Select, exists, func, or_, select, update
from sqlmodel import col

from blogging_api.configs.settings import DEFAULT_PAGE_SIZE, WORDS_PER_MINUTE
from blogging_api.errors.database import DuplicateEntryError
from blogging_api.models import BlogDB, BlogState, UserDB
from blogging_api.monitoring import get_logger
from blogging_api.repositories.base import BaseRepository
from blogging_api.schemas.blog import BlogCreate, BlogUpdate
from blogging_api.utils.helpers import page_offset, total_pages

logger = get_logger(__name__)

TITLE_TAKEN = "Blog with this title already exists"

type SortField = Literal["created_at", "read_count", "reading_time"]
type SortOrder = Literal["asc", "desc"]

SORT_COLUMNS = {
    "created_at": col(BlogDB.created_at),
    "read_count": col(BlogDB.read_count),
    "reading_time": col(BlogDB.reading_time),
}


def calculate_word_count(content: str) -> int:
    """
    Count whitespace-separated words.

    Args:
        content: Blog body

    Returns:
        int: Word count
    """
    return len(content.split())


def calculate_reading_time(content: str) -> int:
    """
    Estimated reading time in whole minutes, rounded up.

    Assumes an average reading speed of 200 words per minute.

    Args:
        content: Blog body

    Returns:
        int: ``ceil(words / 200)``
    """
    return ceil(calculate_word_count(content) / WORDS_PER_MINUTE)


def parse_tags(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated tag list, lower-casing and dropping empties."""
    if not raw:
        return ()
    return tuple(tag for part in raw.split(",") if (tag := part.strip().lower()))


@dataclass(frozen=True)
class BlogListQuery:
    """
    Listing parameters after query-string parsing.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size.
    sort_by : SortField
        Column to order by.
    sort_order : SortOrder
        Ordering direction.
    search : str | None
        Case-insensitive substring matched against title or any tag.
    author : str | None
        Fragment of the author's first or last name.
    tags : tuple[str, ...]
        Posts carrying at least one of these tags match.
    state : BlogState | None
        State filter; only honoured for the caller's own posts.
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: SortField = "created_at"
    sort_order: SortOrder = "desc"
    search: str | None = None
    author: str | None = None
    tags: tuple[str, ...] = ()
    state: BlogState | None = None


@dataclass
class BlogPage:
    """One page of posts plus the authors they reference."""

    blogs: list[BlogDB]
    page: int
    limit: int
    total: int
    authors: dict[UUID, UserDB] = field(default_factory=dict)

    @property
    def pages(self) -> int:
        return total_pages(self.total, self.limit)


def search_filter(term: str) -> ColumnElement[bool]:
    """Title or any tag contains ``term``, case-insensitively and literally."""
    tag_values = func.jsonb_array_elements_text(col(BlogDB.tags)).table_valued("value")
    tag_match = exists(
        select(1)
        .select_from(tag_values)
        .where(tag_values.c.value.icontains(term, autoescape=True)),
    )
    return or_(col(BlogDB.title).icontains(term, autoescape=True), tag_match)


def build_filters(
    query: BlogListQuery,
    *,
    published_only: bool,
    author_id: UUID | None = None,
    author_ids: Sequence[UUID] | None = None,
) -> list[ColumnElement[bool]]:
    """
    Translate a listing query into WHERE clauses.

    Args:
        query: Parsed listing parameters.
        published_only: Restrict to published posts, ignoring ``query.state``.
        author_id: Restrict to a single author (the caller's own posts).
        author_ids: Authors matched by the name filter.

    Returns:
        list[ColumnElement[bool]]: Clauses to AND together.
    """
    filters: list[ColumnElement[bool]] = []

    if published_only:
        filters.append(col(BlogDB.state) == "published")
    elif query.state is not None:
        filters.append(col(BlogDB.state) == query.state)

    if author_id is not None:
        filters.append(col(BlogDB.author_id) == author_id)

    if author_ids is not None:
        filters.append(col(BlogDB.author_id).in_(author_ids))

    if query.search:
        filters.append(search_filter(query.search))

    if query.tags:
        filters.append(or_(*[func.jsonb_exists(col(BlogDB.tags), tag) for tag in query.tags]))

    return filters


def build_list_statement(
    query: BlogListQuery,
    filters: Sequence[ColumnElement[bool]],
) -> Select[tuple[BlogDB]]:
    """Sorted, paginated SELECT for one page."""
    sort_column = SORT_COLUMNS[query.sort_by]
    order = sort_column.asc() if query.sort_order == "asc" else sort_column.desc()
    return (
        select(BlogDB)
        .where(*filters)
        .order_by(order)
        .offset(page_offset(query.page, query.limit))
        .limit(query.limit)
    )


def build_count_statement(filters: Sequence[ColumnElement[bool]]) -> Select[tuple[int]]:
    return select(func.count()).select_from(BlogDB).where(*filters)


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    Only ``increment_read_count`` touches a published post without the
    caller owning it; ownership itself is checked by the routes.
    """

    model = BlogDB
    not_found_detail = "Blog not found"
    duplicate_detail = TITLE_TAKEN

    async def create(self, blog: BlogCreate, author_id: UUID) -> BlogDB:
        """
        Create a draft owned by ``author_id``.

        Raises:
            DuplicateEntryError: If the title is already used
        """
        if await self.title_taken(blog.title):
            raise DuplicateEntryError(detail=TITLE_TAKEN)

        db_blog = BlogDB(
            author_id=author_id,
            title=blog.title,
            description=blog.description,
            body=blog.body,
            tags=blog.tags,
            state="draft",
            reading_time=calculate_reading_time(blog.body),
        )
        db_blog = await self._add_and_refresh(db_blog)
        logger.info("Blog created", blog_id=str(db_blog.id))
        return db_blog

    async def title_taken(self, title: str, exclude_id: UUID | None = None) -> bool:
        return await self._check_exists_by_field("title", title, exclude_id)

    async def update(self, db_blog: BlogDB, changes: BlogUpdate) -> BlogDB:
        """
        Apply a partial update, recomputing reading time when the body changes.

        Raises:
            DuplicateEntryError: If the new title belongs to another post
        """
        data = changes.changes()
        if "title" in data and await self.title_taken(data["title"], exclude_id=db_blog.id):
            raise DuplicateEntryError(detail=TITLE_TAKEN)

        for key, value in data.items():
            setattr(db_blog, key, value)
        if "body" in data:
            db_blog.reading_time = calculate_reading_time(db_blog.body)
        db_blog.updated_at = datetime.now(tz=UTC)

        return await self._add_and_refresh(db_blog)

    async def set_state(self, db_blog: BlogDB, state: BlogState) -> BlogDB:
        db_blog.state = state
        db_blog.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(db_blog)

    async def increment_read_count(self, blog_id: UUID) -> BlogDB | None:
        """
        Fetch a published post and count the read in one statement.

        Returns:
            BlogDB | None: The post after the increment, or None when it is
            missing or not published (nothing is changed then).
        """
        statement = (
            update(BlogDB)
            .where(col(BlogDB.id) == blog_id, col(BlogDB.state) == "published")
            .values(read_count=col(BlogDB.read_count) + 1)
            .returning(BlogDB)
        )
        result = await self.session.execute(
            select(BlogDB).from_statement(statement).execution_options(populate_existing=True),
        )
        db_blog = result.scalar_one_or_none()
        if db_blog is not None:
            await self.session.commit()
        return db_blog

    async def author_ids_matching(self, fragment: str) -> list[UUID]:
        """Ids of users whose first or last name contains ``fragment``."""
        result = await self.session.execute(
            select(UserDB.id).where(
                or_(
                    col(UserDB.first_name).icontains(fragment, autoescape=True),
                    col(UserDB.last_name).icontains(fragment, autoescape=True),
                ),
            ),
        )
        return list(result.scalars().all())

    async def authors_for(self, blogs: Sequence[BlogDB]) -> dict[UUID, UserDB]:
        """Fetch the authors of ``blogs`` in a single query."""
        author_ids = {blog.author_id for blog in blogs}
        if not author_ids:
            return {}
        result = await self.session.execute(
            select(UserDB).where(col(UserDB.id).in_(author_ids)),
        )
        return {user.id: user for user in result.scalars().all()}

    async def list_blogs(
        self,
        query: BlogListQuery,
        *,
        published_only: bool = True,
        author_id: UUID | None = None,
    ) -> BlogPage:
        """
        Run a filtered, sorted, paginated listing.

        An author-name filter that matches nobody yields an empty page
        without querying the blogs table.
        """
        author_ids = None
        if query.author:
            author_ids = await self.author_ids_matching(query.author)
            if not author_ids:
                return BlogPage(blogs=[], page=query.page, limit=query.limit, total=0)

        filters = build_filters(
            query,
            published_only=published_only,
            author_id=author_id,
            author_ids=author_ids,
        )

        total = (await self.session.execute(build_count_statement(filters))).scalar_one()
        result = await self.session.execute(build_list_statement(query, filters))
        blogs = list(result.scalars().all())

        return BlogPage(
            blogs=blogs,
            page=query.page,
            limit=query.limit,
            total=total,
            authors=await self.authors_for(blogs),
        )

"""Tests for the blog listing query builder, compiled against the PostgreSQL dialect."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.sql import ClauseElement

from blogging_api.repositories.blog import (
    BlogListQuery,
    BlogPage,
    BlogRepository,
    build_count_statement,
    build_filters,
    build_list_statement,
    calculate_reading_time,
    calculate_word_count,
    parse_tags,
)


def compile_pg(statement: ClauseElement) -> tuple[str, list[object]]:
    compiled = statement.compile(dialect=postgresql.dialect())
    return str(compiled), list(compiled.params.values())


class TestReadingTime:
    @pytest.mark.parametrize(
        ("words", "minutes"),
        [(0, 0), (1, 1), (200, 1), (201, 2), (400, 2), (1001, 6)],
    )
    def test_rounds_up_at_200_words_per_minute(self, words: int, minutes: int) -> None:
        assert calculate_reading_time(" ".join(["word"] * words)) == minutes

    def test_word_count_ignores_extra_whitespace(self) -> None:
        assert calculate_word_count("  one\ttwo\n\nthree  ") == 3


class TestParseTags:
    def test_lower_trim_and_drop_empties(self) -> None:
        assert parse_tags(" Python, ,JS,") == ("python", "js")

    @pytest.mark.parametrize("raw", [None, "", " , "])
    def test_nothing_to_filter(self, raw: str | None) -> None:
        assert parse_tags(raw) == ()


class TestBuildFilters:
    def test_public_listing_restricted_to_published(self) -> None:
        filters = build_filters(BlogListQuery(state="draft"), published_only=True)

        assert len(filters) == 1
        sql, params = compile_pg(filters[0])
        assert sql.startswith("blogs.state = ")
        assert params == ["published"]

    def test_own_listing_may_filter_by_state(self) -> None:
        author_id = uuid4()

        filters = build_filters(
            BlogListQuery(state="draft"),
            published_only=False,
            author_id=author_id,
        )

        compiled = [compile_pg(f) for f in filters]
        assert compiled[0][1] == ["draft"]
        assert "blogs.author_id = " in compiled[1][0]
        assert compiled[1][1] == [author_id]

    def test_own_listing_without_state_has_no_state_filter(self) -> None:
        filters = build_filters(BlogListQuery(), published_only=False, author_id=uuid4())

        assert all("blogs.state" not in compile_pg(f)[0] for f in filters)

    def test_search_matches_title_or_any_tag(self) -> None:
        filters = build_filters(BlogListQuery(search="Fast"), published_only=True)

        sql, _ = compile_pg(filters[1])
        assert "blogs.title" in sql
        assert "EXISTS" in sql
        assert "jsonb_array_elements_text(blogs.tags)" in sql

    def test_search_is_literal(self) -> None:
        filters = build_filters(BlogListQuery(search="50%_off"), published_only=True)

        sql, params = compile_pg(filters[1])
        assert "ESCAPE '/'" in sql
        assert "50/%/_off" in params

    def test_tags_intersect(self) -> None:
        filters = build_filters(BlogListQuery(tags=("python", "js")), published_only=True)

        sql, params = compile_pg(filters[1])
        assert sql.count("jsonb_exists(blogs.tags") == 2
        assert " OR " in sql
        assert params == ["python", "js"]

    def test_author_ids(self) -> None:
        ids = [uuid4(), uuid4()]

        filters = build_filters(BlogListQuery(), published_only=True, author_ids=ids)

        sql, _ = compile_pg(filters[1])
        assert "blogs.author_id IN" in sql


class TestBuildListStatement:
    def test_default_sort_is_newest_first(self) -> None:
        sql, _ = compile_pg(build_list_statement(BlogListQuery(), []))

        assert "ORDER BY blogs.created_at DESC" in sql

    @pytest.mark.parametrize("sort_by", ["created_at", "read_count", "reading_time"])
    def test_sort_ascending(self, sort_by: str) -> None:
        query = BlogListQuery(sort_by=sort_by, sort_order="asc")  # type: ignore[arg-type]

        sql, _ = compile_pg(build_list_statement(query, []))

        assert f"ORDER BY blogs.{sort_by} ASC" in sql

    def test_pagination_offset(self) -> None:
        sql, params = compile_pg(build_list_statement(BlogListQuery(page=3, limit=20), []))

        assert "LIMIT" in sql
        assert "OFFSET" in sql
        assert 20 in params
        assert 40 in params

    def test_count_uses_same_filters(self) -> None:
        filters = build_filters(BlogListQuery(tags=("python",)), published_only=True)

        sql, _ = compile_pg(build_count_statement(filters))

        assert sql.startswith("SELECT count(*)")
        assert "jsonb_exists" in sql
        assert "ORDER BY" not in sql


class TestBlogPage:
    @pytest.mark.parametrize(
        ("total", "limit", "pages"),
        [(0, 20, 0), (3, 1, 3), (20, 20, 1), (21, 20, 2)],
    )
    def test_pages(self, total: int, limit: int, pages: int) -> None:
        assert BlogPage(blogs=[], page=1, limit=limit, total=total).pages == pages


class TestListBlogs:
    @pytest.mark.asyncio
    async def test_unknown_author_short_circuits(self) -> None:
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        session = AsyncMock()
        session.execute.return_value = result

        page = await BlogRepository(session).list_blogs(BlogListQuery(author="nobody"))

        assert page.blogs == []
        assert page.total == 0
        assert page.pages == 0
        # Only the author lookup ran
        assert session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_runs_count_page_and_author_queries(self) -> None:
        count_result = MagicMock()
        count_result.scalar_one.return_value = 0
        page_result = MagicMock()
        page_result.scalars.return_value.all.return_value = []
        session = AsyncMock()
        session.execute.side_effect = [count_result, page_result]

        page = await BlogRepository(session).list_blogs(BlogListQuery(page=2, limit=5))

        assert (page.page, page.limit, page.total) == (2, 5, 0)
        assert page.authors == {}
        assert session.execute.await_count == 2

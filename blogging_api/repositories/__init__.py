from blogging_api.repositories.base import BaseRepository
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
from blogging_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BlogListQuery",
    "BlogPage",
    "BlogRepository",
    "UserRepository",
    "build_count_statement",
    "build_filters",
    "build_list_statement",
    "calculate_reading_time",
    "calculate_word_count",
    "parse_tags",
]

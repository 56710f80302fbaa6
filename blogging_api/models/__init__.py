"""Database models for the application."""

from blogging_api.models.blog import BLOG_STATES, BlogDB, BlogState
from blogging_api.models.user import UserDB

__all__ = ["BLOG_STATES", "BlogDB", "BlogState", "UserDB"]

"""Ownership checks for blog mutations."""

from blogging_api.errors.auth import NotOwnerError
from blogging_api.models import BlogDB, UserDB


def is_owner(blog: BlogDB, user: UserDB) -> bool:
    return blog.author_id == user.id


def check_owner(blog: BlogDB, user: UserDB, action: str) -> None:
    """
    Ensure ``user`` wrote ``blog``.

    Args:
        blog: The post being modified.
        user: The authenticated caller.
        action: Verb used in the error message, e.g. ``"update"``.

    Raises:
        NotOwnerError: If the caller is not the author.
    """
    if not is_owner(blog, user):
        raise NotOwnerError(f"You can only {action} your own blogs")

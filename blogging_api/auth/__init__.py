from blogging_api.auth.permissions import check_owner, is_owner

__all__ = ["check_owner", "is_owner"]

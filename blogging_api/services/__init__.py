from blogging_api.services.auth import AuthService

__all__ = ["AuthService"]

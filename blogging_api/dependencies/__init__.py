from blogging_api.dependencies.dependencies import (
    AuthServiceDep,
    BlogQueryDep,
    BlogRepoDep,
    CurrentUserDep,
    MyBlogQueryDep,
    OptionalUserDep,
    UserRepoDep,
    bearer_scheme,
    get_auth_service,
    get_blog_list_query,
    get_blog_repository,
    get_current_user,
    get_my_blog_query,
    get_optional_user,
    get_user_repository,
)

__all__ = [
    "AuthServiceDep",
    "BlogQueryDep",
    "BlogRepoDep",
    "CurrentUserDep",
    "MyBlogQueryDep",
    "OptionalUserDep",
    "UserRepoDep",
    "bearer_scheme",
    "get_auth_service",
    "get_blog_list_query",
    "get_blog_repository",
    "get_current_user",
    "get_my_blog_query",
    "get_optional_user",
    "get_user_repository",
]

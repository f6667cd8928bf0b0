# blogapi/dependencies/__init__.py

from blogapi.dependencies.dependencies import (
    AdminDep,
    AiDep,
    AuthServiceDep,
    BlogQueryServiceDep,
    BlogRepoDep,
    BlogServiceDep,
    CommentServiceDep,
    FilterParamsDep,
    InteractionServiceDep,
    MailDep,
    OptionalUserDep,
    PopularityServiceDep,
    PopularLimitDep,
    ProfileServiceDep,
    SearchParamsDep,
    UserBlogsQueryDep,
    UserDBDep,
    UserRepoDep,
    get_ai_client_state,
    get_auth_service,
    get_blog_query_service,
    get_blog_service,
    get_comment_service,
    get_current_user,
    get_interaction_service,
    get_mail_service,
    get_optional_user,
    get_popularity_service,
    get_profile_service,
    get_user_repository,
)

__all__ = [
    "AdminDep",
    "AiDep",
    "AuthServiceDep",
    "BlogQueryServiceDep",
    "BlogRepoDep",
    "BlogServiceDep",
    "CommentServiceDep",
    "FilterParamsDep",
    "InteractionServiceDep",
    "MailDep",
    "OptionalUserDep",
    "PopularLimitDep",
    "PopularityServiceDep",
    "ProfileServiceDep",
    "SearchParamsDep",
    "UserBlogsQueryDep",
    "UserDBDep",
    "UserRepoDep",
    "get_ai_client_state",
    "get_auth_service",
    "get_blog_query_service",
    "get_blog_service",
    "get_comment_service",
    "get_current_user",
    "get_interaction_service",
    "get_mail_service",
    "get_optional_user",
    "get_popularity_service",
    "get_profile_service",
    "get_user_repository",
]

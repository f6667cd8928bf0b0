from blogapi.schemas.ai import GeneratedBlog, GeneratedText, SuggestionRequest, SuggestionResponse
from blogapi.schemas.auth import (
    EmailRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
    Token,
    TokenData,
)
from blogapi.schemas.blog import (
    BlogCreate,
    BlogListResponse,
    BlogResponse,
    BlogUpdate,
    BlogWithPopularity,
    PopularBlogsResponse,
)
from blogapi.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from blogapi.schemas.common import ErrorResponse, MessageResponse
from blogapi.schemas.health import CircuitBreakerStatus, HealthCheckResponse, ServicesStatus
from blogapi.schemas.query import (
    BlogWithAuthor,
    FilterEnvelope,
    FilterParams,
    FilterResponse,
    SearchEnvelope,
    SearchParams,
    SearchQuery,
    SearchResponse,
)
from blogapi.schemas.user import PictureUploadResponse, ProfileResponse, ProfileUpdate

__all__ = [
    "BlogCreate",
    "BlogListResponse",
    "BlogResponse",
    "BlogUpdate",
    "BlogWithAuthor",
    "BlogWithPopularity",
    "CircuitBreakerStatus",
    "CommentCreate",
    "CommentResponse",
    "CommentUpdate",
    "EmailRequest",
    "ErrorResponse",
    "FilterEnvelope",
    "FilterParams",
    "FilterResponse",
    "GeneratedBlog",
    "GeneratedText",
    "HealthCheckResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PictureUploadResponse",
    "PopularBlogsResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "RegisterRequest",
    "ResetPasswordRequest",
    "SearchEnvelope",
    "SearchParams",
    "SearchQuery",
    "SearchResponse",
    "ServicesStatus",
    "SuggestionRequest",
    "SuggestionResponse",
    "Token",
    "TokenData",
]

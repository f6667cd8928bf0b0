from blogapi.services.auth import AuthService
from blogapi.services.blog import BlogService
from blogapi.services.blog_query import BlogQueryService
from blogapi.services.comment import CommentService
from blogapi.services.interaction import InteractionOutcome, InteractionService
from blogapi.services.mail import MailService
from blogapi.services.popularity import LinearScoringPolicy, PopularityService
from blogapi.services.profile import ProfileService

__all__ = [
    "AuthService",
    "BlogQueryService",
    "BlogService",
    "CommentService",
    "InteractionOutcome",
    "InteractionService",
    "LinearScoringPolicy",
    "MailService",
    "PopularityService",
    "ProfileService",
]

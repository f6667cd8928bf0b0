from blogapi.routes.ai import router as ai_router
from blogapi.routes.auth import router as auth_router
from blogapi.routes.blog import router as blog_router
from blogapi.routes.comment import router as comment_router
from blogapi.routes.interaction import router as interaction_router
from blogapi.routes.user import router as user_router

__all__ = [
    "ai_router",
    "auth_router",
    "blog_router",
    "comment_router",
    "interaction_router",
    "user_router",
]

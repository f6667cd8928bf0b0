"""
Interaction engine: likes, dislikes and de-duplicated views.

Every operation runs inside the request transaction, so the interaction log
and the blog counters either change together or not at all. Counters are
moved with relative updates; a concurrent duplicate reaction trips the
unique index and surfaces as ``DuplicateEntryError``.
"""

from collections.abc import Callable
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from blogapi.configs.settings import ANONYMOUS_USER_ID, VIEW_WINDOW
from blogapi.errors import NotAuthenticatedError, RecordNotFoundError
from blogapi.managers.metrics import MetricsManager, metrics_manager
from blogapi.models.interaction import InteractionType
from blogapi.monitoring import get_logger
from blogapi.repositories.blog import BlogRepository
from blogapi.repositories.interaction import InteractionRepository
from blogapi.utils.helpers import utc_now

logger = get_logger(__name__)

BLOG_NOT_FOUND = "Blog not found"

_OPPOSITE = {
    InteractionType.LIKE: InteractionType.DISLIKE,
    InteractionType.DISLIKE: InteractionType.LIKE,
}


class InteractionOutcome(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    SWITCHED = "switched"


class InteractionService:
    """Applies reactions and views to blogs."""

    def __init__(
        self,
        blog_repo: BlogRepository,
        interaction_repo: InteractionRepository,
        clock: Callable[[], datetime] = utc_now,
        metrics: MetricsManager | None = None,
    ) -> None:
        self.blog_repo = blog_repo
        self.interaction_repo = interaction_repo
        self._clock = clock
        self._metrics = metrics or metrics_manager

    async def like(self, blog_id: UUID, user_id: str) -> InteractionOutcome:
        """
        Toggle the user's like on a blog.

        A second like removes the first; liking a disliked blog switches the
        dislike to a like.

        Args:
            blog_id: Blog UUID
            user_id: Authenticated user id

        Returns:
            InteractionOutcome: What happened to the like

        Raises:
            NotAuthenticatedError: If ``user_id`` is empty
            RecordNotFoundError: If the blog does not exist
        """
        return await self._react(blog_id, user_id, InteractionType.LIKE)

    async def dislike(self, blog_id: UUID, user_id: str) -> InteractionOutcome:
        """Toggle the user's dislike on a blog. Mirror image of ``like``."""
        return await self._react(blog_id, user_id, InteractionType.DISLIKE)

    async def _react(
        self,
        blog_id: UUID,
        user_id: str,
        kind: InteractionType,
    ) -> InteractionOutcome:
        if not user_id:
            raise NotAuthenticatedError
        if not await self.blog_repo.exists(blog_id):
            raise RecordNotFoundError(BLOG_NOT_FOUND)

        opposite = _OPPOSITE[kind]
        existing = await self.interaction_repo.find_reaction(blog_id, user_id, kind)
        if existing is not None:
            await self.interaction_repo.remove(existing)
            await self.blog_repo.adjust_counters(blog_id, **{_counter(kind): -1})
            outcome = InteractionOutcome.REMOVED
        else:
            previous = await self.interaction_repo.find_reaction(blog_id, user_id, opposite)
            if previous is not None:
                await self.interaction_repo.remove(previous)
            await self.interaction_repo.add(blog_id, user_id, kind)
            deltas = {_counter(kind): 1}
            if previous is not None:
                deltas[_counter(opposite)] = -1
            await self.blog_repo.adjust_counters(blog_id, **deltas)
            outcome = InteractionOutcome.SWITCHED if previous is not None else InteractionOutcome.ADDED

        logger.info(
            "Reaction applied",
            blog_id=str(blog_id),
            user_id=user_id,
            kind=kind.value,
            outcome=outcome.value,
        )
        self._metrics.record_interaction(f"{kind.value}_{outcome.value}")
        return outcome

    async def view(
        self,
        blog_id: UUID,
        user_id: str | None,
        ip_address: str,
        user_agent: str,
    ) -> bool:
        """
        Record a view unless the same viewer already viewed within 24 hours.

        Authenticated viewers are identified by user id. Anonymous viewers
        share the ``"anonymous"`` id and are told apart by IP and User-Agent.

        Args:
            blog_id: Blog UUID
            user_id: Viewer id, or None/empty for anonymous viewers
            ip_address: Client IP address
            user_agent: Client User-Agent header

        Returns:
            bool: True if a new view was counted

        Raises:
            RecordNotFoundError: If the blog does not exist
        """
        if not await self.blog_repo.exists(blog_id):
            raise RecordNotFoundError(BLOG_NOT_FOUND)

        anonymous = not user_id or user_id == ANONYMOUS_USER_ID
        viewer = ANONYMOUS_USER_ID if anonymous else str(user_id)
        now = self._clock()

        recent = await self.interaction_repo.find_active_view(
            blog_id,
            viewer,
            ip_address if anonymous else None,
            user_agent if anonymous else None,
            now,
        )
        if recent is not None:
            return False

        await self.interaction_repo.add(
            blog_id,
            viewer,
            InteractionType.VIEW,
            ip_address=ip_address,
            user_agent=user_agent,
            expires_at=now + VIEW_WINDOW,
        )
        await self.blog_repo.adjust_counters(blog_id, views=1)
        self._metrics.record_interaction("view_recorded")
        return True


def _counter(kind: InteractionType) -> str:
    return "likes" if kind == InteractionType.LIKE else "dislikes"

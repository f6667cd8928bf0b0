"""
Popularity engine.

Ranks blogs by a linear score over their counters, comment count and age::

    likes*3 + comments*5 + views*0.1 - dislikes*2 + recency boost

The recency boost is a step function of the blog's age. Weights and tiers
live on ``LinearScoringPolicy`` so another policy can be injected.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from blogapi.configs.settings import DEFAULT_POPULAR_LIMIT
from blogapi.models.blog import BlogDB
from blogapi.repositories.blog import BlogRepository
from blogapi.repositories.comment import CommentRepository
from blogapi.schemas.blog import BlogWithPopularity
from blogapi.utils.helpers import utc_now


@dataclass(frozen=True, slots=True)
class BlogCounters:
    likes: int
    dislikes: int
    views: int
    comments: int


class ScoringPolicy(Protocol):
    """Ranks one blog: return a float where higher means more popular."""

    def score(self, counters: BlogCounters, age: timedelta) -> float: ...


@dataclass(frozen=True, slots=True)
class LinearScoringPolicy:
    """Weighted sum of counters plus a tiered recency boost."""

    like_weight: float = 3.0
    comment_weight: float = 5.0
    view_weight: float = 0.1
    dislike_weight: float = -2.0
    # (maximum age, boost); first matching tier wins
    recency_tiers: tuple[tuple[timedelta, float], ...] = field(
        default=(
            (timedelta(days=1), 50.0),
            (timedelta(days=7), 20.0),
            (timedelta(days=30), 5.0),
        ),
    )

    def recency_boost(self, age: timedelta) -> float:
        for max_age, boost in self.recency_tiers:
            if age <= max_age:
                return boost
        return 0.0

    def score(self, counters: BlogCounters, age: timedelta) -> float:
        return (
            counters.likes * self.like_weight
            + counters.comments * self.comment_weight
            + counters.views * self.view_weight
            + counters.dislikes * self.dislike_weight
            + self.recency_boost(age)
        )


def rank_blogs(
    blogs: Sequence[BlogDB],
    comment_counts: dict[UUID, int],
    now: datetime,
    limit: int = 0,
    policy: ScoringPolicy | None = None,
) -> list[BlogWithPopularity]:
    """
    Score and order blogs, most popular first.

    The sort is stable, so equal scores keep the input order. The result is
    cut to ``limit`` only when ``0 < limit < len(blogs)``.

    Args:
        blogs: Blogs to rank
        comment_counts: Comment count per blog id (missing means zero)
        now: Reference time for the recency boost
        limit: Maximum number of results, non-positive for all
        policy: Scoring policy (defaults to ``LinearScoringPolicy()``)

    Returns:
        list[BlogWithPopularity]: Ranked blogs with their scores
    """
    policy = policy or LinearScoringPolicy()
    ranked = []
    for blog in blogs:
        comments = comment_counts.get(blog.id, 0)
        counters = BlogCounters(
            likes=blog.like_count,
            dislikes=blog.dislike_count,
            views=blog.view_count,
            comments=comments,
        )
        ranked.append(
            BlogWithPopularity(
                id=blog.id,
                title=blog.title,
                content=blog.content,
                user_id=blog.user_id,
                like_count=blog.like_count,
                dislike_count=blog.dislike_count,
                view_count=blog.view_count,
                comment_count=comments,
                popularity_score=policy.score(counters, now - blog.created_at),
                created_at=blog.created_at,
                updated_at=blog.updated_at,
            ),
        )

    ranked.sort(key=lambda item: item.popularity_score, reverse=True)
    if 0 < limit < len(ranked):
        ranked = ranked[:limit]
    return ranked


class PopularityService:
    """Loads blogs and comment counts and ranks them."""

    def __init__(
        self,
        blog_repo: BlogRepository,
        comment_repo: CommentRepository,
        policy: ScoringPolicy | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.blog_repo = blog_repo
        self.comment_repo = comment_repo
        self.policy = policy or LinearScoringPolicy()
        self._clock = clock

    async def popular_blogs(self, limit: int = DEFAULT_POPULAR_LIMIT) -> list[BlogWithPopularity]:
        blogs = await self.blog_repo.list_all()
        counts = await self.comment_repo.count_by_blog_ids([blog.id for blog in blogs])
        return rank_blogs(blogs, counts, self._clock(), limit, self.policy)

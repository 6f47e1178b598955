"""Post ranking.

The "best" order uses a time-decayed score::

    score = points / (age_hours + time_offset) ** gravity

A post's score only ever drops as it ages and rises with its points, so fresh
posts with some votes outrank old posts with many. The PostgreSQL repository
computes the same expression inside the database; ``sort_posts`` is the
in-process equivalent.
"""

from datetime import datetime, timezone
from typing import Iterable

from board.domain.model.post import Post
from board.domain.repository.post import PostSortOrder

DEFAULT_GRAVITY = 1.8
DEFAULT_TIME_OFFSET = 2.0


def age_in_hours(created_at: datetime, now: datetime) -> float:
    """Fractional hours between created_at and now, never negative.

    Naive datetimes are taken to be UTC.
    """
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return max((now - created_at).total_seconds() / 3600, 0.0)


def decayed_score(
    points: int,
    age_hours: float,
    gravity: float = DEFAULT_GRAVITY,
    time_offset: float = DEFAULT_TIME_OFFSET,
) -> float:
    """Time-decayed popularity score.

    Args:
        points: Net vote total, may be negative
        age_hours: Age of the item in hours (clamped at zero)
        gravity: Decay exponent
        time_offset: Hours added to the age so new items stay finite

    Returns:
        The score; higher ranks first
    """
    return points / (max(age_hours, 0.0) + time_offset) ** gravity


def sort_posts(
    posts: Iterable[Post],
    sort: PostSortOrder,
    now: datetime,
    gravity: float = DEFAULT_GRAVITY,
    time_offset: float = DEFAULT_TIME_OFFSET,
) -> list[Post]:
    """Return a new list of posts in the requested order.

    The input is never mutated. Every order ends with created_at and then id
    as tie-breakers, so the result is fully determined by the posts and now,
    and sorting an already sorted list returns it unchanged.

    Args:
        posts: Posts to order
        sort: Requested order
        now: Single reference time for every score in this sort
        gravity: Decay exponent for BEST
        time_offset: Age offset for BEST

    Returns:
        Sorted copy of the posts
    """
    if sort == PostSortOrder.TOP:

        def key(post: Post):
            return (post.points, post.created_at, post.id.int)

    elif sort == PostSortOrder.BEST:

        def key(post: Post):
            score = decayed_score(
                post.points,
                age_in_hours(post.created_at, now),
                gravity=gravity,
                time_offset=time_offset,
            )
            return (score, post.created_at, post.id.int)

    else:

        def key(post: Post):
            return (post.created_at, post.id.int)

    return sorted(posts, key=key, reverse=True)

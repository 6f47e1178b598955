"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import Field

from board.domain.model.post import Post
from board.domain.value import PostId, Username
from board.domain.value.common import ValueObject


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    NEW = "new"  # created_at DESC
    TOP = "top"  # points DESC
    BEST = "best"  # decayed score DESC


class MatchAll(ValueObject):
    """Filter clause that accepts every post."""

    def matches(self, post: Post) -> bool:
        return True


class TitleContains(ValueObject):
    """Case-insensitive substring match on the post title.

    The term is matched literally: characters with a special meaning to the
    store's pattern syntax are escaped by the repository.
    """

    term: str = Field(min_length=1)

    def matches(self, post: Post) -> bool:
        return self.term.casefold() in post.title.casefold()


PostFilter = Union[MatchAll, TitleContains]


def build_post_filter(search: Optional[str]) -> PostFilter:
    """Build the listing filter for an optional search term.

    Surrounding whitespace is ignored and a blank term means no filtering.
    """
    term = (search or "").strip()
    if not term:
        return MatchAll()
    return TitleContains(term=term)


class PostPage(ValueObject):
    """One page of posts together with the size of the whole filtered set.

    Both values come from the same read, so they describe one snapshot.
    """

    posts: list[Post]
    total: int = Field(ge=0)


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        post_filter: PostFilter,
        sort: PostSortOrder,
        limit: int,
        offset: int,
        now: datetime,
    ) -> PostPage:
        """Find one page of posts matching a filter.

        Ordering is total (ties fall back to created_at, then id) so that
        consecutive pages never overlap or skip posts.

        Args:
            post_filter: Filter clause
            sort: Sort order
            limit: Maximum number of posts to return
            offset: Number of posts to skip
            now: Reference time for age-based scores

        Returns:
            The requested page and the total number of matching posts
        """
        pass

    @abstractmethod
    async def find_by_author(
        self, author_username: Username, limit: int, offset: int
    ) -> PostPage:
        """Find one page of a user's posts, newest first.

        Args:
            author_username: Display name the posts were created under
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            The requested page and the user's total number of posts
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def increment_points(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically add delta (may be negative) to a post's points.

        Args:
            post_id: The post ID
            delta: Signed change

        Returns:
            The new point total, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId, delta: int = 1) -> None:
        """Atomically add delta to a post's comment count.

        Args:
            post_id: The post ID
            delta: Signed change
        """
        pass

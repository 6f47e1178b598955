"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from board.config import RankingSettings
from board.domain.model.post import Post
from board.domain.repository.post import (
    PostFilter,
    PostPage,
    PostRepository,
    PostSortOrder,
)
from board.domain.service.ranking import sort_posts
from board.domain.value import PostId, Username


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, ranking: RankingSettings | None = None) -> None:
        self._posts: dict[PostId, Post] = {}
        self.ranking = ranking or RankingSettings()

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_page(
        self,
        post_filter: PostFilter,
        sort: PostSortOrder,
        limit: int,
        offset: int,
        now: datetime,
    ) -> PostPage:
        """Filter, sort and slice the stored posts."""
        matching = [p for p in self._posts.values() if post_filter.matches(p)]
        ordered = sort_posts(
            matching,
            sort,
            now,
            gravity=self.ranking.gravity,
            time_offset=self.ranking.time_offset,
        )
        return PostPage(posts=ordered[offset : offset + limit], total=len(matching))

    async def find_by_author(
        self, author_username: Username, limit: int, offset: int
    ) -> PostPage:
        """Newest first, matching on the author's display name."""
        authored = [
            p for p in self._posts.values() if p.author_username == author_username
        ]
        authored.sort(key=lambda p: (p.created_at, p.id.int), reverse=True)
        return PostPage(posts=authored[offset : offset + limit], total=len(authored))

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def increment_points(self, post_id: PostId, delta: int) -> Optional[int]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(update={"points": post.points + delta})
        self._posts[post_id] = updated
        return updated.points

    async def increment_comment_count(self, post_id: PostId, delta: int = 1) -> None:
        post = self._posts.get(post_id)
        if post is not None:
            self._posts[post_id] = post.model_copy(
                update={"comment_count": max(post.comment_count + delta, 0)}
            )

"""Unit tests for CreatePostUseCase."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from board.application.cache import ListingCache
from board.application.usecase.post import CreatePostRequest, CreatePostUseCase
from board.domain.cache import QueryCache
from board.domain.repository import PostRepository
from board.domain.service import PostService
from board.domain.value import PostId, PostKind
from board.persistence.cache import InMemoryQueryCache
from board.persistence.repository.inmemory import InMemoryPostRepository
from board.persistence.transaction import SessionCommitHooks
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()


def _request(**overrides) -> CreatePostRequest:
    data = dict(
        title="  A new post  ",
        author_id=str(uuid4()),
        author_username="alice",
        text="Body",
    )
    data.update(overrides)
    return CreatePostRequest(**data)


class TestCreatePost:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_creates_text_post(self, unit_env):
        """Title is trimmed and the post starts with no points."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)

        # Act
        result = await use_case.execute(_request())

        # Assert
        assert result.title == "A new post"
        assert result.kind == PostKind.TEXT
        assert result.points == 0
        saved = await post_repo.find_by_id(PostId(UUID(result.post_id)))
        assert saved is not None
        assert saved.author_username.root == "alice"

    @pytest.mark.asyncio
    async def test_creates_link_post(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        result = await use_case.execute(_request(text=None, url="https://example.com"))

        assert result.kind == PostKind.LINK

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            dict(text=None, url=None),
            dict(url="https://example.com"),
            dict(title="   "),
            dict(title="x" * 301),
        ],
    )
    async def test_invalid_posts_are_rejected(self, unit_env, overrides):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(_request(**overrides))

    @pytest.mark.asyncio
    async def test_cached_listings_are_invalidated(self, unit_env):
        """Only listing keys are dropped."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        cache = await unit_env.get(QueryCache)
        cache.set("posts:[1,25,\"new\",\"\",\"anonymous\"]", "{}")
        cache.set("other:key", "kept")

        # Act
        await use_case.execute(_request())

        # Assert
        assert cache.stats().keys == ["other:key"]


class TestCreatePostCommitOrder:
    """Listings are invalidated only once the post is committed."""

    @pytest.mark.asyncio
    async def test_invalidation_waits_for_commit(self):
        # Arrange
        session = AsyncSession()
        cache = InMemoryQueryCache()
        use_case = CreatePostUseCase(
            post_service=PostService(post_repository=InMemoryPostRepository()),
            listing_cache=ListingCache(cache=cache, ttl_seconds=60),
            commit_hooks=SessionCommitHooks(session),
        )
        cache.set("posts:stale", "{}")

        # Act
        await use_case.execute(_request())

        # Assert - a reader before the commit still sees the old listing
        assert cache.get("posts:stale") == "{}"

        await session.commit()

        assert cache.get("posts:stale") is None

    @pytest.mark.asyncio
    async def test_rolled_back_post_keeps_cache(self):
        session = AsyncSession()
        cache = InMemoryQueryCache()
        use_case = CreatePostUseCase(
            post_service=PostService(post_repository=InMemoryPostRepository()),
            listing_cache=ListingCache(cache=cache, ttl_seconds=60),
            commit_hooks=SessionCommitHooks(session),
        )
        cache.set("posts:current", "{}")

        await session.begin()
        await use_case.execute(_request())
        await session.rollback()
        await session.commit()

        assert cache.get("posts:current") == "{}"

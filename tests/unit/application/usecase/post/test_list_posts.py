"""Unit tests for ListPostsUseCase."""

import asyncio
from uuid import uuid4

import pytest

from board.application.cache import ListingCache
from board.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
)
from board.application.usecase.post.list_posts import MAX_OFFSET
from board.config import ListingSettings
from board.domain.cache import QueryCache
from board.domain.error import TransientLookupError
from board.domain.repository import PostRepository, VoteRepository
from board.domain.repository.post import PostSortOrder
from board.domain.model.vote import Vote
from board.domain.service import VoteService
from board.domain.value import UserId, VotableType, VoteDirection, VoteId
from board.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryVoteRepository,
)
from tests.conftest import hours_ago, make_post
from tests.di import BrokenCache
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()


class FlakyVoteRepository(InMemoryVoteRepository):
    """Vote repository whose lookups fail or hang for chosen posts."""

    def __init__(self, failing=(), hanging=()):
        super().__init__()
        self.failing = set(failing)
        self.hanging = set(hanging)

    async def get_direction(self, user_id, votable_type, votable_id):
        if votable_id in self.failing:
            raise TransientLookupError("vote", "connection reset")
        if votable_id in self.hanging:
            await asyncio.sleep(10)
        return await super().get_direction(user_id, votable_type, votable_id)


async def _seed(post_repo, count):
    return [
        await post_repo.save(make_post(f"Post {i}", created_at=hours_ago(i)))
        for i in range(count)
    ]


class TestListPosts:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_defaults_apply_for_missing_or_invalid_paging(self, unit_env):
        """Page 1, page size 25 and newest first by default."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        posts = await _seed(post_repo, 30)

        # Act
        for request in [
            ListPostsRequest(),
            ListPostsRequest(page=0, page_size=0),
            ListPostsRequest(page=-3, page_size=-1),
        ]:
            result = await use_case.execute(request)

            # Assert
            assert result.page == 1
            assert result.page_size == 25
            assert result.total == 30
            assert result.total_pages == 2
            assert result.posts[0].post_id == str(posts[0].id)

    @pytest.mark.asyncio
    async def test_second_page_holds_the_rest(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await _seed(post_repo, 30)

        result = await use_case.execute(ListPostsRequest(page=2, page_size=25))

        assert len(result.posts) == 5
        assert result.total_pages == 2

    @pytest.mark.asyncio
    async def test_page_beyond_end_is_empty(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await _seed(post_repo, 3)

        result = await use_case.execute(ListPostsRequest(page=9, page_size=2))

        assert result.posts == []
        assert result.total == 3
        assert result.total_pages == 2

    @pytest.mark.asyncio
    async def test_empty_board(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)

        result = await use_case.execute(ListPostsRequest())

        assert result.posts == []
        assert result.total == 0
        assert result.total_pages == 0

    @pytest.mark.asyncio
    async def test_search_filters_titles(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post("Show: my Python parser"))
        await post_repo.save(make_post("Ask: best editor?"))

        # Act
        result = await use_case.execute(ListPostsRequest(search="  python "))

        # Assert
        assert [p.title for p in result.posts] == ["Show: my Python parser"]
        assert result.total == 1

    @pytest.mark.asyncio
    async def test_top_sort(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post("meh", points=1))
        await post_repo.save(make_post("great", points=9))

        result = await use_case.execute(ListPostsRequest(sort=PostSortOrder.TOP))

        assert [p.title for p in result.posts] == ["great", "meh"]

    @pytest.mark.asyncio
    async def test_user_votes_are_attached(self, unit_env):
        """Each item carries the requesting user's own vote."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        liked, disliked, ignored = await _seed(post_repo, 3)
        user_id = UserId(uuid4())
        await vote_service.cast_vote(user_id, VotableType.POST, liked.id, VoteDirection.UP)
        await vote_service.cast_vote(
            user_id, VotableType.POST, disliked.id, VoteDirection.DOWN
        )

        # Act
        result = await use_case.execute(ListPostsRequest(user_id=str(user_id)))
        anonymous = await use_case.execute(ListPostsRequest())

        # Assert
        votes = {p.post_id: p.user_vote for p in result.posts}
        assert votes[str(liked.id)] == VoteDirection.UP
        assert votes[str(disliked.id)] == VoteDirection.DOWN
        assert votes[str(ignored.id)] == VoteDirection.NONE
        assert all(p.user_vote == VoteDirection.NONE for p in anonymous.posts)

    @pytest.mark.asyncio
    async def test_cached_page_is_served_until_invalidated(self, unit_env):
        """A repeat request hits the cache; creating a post refreshes listings."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        create_post = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        await _seed(post_repo, 2)
        first = await use_case.execute(ListPostsRequest())

        # A write that bypasses the use cases is invisible while cached
        await post_repo.save(make_post("Sneaky"))
        cached = await use_case.execute(ListPostsRequest())
        assert cached == first

        # Act
        created = await create_post.execute(
            CreatePostRequest(
                title="Fresh",
                author_id=str(uuid4()),
                author_username="alice",
                text="Hello",
            )
        )
        refreshed = await use_case.execute(ListPostsRequest())

        # Assert
        assert refreshed.total == 4
        assert refreshed.posts[0].post_id == created.post_id

    @pytest.mark.asyncio
    async def test_cache_entries_are_per_user(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        cache = await unit_env.get(QueryCache)
        post_repo = await unit_env.get(PostRepository)
        await _seed(post_repo, 1)

        await use_case.execute(ListPostsRequest(user_id=str(uuid4())))
        await use_case.execute(ListPostsRequest(user_id=str(uuid4())))
        await use_case.execute(ListPostsRequest())

        assert cache.stats().size == 3


class TestListPostsDegradation:
    """Failures in optional enrichment never fail the listing."""

    @pytest.mark.asyncio
    async def test_failed_vote_lookup_reports_no_vote_for_that_post(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        listing_cache = await unit_env.get(ListingCache)
        ok_post, failing_post, hanging_post = await _seed(post_repo, 3)
        user_id = UserId(uuid4())
        votes = FlakyVoteRepository(
            failing={failing_post.id}, hanging={hanging_post.id}
        )
        for post in (ok_post, failing_post, hanging_post):
            await votes.save(_up_vote(user_id, post.id))
        use_case = ListPostsUseCase(
            post_repository=post_repo,
            vote_repository=votes,
            listing_cache=listing_cache,
            settings=ListingSettings(vote_lookup_timeout_seconds=0.05),
        )

        # Act
        result = await use_case.execute(ListPostsRequest(user_id=str(user_id)))

        # Assert
        by_id = {p.post_id: p.user_vote for p in result.posts}
        assert by_id[str(ok_post.id)] == VoteDirection.UP
        assert by_id[str(failing_post.id)] == VoteDirection.NONE
        assert by_id[str(hanging_post.id)] == VoteDirection.NONE

    @pytest.mark.asyncio
    async def test_page_with_failed_lookup_is_not_cached(self, unit_env):
        """A transient failure must not pin a wrong vote for the whole TTL."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        listing_cache = await unit_env.get(ListingCache)
        cache = await unit_env.get(QueryCache)
        [post] = await _seed(post_repo, 1)
        user_id = UserId(uuid4())
        votes = FlakyVoteRepository(failing={post.id})
        await votes.save(_up_vote(user_id, post.id))
        use_case = ListPostsUseCase(
            post_repository=post_repo,
            vote_repository=votes,
            listing_cache=listing_cache,
            settings=ListingSettings(),
        )
        request = ListPostsRequest(user_id=str(user_id))

        # Act
        degraded = await use_case.execute(request)
        votes.failing.clear()
        recovered = await use_case.execute(request)

        # Assert
        assert degraded.posts[0].user_vote == VoteDirection.NONE
        assert recovered.posts[0].user_vote == VoteDirection.UP
        assert cache.stats().size == 1

    @pytest.mark.asyncio
    async def test_broken_cache_still_lists(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        await _seed(post_repo, 2)
        use_case = ListPostsUseCase(
            post_repository=post_repo,
            vote_repository=vote_repo,
            listing_cache=ListingCache(BrokenCache(), ttl_seconds=60),
            settings=ListingSettings(),
        )

        result = await use_case.execute(ListPostsRequest())

        assert result.total == 2


def _up_vote(user_id, post_id):
    return Vote(
        id=VoteId(uuid4()),
        user_id=user_id,
        votable_type=VotableType.POST,
        votable_id=post_id,
        direction=VoteDirection.UP,
    )


class OffsetRecordingPostRepository(InMemoryPostRepository):
    """Post repository that remembers the offsets it was asked for."""

    def __init__(self):
        super().__init__()
        self.offsets = []

    async def find_page(self, post_filter, sort, limit, offset, now):
        self.offsets.append(offset)
        return await super().find_page(post_filter, sort, limit, offset, now)


class TestListPostsPaging:
    """Out-of-range pages."""

    @pytest.mark.asyncio
    async def test_huge_page_is_empty_with_totals(self, unit_env):
        # Arrange
        post_repo = OffsetRecordingPostRepository()
        await _seed(post_repo, 3)
        use_case = ListPostsUseCase(
            post_repository=post_repo,
            vote_repository=await unit_env.get(VoteRepository),
            listing_cache=await unit_env.get(ListingCache),
            settings=ListingSettings(),
        )

        # Act
        result = await use_case.execute(ListPostsRequest(page=10**19))

        # Assert
        assert result.posts == []
        assert result.total == 3
        assert result.total_pages == 1
        assert result.page == 10**19
        assert post_repo.offsets == [MAX_OFFSET]

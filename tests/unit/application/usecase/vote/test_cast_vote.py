"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest

from board.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from board.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from board.domain.cache import QueryCache
from board.domain.error import NotFoundError
from board.domain.repository import PostRepository
from board.domain.value import VotableType, VoteDirection
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()


def _vote(votable_type, votable_id, user_id, direction) -> CastVoteRequest:
    return CastVoteRequest(
        votable_type=votable_type,
        votable_id=str(votable_id),
        user_id=user_id,
        direction=direction,
    )


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_post_vote_updates_points_and_listings(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        cache = await unit_env.get(QueryCache)
        post = await post_repo.save(make_post(points=2))
        cache.set("posts:cached-page", "{}")

        # Act
        result = await use_case.execute(
            _vote(VotableType.POST, post.id, str(uuid4()), VoteDirection.UP)
        )

        # Assert
        assert result.points == 3
        assert result.user_vote == VoteDirection.UP
        assert cache.get("posts:cached-page") is None

    @pytest.mark.asyncio
    async def test_repeated_vote_keeps_cache(self, unit_env):
        """A no-op vote doesn't invalidate anything."""
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        cache = await unit_env.get(QueryCache)
        post = await post_repo.save(make_post())
        user_id = str(uuid4())
        request = _vote(VotableType.POST, post.id, user_id, VoteDirection.DOWN)
        await use_case.execute(request)
        cache.set("posts:cached-page", "{}")

        result = await use_case.execute(request)

        assert result.points == -1
        assert cache.get("posts:cached-page") == "{}"

    @pytest.mark.asyncio
    async def test_comment_vote(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        create_comment = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        comment = await create_comment.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                author_id=str(uuid4()),
                author_username="fay",
                text="Vote me",
            )
        )

        # Act
        result = await use_case.execute(
            _vote(VotableType.COMMENT, comment.comment_id, str(uuid4()), VoteDirection.UP)
        )

        # Assert
        assert result.votable_type == VotableType.COMMENT
        assert result.points == 1

    @pytest.mark.asyncio
    async def test_vote_on_missing_post_raises(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                _vote(VotableType.POST, uuid4(), str(uuid4()), VoteDirection.UP)
            )

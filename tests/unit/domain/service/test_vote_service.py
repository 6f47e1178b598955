"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from board.domain.error import NotFoundError, ValidationError
from board.domain.repository import PostRepository, VoteRepository
from board.domain.service import CommentService, VoteService, vote_delta
from board.domain.value import (
    CommentId,
    PostId,
    UserId,
    Username,
    VotableType,
    VoteDirection,
)
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()

UP = VoteDirection.UP
DOWN = VoteDirection.DOWN
NONE = VoteDirection.NONE


class TestVoteDelta:
    """The vote state machine."""

    @pytest.mark.parametrize(
        "previous,direction,delta",
        [
            (NONE, UP, 1),
            (NONE, DOWN, -1),
            (UP, DOWN, -2),
            (DOWN, UP, 2),
            (UP, UP, 0),
            (DOWN, DOWN, 0),
        ],
    )
    def test_transitions(self, previous, direction, delta):
        assert vote_delta(previous, direction) == delta


class TestCastVoteOnPost:
    """Tests for cast_vote on posts."""

    @pytest.mark.asyncio
    async def test_upvote_increments_points(self, unit_env):
        """First upvote records the vote and adds one point."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await post_repo.save(make_post(points=4))
        user_id = UserId(uuid4())

        # Act
        result = await vote_service.cast_vote(user_id, VotableType.POST, post.id, UP)

        # Assert
        assert result.points == 5
        assert result.user_vote == UP
        assert result.changed
        saved = await vote_repo.find_by_user_and_votable(
            user_id, VotableType.POST, post.id
        )
        assert saved is not None and saved.direction == UP

    @pytest.mark.asyncio
    async def test_flip_moves_points_by_two(self, unit_env):
        """Up then down nets -1 from the starting total."""
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(points=0))
        user_id = UserId(uuid4())

        await vote_service.cast_vote(user_id, VotableType.POST, post.id, UP)
        result = await vote_service.cast_vote(user_id, VotableType.POST, post.id, DOWN)

        assert result.points == -1
        assert result.user_vote == DOWN
        assert (
            await vote_service.get_user_vote(user_id, VotableType.POST, post.id)
            == DOWN
        )

    @pytest.mark.asyncio
    async def test_repeated_vote_is_idempotent(self, unit_env):
        """Voting the same way twice changes nothing."""
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(points=0))
        user_id = UserId(uuid4())

        await vote_service.cast_vote(user_id, VotableType.POST, post.id, UP)
        result = await vote_service.cast_vote(user_id, VotableType.POST, post.id, UP)

        assert result.points == 1
        assert not result.changed

    @pytest.mark.asyncio
    async def test_votes_from_different_users_accumulate(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(points=0))

        for _ in range(3):
            await vote_service.cast_vote(
                UserId(uuid4()), VotableType.POST, post.id, UP
            )
        result = await vote_service.cast_vote(
            UserId(uuid4()), VotableType.POST, post.id, DOWN
        )

        assert result.points == 2

    @pytest.mark.asyncio
    async def test_missing_post_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                UserId(uuid4()), VotableType.POST, PostId(uuid4()), UP
            )

    @pytest.mark.asyncio
    async def test_none_direction_rejected(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(ValidationError):
            await vote_service.cast_vote(
                UserId(uuid4()), VotableType.POST, PostId(uuid4()), NONE
            )

    @pytest.mark.asyncio
    async def test_user_without_vote_reports_none(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        direction = await vote_service.get_user_vote(
            UserId(uuid4()), VotableType.POST, PostId(uuid4())
        )

        assert direction == NONE


class TestCastVoteOnComment:
    """Tests for cast_vote on comments."""

    @pytest.mark.asyncio
    async def test_downvote_comment(self, unit_env):
        """Comment points can go negative."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.create_comment(
            post_id=PostId(uuid4()),
            author_id=UserId(uuid4()),
            author_username=Username("bob"),
            text="Hmm",
        )

        # Act
        result = await vote_service.cast_vote(
            UserId(uuid4()), VotableType.COMMENT, comment.id, DOWN
        )

        # Assert
        assert result.points == -1
        assert (await comment_service.require_comment(comment.id)).points == -1

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                UserId(uuid4()), VotableType.COMMENT, CommentId(uuid4()), UP
            )

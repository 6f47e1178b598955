"""Unit tests for UpdateCommentUseCase."""

from uuid import uuid4

import pytest

from board.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from board.domain.error import NotAuthorizedError, NotFoundError
from board.domain.repository import PostRepository
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_edits_text(self, unit_env):
        """Edits leave the comment count alone."""
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        update = await unit_env.get(UpdateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        author = str(uuid4())
        comment = await create.execute(
            CreateCommentRequest(
                post_id=str(post.id), author_id=author, author_username="dan", text="Frist"
            )
        )

        # Act
        result = await update.execute(
            UpdateCommentRequest(
                comment_id=comment.comment_id, user_id=author, text="First"
            )
        )

        # Assert
        assert result.text == "First"
        assert result.edited_at is not None
        assert (await post_repo.find_by_id(post.id)).comment_count == 1

    @pytest.mark.asyncio
    async def test_non_author_is_rejected(self, unit_env):
        create = await unit_env.get(CreateCommentUseCase)
        update = await unit_env.get(UpdateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        comment = await create.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                author_id=str(uuid4()),
                author_username="dan",
                text="Mine",
            )
        )

        with pytest.raises(NotAuthorizedError):
            await update.execute(
                UpdateCommentRequest(
                    comment_id=comment.comment_id, user_id=str(uuid4()), text="Ours"
                )
            )

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        update = await unit_env.get(UpdateCommentUseCase)

        with pytest.raises(NotFoundError):
            await update.execute(
                UpdateCommentRequest(
                    comment_id=str(uuid4()), user_id=str(uuid4()), text="?"
                )
            )

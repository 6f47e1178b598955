"""Integration tests for notifications and profile reads on PostgreSQL.

Run against a migrated database:

    DATABASE__URL=postgresql+asyncpg://... pytest -m integration
"""

import os
from uuid import uuid4

import pytest

from board.domain.repository import CommentRepository, PostRepository
from board.domain.service import NotificationService
from board.domain.value import CommentState, UserId, Username
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
    ),
]

integration_env = create_env_fixture(unmock={"persistence"})


class TestNotificationRepositoryIntegration:
    """Notification reads join the post and comment in."""

    @pytest.mark.asyncio
    async def test_title_and_text_are_joined(self, integration_env):
        posts = await integration_env.get(PostRepository)
        comments = await integration_env.get(CommentRepository)
        service = await integration_env.get(NotificationService)
        post = await posts.save(make_post("Joined title"))
        comment = await comments.save(make_comment(post.id, text="Joined text"))
        await service.notify_comment_created(comment, post)

        [notification] = await service.get_notifications(post.author_id)

        assert notification.post_title == "Joined title"
        assert notification.comment_text == "Joined text"

    @pytest.mark.asyncio
    async def test_read_state(self, integration_env):
        posts = await integration_env.get(PostRepository)
        comments = await integration_env.get(CommentRepository)
        service = await integration_env.get(NotificationService)
        post = await posts.save(make_post())
        for _ in range(2):
            comment = await comments.save(make_comment(post.id))
            await service.notify_comment_created(comment, post)
        first, _ = await service.get_notifications(post.author_id)

        await service.mark_read(first.id, post.author_id)

        assert await service.unread_count(post.author_id) == 1
        assert await service.mark_all_read(post.author_id) == 1
        assert await service.get_notifications(post.author_id, unread_only=True) == []
        assert await service.unread_count(UserId(uuid4())) == 0


class TestProfileReadsIntegration:
    """Author lookups by display name."""

    @pytest.mark.asyncio
    async def test_comments_skip_deleted_and_carry_title(self, integration_env):
        posts = await integration_env.get(PostRepository)
        comments = await integration_env.get(CommentRepository)
        name = f"u{uuid4().hex[:20]}"
        post = await posts.save(make_post("Their post", author_username=name))
        await comments.save(make_comment(post.id, author_username=name))
        await comments.save(
            make_comment(post.id, author_username=name, state=CommentState.DELETED)
        )

        post_page = await posts.find_by_author(Username(name), limit=10, offset=0)
        comment_page = await comments.find_by_author(Username(name), limit=10, offset=0)

        assert [p.id for p in post_page.posts] == [post.id]
        assert comment_page.total == 1
        assert comment_page.items[0].post_title == "Their post"

    @pytest.mark.asyncio
    async def test_past_the_end_still_counts(self, integration_env):
        posts = await integration_env.get(PostRepository)
        name = f"u{uuid4().hex[:20]}"
        await posts.save(make_post(author_username=name))

        page = await posts.find_by_author(Username(name), limit=10, offset=50)

        assert page.posts == []
        assert page.total == 1

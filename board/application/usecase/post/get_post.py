"""Get post use case.

Returns one post with its full reply thread. Detail pages are read fresh on
every request and never cached.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.domain.model.comment import Comment
from board.domain.service import (
    CommentNode,
    CommentService,
    PostService,
    VoteService,
    build_comment_tree,
)
from board.domain.value import (
    CommentId,
    PostId,
    PostKind,
    UserId,
    VotableType,
    VoteDirection,
)

DELETED_PLACEHOLDER = "[deleted]"

# Deepest nesting in a rendered thread, kept well under pydantic's recursion
# limit for self-referencing models
MAX_THREAD_DEPTH = 100


class CommentThreadItem(BaseModel):
    """One comment in the rendered thread, with its replies nested."""

    comment_id: str
    parent_id: str | None
    author_id: str | None
    author_username: str
    text: str
    points: int
    is_deleted: bool
    created_at: datetime
    edited_at: datetime | None
    replies: list["CommentThreadItem"]


class PostDetail(BaseModel):
    """Post fields on the detail page."""

    post_id: str
    title: str
    kind: PostKind
    url: str | None
    text: str | None
    author_id: str
    author_username: str
    points: int
    comment_count: int
    created_at: datetime
    user_vote: VoteDirection


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(BaseModel):
    """Get post response."""

    post: PostDetail
    comments: list[CommentThreadItem]
    comment_total: int


def _render_item(
    comment: Comment, replies: list[CommentThreadItem]
) -> CommentThreadItem:
    """Render one comment, hiding the body and author of deleted comments."""
    deleted = comment.is_deleted
    return CommentThreadItem(
        comment_id=str(comment.id),
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        author_id=None if deleted else str(comment.author_id),
        author_username=DELETED_PLACEHOLDER if deleted else comment.author_username.root,
        text=DELETED_PLACEHOLDER if deleted else comment.text,
        points=comment.points,
        is_deleted=deleted,
        created_at=comment.created_at,
        edited_at=comment.edited_at,
        replies=replies,
    )


def render_thread(
    root: CommentNode, max_depth: int = MAX_THREAD_DEPTH
) -> CommentThreadItem:
    """Render a reply tree without recursion, children before parents.

    Nesting stops at max_depth levels (the root is level 1). Replies below
    that level are listed flat, in thread order, under their ancestor on the
    last level; each keeps its own parent_id.
    """
    rendered: dict[CommentId, CommentThreadItem] = {}
    stack: list[tuple[CommentNode, int, bool]] = [(root, 1, False)]
    while stack:
        node, depth, replies_done = stack.pop()
        if depth >= max_depth:
            flattened = [
                _render_item(descendant.comment, [])
                for descendant in node.walk()
                if descendant is not node
            ]
            rendered[node.comment.id] = _render_item(node.comment, flattened)
        elif replies_done:
            rendered[node.comment.id] = _render_item(
                node.comment, [rendered.pop(reply.comment.id) for reply in node.replies]
            )
        else:
            stack.append((node, depth, True))
            stack.extend((reply, depth + 1, False) for reply in node.replies)
    return rendered[root.comment.id]


class GetPostUseCase(BaseUseCase):
    """Use case for retrieving a post with its comment thread."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Args:
            request: Get post request

        Returns:
            Post, reply forest and the requesting user's vote

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post_id = PostId(UUID(request.post_id))

        with logfire.span("get_post.execute", post_id=request.post_id):
            post = await self.post_service.require_post(post_id)
            comments = await self.comment_service.get_comments_for_post(post_id)
            forest = build_comment_tree(comments)
            user_vote = await self._user_vote(request.user_id, post_id)

            return GetPostResponse(
                post=PostDetail(
                    post_id=str(post.id),
                    title=post.title,
                    kind=post.kind,
                    url=post.url,
                    text=post.text,
                    author_id=str(post.author_id),
                    author_username=post.author_username.root,
                    points=post.points,
                    comment_count=post.comment_count,
                    created_at=post.created_at,
                    user_vote=user_vote,
                ),
                comments=[render_thread(root) for root in forest],
                comment_total=len(comments),
            )

    async def _user_vote(
        self, user_id: Optional[str], post_id: PostId
    ) -> VoteDirection:
        if not user_id:
            return VoteDirection.NONE
        try:
            return await self.vote_service.get_user_vote(
                UserId(UUID(user_id)), VotableType.POST, post_id
            )
        except Exception as e:
            logfire.warn(
                "Vote lookup failed, reporting no vote",
                post_id=str(post_id),
                error=str(e),
            )
            return VoteDirection.NONE

"""Get user profile use case."""

import math
from datetime import datetime

import logfire
from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.application.usecase.post.list_posts import MAX_OFFSET
from board.config import ListingSettings
from board.domain.error import NotFoundError
from board.domain.model.post import Post
from board.domain.repository import AuthoredComment, CommentRepository, PostRepository
from board.domain.value import PostKind, Username


class GetUserProfileRequest(BaseModel):
    """Get user profile request.

    Paging is normalised the same way as post listings and applies to the
    posts and the comments alike.
    """

    username: str
    page: int | None = None
    page_size: int | None = None


class ProfilePost(BaseModel):
    """A post on a profile page."""

    post_id: str
    title: str
    kind: PostKind
    url: str | None
    text: str | None
    points: int
    comment_count: int
    created_at: datetime


class ProfileComment(BaseModel):
    """A comment on a profile page, with the post it belongs to."""

    comment_id: str
    post_id: str
    post_title: str
    parent_id: str | None
    text: str
    points: int
    created_at: datetime
    edited_at: datetime | None


class GetUserProfileResponse(BaseModel):
    """User profile response."""

    username: str
    posts: list[ProfilePost]
    comments: list[ProfileComment]
    total_posts: int
    total_comments: int
    page: int
    page_size: int
    total_pages: int


class GetUserProfileUseCase(BaseUseCase):
    """Use case for a user's recent posts and comments.

    Users exist only as authors here, so a name that has never posted or
    commented (deleted comments aside) is reported as not found.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        settings: ListingSettings,
    ) -> None:
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.settings = settings

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get profile flow.

        Raises:
            NotFoundError: If the user has no posts and no comments
            ValueError: If the username is blank or too long
        """
        username = Username(request.username)
        page = request.page if request.page and request.page > 0 else 1
        page_size = min(
            (
                request.page_size
                if request.page_size and request.page_size > 0
                else self.settings.default_page_size
            ),
            self.settings.max_page_size,
        )
        offset = min((page - 1) * page_size, MAX_OFFSET)

        with logfire.span(
            "get_user_profile.execute", username=username.root, page=page
        ):
            posts = await self.post_repository.find_by_author(
                username, limit=page_size, offset=offset
            )
            comments = await self.comment_repository.find_by_author(
                username, limit=page_size, offset=offset
            )

            if posts.total == 0 and comments.total == 0:
                logfire.warn("Profile not found", username=username.root)
                raise NotFoundError("User", username.root)

            return GetUserProfileResponse(
                username=username.root,
                posts=[self._to_post(p) for p in posts.posts],
                comments=[self._to_comment(c) for c in comments.items],
                total_posts=posts.total,
                total_comments=comments.total,
                page=page,
                page_size=page_size,
                total_pages=math.ceil(max(posts.total, comments.total) / page_size),
            )

    @staticmethod
    def _to_post(post: Post) -> ProfilePost:
        return ProfilePost(
            post_id=str(post.id),
            title=post.title,
            kind=post.kind,
            url=post.url,
            text=post.text,
            points=post.points,
            comment_count=post.comment_count,
            created_at=post.created_at,
        )

    @staticmethod
    def _to_comment(item: AuthoredComment) -> ProfileComment:
        comment = item.comment
        return ProfileComment(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            post_title=item.post_title,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            text=comment.text,
            points=comment.points,
            created_at=comment.created_at,
            edited_at=comment.edited_at,
        )

"""Application layer DI providers."""

from dishka import Scope, provide

from board.application.cache import ListingCache
from board.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    UpdateCommentUseCase,
)
from board.application.usecase.notification import (
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from board.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from board.application.usecase.user import GetUserProfileUseCase
from board.application.usecase.vote import CastVoteUseCase
from board.config import ListingSettings, Settings
from board.domain.cache import QueryCache
from board.domain.repository import CommentRepository, PostRepository, VoteRepository
from board.domain.service import (
    CommentService,
    NotificationService,
    PostService,
    VoteService,
)
from board.domain.transaction import CommitHooks
from board.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.APP)
    def get_listing_cache(self, cache: QueryCache, settings: Settings) -> ListingCache:
        """Provide the listing namespace of the shared query cache."""
        return ListingCache(cache=cache, ttl_seconds=settings.cache.ttl_seconds)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        post_service: PostService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service,
            listing_cache=listing_cache,
            commit_hooks=commit_hooks,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        listing_cache: ListingCache,
        listing_settings: ListingSettings,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_repository=post_repository,
            vote_repository=vote_repository,
            listing_cache=listing_cache,
            settings=listing_settings,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        notification_service: NotificationService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            notification_service=notification_service,
            listing_cache=listing_cache,
            commit_hooks=commit_hooks,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            listing_cache=listing_cache,
            commit_hooks=commit_hooks,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self,
        vote_service: VoteService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service,
            listing_cache=listing_cache,
            commit_hooks=commit_hooks,
        )

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_unread_count_use_case(
        self, notification_service: NotificationService
    ) -> GetUnreadCountUseCase:
        """Provide unread notification count use case."""
        return GetUnreadCountUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_notifications_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllNotificationsReadUseCase:
        """Provide mark all notifications read use case."""
        return MarkAllNotificationsReadUseCase(
            notification_service=notification_service
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_user_profile_use_case(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        listing_settings: ListingSettings,
    ) -> GetUserProfileUseCase:
        """Provide user profile use case."""
        return GetUserProfileUseCase(
            post_repository=post_repository,
            comment_repository=comment_repository,
            settings=listing_settings,
        )

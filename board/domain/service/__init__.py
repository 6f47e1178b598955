"""Domain services."""

from .base import Service
from .comment_service import CommentService, DeletionOutcome
from .comment_tree import CommentNode, build_comment_tree
from .jwt_service import JWTService
from .notification_service import NotificationService
from .post_service import PostService
from .ranking import age_in_hours, decayed_score, sort_posts
from .vote_service import VoteResult, VoteService, vote_delta

__all__ = [
    "CommentNode",
    "CommentService",
    "DeletionOutcome",
    "JWTService",
    "NotificationService",
    "PostService",
    "Service",
    "VoteResult",
    "VoteService",
    "age_in_hours",
    "build_comment_tree",
    "decayed_score",
    "sort_posts",
    "vote_delta",
]

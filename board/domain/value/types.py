"""Domain value objects for the board.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum

from pydantic import field_validator

from board.domain.value.common import RootValueObject


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteDirection(IntEnum):
    """Direction of a user's vote.

    NONE is never stored. It is what a lookup reports when the user has not
    voted or when the lookup could not be completed.
    """

    DOWN = -1
    NONE = 0
    UP = 1


class PostKind(str, Enum):
    """Derived post kind: link posts carry a URL, text posts a body."""

    LINK = "link"
    TEXT = "text"


class NotificationType(str, Enum):
    """What happened to the recipient's content."""

    POST_COMMENT = "post_comment"  # someone commented on their post
    COMMENT_REPLY = "comment_reply"  # someone replied to their comment


class CommentState(str, Enum):
    """Lifecycle state of a comment.

    A deleted comment stays in the thread so its replies keep their parent.
    """

    ACTIVE = "active"
    DELETED = "deleted"


class Username(RootValueObject[str]):
    """Display name of a content author, taken from the verified token."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Username must be 1-50 characters")
        return v

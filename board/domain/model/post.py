"""Post aggregate root.

A post is either a link (URL) or a text post (body), never both.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from board.domain.model.common import DomainModel
from board.domain.value import PostId, PostKind, UserId, Username


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Post(DomainModel):
    """Post aggregate root.

    Points are the signed net of all votes and may go negative. The decayed
    "best" score is derived at query time and never stored.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    author_id: UserId
    author_username: Username
    url: Optional[str] = Field(default=None, max_length=2048)
    text: Optional[str] = Field(default=None, max_length=10000)
    points: int = 0
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_url_or_text(self) -> "Post":
        """Exactly one of url and text must be provided."""
        if bool(self.url) == bool(self.text):
            raise ValueError("A post needs either a URL or text, but not both")
        return self

    @property
    def kind(self) -> PostKind:
        return PostKind.LINK if self.url else PostKind.TEXT

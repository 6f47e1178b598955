"""notifications

Add notifications for comments on a user's posts and replies to their
comments, and index author names for profile pages.

Revision ID: 8b2e4f6a1c93
Revises: 3f1c9a2d7b40
Create Date: 2026-10-19 15:03:27.902114

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "8b2e4f6a1c93"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2d7b40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE notification_type AS ENUM ('post_comment', 'comment_reply');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("sender_username", sa.String(50), nullable=False),
        sa.Column(
            "type",
            postgresql.ENUM(
                "post_comment",
                "comment_reply",
                name="notification_type",
                create_type=False,
            ),
            nullable=False,
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("comment_id", sa.UUID(), nullable=True),
        sa.Column(
            "is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_recipient_created",
        "notifications",
        ["recipient_id", sa.text("created_at DESC")],
    )
    # Backs the unread badge count
    op.create_index(
        "idx_notifications_unread",
        "notifications",
        ["recipient_id"],
        postgresql_where=sa.text("NOT is_read"),
    )

    # Profile pages look authors up by name
    op.create_index("idx_posts_author_username", "posts", ["author_username"])
    op.create_index("idx_comments_author_username", "comments", ["author_username"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_author_username", table_name="comments")
    op.drop_index("idx_posts_author_username", table_name="posts")
    op.drop_table("notifications")
    op.execute("DROP TYPE IF EXISTS notification_type")

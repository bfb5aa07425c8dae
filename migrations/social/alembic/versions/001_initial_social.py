"""Full social schema: accounts, social graph, messages, posts, media

Revision ID: 001
Revises:
Create Date: 2026-10-18

Tables created:
  - users                     Accounts, profile fields, privacy flag, roles
  - email_verification_codes  Hashed 4-digit registration codes
  - follows                   Unidirectional follow edges (follower → following)
  - friend_requests           pending / accepted / declined proposals
  - messages                  Append-only direct messages
  - posts, comments, likes    Public feed
  - user_media                Profile gallery (image / video URLs)

Status-like columns are VARCHAR (non-native enums) so new values need no
type migration.

Downgrade: drops all tables in reverse dependency order.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk(name: str) -> sa.Column:
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=True),
        nullable=False,
        server_default=sa.text("gen_random_uuid()"),
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _user_fk(column: str, table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], ["users.id"], name=f"fk_{table}_{column}", ondelete="CASCADE"
    )


# ─────────────────────────────────────────────────────────────────────────────
#  UPGRADE
# ─────────────────────────────────────────────────────────────────────────────

def upgrade() -> None:
    # ── 1. users ──────────────────────────────────────────────────────────────
    op.create_table(
        "users",
        _uuid_pk("id"),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(20), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "roles",
            sa.JSON(),
            nullable=False,
            server_default=sa.text("'[\"user\"]'"),
        ),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    # ── 2. email_verification_codes ───────────────────────────────────────────
    # Keyed by email, no FK: the row is looked up before the user is trusted.
    op.create_table(
        "email_verification_codes",
        _uuid_pk("id"),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("code_hash", sa.String(255), nullable=False),
        sa.Column("is_used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "attempts_remaining",
            sa.SmallInteger(),
            nullable=False,
            server_default=sa.text("5"),
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_email_verification_codes"),
    )
    op.create_index(
        "ix_email_verification_codes_email", "email_verification_codes", ["email"]
    )

    # ── 3. follows ────────────────────────────────────────────────────────────
    op.create_table(
        "follows",
        _uuid_pk("follow_id"),
        sa.Column("follower_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("following_id", postgresql.UUID(as_uuid=True), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("follow_id", name="pk_follows"),
        _user_fk("follower_id", "follows"),
        _user_fk("following_id", "follows"),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id != following_id", name="ck_follows_no_self"),
    )
    op.create_index("idx_follows_follower_id", "follows", ["follower_id"])
    op.create_index("idx_follows_following_id", "follows", ["following_id"])

    # ── 4. friend_requests ────────────────────────────────────────────────────
    op.create_table(
        "friend_requests",
        _uuid_pk("request_id"),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("receiver_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "status",
            sa.String(16),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        _created_at(),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("request_id", name="pk_friend_requests"),
        _user_fk("sender_id", "friend_requests"),
        _user_fk("receiver_id", "friend_requests"),
        sa.CheckConstraint("sender_id != receiver_id", name="ck_friend_requests_no_self"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="ck_friend_requests_status",
        ),
    )
    # One pending request per ordered pair; answered rows are history.
    op.create_index(
        "uq_friend_requests_pending_pair",
        "friend_requests",
        ["sender_id", "receiver_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        "idx_friend_requests_receiver_status", "friend_requests", ["receiver_id", "status"]
    )
    op.create_index(
        "idx_friend_requests_sender_status", "friend_requests", ["sender_id", "status"]
    )

    # ── 5. messages ───────────────────────────────────────────────────────────
    op.create_table(
        "messages",
        _uuid_pk("message_id"),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("receiver_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("message_id", name="pk_messages"),
        _user_fk("sender_id", "messages"),
        _user_fk("receiver_id", "messages"),
    )
    op.create_index(
        "idx_messages_sender_receiver", "messages", ["sender_id", "receiver_id", "created_at"]
    )
    op.create_index(
        "idx_messages_receiver_sender", "messages", ["receiver_id", "sender_id", "created_at"]
    )

    # ── 6. posts / comments / likes ───────────────────────────────────────────
    op.create_table(
        "posts",
        _uuid_pk("post_id"),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("media_url", sa.String(1024), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("post_id", name="pk_posts"),
        _user_fk("author_id", "posts"),
    )
    op.create_index("ix_posts_author_id", "posts", ["author_id"])
    op.create_index("ix_posts_created_at", "posts", ["created_at"])

    op.create_table(
        "comments",
        _uuid_pk("comment_id"),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("comment_id", name="pk_comments"),
        sa.ForeignKeyConstraint(
            ["post_id"], ["posts.post_id"], name="fk_comments_post_id", ondelete="CASCADE"
        ),
        _user_fk("author_id", "comments"),
    )
    op.create_index("idx_comments_post_created", "comments", ["post_id", "created_at"])

    op.create_table(
        "likes",
        _uuid_pk("like_id"),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("like_id", name="pk_likes"),
        sa.ForeignKeyConstraint(
            ["post_id"], ["posts.post_id"], name="fk_likes_post_id", ondelete="CASCADE"
        ),
        _user_fk("user_id", "likes"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),
    )
    op.create_index("ix_likes_user_id", "likes", ["user_id"])

    # ── 7. user_media ─────────────────────────────────────────────────────────
    op.create_table(
        "user_media",
        _uuid_pk("media_id"),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("url", sa.String(1024), nullable=False),
        sa.Column("media_type", sa.String(16), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("media_id", name="pk_user_media"),
        _user_fk("user_id", "user_media"),
        sa.CheckConstraint("media_type IN ('image', 'video')", name="ck_user_media_type"),
    )
    op.create_index("ix_user_media_user_id", "user_media", ["user_id"])


# ─────────────────────────────────────────────────────────────────────────────
#  DOWNGRADE
# ─────────────────────────────────────────────────────────────────────────────

def downgrade() -> None:
    # Drop tables in reverse FK dependency order
    op.drop_table("user_media")
    op.drop_table("likes")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("messages")
    op.drop_table("friend_requests")
    op.drop_table("follows")
    op.drop_table("email_verification_codes")
    op.drop_table("users")

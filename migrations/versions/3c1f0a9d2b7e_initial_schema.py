"""initial_schema

Create the schema for Listen Together:
- Users (directory view: handle, active-session pointer, inbound invitations)
- Friendships (directed friend sets)
- Invitations (time-bounded listen-together offers)
- Listen sessions (membership, queue and transport state)

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invitation_status AS ENUM
                ('pending', 'accepted', 'declined', 'expired');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("handle", sa.String(255), nullable=False),
        sa.Column("active_session_id", sa.UUID(), nullable=True),
        sa.Column(
            "pending_invitation_ids",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_handle", "users", ["handle"])
    op.create_index("idx_users_active_session_id", "users", ["active_session_id"])

    # ========================================================================
    # FRIENDSHIPS table
    # ========================================================================
    op.create_table(
        "friendships",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("friend_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["friend_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "friend_id", name="pk_friendships"),
        sa.CheckConstraint("user_id <> friend_id", name="ck_friendships_not_self"),
    )
    op.create_index("idx_friendships_friend_id", "friendships", ["friend_id"])

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("from_user_id", sa.UUID(), nullable=False),
        sa.Column("to_user_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "accepted",
                "declined",
                "expired",
                name="invitation_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("session_id", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["from_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["to_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "from_user_id <> to_user_id", name="ck_invitations_not_self"
        ),
    )
    op.create_index(
        "idx_invitations_to_status", "invitations", ["to_user_id", "status"]
    )
    op.create_index(
        "idx_invitations_from_status", "invitations", ["from_user_id", "status"]
    )
    op.create_index("idx_invitations_expires_at", "invitations", ["expires_at"])
    # Only one pending invitation per sender/recipient pair
    op.create_index(
        "idx_invitations_unique_pending_pair",
        "invitations",
        ["from_user_id", "to_user_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    # ========================================================================
    # LISTEN_SESSIONS table
    # ========================================================================
    op.create_table(
        "listen_sessions",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("host_id", sa.UUID(), nullable=False),
        sa.Column("participant_ids", postgresql.ARRAY(sa.UUID()), nullable=False),
        sa.Column("current_track", postgresql.JSONB(), nullable=True),
        sa.Column(
            "queue",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("position", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_playing", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "playback_updated_at", sa.TIMESTAMP(timezone=True), nullable=False
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("ended_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["host_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("position >= 0", name="ck_listen_sessions_position"),
        sa.CheckConstraint(
            "is_active = (ended_at IS NULL)", name="ck_listen_sessions_active_ended"
        ),
    )
    op.create_index(
        "idx_listen_sessions_host_active", "listen_sessions", ["host_id", "is_active"]
    )
    op.create_index(
        "idx_listen_sessions_participant_ids",
        "listen_sessions",
        ["participant_ids"],
        postgresql_using="gin",
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("listen_sessions")
    op.drop_table("invitations")
    op.drop_table("friendships")
    op.drop_table("users")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS invitation_status")

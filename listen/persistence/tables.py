"""SQLAlchemy table definitions for Listen Together.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (directory view: handle, pointer, inbound invitations)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("handle", String(255), nullable=False),
    Column("active_session_id", UUID, nullable=True),  # Cached, revalidated on read
    Column(
        "pending_invitation_ids",
        ARRAY(UUID),
        nullable=False,
        server_default="{}",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_handle", users_table.c.handle)
Index("idx_users_active_session_id", users_table.c.active_session_id)

# ============================================================================
# FRIENDSHIPS TABLE (directed: friend_id is in user_id's friend set)
# ============================================================================
friendships_table = Table(
    "friendships",
    metadata,
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "friend_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    PrimaryKeyConstraint("user_id", "friend_id", name="pk_friendships"),
    CheckConstraint("user_id <> friend_id", name="ck_friendships_not_self"),
)

Index("idx_friendships_friend_id", friendships_table.c.friend_id)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "from_user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "to_user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
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
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("session_id", UUID, nullable=True),
    CheckConstraint("from_user_id <> to_user_id", name="ck_invitations_not_self"),
)

# Inbox and outbox queries
Index(
    "idx_invitations_to_status", invitations_table.c.to_user_id, invitations_table.c.status
)
Index(
    "idx_invitations_from_status",
    invitations_table.c.from_user_id,
    invitations_table.c.status,
)
# Housekeeping purge
Index("idx_invitations_expires_at", invitations_table.c.expires_at)

# Partial unique constraint: only one pending invitation per sender/recipient pair
Index(
    "idx_invitations_unique_pending_pair",
    invitations_table.c.from_user_id,
    invitations_table.c.to_user_id,
    unique=True,
    postgresql_where=invitations_table.c.status == "pending",
)

# ============================================================================
# LISTEN SESSIONS TABLE
# ============================================================================
listen_sessions_table = Table(
    "listen_sessions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("host_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("participant_ids", ARRAY(UUID), nullable=False),
    Column("current_track", JSONB, nullable=True),  # Track value object
    Column("queue", JSONB, nullable=False, server_default="[]"),  # List of tracks
    Column("position", Float, nullable=False, server_default="0"),
    Column("is_playing", Boolean, nullable=False, server_default="false"),
    Column("playback_updated_at", TIMESTAMP(timezone=True), nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("ended_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("position >= 0", name="ck_listen_sessions_position"),
    CheckConstraint(
        "is_active = (ended_at IS NULL)", name="ck_listen_sessions_active_ended"
    ),
)

Index(
    "idx_listen_sessions_host_active",
    listen_sessions_table.c.host_id,
    listen_sessions_table.c.is_active,
)
Index(
    "idx_listen_sessions_participant_ids",
    listen_sessions_table.c.participant_ids,
    postgresql_using="gin",
)

"""SQLAlchemy table definitions for Haven.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    Identity,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("identity_id", String(255), nullable=False, unique=True),
    Column("email", String(320), nullable=False, unique=True),  # Stored lowercased
    Column("wallet_address", String(255), nullable=False, server_default="pending"),
    Column("referral_code", String(32), nullable=False, unique=True),
    Column(
        "referred_by",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("country", String(8), nullable=True),
    Column("display_currency", String(8), nullable=False, server_default="USD"),
    Column("profile_image_url", Text, nullable=True),
    Column(
        "financial_knowledge_level",
        String(20),
        nullable=False,
        server_default="none",
    ),
    Column("risk_level", String(10), nullable=False, server_default="low"),
    Column("is_pro", Boolean, nullable=False, server_default="false"),
    Column("is_onboarded", Boolean, nullable=False, server_default="false"),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Unique except for the shared "pending" placeholder
Index(
    "uq_users_wallet_address",
    users_table.c.wallet_address,
    unique=True,
    postgresql_where=users_table.c.wallet_address != "pending",
)
Index("idx_users_referred_by", users_table.c.referred_by)

# ============================================================================
# REFERRALS TABLE (referrer -> referred, set semantics)
# ============================================================================
referrals_table = Table(
    "referrals",
    metadata,
    Column(
        "referrer_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "referred_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("referrer_id", "referred_id", name="pk_referrals"),
)

# ============================================================================
# CONTACTS TABLE
# ============================================================================
contacts_table = Table(
    "contacts",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "owner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    # Insertion order within an owner's list
    Column("seq", BigInteger, Identity(always=True), nullable=False),
    Column("name", String(255), nullable=True),
    Column("email", String(320), nullable=True),
    Column("wallet_address", String(255), nullable=True),
    Column(
        "haven_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("status", String(20), nullable=False, server_default="external"),
    Column("invited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("joined_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_contacts_owner_seq", contacts_table.c.owner_id, contacts_table.c.seq)
Index(
    "uq_contacts_owner_email",
    contacts_table.c.owner_id,
    func.lower(contacts_table.c.email),
    unique=True,
    postgresql_where=contacts_table.c.email.isnot(None),
)
Index(
    "uq_contacts_owner_wallet",
    contacts_table.c.owner_id,
    contacts_table.c.wallet_address,
    unique=True,
    postgresql_where=contacts_table.c.wallet_address.isnot(None),
)

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "inviter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("email", String(320), nullable=False),  # Stored lowercased
    Column("invite_token", String(64), nullable=False, unique=True),
    Column("is_personal", Boolean, nullable=False, server_default="true"),
    Column("status", String(20), nullable=False, server_default="sent"),
    Column(
        "sent_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("clicked_at", TIMESTAMP(timezone=True), nullable=True),
    Column("redeemed_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "invited_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("claimed_email", String(320), nullable=True),
    Column("claimed_wallet_address", String(255), nullable=True),
    Column("recipient_name", String(255), nullable=True),
    Column("message", Text, nullable=True),
)

Index("idx_invites_inviter_sent", invites_table.c.inviter_id, invites_table.c.sent_at)
# One open personal invite per inviter/email
Index(
    "uq_invites_open_personal",
    invites_table.c.inviter_id,
    invites_table.c.email,
    unique=True,
    postgresql_where=text("is_personal AND status <> 'signed_up'"),
)

"""initial_schema

Create the schema for Haven:
- Users (identity provider account, wallet, referral code, profile)
- Referrals (referrer -> referred set)
- Contacts (per-user address book, insertion ordered)
- Invites (email-bound personal invite links)

Revision ID: 3c71d9a0b2e4
Revises:
Create Date: 2025-11-04 10:12:41.532118

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c71d9a0b2e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid()
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("identity_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column(
            "wallet_address",
            sa.String(255),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("referral_code", sa.String(32), nullable=False),
        sa.Column("referred_by", sa.UUID(), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("country", sa.String(8), nullable=True),
        sa.Column(
            "display_currency", sa.String(8), nullable=False, server_default="USD"
        ),
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column(
            "financial_knowledge_level",
            sa.String(20),
            nullable=False,
            server_default="none",
        ),
        sa.Column("risk_level", sa.String(10), nullable=False, server_default="low"),
        sa.Column("is_pro", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "is_onboarded", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("last_login_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["referred_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("identity_id", name="uq_users_identity_id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("referral_code", name="uq_users_referral_code"),
    )
    # Every user without a wallet shares the "pending" placeholder
    op.create_index(
        "uq_users_wallet_address",
        "users",
        ["wallet_address"],
        unique=True,
        postgresql_where=sa.text("wallet_address <> 'pending'"),
    )
    op.create_index("idx_users_referred_by", "users", ["referred_by"])

    # ========================================================================
    # REFERRALS table
    # ========================================================================
    op.create_table(
        "referrals",
        sa.Column("referrer_id", sa.UUID(), nullable=False),
        sa.Column("referred_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["referrer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["referred_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("referrer_id", "referred_id", name="pk_referrals"),
    )

    # ========================================================================
    # CONTACTS table
    # ========================================================================
    op.create_table(
        "contacts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("seq", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("wallet_address", sa.String(255), nullable=True),
        sa.Column("haven_user_id", sa.UUID(), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default="external"
        ),
        sa.Column("invited_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("joined_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["haven_user_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('external', 'invited', 'active')",
            name="contact_status_valid",
        ),
    )
    op.create_index("idx_contacts_owner_seq", "contacts", ["owner_id", "seq"])
    op.execute(
        "CREATE UNIQUE INDEX uq_contacts_owner_email ON contacts "
        "(owner_id, lower(email)) WHERE email IS NOT NULL"
    )
    op.create_index(
        "uq_contacts_owner_wallet",
        "contacts",
        ["owner_id", "wallet_address"],
        unique=True,
        postgresql_where=sa.text("wallet_address IS NOT NULL"),
    )

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("inviter_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("invite_token", sa.String(64), nullable=False),
        sa.Column("is_personal", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("status", sa.String(20), nullable=False, server_default="sent"),
        sa.Column(
            "sent_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("clicked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("redeemed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("invited_user_id", sa.UUID(), nullable=True),
        sa.Column("claimed_email", sa.String(320), nullable=True),
        sa.Column("claimed_wallet_address", sa.String(255), nullable=True),
        sa.Column("recipient_name", sa.String(255), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["inviter_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["invited_user_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invite_token", name="uq_invites_token"),
        sa.CheckConstraint(
            "status IN ('sent', 'clicked', 'signed_up')",
            name="invite_status_valid",
        ),
    )
    op.create_index(
        "idx_invites_inviter_sent", "invites", ["inviter_id", "sent_at"]
    )
    # At most one open personal invite per inviter and email
    op.create_index(
        "uq_invites_open_personal",
        "invites",
        ["inviter_id", "email"],
        unique=True,
        postgresql_where=sa.text("is_personal AND status <> 'signed_up'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("invites")
    op.drop_table("contacts")
    op.drop_table("referrals")
    op.drop_table("users")

"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from haven.domain.error import DuplicateRecordError
from haven.domain.model import Invite
from haven.domain.repository import InviteRepository
from haven.domain.value import InviteId, InviteStatus, InviteToken, UserId
from haven.persistence.mappers import invite_to_dict, row_to_invite
from haven.persistence.tables import invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token.

        Args:
            token: Invite token to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invites_table).where(invites_table.c.invite_token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_open_personal(
        self, inviter_id: UserId, email: str
    ) -> Optional[Invite]:
        """Find the unredeemed personal invite for an inviter/email pair.

        Backed by the partial unique index uq_invites_open_personal.
        """
        stmt = select(invites_table).where(
            and_(
                invites_table.c.inviter_id == inviter_id,
                invites_table.c.email == email.lower(),
                invites_table.c.is_personal.is_(True),
                invites_table.c.status != InviteStatus.SIGNED_UP.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_inviter(self, inviter_id: UserId) -> list[Invite]:
        """Find invites by inviter, newest first."""
        stmt = (
            select(invites_table)
            .where(invites_table.c.inviter_id == inviter_id)
            .order_by(invites_table.c.sent_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def save(self, invite: Invite) -> Invite:
        """Insert an invite.

        Raises:
            DuplicateRecordError: If the token or open inviter/email pair exists
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(invites_table).values(**invite_to_dict(invite))
                )
        except IntegrityError as e:
            raise DuplicateRecordError("invite", str(e.orig)) from e

        await self.session.flush()
        return invite

    async def mark_clicked(self, token: InviteToken, at: datetime) -> bool:
        """Move sent -> clicked."""
        stmt = (
            update(invites_table)
            .where(invites_table.c.invite_token == token.root)
            .where(invites_table.c.status == InviteStatus.SENT.value)
            .values(
                status=InviteStatus.CLICKED.value,
                clicked_at=func.coalesce(invites_table.c.clicked_at, at),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def redeem(
        self,
        invite_id: InviteId,
        user_id: UserId,
        at: datetime,
        claimed_email: str | None,
        claimed_wallet_address: str | None,
    ) -> bool:
        """Mark signed_up unless already signed_up."""
        stmt = (
            update(invites_table)
            .where(invites_table.c.id == invite_id)
            .where(invites_table.c.status != InviteStatus.SIGNED_UP.value)
            .values(
                status=InviteStatus.SIGNED_UP.value,
                invited_user_id=user_id,
                clicked_at=func.coalesce(invites_table.c.clicked_at, at),
                redeemed_at=func.coalesce(invites_table.c.redeemed_at, at),
                claimed_email=claimed_email,
                claimed_wallet_address=claimed_wallet_address,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

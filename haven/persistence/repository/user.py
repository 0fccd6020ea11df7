"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from haven.domain.error import DuplicateRecordError
from haven.domain.model import User
from haven.domain.repository import UserRepository
from haven.domain.value import ReferralCode, UserId
from haven.persistence.mappers import row_to_user, user_to_dict
from haven.persistence.tables import referrals_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, *conditions) -> Optional[User]:
        stmt = select(users_table).where(*conditions)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_identity(self, identity_id: str) -> Optional[User]:
        """Find a user by identity provider id."""
        return await self._find_one(users_table.c.identity_id == identity_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive)."""
        return await self._find_one(func.lower(users_table.c.email) == email.lower())

    async def find_by_wallet(self, wallet_address: str) -> Optional[User]:
        """Find a user by wallet address."""
        return await self._find_one(users_table.c.wallet_address == wallet_address)

    async def find_by_referral_code(self, code: ReferralCode) -> Optional[User]:
        """Find a user by referral code."""
        return await self._find_one(users_table.c.referral_code == code.root)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users by ID."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            DuplicateRecordError: If a unique column is already taken
        """
        user_dict = user_to_dict(user)

        existing = await self.find_by_id(user.id)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        update(users_table)
                        .where(users_table.c.id == user.id)
                        .values(**user_dict)
                    )
                else:
                    stmt = insert(users_table).values(**user_dict)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateRecordError("user", str(e.orig)) from e

        await self.session.flush()
        return await self.find_by_id(user.id) or user

    async def set_referred_by(self, user_id: UserId, referrer_id: UserId) -> bool:
        """Set referred_by only while it is NULL."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .where(users_table.c.referred_by.is_(None))
            .where(users_table.c.id != referrer_id)
            .values(referred_by=referrer_id, updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def add_referral(self, referrer_id: UserId, referred_id: UserId) -> bool:
        """Insert a referral pair, ignoring duplicates."""
        stmt = (
            pg_insert(referrals_table)
            .values(referrer_id=referrer_id, referred_id=referred_id)
            .on_conflict_do_nothing()
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def list_referral_ids(self, referrer_id: UserId) -> list[UserId]:
        """List referred user ids, oldest first."""
        stmt = (
            select(referrals_table.c.referred_id)
            .where(referrals_table.c.referrer_id == referrer_id)
            .order_by(referrals_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [UserId(row) for row in result.scalars().all()]

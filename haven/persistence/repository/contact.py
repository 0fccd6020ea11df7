"""PostgreSQL implementation of Contact repository."""

from typing import Optional

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from haven.domain.error import DuplicateRecordError
from haven.domain.model import Contact
from haven.domain.repository import ContactRepository
from haven.domain.value import ContactId, UserId
from haven.persistence.mappers import contact_to_dict, row_to_contact
from haven.persistence.tables import contacts_table


class PostgresContactRepository(ContactRepository):
    """PostgreSQL implementation of ContactRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_owner(self, owner_id: UserId) -> list[Contact]:
        """Find contacts of a user ordered by insertion sequence."""
        stmt = (
            select(contacts_table)
            .where(contacts_table.c.owner_id == owner_id)
            .order_by(contacts_table.c.seq)
        )
        result = await self.session.execute(stmt)
        return [row_to_contact(dict(row)) for row in result.mappings().all()]

    async def find_match(
        self,
        owner_id: UserId,
        email: str | None,
        wallet_address: str | None,
    ) -> Optional[Contact]:
        """Find by email first, then by wallet."""
        if email:
            stmt = (
                select(contacts_table)
                .where(contacts_table.c.owner_id == owner_id)
                .where(func.lower(contacts_table.c.email) == email.lower())
                .order_by(contacts_table.c.seq)
            )
            row = (await self.session.execute(stmt)).mappings().first()
            if row:
                return row_to_contact(dict(row))

        if wallet_address:
            stmt = (
                select(contacts_table)
                .where(contacts_table.c.owner_id == owner_id)
                .where(contacts_table.c.wallet_address == wallet_address)
                .order_by(contacts_table.c.seq)
            )
            row = (await self.session.execute(stmt)).mappings().first()
            if row:
                return row_to_contact(dict(row))

        return None

    async def save(self, contact: Contact) -> Contact:
        """Save a contact (create or update).

        Writes run in a savepoint so a unique violation leaves the
        surrounding transaction usable.
        """
        contact_dict = contact_to_dict(contact)

        existing = await self.session.execute(
            select(contacts_table.c.id).where(contacts_table.c.id == contact.id)
        )

        try:
            async with self.session.begin_nested():
                if existing.first() is not None:
                    stmt = (
                        update(contacts_table)
                        .where(contacts_table.c.id == contact.id)
                        .values(**contact_dict)
                    )
                else:
                    stmt = insert(contacts_table).values(**contact_dict)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateRecordError("contact", str(e.orig)) from e

        await self.session.flush()
        return contact

    async def delete(self, contact_id: ContactId) -> None:
        """Delete one contact by ID."""
        await self.session.execute(
            delete(contacts_table).where(contacts_table.c.id == contact_id)
        )

    async def delete_matching(
        self,
        owner_id: UserId,
        email: str | None,
        wallet_address: str | None,
    ) -> int:
        """Delete contacts matching the email or wallet."""
        conditions = []
        if email:
            conditions.append(func.lower(contacts_table.c.email) == email.lower())
        if wallet_address:
            conditions.append(contacts_table.c.wallet_address == wallet_address)
        if not conditions:
            return 0

        stmt = (
            delete(contacts_table)
            .where(contacts_table.c.owner_id == owner_id)
            .where(or_(*conditions))
        )
        result = await self.session.execute(stmt)
        return result.rowcount

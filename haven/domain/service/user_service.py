"""User domain service."""

import secrets
import string
from uuid import uuid4

import logfire

from haven.config import InvitationSettings
from haven.domain.error import NotFoundError, UnauthorizedError
from haven.domain.model import User
from haven.domain.model.user import utcnow
from haven.domain.repository import UserRepository
from haven.domain.value import (
    PENDING_WALLET,
    DisplayCurrency,
    FinancialKnowledgeLevel,
    ReferralCode,
    RiskLevel,
    UserId,
)

from .base import Service

REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            invitation_settings: Referral code settings
        """
        self.user_repository = user_repository
        self.invitation_settings = invitation_settings

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_identity(self, identity_id: str) -> User | None:
        """Get user by identity provider id.

        Args:
            identity_id: Identity provider user id

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_by_identity", identity_id=identity_id):
            user = await self.user_repository.find_by_identity(identity_id)
            if not user:
                logfire.info("No user for identity", identity_id=identity_id)
            return user

    async def get_caller(self, identity_id: str | None) -> User:
        """Load the user behind an authenticated identity.

        Args:
            identity_id: Identity from the session, None when unauthenticated

        Returns:
            The caller's user record

        Raises:
            UnauthorizedError: If there is no identity
            NotFoundError: If no user exists for the identity
        """
        if not identity_id:
            raise UnauthorizedError()
        user = await self.get_by_identity(identity_id)
        if not user:
            raise NotFoundError("User", identity_id)
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        with logfire.span("user_service.get_user_by_email"):
            return await self.user_repository.find_by_email(email.strip().lower())

    async def list_referrals(self, user_id: UserId) -> list[User]:
        """List users referred by a user, oldest referral first."""
        with logfire.span("user_service.list_referrals", user_id=str(user_id)):
            ids = await self.user_repository.list_referral_ids(user_id)
            users = {u.id: u for u in await self.user_repository.find_by_ids(ids)}
            return [users[i] for i in ids if i in users]

    async def generate_referral_code(self) -> ReferralCode:
        """Generate a referral code no other user holds.

        Returns:
            Fresh referral code, e.g. HVN_AB12CD

        Raises:
            RuntimeError: If every attempt collided with an existing code
        """
        settings = self.invitation_settings
        for attempt in range(settings.referral_code_attempts):
            suffix = "".join(
                secrets.choice(REFERRAL_CODE_ALPHABET)
                for _ in range(settings.referral_code_length)
            )
            code = ReferralCode(settings.referral_code_prefix + suffix)
            if not await self.user_repository.find_by_referral_code(code):
                return code
            logfire.warn("Referral code collision", attempt=attempt + 1)

        logfire.error(
            "Could not generate unique referral code",
            attempts=settings.referral_code_attempts,
        )
        raise RuntimeError("Could not generate a unique referral code")

    async def create_user(
        self, identity_id: str, email: str, wallet_address: str | None
    ) -> User:
        """Create a user on first authentication.

        Args:
            identity_id: Identity provider user id
            email: Email address
            wallet_address: Wallet address, or None while no wallet exists

        Returns:
            Created user
        """
        with logfire.span("user_service.create_user", identity_id=identity_id):
            now = utcnow()
            user = User(
                id=UserId(uuid4()),
                identity_id=identity_id,
                email=email.strip().lower(),
                wallet_address=wallet_address or PENDING_WALLET,
                referral_code=await self.generate_referral_code(),
                last_login_at=now,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info(
                "User created",
                user_id=str(saved.id),
                referral_code=saved.referral_code.root,
            )
            return saved

    async def record_login(
        self, user: User, email: str, wallet_address: str | None
    ) -> User:
        """Refresh email, wallet and last login time on a returning user."""
        with logfire.span("user_service.record_login", user_id=str(user.id)):
            now = utcnow()
            updated = user.model_copy(
                update={
                    "email": email.strip().lower(),
                    "wallet_address": wallet_address or user.wallet_address,
                    "last_login_at": now,
                    "updated_at": now,
                }
            )
            return await self.user_repository.save(updated)

    async def onboard(
        self,
        user_id: UserId,
        first_name: str,
        last_name: str,
        country: str | None = None,
        display_currency: DisplayCurrency | None = None,
        financial_knowledge_level: FinancialKnowledgeLevel | None = None,
        risk_level: RiskLevel | None = None,
    ) -> User:
        """Complete a user's profile and mark them onboarded.

        Optional fields left as None keep their stored value.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.onboard", user_id=str(user_id)):
            user = await self.get_by_id(user_id)

            updates: dict = {
                "first_name": first_name.strip(),
                "last_name": last_name.strip(),
                "is_onboarded": True,
                "updated_at": utcnow(),
            }
            if country:
                updates["country"] = country.strip().upper()
            if display_currency:
                updates["display_currency"] = display_currency
            if financial_knowledge_level:
                updates["financial_knowledge_level"] = financial_knowledge_level
            if risk_level:
                updates["risk_level"] = risk_level

            saved = await self.user_repository.save(user.model_copy(update=updates))
            logfire.info("User onboarded", user_id=str(user_id))
            return saved

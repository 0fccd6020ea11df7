"""Domain services."""

from .auth_service import AuthService, IdentityClient
from .base import Service
from .contact_service import ContactService, ResolvedContact
from .invite_service import InviteService
from .jwt_service import JWTService
from .referral_service import InviteClaim, ReferralClaim, ReferralService
from .user_service import UserService

__all__ = [
    "AuthService",
    "ContactService",
    "IdentityClient",
    "InviteClaim",
    "InviteService",
    "JWTService",
    "ReferralClaim",
    "ReferralService",
    "ResolvedContact",
    "Service",
    "UserService",
]

"""Referral use cases."""

from haven.application.usecase.referral.claim_referral import (
    ClaimReferralRequest,
    ClaimReferralResponse,
    ClaimReferralUseCase,
)

__all__ = [
    "ClaimReferralRequest",
    "ClaimReferralResponse",
    "ClaimReferralUseCase",
]

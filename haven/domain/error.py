"""Domain layer errors.

Every error carries a machine-readable ``reason`` code that the interface
layer returns to clients alongside the message.
"""


class DomainError(Exception):
    """Base domain error."""

    reason: str = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed input or missing required field."""

    reason = "invalid_input"


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    reason = "conflict"


class UnauthorizedError(DomainError):
    """Raised when a request carries no valid caller identity."""

    reason = "unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    reason = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidReferralCodeError(DomainError):
    """Raised when no user owns the given referral code."""

    reason = "invalid_code"

    def __init__(self, code: str):
        self.code = code
        super().__init__("Invalid referral code")


class SelfReferralError(BusinessRuleViolationError):
    """Raised when a user tries to refer themselves."""

    reason = "self_referral"


class AlreadyReferredError(BusinessRuleViolationError):
    """Raised when the caller already has a referrer."""

    reason = "already_referred"

    def __init__(self, message: str = "Referral already set for this account."):
        super().__init__(message)


class WrongRecipientError(BusinessRuleViolationError):
    """Raised when an invite is redeemed by someone other than its addressee."""

    reason = "wrong_recipient"

    def __init__(
        self,
        message: str = "This invite link is only valid for the email it was sent to.",
    ):
        super().__init__(message)


class InviteAlreadyUsedError(BusinessRuleViolationError):
    """Raised when an invite was already redeemed by a different user."""

    reason = "already_used"

    def __init__(self, message: str = "This invite has already been used."):
        super().__init__(message)


class DuplicateRecordError(BusinessRuleViolationError):
    """Raised by repositories when a unique constraint rejects a write."""

    def __init__(self, resource: str, detail: str):
        self.resource = resource
        super().__init__(f"Duplicate {resource}: {detail}")

"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class IdentityProviderError(AdapterError):
    """Identity provider rejected a token or could not be reached."""

    pass

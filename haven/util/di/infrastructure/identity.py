"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from haven.adapter.privy import PrivyIdentityClient
from haven.config import Settings
from haven.domain.service import IdentityClient
from haven.util.di.base import ProviderBase


class IdentityProvider(ProviderBase):
    """Identity provider component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider using Privy."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_client(self, settings: Settings) -> IdentityClient:
        """Provide Privy identity client."""
        return PrivyIdentityClient(settings.auth.privy)

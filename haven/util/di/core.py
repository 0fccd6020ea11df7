"""Configuration and unit-of-work providers."""

from dishka import Scope, provide

from haven.config import AuthSettings, InvitationSettings, Settings
from haven.persistence.database import UnitOfWork
from haven.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings read once per process from the environment and ``.env``."""

    scope = Scope.APP

    @provide
    def settings(self) -> Settings:
        return Settings()

    @provide
    def auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def invitation_settings(self, settings: Settings) -> InvitationSettings:
        return settings.invitations

    @provide(scope=Scope.REQUEST)
    def unit_of_work(self) -> UnitOfWork:
        return UnitOfWork()

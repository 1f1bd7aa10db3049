"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from engage.config import ApiSettings, Settings
from engage.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide engine settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_api_settings(self, settings: Settings) -> ApiSettings:
        """Provide API settings."""
        return settings.api

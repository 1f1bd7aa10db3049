"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from engage.config import Settings
from engage.util.di import PROVIDERS, get_provider
from engage.util.logging import setup_logging
from engage.util.observability import configure_logfire


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)


def bootstrap(settings: Settings | None = None) -> AsyncContainer:
    """Configure logging and Logfire, then build the production container.

    Call once at process start, before asking the container for an
    ``EngineFactory``.

    Args:
        settings: Settings to configure observability with (loaded from the
            environment if omitted)

    Returns:
        Configured DI container with production providers
    """
    settings = settings or Settings()
    setup_logging(settings)
    configure_logfire(settings)
    return create_container()

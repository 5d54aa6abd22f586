"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from threadlens.config import Settings
from threadlens.util.di import PROVIDERS, get_provider
from threadlens.util.logging import setup_logging
from threadlens.util.observability import configure_logfire


def create_container(configure_observability: bool = True) -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically. Open a
    request scope per comment view:

        container = create_container()
        async with container() as request_container:
            session = await request_container.get(CommentViewSession)

    Args:
        configure_observability: Set up logging and Logfire before building

    Returns:
        Configured DI container with production providers
    """
    if configure_observability:
        settings = Settings()
        setup_logging(settings)
        configure_logfire(settings)

    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)

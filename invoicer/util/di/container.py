"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from invoicer.config import Settings
from invoicer.util.di import PROVIDERS, get_provider


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build production container (all prod implementations).

    Args:
        settings: Client settings; loaded from the environment when omitted

    Returns:
        Configured DI container with production providers
    """
    settings = settings or Settings()
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances, context={Settings: settings})

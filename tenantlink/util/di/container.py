"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from tenantlink.util.di import PROVIDERS, get_provider


def create_container(for_http: bool = True) -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Args:
        for_http: Include the FastAPI request context. Scripts that open
            request scopes without an HTTP request pass False.

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    if for_http:
        provider_instances.append(FastapiProvider())
    return make_async_container(*provider_instances)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)

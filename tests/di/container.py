"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from tenantlink.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build test container with selective unmocking.

    Unmocked components talk to real services, which must already be
    running (postgres for "persistence"). Settings are loaded from
    environment variables.

    Args:
        unmock: Components to use production implementations for.
                All others use mocks.

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components or dependency violations

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})

        # Shared rate limits - the postgres backend needs real persistence
        container = build_test_container(unmock={"persistence", "ratelimit"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component_name = base.__mock_component__
        use_mock = component_name is not None and component_name not in unmock
        provider_instances.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*provider_instances)


def _validate_unmock(unmock: set[Component]) -> None:
    """Validate unmock configuration.

    Raises:
        ValueError: If unknown components or dependency violations
    """
    mockable = [p for p in PROVIDERS if p.__mock_component__ is not None]
    all_components = {p.__mock_component__ for p in mockable}

    unknown = unmock - all_components
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    for base in mockable:
        if base.__mock_component__ in unmock:
            missing = base.__depends_on__ - unmock
            if missing:
                raise ValueError(
                    f"Component '{base.__mock_component__}' requires {missing} to be unmocked"
                )

"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from invoicer.config import Settings
from invoicer.util.di import PROVIDERS, Component, get_provider
from invoicer.util.error import DependencyInjectionError


def build_test_container(
    unmock: set[Component] | None = None,
    settings: Settings | None = None,
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are loaded from environment variables (tests/conftest.py sets
    the test environment and zero display delays) unless passed in.


    Args:
        unmock: Components to use production implementations for.
                All others use mocks if available.
        settings: Settings to place in the container context

    Returns:
        Configured test container

    Raises:
        DependencyInjectionError: If unknown components or dependency violations

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Real file-backed storage and system browser
        container = build_test_container(unmock={"browser"})

        # Real HTTP backend (needs a running backend)
        container = build_test_container(unmock={"backend"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        is_mockable = bool(base.__subclasses__())

        if not is_mockable:
            provider_class = get_provider(base, use_mock=False)
        else:
            component_name = getattr(base, "__mock_component__", None)
            use_mock = component_name not in unmock if component_name else False
            provider_class = get_provider(base, use_mock=use_mock)

        # All providers instantiated without arguments (Settings comes from context)
        provider_instances.append(provider_class())

    return make_async_container(
        *provider_instances, context={Settings: settings or Settings()}
    )


def _validate_unmock(unmock: set[Component]) -> None:
    """Validate unmock configuration.

    Args:
        unmock: Set of components to unmock

    Raises:
        DependencyInjectionError: If unknown components or dependency violations
    """
    mockable_providers = [p for p in PROVIDERS if p.__subclasses__()]
    all_components = {
        getattr(p, "__mock_component__")
        for p in mockable_providers
        if hasattr(p, "__mock_component__")
    }

    unknown = unmock - all_components
    if unknown:
        raise DependencyInjectionError(f"Unknown components: {unknown}")

    for base in mockable_providers:
        component_name = getattr(base, "__mock_component__", None)
        if component_name in unmock:
            depends_on = getattr(base, "__depends_on__", set())
            missing = depends_on - unmock
            if missing:
                raise DependencyInjectionError(
                    f"Component '{component_name}' requires {missing} to be unmocked"
                )

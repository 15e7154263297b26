"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components a test can swap between mock and production implementations
Component = Literal["backend", "browser"]


class ProviderBase(Provider):
    """Base for all DI providers.

    Attributes:
        __mock_component__: Component name, None for concrete providers
        __is_mock__: Whether this is a mock implementation
        __depends_on__: Components that must also be unmocked when this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[str]] = frozenset()

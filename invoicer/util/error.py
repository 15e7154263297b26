"""Errors raised while wiring the client together."""


class UtilError(Exception):
    """Base error for the util layer."""

    pass


class ConfigurationError(UtilError):
    """Settings cannot be turned into a working client (bad storage path, etc.)."""

    pass


class DependencyInjectionError(UtilError):
    """A provider or mock component could not be resolved."""

    pass

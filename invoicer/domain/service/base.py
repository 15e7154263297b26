"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Domain services own client-side state that outlives a single page:
    the session identity, the invite correlation token and navigation.
    """

    pass

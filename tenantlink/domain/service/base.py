"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold invite logic that spans several entities or
    repositories.
    """

    pass

"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services own per-target state and the business rules that keep
    it consistent with the backend.
    """

    pass

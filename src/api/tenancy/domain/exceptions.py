"""Domain exceptions for the tenancy bounded context."""


class InvalidTenantConfigError(ValueError):
    """Raised when a tenant configuration record violates its invariants.

    Tenant records are static literals, so this surfaces at import time
    rather than while the dashboard is running.
    """

    pass

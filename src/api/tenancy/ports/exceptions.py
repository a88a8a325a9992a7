"""Port-level exceptions for the tenancy bounded context.

These exceptions are raised by adapters and handled by the application
layer, which turns them into an advisory error on the active tenant state.
"""


class TenantPersistenceError(Exception):
    """Raised when the selected-tenant store cannot be read or written.

    Adapters wrap backend-specific failures (I/O errors, corrupt data)
    in this exception so the application layer handles a single type.
    """

    pass

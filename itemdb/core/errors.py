"""Error types raised by the catalog core.

Only the transport layers (HTTP server, CLI) turn these into status codes or
exit codes.
"""


class CatalogError(Exception):
    """Base class for every catalog failure."""
    pass


class ValidationError(CatalogError):
    """Raised when a request is rejected before any storage mutation."""
    pass


class NotFoundError(CatalogError):
    """Raised when a position or asset does not exist."""
    pass


class StorageError(CatalogError):
    """Raised when the backing store or image directory cannot be used."""
    pass


class DeadlineExceeded(StorageError):
    """Raised when a storage call outlives its request deadline."""
    pass

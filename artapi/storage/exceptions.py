class StorageError(Exception):
    """Base exception for all object storage errors."""


class StorageTransportError(StorageError):
    """Raised when the object store cannot be reached or rejects a request."""


class ObjectNotFoundError(StorageError):
    """Raised when an operation targets an object that does not exist."""

"""Typed failures raised by the expense store."""


class StoreError(Exception):
    """Base class for every failure the store raises."""


class StorageUnavailable(StoreError):
    """The database could not be opened or its schema created. Fatal."""


class QueryFailed(StoreError):
    """A read operation could not complete."""


class WriteFailed(StoreError):
    """An insert or delete could not complete; nothing was applied."""

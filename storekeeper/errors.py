class StoreError(Exception):
    """Base class for every error a Store operation can report."""


class NotFoundError(StoreError, LookupError):
    """A referenced product id does not exist."""


class InvalidInputError(StoreError, ValueError):
    """Non-positive quantity, negative price, or text that is not a number."""


class InsufficientStockError(StoreError):
    """A sale asks for more units than are on hand."""


class StorageError(StoreError):
    """The snapshot could not be read, parsed or written."""

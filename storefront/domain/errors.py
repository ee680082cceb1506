# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base class for every failure the storefront core reports."""


class ValidationError(StorefrontError):
    """User input is missing or malformed; recoverable by re-prompting."""

    def __init__(self, missing_fields: list[str], message: str | None = None):
        self.missing_fields = list(missing_fields)
        super().__init__(message or f"Missing required fields: {', '.join(self.missing_fields)}")


class DataUnavailable(StorefrontError):
    """The store could not be read; recoverable by retrying."""

    def __init__(self, collection: str, message: str = "store unreachable"):
        self.collection = collection
        super().__init__(f"{collection}: {message}")


class WriteError(StorefrontError):
    """A specific insert/update/delete against the store failed."""

    def __init__(self, collection: str, operation: str, message: str = "write failed"):
        self.collection = collection
        self.operation = operation
        super().__init__(f"{operation} {collection}: {message}")


class NotFound(StorefrontError):
    """Referenced entity is missing or is not owned by the requesting user."""


class OrderCreationFailed(StorefrontError):
    """Order placement aborted; the cart is left as it was."""

    def __init__(self, step: str, order_id: str | None = None, cause: Exception | None = None):
        self.step = step
        self.order_id = order_id
        self.cause = cause
        super().__init__(f"Order creation failed at step '{step}'")

"""
Exceptions raised by the seed and flush pipelines.

Validation errors (``MalformedInputError``, ``MissingRequiredFieldError``,
``UnknownReferenceError``, ``InvalidValueError``) mean the input data is bad
and must be fixed upstream; they are never retried.  ``StoreCommitError``
wraps a backend failure during a batch commit or read.  Chunks committed
before any of these is raised stay committed.
"""

from typing import Any


class StoreSeedError(Exception):
    """Base exception for all pipeline errors."""


class MalformedInputError(StoreSeedError):
    """The top-level shape of a seed source is wrong (e.g. not a JSON array)."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        original_error: Exception | None = None,
    ):
        self.source = source
        self.original_error = original_error

        if source:
            message = f"Malformed seed source '{source}': {message}"

        if original_error:
            message = f"{message} (Original error: {original_error})"

        super().__init__(message)


class MissingRequiredFieldError(StoreSeedError):
    """A record lacks a field the entity requires."""

    def __init__(self, entity: str, field: str, key: str | None = None):
        self.entity = entity
        self.field = field
        self.key = key

        if key:
            message = f"{entity} {key} missing {field}"
        else:
            message = f"{entity} missing {field}"

        super().__init__(message)


class UnknownReferenceError(StoreSeedError):
    """An order references a user or product that is not in the reference index."""

    def __init__(self, order_id: str, field: str, key: Any):
        self.order_id = order_id
        self.field = field
        self.key = key
        super().__init__(f"Order {order_id} references unknown {field}: {key}")


class UnknownSkuError(UnknownReferenceError):
    def __init__(self, order_id: str, sku: Any):
        self.sku = sku
        super().__init__(order_id, "sku", sku)


class UnknownUserError(UnknownReferenceError):
    def __init__(self, order_id: str, user_id: Any):
        self.user_id = user_id
        super().__init__(order_id, "userId", user_id)


class InvalidValueError(StoreSeedError):
    """A field holds a value outside its allowed range or type."""

    def __init__(
        self,
        entity: str,
        field: str,
        value: Any,
        key: str | None = None,
        reason: str | None = None,
    ):
        self.entity = entity
        self.field = field
        self.value = value
        self.key = key
        self.reason = reason

        error_parts = [f"Invalid {field} for {entity}" + (f" {key}" if key else "")]

        if reason:
            error_parts.append(reason)

        error_parts.append(f"Value: {value!r}")

        super().__init__(" | ".join(error_parts))


class InvalidPriceError(InvalidValueError):
    """A product resolved during order expansion has a non-positive unit price."""

    def __init__(self, sku: str, value: Any):
        self.sku = sku
        super().__init__(
            "Product",
            "priceUSD",
            value,
            key=sku,
            reason="Product price must be > 0",
        )


class StoreCommitError(StoreSeedError):
    """The document store rejected a batch commit or read."""

    def __init__(
        self,
        collection: str | None,
        operation: str,
        original_error: Exception | None = None,
    ):
        self.collection = collection
        self.operation = operation
        self.original_error = original_error

        message = f"Store {operation} failed"
        if collection:
            message = f"{message} on '{collection}'"
        if original_error:
            message = f"{message} (Original error: {original_error})"

        super().__init__(message)

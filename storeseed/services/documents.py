"""Per-entity validation and document shaping for seed records.

Each builder takes one raw record and returns ``(key, document)`` or raises
the matching validation error.  Input fields are carried over as-is and the
document is written with merge semantics, so fields not mentioned here
survive a re-seed untouched.
"""

from collections.abc import Mapping
from decimal import InvalidOperation
from typing import Any

from storeseed.errors import InvalidValueError, MalformedInputError, MissingRequiredFieldError
from storeseed.services.money import round2, to_decimal
from storeseed.services.timestamps import coerce_timestamp
from storeseed.store.base import SERVER_TIMESTAMP

_TICKET_OPTIONAL_TIMESTAMPS = ("readAt", "resolvedAt", "closedAt", "lastReplyAt")


def _record(raw: Any, source: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedInputError(f"record is not an object: {raw!r}", source=source)
    return raw


def _require(record: Mapping[str, Any], entity: str, field: str, key: str | None = None) -> Any:
    value = record.get(field)
    if value is None or value == "":
        raise MissingRequiredFieldError(entity, field, key)
    return value


def require_key(record: Mapping[str, Any], entity: str, field: str, key: str | None = None) -> str:
    """Return the document id held in *field*; ids must be non-empty strings."""
    value = _require(record, entity, field, key)
    if not isinstance(value, str):
        raise InvalidValueError(entity, field, value, key=key, reason="must be a non-empty string")
    return value


def user_document(raw: Any) -> tuple[str, dict[str, Any]]:
    user = _record(raw, "users")
    user_id = require_key(user, "User", "userId")
    _require(user, "User", "email", user_id)
    return user_id, {
        **user,
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    }


def product_document(raw: Any) -> tuple[str, dict[str, Any]]:
    product = _record(raw, "products")
    sku = product.get("sku")
    if not sku:
        raise MissingRequiredFieldError("Product", "sku", product.get("name") or "?")
    if not isinstance(sku, str):
        raise InvalidValueError("Product", "sku", sku, key=product.get("name"), reason="must be a non-empty string")

    price = _require(product, "Product", "priceUSD", sku)
    try:
        price_usd = to_decimal(price)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidValueError("Product", "priceUSD", price, key=sku, reason="not a number") from None
    if not price_usd.is_finite() or price_usd < 0:
        raise InvalidValueError("Product", "priceUSD", price, key=sku, reason="Product price cannot be negative")

    inventory = product.get("inventory")
    if inventory is None:
        raise MissingRequiredFieldError("Product", "inventory", sku)
    if isinstance(inventory, bool):
        raise InvalidValueError("Product", "inventory", inventory, key=sku, reason="must be an integer")
    try:
        inventory_dec = to_decimal(inventory)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidValueError("Product", "inventory", inventory, key=sku, reason="must be an integer") from None
    if not inventory_dec.is_finite() or inventory_dec != inventory_dec.to_integral_value():
        raise InvalidValueError("Product", "inventory", inventory, key=sku, reason="must be an integer")
    if inventory_dec < 0:
        raise InvalidValueError(
            "Product", "inventory", inventory, key=sku, reason="Product inventory cannot be negative"
        )

    return sku, {
        **product,
        "image": product.get("imageUrl") or product.get("image"),
        "inventory": int(inventory_dec),
        "priceUSD": round2(price_usd),
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    }


def discount_document(raw: Any) -> tuple[str, dict[str, Any]]:
    discount = _record(raw, "discounts")
    code = require_key(discount, "Discount", "code")
    return code, {
        **discount,
        "validFrom": coerce_timestamp(discount.get("validFrom"), entity="Discount", field="validFrom", key=code),
        "validUntil": coerce_timestamp(
            discount.get("validUntil"), entity="Discount", field="validUntil", key=code
        ),
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    }


def _timestamp_or_now(record: Mapping[str, Any], entity: str, field: str, key: str) -> Any:
    value = coerce_timestamp(record.get(field), entity=entity, field=field, key=key)
    return value if value is not None else SERVER_TIMESTAMP


def ticket_document(raw: Any) -> tuple[str, dict[str, Any]]:
    ticket = _record(raw, "supportTickets")
    ticket_id = require_key(ticket, "Support ticket", "id")
    _require(ticket, "Ticket", "userId", ticket_id)
    _require(ticket, "Ticket", "subject", ticket_id)

    document: dict[str, Any] = {
        **ticket,
        "createdAt": _timestamp_or_now(ticket, "Ticket", "createdAt", ticket_id),
        "updatedAt": _timestamp_or_now(ticket, "Ticket", "updatedAt", ticket_id),
    }
    for field in _TICKET_OPTIONAL_TIMESTAMPS:
        document[field] = coerce_timestamp(ticket.get(field), entity="Ticket", field=field, key=ticket_id)
    return ticket_id, document


def reply_document(raw: Any) -> tuple[str, dict[str, Any]]:
    reply = _record(raw, "ticketReplies")
    reply_id = require_key(reply, "Ticket reply", "id")
    _require(reply, "Reply", "ticketId", reply_id)
    _require(reply, "Reply", "userId", reply_id)
    return reply_id, {
        **reply,
        "createdAt": _timestamp_or_now(reply, "Reply", "createdAt", reply_id),
    }

"""Order expansion: price raw line items and compute order-level totals.

Rounding happens at every step, in this order::

    unitPriceUSD = round2(priceUSD)
    lineTotalUSD = round2(priceUSD * qty)
    subtotalUSD  = round2(sum(lineTotalUSD))
    taxUSD       = round2(subtotalUSD * taxRate)
    totalUSD     = round2(subtotalUSD + taxUSD + shippingUSD)

Everything here is side-effect free; writing the resulting documents is the
caller's job.
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from storeseed.collections import USERS
from storeseed.errors import (
    InvalidPriceError,
    InvalidValueError,
    MalformedInputError,
    MissingRequiredFieldError,
    UnknownSkuError,
    UnknownUserError,
)
from storeseed.schemas.orders import CustomerSnapshot, LineItem, OrderTotals
from storeseed.services.money import money_sum, round2, to_decimal
from storeseed.services.reference_index import ReferenceIndex
from storeseed.services.timestamps import coerce_timestamp
from storeseed.store.base import SERVER_TIMESTAMP


def _decimal_field(value: Any, *, entity: str, field: str, key: str | None) -> Decimal:
    try:
        result = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidValueError(entity, field, value, key=key, reason="not a number") from None
    if not result.is_finite():
        raise InvalidValueError(entity, field, value, key=key, reason="not a finite number")
    return result


def _quantity(order_id: str, position: int, item: Mapping[str, Any]) -> int:
    qty = item.get("qty")
    field = f"items[{position}].qty"
    if qty is None:
        raise MissingRequiredFieldError("Order", field, order_id)
    if isinstance(qty, bool) or not isinstance(qty, (int, float, str)):
        raise InvalidValueError("Order", field, qty, key=order_id, reason="must be a positive integer")
    qty_dec = _decimal_field(qty, entity="Order", field=field, key=order_id)
    if qty_dec != qty_dec.to_integral_value() or qty_dec <= 0:
        raise InvalidValueError("Order", field, qty, key=order_id, reason="must be a positive integer")
    return int(qty_dec)


def expand_line_items(
    order_id: str,
    items: Sequence[Any],
    products: ReferenceIndex,
) -> list[LineItem]:
    """Resolve every item's sku against *products* and price it.

    Raises ``UnknownSkuError`` for an unresolved sku and ``InvalidPriceError``
    when the resolved price is not strictly positive, even if the product
    itself was accepted with a zero price.
    """
    expanded: list[LineItem] = []
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise MalformedInputError(f"order {order_id} item {position} is not an object", source="orders")

        sku = item.get("sku")
        if not sku:
            raise MissingRequiredFieldError("Order", f"items[{position}].sku", order_id)

        product = products.get(sku)
        if product is None:
            raise UnknownSkuError(order_id, sku)

        raw_price = product.get("priceUSD")
        try:
            unit_price = to_decimal(raw_price)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidPriceError(sku, raw_price) from None
        if not unit_price.is_finite() or not round2(unit_price) > 0:
            raise InvalidPriceError(sku, raw_price)

        qty = _quantity(order_id, position, item)
        expanded.append(
            LineItem(
                sku=sku,
                name=product.get("name"),
                unit_price_usd=round2(unit_price),
                qty=qty,
                line_total_usd=round2(unit_price * qty),
            )
        )
    return expanded


def compute_totals(
    line_items: Sequence[LineItem],
    tax_rate: Any = None,
    shipping: Any = None,
    *,
    order_id: str | None = None,
) -> OrderTotals:
    """Aggregate priced line items into order totals (tax rate and shipping default to 0)."""
    rate = _decimal_field(tax_rate or 0, entity="Order", field="taxRate", key=order_id)
    shipping_usd = round2(_decimal_field(shipping or 0, entity="Order", field="shippingUSD", key=order_id))

    subtotal_usd = round2(money_sum(item.line_total_usd for item in line_items))
    tax_usd = round2(subtotal_usd * rate)
    total_usd = round2(subtotal_usd + tax_usd + shipping_usd)

    return OrderTotals(
        subtotal_usd=subtotal_usd,
        tax_usd=tax_usd,
        shipping_usd=shipping_usd,
        total_usd=total_usd,
        tax_rate=rate,
    )


def build_order_document(
    order: Any,
    products: ReferenceIndex,
    users: ReferenceIndex,
) -> tuple[str, dict[str, Any]]:
    """Validate one raw order and return ``(orderId, document)``.

    The document carries the expanded line items, the totals, a reference
    path to the owning user and a denormalised customer snapshot.
    """
    if not isinstance(order, Mapping):
        raise MalformedInputError("order record is not an object", source="orders")

    order_id = order.get("orderId")
    if not order_id:
        raise MissingRequiredFieldError("Order", "orderId")
    if not isinstance(order_id, str):
        raise InvalidValueError("Order", "orderId", order_id, reason="must be a non-empty string")

    user_id = order.get("userId")
    if not user_id:
        raise MissingRequiredFieldError("Order", "userId", order_id)

    items = order.get("items")
    if not isinstance(items, list) or not items:
        raise MissingRequiredFieldError("Order", "items", order_id)

    user = users.get(user_id)
    if user is None:
        raise UnknownUserError(order_id, user_id)

    line_items = expand_line_items(order_id, items, products)
    totals = compute_totals(
        line_items,
        order.get("taxRate"),
        order.get("shippingUSD"),
        order_id=order_id,
    )
    snapshot = CustomerSnapshot(name=user.get("name"), email=user.get("email"))

    placed_at = coerce_timestamp(order.get("placedAt"), entity="Order", field="placedAt", key=order_id)

    document: dict[str, Any] = {
        "orderId": order_id,
        "userId": user_id,
        "userRef": f"{USERS}/{user_id}",
        "customerSnapshot": snapshot.model_dump(),
        "currency": "USD",
        "items": [item.model_dump(by_alias=True) for item in line_items],
        **totals.model_dump(by_alias=True),
        "paymentMethod": order.get("paymentMethod") or "card",
        "shippingAddress": order.get("shippingAddress") or None,
        "status": order.get("status") or "paid",
        "placedAt": placed_at if placed_at is not None else SERVER_TIMESTAMP,
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    }
    return order_id, document

"""Derive standalone Address documents from the addresses nested on a user.

Extraction is best-effort: missing or malformed sub-fields become empty
strings and never abort the user seed.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from storeseed.store.base import SERVER_TIMESTAMP


def address_id(user_id: str, index: int) -> str:
    """Composite id stable for the same user and array position."""
    return f"{user_id}-addr-{index}"


def _text(value: Any) -> str:
    if value is None or value == "":
        return ""
    return value if isinstance(value, str) else str(value)


def extract_addresses(user: Any) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield ``(id, document)`` for every nested address on *user*."""
    if not isinstance(user, Mapping):
        return
    user_id = user.get("userId")
    addresses = user.get("addresses")
    if not user_id or not isinstance(addresses, list):
        return

    for index, raw in enumerate(addresses):
        addr = raw if isinstance(raw, Mapping) else {}
        label = addr.get("label")
        yield address_id(user_id, index), {
            "userId": user_id,
            "type": "billing" if label == "billing" else "shipping",
            "line1": _text(addr.get("line1")),
            "line2": _text(addr.get("line2")),
            "city": _text(addr.get("city")),
            "state": _text(addr.get("region") or addr.get("state")),
            "postalCode": _text(addr.get("postalCode")),
            "country": _text(addr.get("country")) or "US",
            "isDefault": label == "default" or index == 0,
            "createdAt": SERVER_TIMESTAMP,
            "updatedAt": SERVER_TIMESTAMP,
        }

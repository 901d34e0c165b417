"""Fixed collection names and the order the pipelines visit them in."""

from enum import StrEnum

USERS = "users"
PRODUCTS = "products"
DISCOUNTS = "discounts"
ORDERS = "orders"
ADDRESSES = "addresses"
PAYMENT_METHODS = "paymentMethods"
SETTINGS = "settings"
CONTENT = "content"
SUPPORT_TICKETS = "supportTickets"
TICKET_REPLIES = "ticketReplies"


class SeedTarget(StrEnum):
    USERS = "users"
    PRODUCTS = "products"
    DISCOUNTS = "discounts"
    ORDERS = "orders"
    TICKETS = "tickets"
    REPLIES = "replies"


# Orders need the user and product indexes, so they come after both.
SEED_ORDER: tuple[SeedTarget, ...] = (
    SeedTarget.USERS,
    SeedTarget.PRODUCTS,
    SeedTarget.DISCOUNTS,
    SeedTarget.ORDERS,
    SeedTarget.TICKETS,
    SeedTarget.REPLIES,
)

SEED_COLLECTIONS: dict[SeedTarget, str] = {
    SeedTarget.USERS: USERS,
    SeedTarget.PRODUCTS: PRODUCTS,
    SeedTarget.DISCOUNTS: DISCOUNTS,
    SeedTarget.ORDERS: ORDERS,
    SeedTarget.TICKETS: SUPPORT_TICKETS,
    SeedTarget.REPLIES: TICKET_REPLIES,
}

SEED_FILES: dict[SeedTarget, str] = {
    SeedTarget.USERS: "usersSeed.json",
    SeedTarget.PRODUCTS: "productSeed.json",
    SeedTarget.DISCOUNTS: "discountsSeed.json",
    SeedTarget.ORDERS: "ordersSeed.json",
    SeedTarget.TICKETS: "supportTicketsSeed.json",
    SeedTarget.REPLIES: "ticketRepliesSeed.json",
}

FLUSH_COLLECTIONS: tuple[str, ...] = (
    PRODUCTS,
    ORDERS,
    DISCOUNTS,
    ADDRESSES,
    USERS,
    PAYMENT_METHODS,
    SETTINGS,
    CONTENT,
)

# Collections whose documents are owned by a user through ``userId``.
USER_RELATED_COLLECTIONS: tuple[str, ...] = (ADDRESSES, PAYMENT_METHODS)

# Collections rewritten when a seeded user id is reassigned.
USER_OWNED_COLLECTIONS: tuple[str, ...] = (ORDERS, ADDRESSES, SUPPORT_TICKETS)

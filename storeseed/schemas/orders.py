"""Pydantic models for the derived parts of an Order document."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class LineItem(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "sku": "A1",
                "name": "Canvas Tote",
                "unitPriceUSD": "10.00",
                "qty": 3,
                "lineTotalUSD": "30.00",
            }
        },
    )

    sku: str
    name: str | None = None
    unit_price_usd: Decimal = Field(..., alias="unitPriceUSD", gt=0)
    qty: int
    line_total_usd: Decimal = Field(..., alias="lineTotalUSD")


class OrderTotals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subtotal_usd: Decimal = Field(..., alias="subtotalUSD")
    tax_usd: Decimal = Field(..., alias="taxUSD")
    shipping_usd: Decimal = Field(..., alias="shippingUSD")
    total_usd: Decimal = Field(..., alias="totalUSD")
    tax_rate: Decimal = Field(..., alias="taxRate")


class CustomerSnapshot(BaseModel):
    name: str | None = None
    email: str | None = None

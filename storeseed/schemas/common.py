from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "collections.0",
                "message": "Input should be 'users', 'products', 'discounts', 'orders', 'tickets' or 'replies'",
            }
        }
    )

    field: str
    message: str


class ErrorCode(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "UNKNOWN_REFERENCE",
                "message": "Order O1 references unknown sku: Z9",
                "details": None,
            }
        }
    )

    code: str
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "STORE_COMMIT_FAILED",
                    "message": "Store commit failed on 'orders'",
                    "details": None,
                }
            }
        }
    )

    error: ErrorCode

from pydantic import BaseModel, ConfigDict

from storeseed.collections import SeedTarget


class SeedRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "collections": ["products", "orders"],
            }
        }
    )

    # None or empty seeds everything.
    collections: list[SeedTarget] | None = None

"""Result models returned by the seed, flush and maintenance pipelines."""

from pydantic import BaseModel, ConfigDict, Field


class CollectionWriteResult(BaseModel):
    collection: str
    written: int
    chunks: int


class SeedReport(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "collections": [
                    {"collection": "users", "written": 3, "chunks": 1},
                    {"collection": "addresses", "written": 4, "chunks": 1},
                    {"collection": "products", "written": 5, "chunks": 1},
                ]
            }
        }
    )

    collections: list[CollectionWriteResult] = Field(default_factory=list)

    def written(self, collection: str) -> int:
        return sum(r.written for r in self.collections if r.collection == collection)


class DeleteResult(BaseModel):
    collection: str
    deleted: int
    preserved: int
    iterations: int


class PurgeResult(BaseModel):
    collection: str
    scanned: int
    deleted: int


class FlushReport(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "preserved_user_ids": ["lhoijzfg2ya5Z7LzY2RBiWBI3sa2"],
                "collections": [
                    {"collection": "users", "deleted": 2, "preserved": 1, "iterations": 1}
                ],
                "related": [{"collection": "addresses", "scanned": 0, "deleted": 0}],
            }
        }
    )

    preserved_user_ids: list[str]
    collections: list[DeleteResult] = Field(default_factory=list)
    related: list[PurgeResult] = Field(default_factory=list)


class ReassignReport(BaseModel):
    old_user_id: str
    new_user_id: str
    user_moved: bool
    updated: dict[str, int] = Field(default_factory=dict)


class DiscountRefreshReport(BaseModel):
    categories: list[str]
    category_discounts: int
    total_discounts: int

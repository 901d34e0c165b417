from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "store": "connected",
                "backend": "sql",
                "version": "1.0.0",
                "built_by": "StoreSeed",
            }
        }
    )

    status: str  # "ok" | "degraded"
    store: str  # "connected" | "disconnected"
    backend: str  # "sql" | "memory"
    version: str
    built_by: str

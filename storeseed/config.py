from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Upper bound on operations in one write batch for every supported store.
MAX_BATCH_SIZE = 500


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    database_url_direct: str | None = None

    # Store
    store_backend: Literal["sql", "memory"] = "sql"
    seed_data_dir: Path = Path("seed/data")
    seed_chunk_size: int = Field(400, ge=1, le=MAX_BATCH_SIZE)
    delete_page_size: int = Field(500, ge=1, le=MAX_BATCH_SIZE)
    purge_chunk_size: int = Field(500, ge=1, le=MAX_BATCH_SIZE)

    # Flush
    preserve_user_id: str = "lhoijzfg2ya5Z7LzY2RBiWBI3sa2"

    # Admin API
    admin_api_key: str | None = None

    # App
    app_name: str = "StoreSeed"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()

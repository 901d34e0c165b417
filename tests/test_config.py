import pytest
from pydantic import ValidationError

from storeseed.config import MAX_BATCH_SIZE, Settings

_ENV_VARS = ("DATABASE_URL", "ADMIN_API_KEY", "STORE_BACKEND", "SEED_CHUNK_SIZE")


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_requires_database_url(clean_env):
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_loads_from_env(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/db")
    clean_env.setenv("ADMIN_API_KEY", "secret")
    s = Settings(_env_file=None)
    assert s.database_url == "postgresql+asyncpg://u:p@localhost/db"
    assert s.admin_api_key == "secret"
    assert s.app_name == "StoreSeed"
    assert s.version == "1.0.0"
    assert s.debug is False


def test_settings_defaults(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/db")
    s = Settings(_env_file=None)
    assert s.database_url_direct is None
    assert s.store_backend == "sql"
    assert s.seed_chunk_size == 400
    assert s.delete_page_size == 500
    assert s.purge_chunk_size == 500
    assert s.preserve_user_id == "lhoijzfg2ya5Z7LzY2RBiWBI3sa2"
    assert s.admin_api_key is None


@pytest.mark.parametrize("size", ["0", str(MAX_BATCH_SIZE + 1)])
def test_chunk_size_bounded_by_batch_limit(clean_env, size):
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    clean_env.setenv("SEED_CHUNK_SIZE", size)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_unknown_store_backend_rejected(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    clean_env.setenv("STORE_BACKEND", "firestore")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

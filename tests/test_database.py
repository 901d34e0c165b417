import ssl

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from storeseed.database import AsyncSessionLocal, _asyncpg_url, build_engine, engine


def test_engine_is_async_engine():
    assert isinstance(engine, AsyncEngine)


def test_async_session_factory_is_sessionmaker():
    assert isinstance(AsyncSessionLocal, async_sessionmaker)


def test_sslmode_moved_to_connect_args():
    url, connect_args = _asyncpg_url("postgresql+asyncpg://u:p@db/app?sslmode=require&application_name=seed")
    assert url == "postgresql+asyncpg://u:p@db/app?application_name=seed"
    assert isinstance(connect_args["ssl"], ssl.SSLContext)


def test_sslmode_disable_drops_parameter_only():
    url, connect_args = _asyncpg_url("postgresql+asyncpg://u:p@db/app?sslmode=disable")
    assert url == "postgresql+asyncpg://u:p@db/app"
    assert connect_args == {}


def test_url_without_sslmode_untouched():
    assert _asyncpg_url("sqlite+aiosqlite:///:memory:") == ("sqlite+aiosqlite:///:memory:", {})


def test_postgres_engine_gets_pool_settings():
    pg = build_engine("postgresql+asyncpg://u:p@localhost/db")
    assert pg.pool.size() == 5  # type: ignore[attr-defined]

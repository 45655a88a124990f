from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncEngine,
    async_sessionmaker,
    AsyncAttrs,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings


def _engine_options(database_url: str) -> dict[str, Any]:
    """Pool options for server databases; SQLite manages its own pool."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": 20,
        "max_overflow": 30,
        "pool_pre_ping": True,  # Validate connections before use
        "pool_recycle": 3600,
    }


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ``ON DELETE CASCADE`` unless the pragma is set per connection.
    This is a no-op for other backends.

    Args:
        engine (AsyncEngine): The engine to configure.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async_engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL),
)
enable_sqlite_foreign_keys(async_engine)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    autoflush=False,
    expire_on_commit=False,
    autobegin=True,
)


class Base(AsyncAttrs, DeclarativeBase):
    pass


async def init_db() -> None:
    """
    Create every table registered on ``Base.metadata``.

    Intended for local development and tests; deployments use Alembic.
    """
    # Registers all models on the metadata
    import app.core.db.models  # noqa: F401
    import app.apps.inventory.db.models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db() -> None:
    """Close every pooled connection held by the engine."""
    await async_engine.dispose()

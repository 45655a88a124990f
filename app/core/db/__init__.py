from app.core.db.config import (
    async_engine,
    AsyncSessionLocal,
    Base,
    dispose_db,
    enable_sqlite_foreign_keys,
    init_db,
)

__all__ = [
    "async_engine",
    "AsyncSessionLocal",
    "Base",
    "dispose_db",
    "enable_sqlite_foreign_keys",
    "init_db",
]

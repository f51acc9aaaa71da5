"""SQLite image cache database via SQLAlchemy Core."""

from assetctl.infrastructure.database.engine import create_db_engine, init_database
from assetctl.infrastructure.database.schema import image_cache, metadata

__all__ = [
    "create_db_engine",
    "image_cache",
    "init_database",
    "metadata",
]

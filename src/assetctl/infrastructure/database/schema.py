"""SQLAlchemy Core table definitions for the assetctl state database."""

from __future__ import annotations

from sqlalchemy import Column, Integer, LargeBinary, MetaData, Table, Text

metadata = MetaData()

# One row per optimized image, keyed by a digest of the input bytes and
# the optimizer signature. Cleared wholesale by ``assetctl clear-cache``.
image_cache = Table(
    "image_cache",
    metadata,
    Column("key", Text, primary_key=True),
    Column("source", Text, nullable=False),
    Column("size_in", Integer, nullable=False),
    Column("size_out", Integer, nullable=False),
    Column("data", LargeBinary, nullable=False),
    Column("created", Text, nullable=False),
)

"""ImageCache — content-addressed store of optimized image bytes.

Shared by the ``imagemin`` stage (reads and fills) and ``clear-cache``
(wipes). Every access holds a lock so parallel task runs with worker
threads never interleave a lookup with a wipe.
"""

from __future__ import annotations

import hashlib
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert

from assetctl.infrastructure.database.schema import image_cache

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class ImageCache:
    """Lock-guarded cache over the ``image_cache`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._lock = threading.Lock()

    @staticmethod
    def make_key(data: bytes, signature: str) -> str:
        """Digest of the input bytes plus the optimizer settings that produced the output."""
        digest = hashlib.sha256()
        digest.update(signature.encode("utf-8"))
        digest.update(b"\0")
        digest.update(data)
        return digest.hexdigest()

    def get(self, key: str) -> bytes | None:
        with self._lock, self._engine.connect() as conn:
            return conn.execute(
                select(image_cache.c.data).where(image_cache.c.key == key)
            ).scalar_one_or_none()

    def put(self, key: str, *, source: str, size_in: int, data: bytes) -> None:
        stmt = insert(image_cache).values(
            key=key,
            source=source,
            size_in=size_in,
            size_out=len(data),
            data=data,
            created=datetime.now(UTC).isoformat(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[image_cache.c.key],
            set_={"source": source, "data": data, "size_out": len(data)},
        )
        with self._lock, self._engine.begin() as conn:
            conn.execute(stmt)

    def count(self) -> int:
        with self._lock, self._engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(image_cache)).scalar_one()

    def clear(self) -> int:
        """Remove every entry. Returns the number removed."""
        with self._lock, self._engine.begin() as conn:
            return conn.execute(delete(image_cache)).rowcount

"""Source map v3 payloads and the write step that emits them as files."""

from __future__ import annotations

import json
from pathlib import PurePosixPath
from typing import Any

from assetctl.domain.files import MAP_EXTENSION, AssetFile


def identity_map(source: str, content: str) -> dict[str, Any]:
    """A map that records the original source without line mappings.

    Used for compilers that cannot produce mappings of their own.
    """
    return {
        "version": 3,
        "sources": [source],
        "sourcesContent": [content],
        "names": [],
        "mappings": "",
    }


def write_source_map(
    asset: AssetFile,
    *,
    map_relative: str | None = None,
    file_name: str | None = None,
) -> list[AssetFile]:
    """Split *asset* into the annotated file and its external ``.map`` file.

    The map lands next to the file (``styles.css`` -> ``styles.css.map``)
    unless *map_relative* says otherwise. Its ``file`` field names
    *file_name*, for files renamed after this step, or the current name.
    Files without a map pass through.
    """
    if asset.source_map is None:
        return [asset]

    map_relative = map_relative or f"{asset.relative}{MAP_EXTENSION}"
    payload = {**asset.source_map, "file": PurePosixPath(file_name or asset.relative).name}
    comment = f"\n/*# sourceMappingURL={PurePosixPath(map_relative).name} */\n"

    annotated = asset.with_contents(asset.contents.rstrip() + comment.encode("utf-8"))
    map_file = AssetFile(
        source=asset.source,
        relative=map_relative,
        contents=json.dumps(payload, separators=(",", ":")).encode("utf-8"),
    )
    return [annotated.with_source_map(None), map_file]

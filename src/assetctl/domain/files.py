"""AssetFile — the unit of content flowing through a transform stage.

Pure value type plus the rename rules applied before writing. Transforms
never mutate an AssetFile; they return a modified copy.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import PurePosixPath
from typing import Any

from assetctl.domain.errors import TransformError

MIN_SUFFIX = ".min"
MAP_EXTENSION = ".map"


@dataclass(frozen=True)
class AssetFile:
    """An in-memory file between selection and write.

    Attributes:
        source: Project-relative POSIX path of the originating input.
        relative: Output path relative to the stage destination.
        contents: Current file bytes.
        source_map: Source map v3 payload carried alongside the contents,
            or None when the stage does not produce maps.
    """

    source: str
    relative: str
    contents: bytes
    source_map: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        return PurePosixPath(self.relative).name

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.relative).suffix

    @property
    def text(self) -> str:
        """Contents decoded as UTF-8.

        Raises:
            TransformError: The contents are not valid UTF-8.
        """
        try:
            return self.contents.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Not valid UTF-8: {exc.reason} at byte {exc.start}"
            raise TransformError(msg, path=self.source) from exc

    def with_contents(self, contents: bytes | str) -> AssetFile:
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        return replace(self, contents=contents)

    def with_relative(self, relative: str) -> AssetFile:
        return replace(self, relative=relative)

    def with_source_map(self, source_map: dict[str, Any] | None) -> AssetFile:
        return replace(self, source_map=source_map)


def append_min(relative: str) -> str:
    """Insert ``.min`` before the final extension, unless it is ``.map``.

    Examples:
        >>> append_min("pages/styles.css")
        'pages/styles.min.css'
        >>> append_min("styles.css.map")
        'styles.css.map'
    """
    path = PurePosixPath(relative)
    if path.suffix.endswith(MAP_EXTENSION):
        return relative
    return str(path.with_name(f"{path.stem}{MIN_SUFFIX}{path.suffix}"))


def replace_suffix(relative: str, suffix: str) -> str:
    """Swap the final extension (``index.kit`` -> ``index.html``)."""
    return str(PurePosixPath(relative).with_suffix(suffix))


def is_partial(relative: str) -> bool:
    """Partials (``_name.ext``) are imported by other files, never emitted."""
    return PurePosixPath(relative).name.startswith("_")

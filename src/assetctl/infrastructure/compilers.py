"""Thin adapters over the third-party compilers and minifiers.

Each adapter takes text or bytes and returns text or bytes. Library-specific
failures are re-raised as :class:`TransformError` so the stage error guard
can handle every compiler the same way.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Any

from assetctl.domain.errors import TransformError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stylesheets
# ---------------------------------------------------------------------------


def compile_sass(
    path: Path,
    *,
    map_path: Path,
    source: str | None = None,
) -> tuple[str, dict[str, Any]]:
    """Compile a ``.scss`` file to compressed CSS, returning ``(css, source_map)``.

    libsass maps its own compressed output, so no later minify pass is
    needed. *map_path* is where the map will eventually be written; source
    paths inside the map are made relative to it.

    When *source* is given it is compiled in place of the file's contents.
    Imports still resolve next to *path*, and the map names *path*, so
    *source* must keep the file's line structure.
    """
    if source is None:
        return _compile_sass_file(path, path, map_path=map_path)

    with tempfile.TemporaryDirectory(prefix="assetctl-sass-") as tmp:
        staged = Path(tmp) / path.name
        staged.write_text(source, encoding="utf-8")
        css, source_map = _compile_sass_file(staged, path, map_path=map_path)

    marker = Path(tmp).name
    sources = list(source_map.get("sources", []))
    contents = list(source_map.get("sourcesContent", []))
    for index, entry in enumerate(sources):
        if marker in entry:
            sources[index] = Path(os.path.relpath(path, map_path.parent)).as_posix()
            if index < len(contents):
                contents[index] = path.read_text(encoding="utf-8")
    source_map["sources"] = sources
    if contents:
        source_map["sourcesContent"] = contents
    return css, source_map


def _compile_sass_file(path: Path, origin: Path, *, map_path: Path) -> tuple[str, dict[str, Any]]:
    import sass

    try:
        css, raw_map = sass.compile(
            filename=str(path),
            output_style="compressed",
            source_map_filename=str(map_path),
            source_map_contents=True,
            omit_source_map_url=True,
            include_paths=[str(origin.parent)],
        )
    except sass.CompileError as exc:
        message = str(exc).strip().replace(str(path), str(origin))
        raise TransformError(message, path=str(origin)) from exc
    return css, json.loads(raw_map)


def compile_less(path: Path) -> str:
    """Compile a ``.less`` file with lesscpy."""
    import lesscpy

    try:
        return lesscpy.compile(str(path), minify=False)
    except Exception as exc:
        # lesscpy signals parse failures with a mix of exception types.
        raise TransformError(str(exc) or exc.__class__.__name__, path=str(path)) from exc


def minify_css(css: str) -> str:
    import rcssmin

    return rcssmin.cssmin(css)


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------


def transpile_js(source: str, *, filename: str) -> str:
    """Transpile modern JavaScript to ES5 with the Babel build bundled in dukpy."""
    import dukpy

    try:
        result = dukpy.babel_compile(source)
    except dukpy.JSRuntimeError as exc:
        raise TransformError(str(exc).strip(), path=filename) from exc
    return result["code"]


def minify_js(source: str) -> str:
    import rjsmin

    return rjsmin.jsmin(source)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

_SVG_COMMENT = re.compile(r"<!--[\s\S]*?-->")
_SVG_INTER_TAG = re.compile(r">\s+<")


def optimizer_signature(*, jpeg_quality: int) -> str:
    """Identify optimizer settings; a change here invalidates cached outputs."""
    from PIL import __version__ as pillow_version

    return f"pillow={pillow_version};jpeg_quality={jpeg_quality}"


def optimize_image(data: bytes, *, suffix: str, jpeg_quality: int, filename: str) -> bytes:
    """Losslessly recompress PNG/GIF, re-encode JPEG, and strip SVG whitespace.

    The original bytes are kept when the optimized output is not smaller.
    """
    if suffix.lower() == ".svg":
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TransformError(f"SVG is not valid UTF-8: {exc.reason}", path=filename) from exc
        optimized = _SVG_INTER_TAG.sub("><", _SVG_COMMENT.sub("", text)).strip().encode("utf-8")
    else:
        optimized = _optimize_raster(data, jpeg_quality=jpeg_quality, filename=filename)
    return optimized if len(optimized) < len(data) else data


def _optimize_raster(data: bytes, *, jpeg_quality: int, filename: str) -> bytes:
    from PIL import Image, UnidentifiedImageError

    out = BytesIO()
    try:
        with Image.open(BytesIO(data)) as image:
            fmt = image.format
            if fmt == "JPEG":
                image.save(out, "JPEG", optimize=True, progressive=True, quality=jpeg_quality)
            elif fmt == "PNG":
                image.save(out, "PNG", optimize=True)
            elif fmt == "GIF":
                image.save(
                    out, "GIF", optimize=True, save_all=getattr(image, "is_animated", False)
                )
            else:
                logger.debug("No optimizer for %s (%s)", filename, fmt)
                return data
    except (UnidentifiedImageError, OSError) as exc:
        raise TransformError(f"Cannot optimize image: {exc}", path=filename) from exc
    return out.getvalue()


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


def minify_html(html: str) -> str:
    """Collapse whitespace between and inside elements."""
    import minify_html as _minify_html

    return _minify_html.minify(html)

"""Filesystem operations: glob selection, output writes, directory cleanup.

Glob semantics follow the usual front-end build conventions via wcmatch:
``**`` crosses directories, ``+(a|b)`` extended globs and ``{a,b}`` braces
are supported, and a leading ``!`` subtracts from the positive patterns.
Dotfiles are never matched.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from wcmatch import glob

from assetctl.domain.files import AssetFile

GLOB_FLAGS = glob.GLOBSTAR | glob.EXTGLOB | glob.BRACE | glob.NEGATE

_MAGIC_CHARS = frozenset("*?[]{}()!+@")


# ---------------------------------------------------------------------------
# Pattern helpers
# ---------------------------------------------------------------------------


def normalize_pattern(pattern: str) -> str:
    """Strip a leading ``./`` (after the negation mark, if any)."""
    negated = pattern.startswith("!")
    body = pattern[1:] if negated else pattern
    while body.startswith("./"):
        body = body[2:]
    return f"!{body}" if negated else body


def _is_magic(part: str) -> bool:
    return any(ch in _MAGIC_CHARS for ch in part)


def glob_base(pattern: str) -> str:
    """Return the leading non-magic directory of *pattern*.

    A pattern without magic names a single file; its base is the parent.

    Examples:
        >>> glob_base("src/sass/**/*.scss")
        'src/sass'
        >>> glob_base("src/less/styles.less")
        'src/less'
    """
    parts = PurePosixPath(normalize_pattern(pattern)).parts
    base: list[str] = []
    for part in parts:
        if _is_magic(part):
            return "/".join(base)
        base.append(part)
    return "/".join(base[:-1])


@dataclass(frozen=True)
class SelectedFile:
    """A file matched by a positive glob, with its path below the glob base."""

    path: Path
    source: str
    relative: str


def select_files(root: Path, patterns: tuple[str, ...] | list[str]) -> list[SelectedFile]:
    """Resolve *patterns* against *root*.

    Files are returned grouped by positive pattern, in pattern order, each
    group sorted by path. A file matched by several patterns is kept once,
    under the first. Negative patterns apply to every positive pattern.
    A pattern that matches nothing contributes nothing.
    """
    normalized = [normalize_pattern(p) for p in patterns]
    negatives = [p for p in normalized if p.startswith("!")]
    positives = [p for p in normalized if not p.startswith("!")]

    seen: set[str] = set()
    selected: list[SelectedFile] = []
    for positive in positives:
        base = glob_base(positive)
        matches = glob.glob([positive, *negatives], flags=GLOB_FLAGS, root_dir=str(root))
        for match in sorted(Path(m).as_posix() for m in matches):
            if match in seen:
                continue
            path = root / match
            if not path.is_file():
                continue
            seen.add(match)
            relative = PurePosixPath(match).relative_to(base).as_posix() if base else match
            selected.append(SelectedFile(path=path, source=match, relative=relative))
    return selected


def watch_roots(root: Path, patterns: tuple[str, ...] | list[str]) -> list[Path]:
    """Directories that must be observed to see changes for *patterns*."""
    roots: list[Path] = []
    for pattern in patterns:
        normalized = normalize_pattern(pattern)
        if normalized.startswith("!"):
            continue
        base = root / glob_base(normalized)
        if base not in roots:
            roots.append(base)
    return roots


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def write_asset(dest_dir: Path, asset: AssetFile) -> Path:
    """Write *asset* below *dest_dir*, creating parent directories.

    Returns the written path.
    """
    target = dest_dir / asset.relative
    if not target.resolve().is_relative_to(dest_dir.resolve()):
        msg = f"Output escapes destination: {target}"
        raise ValueError(msg)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(asset.contents)
    return target


def clear_directory(path: Path) -> int:
    """Delete everything inside *path*, keeping *path* itself.

    Returns the number of top-level entries removed. A missing directory
    counts as already clean.
    """
    if not path.exists():
        return 0
    removed = 0
    for child in sorted(path.iterdir()):
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
        removed += 1
    return removed

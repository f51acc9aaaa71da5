"""Kit templating — the CodeKit ``.kit`` language.

Kit is HTML plus special comments:

- ``<!-- @import header.kit, "nav" -->`` (or ``@include``) inlines other files,
  resolved relative to the importing file.
- ``<!-- $title = Home -->``, ``<!-- $title: Home -->`` or
  ``<!-- $title Home -->`` declares a variable (``@title`` also works).
- ``<!-- $title -->`` prints a variable.

Variables live in a single scope shared with imported files, in document
order. Every other comment passes through untouched.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from assetctl.domain.errors import TransformError

_SPECIAL_COMMENT = re.compile(r"<!--\s*(?P<body>[@$][\s\S]*?)\s*-->")
_IMPORT = re.compile(r"^@(?:import|include)\s+(?P<targets>.+)$", re.DOTALL)
_VARIABLE = re.compile(r"^(?P<name>[@$][A-Za-z0-9_-]+)(?:\s*[:=]\s*|\s+)?(?P<value>[\s\S]*)$")

# Raises FileNotFoundError when the path does not exist.
FileReader = Callable[[Path], str]


def _import_candidates(base_dir: Path, target: str) -> list[Path]:
    target_path = Path(target)
    names = [target_path.name]
    if not target_path.suffix:
        names.append(f"{target_path.name}.kit")
    names += [f"_{name}" for name in list(names)]
    return [base_dir / target_path.parent / name for name in names]


class KitRenderer:
    """Render a ``.kit`` document with its imports and variables.

    Args:
        read_file: Reads a template by path. Injected so the renderer
            itself performs no I/O.
    """

    def __init__(self, read_file: FileReader) -> None:
        self._read_file = read_file

    def render(self, path: Path, text: str | None = None) -> str:
        """Render the document at *path* (or *text*, when already loaded)."""
        if text is None:
            text = self._read_file(path)
        return self._render(path, text, variables={}, stack=(path.resolve(),))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _render(
        self,
        path: Path,
        text: str,
        *,
        variables: dict[str, str],
        stack: tuple[Path, ...],
    ) -> str:
        def substitute(match: re.Match[str]) -> str:
            body = match.group("body").strip()

            import_match = _IMPORT.match(body)
            if import_match is not None:
                return "".join(
                    self._render_import(path, target, variables=variables, stack=stack)
                    for target in _split_targets(import_match.group("targets"))
                )

            var_match = _VARIABLE.match(body)
            if var_match is None:
                return match.group(0)

            name = var_match.group("name")[1:]
            value = var_match.group("value").strip()
            if value:
                variables[name] = value
                return ""
            if name not in variables:
                raise TransformError(f"Undefined variable ${name}", path=str(path))
            return variables[name]

        return _SPECIAL_COMMENT.sub(substitute, text)

    def _render_import(
        self,
        path: Path,
        target: str,
        *,
        variables: dict[str, str],
        stack: tuple[Path, ...],
    ) -> str:
        for candidate in _import_candidates(path.parent, target):
            try:
                text = self._read_file(candidate)
            except (FileNotFoundError, IsADirectoryError):
                continue
            resolved = candidate.resolve()
            if resolved in stack:
                chain = " -> ".join(p.name for p in (*stack, resolved))
                raise TransformError(f"Circular import: {chain}", path=str(path))
            return self._render(candidate, text, variables=variables, stack=(*stack, resolved))
        raise TransformError(f"Imported file not found: {target}", path=str(path))


def _split_targets(raw: str) -> list[str]:
    """Split ``a.kit, "b c.kit", 'd'`` into bare file names."""
    targets: list[str] = []
    for part in raw.split(","):
        cleaned = part.strip().strip("'\"").strip()
        if cleaned:
            targets.append(cleaned)
    return targets

"""Vendor prefixing for stylesheet declarations.

Works on CSS or SCSS text. Prefixed copies are inserted on the same line
as the original declaration so line numbers, and with them the compiler's
source map, stay valid.
"""

from __future__ import annotations

import re

# Properties that still need vendor prefixes for the browsers we target.
VENDOR_PREFIXES: dict[str, tuple[str, ...]] = {
    "appearance": ("-webkit-", "-moz-"),
    "backdrop-filter": ("-webkit-",),
    "box-decoration-break": ("-webkit-",),
    "clip-path": ("-webkit-",),
    "hyphens": ("-webkit-", "-ms-"),
    "mask": ("-webkit-",),
    "mask-image": ("-webkit-",),
    "mask-size": ("-webkit-",),
    "print-color-adjust": ("-webkit-",),
    "tab-size": ("-moz-",),
    "text-size-adjust": ("-webkit-", "-moz-", "-ms-"),
    "user-select": ("-webkit-", "-moz-", "-ms-"),
}

_DECLARATION = re.compile(
    r"(?P<lead>^|[\s{;])"
    r"(?P<prop>" + "|".join(sorted(map(re.escape, VENDOR_PREFIXES), key=len, reverse=True)) + r")"
    r"(?P<sep>\s*:\s*)"
    r"(?P<value>[^;{}\n]+?)"
    r"(?P<end>\s*;|\s*(?=}))",
    re.MULTILINE,
)


def _expand(match: re.Match[str]) -> str:
    prop = match.group("prop")
    value = match.group("value").strip()
    prefixed = " ".join(f"{prefix}{prop}: {value};" for prefix in VENDOR_PREFIXES[prop])
    original = match.group(0)[len(match.group("lead")) :]
    return f"{match.group('lead')}{prefixed} {original}"


def add_vendor_prefixes(source: str) -> str:
    """Return *source* with prefixed copies of every listed declaration.

    Examples:
        >>> add_vendor_prefixes("a { user-select: none; }")
        'a { -webkit-user-select: none; -moz-user-select: none; -ms-user-select: none; user-select: none; }'
    """
    return _DECLARATION.sub(_expand, source)

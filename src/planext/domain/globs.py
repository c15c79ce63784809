"""Glob matching over absolute in-image paths.

Follows the glob dialect of JVM build tools rather than :mod:`fnmatch`:

- ``*`` matches any run of characters within one path segment
- ``**`` matches any run of characters across segments
- ``?`` matches one character other than ``/``
- ``{a,b}`` matches either alternative (no nesting)
- ``[abc]`` / ``[!abc]`` character classes within a segment
"""

from __future__ import annotations

import functools
import re


@functools.lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate *pattern* into an anchored regular expression."""
    if not pattern:
        msg = "Glob pattern must not be empty"
        raise ValueError(msg)

    out: list[str] = []
    i = 0
    in_group = False
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        elif ch == "{":
            if in_group:
                msg = f"Nested groups are not supported: {pattern!r}"
                raise ValueError(msg)
            in_group = True
            out.append("(?:")
        elif ch == "}" and in_group:
            in_group = False
            out.append(")")
        elif ch == "," and in_group:
            out.append("|")
        elif ch == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                msg = f"Unclosed character class: {pattern!r}"
                raise ValueError(msg)
            body = pattern[i + 1 : end]
            if body.startswith("!"):
                body = "^" + body[1:]
            body = body.replace("\\", "\\\\")
            # Classes never match the separator, negated or not.
            out.append(f"(?!/)[{body}]")
            i = end + 1
            continue
        elif ch == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        else:
            out.append(re.escape(ch))
        i += 1

    if in_group:
        msg = f"Unclosed group: {pattern!r}"
        raise ValueError(msg)
    try:
        return re.compile("".join(out) + r"\Z")
    except re.error as exc:
        msg = f"Invalid glob {pattern!r}: {exc}"
        raise ValueError(msg) from exc


def glob_matches(pattern: str, path: str) -> bool:
    """Return True if the whole of *path* matches *pattern*."""
    return compile_glob(pattern).match(path) is not None

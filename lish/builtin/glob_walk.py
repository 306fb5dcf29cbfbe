"""Depth-limited glob walking.

Absolute patterns are split at the first path component containing a glob
character; the literal prefix is the directory the walk starts from and the
rest is matched against paths relative to it. Relative patterns walk from
``.``. Patterns support ``*``, ``?``, ``[...]``, ``{a,b}`` alternatives and
``**`` for any number of directories. A pattern without a slash matches the
entry's base name at any depth; one with a slash matches the relative path.
"""

from __future__ import annotations

import logging
import os
from fnmatch import fnmatchcase
from pathlib import PurePath

from lish.errors import GlobError

logger = logging.getLogger(__name__)

GLOB_CHARS = ("*", "{", "}")


def split_pattern(pattern: str) -> tuple[str, str]:
    """Split into (base directory, glob suffix)."""
    path = PurePath(pattern)
    if not path.is_absolute():
        return ".", pattern
    base: list[str] = []
    rest: list[str] = []
    globbing = False
    for part in path.parts:
        if not globbing and any(c in part for c in GLOB_CHARS):
            globbing = True
        (rest if globbing else base).append(part)
    return str(PurePath(*base)), "/".join(rest)


def expand_braces(pattern: str) -> list[str]:
    start = pattern.find("{")
    if start < 0:
        if "}" in pattern:
            raise GlobError(pattern, "unbalanced '}'")
        return [pattern]
    depth = 0
    alternatives: list[str] = []
    current = start + 1
    for i in range(start, len(pattern)):
        ch = pattern[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                alternatives.append(pattern[current:i])
                prefix, suffix = pattern[:start], pattern[i + 1:]
                results: list[str] = []
                for alt in alternatives:
                    results.extend(expand_braces(prefix + alt + suffix))
                return results
        elif ch == "," and depth == 1:
            alternatives.append(pattern[current:i])
            current = i + 1
    raise GlobError(pattern, "unbalanced '{'")


def _match_parts(parts: list[str], pats: list[str]) -> bool:
    if not pats:
        return not parts
    if pats[0] == "**":
        return any(_match_parts(parts[i:], pats[1:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatchcase(parts[0], pats[0]) and _match_parts(parts[1:], pats[1:])


def matches(rel_path: str, pattern: str) -> bool:
    parts = rel_path.split("/")
    if "/" not in pattern:
        return fnmatchcase(parts[-1], pattern)
    return _match_parts(parts, pattern.strip("/").split("/"))


def walk(pattern: str, max_depth: int = 1) -> list[str]:
    """Return the paths under the pattern's base that match, at most ``max_depth`` deep."""
    base, suffix = split_pattern(pattern)
    if not suffix:
        return [base] if os.path.exists(base) else []
    patterns = expand_braces(suffix)
    logger.debug("glob walk from %s for %r (depth %d)", base, patterns, max_depth)

    results: list[str] = []
    if max_depth < 1 or not os.path.isdir(base):
        return results
    for root, dirs, files in os.walk(base):
        rel_root = os.path.relpath(root, base)
        depth = 0 if rel_root == "." else rel_root.count(os.sep) + 1
        dirs.sort()
        for name in sorted(dirs + files):
            rel = name if depth == 0 else f"{rel_root.replace(os.sep, '/')}/{name}"
            if any(matches(rel, p) for p in patterns):
                results.append(os.path.join(root, name))
        if depth + 1 >= max_depth:
            dirs[:] = []
    return results

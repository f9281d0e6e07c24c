"""
Glob matching for tip patterns.

Tip patterns use editor-style globs such as ``**/*.md`` or
``{**/*.ts,**/*.tsx}``. Brace alternatives are expanded here; each
alternative is then matched with gitignore semantics via pathspec,
where a leading ``**/`` also matches files at the root. A leading ``!``
or ``#`` is matched literally rather than as negation or comment.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

import pathspec

GlobMatcher = Callable[[str, str], bool]


def expand_braces(pattern: str) -> list[str]:
    """
    Expand ``{a,b}`` alternatives in a glob pattern.

    Nested groups are supported. Unbalanced braces are left untouched.

    Example:
        >>> expand_braces("{**/*.ts,**/*.tsx}")
        ['**/*.ts', '**/*.tsx']
        >>> expand_braces("src/*.{c,h}")
        ['src/*.c', 'src/*.h']
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    parts: list[str] = []
    last = start + 1
    for idx in range(start, len(pattern)):
        char = pattern[idx]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                parts.append(pattern[last:idx])
                prefix, suffix = pattern[:start], pattern[idx + 1:]
                expanded: list[str] = []
                for part in parts:
                    expanded.extend(expand_braces(prefix + part + suffix))
                return expanded
        elif char == "," and depth == 1:
            parts.append(pattern[last:idx])
            last = idx + 1

    return [pattern]


def _literal_prefix(pattern: str) -> str:
    # gitignore reads a leading ! as negation and a leading # as a comment
    if pattern.startswith(("!", "#")):
        return "\\" + pattern
    return pattern


@lru_cache(maxsize=512)
def _compile(pattern: str) -> pathspec.PathSpec:
    lines = [_literal_prefix(p) for p in expand_braces(pattern)]
    return pathspec.PathSpec.from_lines("gitignore", lines)


def match_glob(pattern: str, path: str) -> bool:
    """
    Check whether path matches a tip glob pattern.

    Compiled patterns are cached. A pattern pathspec can't compile raises
    its error to the caller.

    Args:
        pattern: Glob pattern (e.g. ``**/*.md``)
        path: File system path of the document

    Returns:
        True if the path matches

    Example:
        >>> match_glob("**/*.md", "README.md")
        True
        >>> match_glob("**/*.md", "/home/me/project/src/app.ts")
        False
    """
    if not pattern or not path:
        return False
    return _compile(pattern).match_file(path)

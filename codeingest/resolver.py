"""Glob-based file set resolution with dependency/build directory exclusion."""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Sequence

from .errors import InvalidPathError

EXCLUDED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        "bower_components",
        "_build",
        "deps",
        "vendor",
        "__pycache__",
        ".venv",
        "venv",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
        "dist",
        "build",
        "target",
        "bin",
        "obj",
        ".next",
        ".nuxt",
        ".svelte-kit",
    }
)


def resolve(root: str | Path, pattern: str, exclude: Iterable[str] = ()) -> List[str]:
    """Return sorted POSIX paths (relative to ``root``) matching ``pattern``.

    ``pattern`` is a recursive glob: ``**`` spans directories, ``*`` and ``?``
    stay within one segment and ``{a,b}`` lists alternatives. Paths with any
    segment in the excluded set never appear. A missing root yields ``[]``.
    """
    return match_paths(list_files(root, exclude), pattern)


def list_files(root: str | Path, exclude: Iterable[str] = ()) -> List[str]:
    """Walk ``root`` once and return every non-excluded file as a relative POSIX path."""
    root_path = Path(root)
    if not root_path.is_dir():
        return []
    excluded = EXCLUDED_DIRS | {name for name in exclude if name}
    return sorted(_iter_files(root_path, excluded))


def coerce_root(path: Any) -> Path:
    """Validate an analysis root argument and return it as a :class:`Path`."""
    if not isinstance(path, (str, os.PathLike)):
        raise InvalidPathError(f"Expected a path string, got {type(path).__name__}")
    text = os.fspath(path)
    if isinstance(text, bytes) or not text.strip():
        raise InvalidPathError("Path must be a non-empty string")
    return Path(text).expanduser()


def match_paths(paths: Sequence[str], pattern: str) -> List[str]:
    regex = glob_to_regex(pattern)
    return [path for path in paths if regex.fullmatch(path)]


def _iter_files(root: Path, excluded: frozenset[str] | set[str]) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        dirnames[:] = [name for name in dirnames if name not in excluded]

        for filename in filenames:
            if filename in excluded:
                continue
            yield f"{rel_dir}/{filename}" if rel_dir else filename


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a recursive glob into an anchored regular expression."""
    pattern = pattern.strip()
    if pattern.startswith("./"):
        pattern = pattern[2:]
    parts: List[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
            continue
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "{":
            end = pattern.find("}", index)
            if end == -1:
                parts.append(re.escape(char))
            else:
                options = pattern[index + 1 : end].split(",")
                parts.append("(?:" + "|".join(re.escape(option) for option in options) + ")")
                index = end + 1
                continue
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile("".join(parts))


__all__ = ["EXCLUDED_DIRS", "coerce_root", "glob_to_regex", "list_files", "match_paths", "resolve"]

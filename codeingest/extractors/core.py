"""Shared helpers for pattern extractors."""

from __future__ import annotations

import re
from functools import cached_property
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..resolver import list_files, match_paths

MAX_FILE_SIZE = 1_000_000
MAX_FIELDS = 20

HTTP_VERBS = ("GET", "POST", "PUT", "PATCH", "DELETE")

_DUNDER = re.compile(r"^__\w+__$")

logger = get_logger("extractors")


class SourceTree:
    """Read-only view of an analyzed tree with a per-analysis read cache."""

    def __init__(self, root: str | Path, exclude: Iterable[str] = ()) -> None:
        self.root = Path(root)
        self._exclude = tuple(exclude)
        self._cache: Dict[str, Optional[str]] = {}

    @cached_property
    def files(self) -> List[str]:
        return list_files(self.root, self._exclude)

    def find(self, *patterns: str) -> List[str]:
        """Return files matching any of ``patterns``, in pattern order without repeats."""
        seen: Dict[str, None] = {}
        for pattern in patterns:
            for path in match_paths(self.files, pattern):
                seen.setdefault(path, None)
        return list(seen)

    def read(self, relative: str) -> Optional[str]:
        """Return file text, or None when the file cannot be read."""
        if relative in self._cache:
            return self._cache[relative]
        text = self._load(relative)
        self._cache[relative] = text
        return text

    def exists(self, relative: str) -> bool:
        return (self.root / relative).exists()

    def iter_texts(self, paths: Iterable[str]) -> Iterator[Tuple[str, str]]:
        """Yield ``(path, text)`` for each readable path, skipping the rest."""
        for path in paths:
            text = self.read(path)
            if text is None:
                continue
            yield path, text

    def _load(self, relative: str) -> Optional[str]:
        path = self.root / relative
        try:
            if path.stat().st_size > MAX_FILE_SIZE:
                logger.debug("Skipping oversized file %s", relative)
                return None
            return path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            logger.debug("Unable to read %s: %s", relative, exc)
            return None


Extractor = Callable[[SourceTree], list]


def unique(names: Iterable[str]) -> Tuple[str, ...]:
    """De-duplicate while keeping first-seen order."""
    return tuple(dict.fromkeys(name for name in names if name))


def is_dunder(name: str) -> bool:
    return bool(_DUNDER.match(name))


def stem(path: str, *suffixes: str) -> str:
    """Return the file name without directory and the first matching suffix."""
    name = PurePosixPath(path).name
    for suffix in suffixes:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return PurePosixPath(name).stem


def balanced_span(text: str, open_index: int, opener: str = "{", closer: str = "}") -> Optional[str]:
    """Return the text between the delimiter at ``open_index`` and its matching closer.

    Nested pairs of the same delimiter are skipped, so a body containing inner
    blocks is captured whole. Returns None when the closer never appears.
    """
    if open_index >= len(text) or text[open_index] != opener:
        return None
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[open_index + 1 : index]
    return None


def flatten_nested(body: str, opener: str = "{", closer: str = "}") -> str:
    """Blank out nested delimiter content so only top-level entries remain."""
    result: List[str] = []
    depth = 0
    for char in body:
        if char == opener:
            if depth == 0:
                result.append(opener)
            depth += 1
            continue
        if char == closer and depth:
            depth -= 1
            if depth == 0:
                result.append(closer)
            continue
        if depth == 0:
            result.append(char)
    return "".join(result)


def split_top_level(body: str, separators: str = ",\n") -> List[str]:
    """Split ``body`` on separators that sit outside any bracket pair."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    for char in body:
        if char in "{[(<":
            depth += 1
        elif char in "}])>" and depth:
            depth -= 1
        if char in separators and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    return [part for part in parts if part]


def indented_block(text: str, index: int) -> str:
    """Return the indentation-delimited body that starts on the line after ``index``."""
    newline = text.find("\n", index)
    if newline == -1:
        return ""
    lines: List[str] = []
    body_indent: Optional[int] = None
    for line in text[newline + 1 :].splitlines():
        stripped = line.strip()
        if not stripped:
            lines.append(line)
            continue
        indent = len(line) - len(line.lstrip())
        if body_indent is None:
            if indent == 0:
                break
            body_indent = indent
        elif indent < body_indent:
            break
        lines.append(line)
    return "\n".join(lines)


def next_name(pattern: re.Pattern[str], text: str, position: int, window: int = 800) -> Optional[str]:
    """Return the first capture of ``pattern`` found shortly after ``position``."""
    match = pattern.search(text, position, position + window)
    return match.group(1) if match else None


def join_paths(prefix: str, route: str) -> str:
    """Combine class-level and method-level route paths."""
    prefix = (prefix or "").strip()
    route = (route or "").strip()
    if not prefix:
        return route or "/"
    if not route:
        return prefix
    return prefix.rstrip("/") + "/" + route.lstrip("/")


def quoted_strings(text: str) -> List[str]:
    return [match.group(2) for match in re.finditer(r"(['\"])([^'\"]*)\1", text)]


def method_list(text: str, default: Sequence[str] = ("GET",)) -> List[str]:
    """Return upper-cased HTTP verbs quoted inside ``text`` or ``default`` when none."""
    verbs = [value.upper() for value in quoted_strings(text) if value.upper() in HTTP_VERBS]
    return verbs or list(default)


__all__ = [
    "Extractor",
    "HTTP_VERBS",
    "MAX_FIELDS",
    "SourceTree",
    "balanced_span",
    "flatten_nested",
    "indented_block",
    "is_dunder",
    "join_paths",
    "method_list",
    "next_name",
    "quoted_strings",
    "split_top_level",
    "stem",
    "unique",
]

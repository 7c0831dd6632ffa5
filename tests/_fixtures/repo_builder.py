"""Helper utilities for constructing temporary codebases in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping

from codeingest.extractors import SourceTree


class RepoBuilder:
    """Utility for writing files into a throwaway codebase and viewing it as a source tree."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the codebase."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def tree(self, exclude: Iterable[str] = ()) -> SourceTree:
        """Return a fresh source tree over the codebase contents."""
        return SourceTree(self.root, exclude)

    def path(self) -> Path:
        """Return the codebase root path."""
        return self.root


__all__ = ["RepoBuilder"]

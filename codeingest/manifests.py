"""Project manifest and README readers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .dispatcher import resolve_config_reader
from .extractors import SourceTree
from .logging import get_logger

README_CANDIDATES = ("README.md", "readme.md", "README", "README.txt")

logger = get_logger("manifests")


def read_config(tree: SourceTree, language: str) -> dict:
    """Return ``{"app_name": ..., "type": ...}`` style metadata for ``language``."""
    return resolve_config_reader(language)(tree)


def read_readme(root: Path) -> Optional[str]:
    """Return the first README found at ``root``, or None."""
    for name in README_CANDIDATES:
        path = Path(root) / name
        if not path.is_file():
            continue
        try:
            return path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            logger.debug("Unable to read %s: %s", name, exc)
    return None


__all__ = ["README_CANDIDATES", "read_config", "read_readme"]

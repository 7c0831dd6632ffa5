"""Language-agnostic route fallback used when no framework extractor applies."""

from __future__ import annotations

import re
from typing import List, Set, Tuple

from ..models import Route
from .core import SourceTree

GENERIC_PATTERNS = (
    "**/*.py",
    "**/*.js",
    "**/*.ts",
    "**/*.rb",
    "**/*.go",
    "**/*.java",
    "**/*.php",
    "**/*.rs",
    "**/*.cs",
    "**/*.ex",
)

# A verb token directly followed by a quoted absolute path.
_GENERIC_ROUTE = re.compile(
    r"(?<!\w)(GET|POST|PUT|PATCH|DELETE|get|post|put|patch|delete)\s*[(\[]\s*['\"](/[^'\"\s]*)['\"]"
)


def extract_generic_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    seen: Set[Tuple[str, str, str]] = set()
    for file, content in tree.iter_texts(tree.find(*GENERIC_PATTERNS)):
        for match in _GENERIC_ROUTE.finditer(content):
            method = match.group(1).upper()
            key = (method, match.group(2), file)
            if key in seen:
                continue
            seen.add(key)
            routes.append(Route(method=method, path=match.group(2), file=file))
    return routes


__all__ = ["GENERIC_PATTERNS", "extract_generic_routes"]

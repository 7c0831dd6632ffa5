"""Feature extraction and documentation gap detection over an analysis result."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Sequence

from .logging import get_logger
from .models import CodebaseAnalysis

GAP_REASON = "Feature exists in code but no documentation found"
DOCUMENT_PATTERNS = ("*.md", "*.markdown", "*.html")

_PARAMETER = re.compile(r"^(?::\w+|\{[^}]*\}|\[[^\]]*\]|<[^>]*>|\*\w*)$")
_SEPARATORS = re.compile(r"[\s_\-]+")
_HEADING = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)
_HTML_TITLE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)

logger = get_logger("curriculum")


@dataclass(frozen=True)
class Document:
    """A flat documentation record compared against code features."""

    title: str
    content: str
    source: str


@dataclass(frozen=True)
class Feature:
    name: str
    type: str
    path: Optional[str] = None
    method: Optional[str] = None


@dataclass(frozen=True)
class Gap:
    feature: str
    type: str
    priority: str = "high"
    reason: str = GAP_REASON


def path_to_feature_name(path: str) -> str:
    """Title-case the first two literal segments of a route path (``/user_profile`` -> ``User Profile``)."""
    segments = [segment for segment in path.strip("/").split("/") if segment and not _PARAMETER.match(segment)]
    words = _SEPARATORS.split(" ".join(segments[:2]))
    name = " ".join(word.capitalize() for word in words if word)
    return name or "Home"


def extract_features(analysis: CodebaseAnalysis) -> List[Feature]:
    features: List[Feature] = [
        Feature(name=path_to_feature_name(route.path), type="route", path=route.path, method=route.method)
        for route in analysis.routes
    ]
    features.extend(Feature(name=model.name.split(".")[-1], type="entity") for model in analysis.models)
    for component in analysis.components:
        short_name = component.name.split(".")[-1]
        if component.events:
            features.append(Feature(name=short_name.replace("Live", "") or short_name, type="live_view"))
        else:
            features.append(Feature(name=short_name, type="component"))
    features.extend(
        Feature(name=controller.name.split(".")[-1].replace("Controller", "") or controller.name, type="controller")
        for controller in analysis.controllers
    )
    return features


def tokenize(text: str) -> FrozenSet[str]:
    """Lower-case word tokens, treating underscores and hyphens as spaces."""
    return frozenset(token for token in _SEPARATORS.split(text.lower()) if token)


def identify_gaps(features: Iterable[Feature], documents: Sequence[Document]) -> List[Gap]:
    """Return a gap for every feature whose words appear in no document title."""
    title_tokens = frozenset().union(*(tokenize(document.title) for document in documents))
    return [
        Gap(feature=feature.name, type=feature.type)
        for feature in features
        if tokenize(feature.name).isdisjoint(title_tokens)
    ]


def load_documents(directory: str | Path) -> List[Document]:
    """Read markdown and HTML files under ``directory`` as :class:`Document` records."""
    root = Path(directory)
    if not root.is_dir():
        logger.debug("Documentation directory %s does not exist", root)
        return []
    documents: List[Document] = []
    paths = sorted({path for pattern in DOCUMENT_PATTERNS for path in root.rglob(pattern) if path.is_file()})
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            logger.debug("Unable to read %s: %s", path, exc)
            continue
        documents.append(
            Document(title=_document_title(path, content), content=content, source=path.relative_to(root).as_posix())
        )
    return documents


def _document_title(path: Path, content: str) -> str:
    match = _HTML_TITLE.search(content) if path.suffix == ".html" else _HEADING.search(content)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return path.stem.replace("_", " ").replace("-", " ")


__all__ = [
    "Document",
    "Feature",
    "Gap",
    "extract_features",
    "identify_gaps",
    "load_documents",
    "path_to_feature_name",
    "tokenize",
]

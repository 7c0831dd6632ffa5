"""Single-pass codebase analysis: detect the stack, then extract each category in parallel."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

from .config import CATEGORIES, IngestConfig, load_config_or_default
from .detector import detect_tree_stack
from .dispatcher import resolve_extractor
from .extractors import SourceTree
from .logging import get_logger
from .manifests import read_config, read_readme
from .models import UNKNOWN, CodebaseAnalysis
from .resolver import coerce_root

logger = get_logger("analyzer")


def analyze(path: Any, *, config: Optional[IngestConfig] = None) -> CodebaseAnalysis:
    """Analyze the tree at ``path`` and return an immutable :class:`CodebaseAnalysis`.

    Raises :class:`~codeingest.errors.InvalidPathError` when ``path`` is not a
    usable path argument. A path that does not exist still yields a result with
    ``language == "unknown"`` and empty collections.
    """
    root = coerce_root(path)
    if not root.is_dir():
        logger.info("Nothing to analyze at %s", root)
        return CodebaseAnalysis(path=str(root), language=UNKNOWN, framework=None)

    config = config or load_config_or_default(root)
    tree = SourceTree(root, config.exclude_paths)
    logger.info("Analyzing %s", root)
    # Walk once up front so worker threads share one listing.
    logger.debug("Resolver listed %d files", len(tree.files))

    language, framework = detect_tree_stack(tree, config.sample_limits)
    logger.info("Detected %s/%s", language, framework or "-")

    results = _extract_all(tree, language, framework, config)
    analysis = CodebaseAnalysis(
        path=str(root),
        language=language,
        framework=framework,
        routes=tuple(results.get("routes", ())),
        models=tuple(results.get("models", ())),
        controllers=tuple(results.get("controllers", ())),
        components=tuple(results.get("components", ())),
        services=tuple(results.get("services", ())),
        config=results.get("config") or {},
        readme=read_readme(root),
    )
    logger.debug("Extracted %s", ", ".join(f"{key}={value}" for key, value in analysis.counts().items()))
    return analysis


def _extract_all(
    tree: SourceTree, language: str, framework: Optional[str], config: IngestConfig
) -> Dict[str, Any]:
    futures: Dict[str, Future] = {}
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        for category in CATEGORIES:
            if not config.category_enabled(category):
                continue
            extractor = resolve_extractor(category, language, framework)
            logger.debug("Running %s for %s", extractor.__name__, category)
            futures[category] = executor.submit(extractor, tree)
        futures["config"] = executor.submit(read_config, tree, language)

    results: Dict[str, Any] = {}
    for name, future in futures.items():
        try:
            results[name] = future.result()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Extraction of %s failed: %s", name, exc)
            results[name] = {} if name == "config" else []
    return results


__all__ = ["analyze"]

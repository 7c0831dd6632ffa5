"""Primary language and framework detection from manifest files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import SampleLimits, load_config_or_default
from .extractors import SourceTree
from .logging import get_logger
from .models import UNKNOWN, Stack
from .resolver import coerce_root

logger = get_logger("detector")

_PYTHON_MANIFESTS = ("requirements.txt", "pyproject.toml", "setup.py")
_JAVA_MANIFESTS = ("pom.xml", "build.gradle", "build.gradle.kts")

# Ordered (needle, framework) pairs; the first needle found wins.
_PYTHON_FRAMEWORKS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("django",), "django"),
    (("fastapi", "FastAPI"), "fastapi"),
    (("flask", "Flask"), "flask"),
)
_NODE_FRAMEWORKS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("next",), "nextjs"),
    (("nuxt",), "nuxt"),
    (("svelte", "@sveltejs/kit"), "svelte"),
    (("vue",), "vue"),
    (("react",), "react"),
    (("express",), "express"),
    (("fastify",), "fastify"),
    (("hono",), "hono"),
)
_GO_FRAMEWORKS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("github.com/gin-gonic/gin",), "gin"),
    (("github.com/labstack/echo",), "echo"),
    (("github.com/gofiber/fiber",), "fiber"),
    (("github.com/gorilla/mux",), "gorilla"),
)
_RUST_FRAMEWORKS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("actix-web",), "actix"),
    (("axum",), "axum"),
    (("rocket",), "rocket"),
    (("warp",), "warp"),
)
_JAVA_FRAMEWORKS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("spring",), "spring"),
    (("quarkus",), "quarkus"),
    (("micronaut",), "micronaut"),
)
_PHP_FRAMEWORKS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("laravel",), "laravel"),
    (("symfony",), "symfony"),
)


def detect_stack(path: str | Path, limits: Optional[SampleLimits] = None) -> Stack:
    """Return ``(language, framework)`` for the tree rooted at ``path``.

    Honours ``exclude_paths`` and ``sample_limits`` from ``.codeingest.yml`` the
    same way :func:`~codeingest.analyzer.analyze` does; ``limits`` overrides the latter.
    """
    root = coerce_root(path)
    config = load_config_or_default(root)
    return detect_tree_stack(SourceTree(root, config.exclude_paths), limits or config.sample_limits)


def detect_tree_stack(tree: SourceTree, limits: Optional[SampleLimits] = None) -> Stack:
    limits = limits or SampleLimits()
    for check in _checks(limits):
        stack = check(tree)
        if stack is not None:
            logger.debug("Detected stack %s/%s", stack[0], stack[1])
            return stack
    return UNKNOWN, None


def _checks(limits: SampleLimits) -> List[Callable[[SourceTree], Optional[Stack]]]:
    return [
        _detect_elixir,
        lambda tree: _detect_python(tree, limits.python),
        _detect_ruby,
        _detect_node,
        _detect_go,
        _detect_rust,
        lambda tree: _detect_java(tree, limits.java),
        _detect_php,
        _detect_csharp,
    ]


def _first_framework(content: str, table: Sequence[Tuple[Tuple[str, ...], str]], default: Optional[str]) -> Optional[str]:
    for needles, framework in table:
        if any(needle in content for needle in needles):
            return framework
    return default


def _sample(tree: SourceTree, manifests: Sequence[str], suffixes: Tuple[str, ...], limit: int) -> str:
    """Join root manifests plus the first ``limit`` other files with the given suffixes."""
    present = [name for name in manifests if tree.exists(name)]
    sampled = [path for path in tree.files if path.endswith(suffixes) and path not in present]
    return "\n".join(text for _, text in tree.iter_texts(present + sampled[:limit]))


def _detect_elixir(tree: SourceTree) -> Optional[Stack]:
    if not tree.exists("mix.exs"):
        return None
    content = tree.read("mix.exs") or ""
    return "elixir", "phoenix" if ":phoenix" in content else "elixir"


def _detect_python(tree: SourceTree, limit: int) -> Optional[Stack]:
    if not any(tree.exists(name) for name in _PYTHON_MANIFESTS):
        return None
    content = _sample(tree, _PYTHON_MANIFESTS, (".py", ".txt", ".toml"), limit)
    return "python", _first_framework(content, _PYTHON_FRAMEWORKS, "python")


def _detect_ruby(tree: SourceTree) -> Optional[Stack]:
    if not tree.exists("Gemfile"):
        return None
    rails = tree.exists("config/routes.rb") or tree.exists("bin/rails")
    return "ruby", "rails" if rails else "ruby"


def _detect_node(tree: SourceTree) -> Optional[Stack]:
    if not tree.exists("package.json"):
        return None
    dependencies = _node_dependencies(tree.read("package.json"))
    language = "typescript" if "typescript" in dependencies else "javascript"
    for names, framework in _NODE_FRAMEWORKS:
        if any(name in dependencies for name in names):
            return language, framework
    return language, None


def _node_dependencies(content: Optional[str]) -> Dict[str, object]:
    if not content:
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.debug("Unable to parse package.json: %s", exc)
        return {}
    if not isinstance(data, dict):
        return {}
    merged: Dict[str, object] = {}
    for key in ("dependencies", "devDependencies"):
        section = data.get(key)
        if isinstance(section, dict):
            merged.update(section)
    return merged


def _detect_go(tree: SourceTree) -> Optional[Stack]:
    if not tree.exists("go.mod"):
        return None
    return "go", _first_framework(tree.read("go.mod") or "", _GO_FRAMEWORKS, "go")


def _detect_rust(tree: SourceTree) -> Optional[Stack]:
    if not tree.exists("Cargo.toml"):
        return None
    return "rust", _first_framework(tree.read("Cargo.toml") or "", _RUST_FRAMEWORKS, "rust")


def _detect_java(tree: SourceTree, limit: int) -> Optional[Stack]:
    if not any(tree.exists(name) for name in _JAVA_MANIFESTS):
        return None
    content = _sample(tree, _JAVA_MANIFESTS, (".xml", ".gradle", ".kts", ".java"), limit)
    return "java", _first_framework(content, _JAVA_FRAMEWORKS, "java")


def _detect_php(tree: SourceTree) -> Optional[Stack]:
    if not tree.exists("composer.json"):
        return None
    return "php", _first_framework(tree.read("composer.json") or "", _PHP_FRAMEWORKS, "php")


def _detect_csharp(tree: SourceTree) -> Optional[Stack]:
    if any(path.endswith((".csproj", ".sln")) and "/" not in path for path in tree.files):
        return "csharp", "dotnet"
    return None


__all__ = ["detect_stack", "detect_tree_stack"]

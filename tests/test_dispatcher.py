"""Tests for extractor lookup tables."""

from __future__ import annotations

import pytest

from codeingest import extractors as ex
from codeingest.dispatcher import TABLES, resolve_config_reader, resolve_extractor
from tests._fixtures.repo_builder import RepoBuilder


@pytest.mark.parametrize(
    ("category", "language", "framework", "expected"),
    [
        ("routes", "elixir", "phoenix", ex.extract_phoenix_routes),
        ("models", "python", "django", ex.extract_django_models),
        ("models", "python", "flask", ex.extract_python_models),
        ("components", "typescript", "nextjs", ex.extract_react_components),
        ("controllers", "go", "gin", ex.extract_go_handlers),
        ("routes", "rust", "rocket", ex.extract_rust_attribute_routes),
    ],
)
def test_exact_pair_then_language_default(category, language, framework, expected) -> None:
    assert resolve_extractor(category, language, framework) is expected


@pytest.mark.parametrize(
    ("language", "framework"),
    [("python", "python"), ("unknown", None), ("rust", "warp"), ("javascript", None)],
)
def test_routes_fall_back_to_generic_scan(language, framework) -> None:
    assert resolve_extractor("routes", language, framework) is ex.extract_generic_routes


def test_other_categories_have_no_fallback(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"main.go": "package main\n"})

    for category in ("models", "controllers", "components", "services"):
        extractor = resolve_extractor(category, "unknown", None)
        assert extractor(repo_builder.tree()) == []

    assert resolve_extractor("components", "go", "gin")(repo_builder.tree()) == []


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(ValueError, match="widgets"):
        resolve_extractor("widgets", "python", None)


def test_config_readers(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"go.mod": "module example.com/api\n"})
    tree = repo_builder.tree()

    assert resolve_config_reader("go")(tree) == {"app_name": "example.com/api", "type": "go"}
    assert resolve_config_reader("unknown")(tree) == {}


def test_every_table_entry_is_callable() -> None:
    for table in TABLES.values():
        assert all(callable(extractor) for extractor in table.values())

"""Tests for the language-agnostic route fallback."""

from __future__ import annotations

from codeingest.extractors import extract_generic_routes
from tests._fixtures.repo_builder import RepoBuilder


def test_generic_routes_need_absolute_paths_and_dedupe(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "app.js": """
            app.get('/users', list);
            app.get('/users', other);
            router.post("/orders", create);
            client.get('relative');
            """,
            "routes.py": """
            @get('/health')
            def health():
                return target('/not-a-route')
            """,
            "README.md": "GET('/docs')\n",
        }
    )

    routes = extract_generic_routes(repo_builder.tree())

    assert [(route.method, route.path, route.file) for route in routes] == [
        ("GET", "/health", "routes.py"),
        ("GET", "/users", "app.js"),
        ("POST", "/orders", "app.js"),
    ]
    assert all(route.handler is None for route in routes)

"""Tests for glob resolution and directory exclusion."""

from __future__ import annotations

from pathlib import Path

import pytest

from codeingest.errors import InvalidPathError
from codeingest.resolver import coerce_root, glob_to_regex, resolve
from tests._fixtures.repo_builder import RepoBuilder


def test_resolve_matches_recursive_and_root_files(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "app.py": "",
            "pkg/models.py": "",
            "pkg/sub/views.py": "",
            "README.md": "",
        }
    )

    assert resolve(repo_builder.path(), "**/*.py") == ["app.py", "pkg/models.py", "pkg/sub/views.py"]
    assert resolve(repo_builder.path(), "pkg/*.py") == ["pkg/models.py"]


def test_resolve_supports_brace_alternatives(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.js": "", "b.ts": "", "c.tsx": "", "d.rb": ""})

    assert resolve(repo_builder.path(), "**/*.{js,ts}") == ["a.js", "b.ts"]


def test_resolve_never_returns_excluded_directories(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/index.js": "",
            "node_modules/lib/index.js": "",
            "deps/plug/lib/plug.ex": "",
            "_build/dev/app.ex": "",
            "vendor/bundle/gem.rb": "",
            "src/__pycache__/mod.py": "",
        }
    )

    found = resolve(repo_builder.path(), "**/*")
    assert found == ["src/index.js"]


def test_resolve_honours_extra_exclusions(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/app.py": "", "generated/api.py": ""})

    assert resolve(repo_builder.path(), "**/*.py", exclude=["generated"]) == ["src/app.py"]


def test_resolve_returns_empty_for_missing_root(tmp_path: Path) -> None:
    assert resolve(tmp_path / "missing", "**/*") == []


def test_glob_single_star_stays_within_segment() -> None:
    regex = glob_to_regex("lib/*.ex")
    assert regex.fullmatch("lib/app.ex")
    assert not regex.fullmatch("lib/app/accounts.ex")


@pytest.mark.parametrize("value", [None, "", "   ", 42, b"bytes"])
def test_coerce_root_rejects_unusable_values(value: object) -> None:
    with pytest.raises(InvalidPathError):
        coerce_root(value)


def test_coerce_root_accepts_path_objects(tmp_path: Path) -> None:
    assert coerce_root(tmp_path) == tmp_path

"""Tests for stack detection."""

from __future__ import annotations

import json

import pytest

from codeingest import analyze
from codeingest.config import SampleLimits
from codeingest.detector import detect_stack
from codeingest.errors import InvalidPathError
from tests._fixtures.repo_builder import RepoBuilder


def test_requirements_mentioning_flask_detects_flask(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"requirements.txt": "flask==3.0\n"})

    assert detect_stack(repo_builder.path()) == ("python", "flask")


def test_django_wins_over_flask(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"requirements.txt": "flask\ndjango>=4\n"})

    assert detect_stack(repo_builder.path()) == ("python", "django")


def test_plain_python_defaults_to_language_name(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"pyproject.toml": '[project]\nname = "tool"\n'})

    assert detect_stack(repo_builder.path()) == ("python", "python")


def test_python_sampling_respects_limit(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"setup.py": "from setuptools import setup\n", "z/app.py": "import fastapi\n"})

    assert detect_stack(repo_builder.path(), SampleLimits(python=0)) == ("python", "python")
    assert detect_stack(repo_builder.path()) == ("python", "fastapi")


def test_gemfile_beats_package_json(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Gemfile": "gem 'rails'\n",
            "package.json": json.dumps({"dependencies": {"react": "18"}}),
            "config/routes.rb": "Rails.application.routes.draw do\nend\n",
        }
    )

    assert detect_stack(repo_builder.path()) == ("ruby", "rails")


def test_phoenix_from_mix_file(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"mix.exs": "defp deps do\n  [{:phoenix, \"~> 1.7\"}]\nend\n"})

    assert detect_stack(repo_builder.path()) == ("elixir", "phoenix")


@pytest.mark.parametrize(
    ("dependencies", "expected"),
    [
        ({"dependencies": {"next": "14", "react": "18"}, "devDependencies": {"typescript": "5"}}, ("typescript", "nextjs")),
        ({"dependencies": {"@sveltejs/kit": "2"}}, ("javascript", "svelte")),
        ({"dependencies": {"express": "4"}}, ("javascript", "express")),
        ({"dependencies": {"lodash": "4"}}, ("javascript", None)),
    ],
)
def test_node_frameworks(repo_builder: RepoBuilder, dependencies: dict, expected: tuple) -> None:
    repo_builder.write({"package.json": json.dumps(dependencies)})

    assert detect_stack(repo_builder.path()) == expected


def test_go_framework_from_module_file(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"go.mod": "module example.com/api\n\nrequire github.com/gin-gonic/gin v1.9.1\n"})

    assert detect_stack(repo_builder.path()) == ("go", "gin")


def test_rust_java_and_php(tmp_path) -> None:
    cases = {
        "rust": ("Cargo.toml", '[dependencies]\naxum = "0.7"\n', ("rust", "axum")),
        "java": ("pom.xml", "<artifactId>spring-boot-starter-web</artifactId>", ("java", "spring")),
        "php": ("composer.json", '{"require": {"laravel/framework": "^11"}}', ("php", "laravel")),
    }
    for name, (manifest, content, expected) in cases.items():
        root = tmp_path / name
        root.mkdir()
        (root / manifest).write_text(content, encoding="utf-8")
        assert detect_stack(root) == expected


def test_csproj_in_root_detects_dotnet(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"Api.csproj": "<Project Sdk=\"Microsoft.NET.Sdk.Web\" />\n"})

    assert detect_stack(repo_builder.path()) == ("csharp", "dotnet")


def test_unrecognised_tree_is_unknown(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"notes.txt": "hello\n"})

    assert detect_stack(repo_builder.path()) == ("unknown", None)


def test_detect_rejects_invalid_path() -> None:
    with pytest.raises(InvalidPathError):
        detect_stack("")


def test_config_file_exclusions_apply_to_detection(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"requirements.txt": "flask\n", "legacy/old.py": "import django\n"})
    assert detect_stack(repo_builder.path()) == ("python", "django")

    repo_builder.write({".codeingest.yml": "exclude_paths: [legacy]\n"})

    assert detect_stack(repo_builder.path()) == ("python", "flask")
    assert analyze(repo_builder.path()).stack == ("python", "flask")


def test_config_file_sample_limits_apply_to_detection(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "setup.py": "from setuptools import setup\n",
            "z/app.py": "import fastapi\n",
            ".codeingest.yml": "sample_limits:\n  python: 0\n",
        }
    )

    assert detect_stack(repo_builder.path()) == ("python", "python")
    assert detect_stack(repo_builder.path(), SampleLimits(python=5)) == ("python", "fastapi")

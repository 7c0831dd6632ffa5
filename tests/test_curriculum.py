"""Tests for feature extraction and documentation gap detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from codeingest.curriculum import (
    Document,
    Feature,
    Gap,
    extract_features,
    identify_gaps,
    load_documents,
    path_to_feature_name,
    tokenize,
)
from codeingest.models import CodebaseAnalysis, Component, Controller, Model, Route


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/user_profile", "User Profile"),
        ("/", "Home"),
        ("/users/:id/posts", "Users Posts"),
        ("/api/v1/users", "Api V1"),
        ("/blog/{slug}", "Blog"),
        ("/getting-started", "Getting Started"),
    ],
)
def test_path_to_feature_name(path: str, expected: str) -> None:
    assert path_to_feature_name(path) == expected


def test_tokenize_splits_separators() -> None:
    assert tokenize("User_Profile-guide  v2") == frozenset({"user", "profile", "guide", "v2"})


def test_extract_features_covers_each_category() -> None:
    analysis = CodebaseAnalysis(
        path="/repo",
        language="elixir",
        framework="phoenix",
        routes=(Route("GET", "/orders", "router.ex"),),
        models=(Model("App.Accounts.User", (), "user.ex"),),
        components=(
            Component("AppWeb.DashboardLive", (), "dashboard_live.ex", events=("refresh",)),
            Component("AppWeb.Button", ("label",), "button.ex"),
        ),
        controllers=(Controller("AppWeb.UserController", ("index",), "user_controller.ex"),),
    )

    assert extract_features(analysis) == [
        Feature("Orders", "route", path="/orders", method="GET"),
        Feature("User", "entity"),
        Feature("Dashboard", "live_view"),
        Feature("Button", "component"),
        Feature("User", "controller"),
    ]


def test_gaps_only_for_features_missing_from_titles() -> None:
    features = [Feature("User Profile", "route", path="/user_profile"), Feature("Orders", "route", path="/orders")]
    documents = [Document(title="User Profile Guide", content="", source="guide.md")]

    assert identify_gaps(features, documents) == [Gap(feature="Orders", type="route")]
    assert identify_gaps(features, documents)[0].priority == "high"


def test_no_documents_means_every_feature_is_a_gap() -> None:
    gaps = identify_gaps([Feature("Orders", "route")], [])

    assert [gap.feature for gap in gaps] == ["Orders"]


def test_load_documents_reads_titles(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    (docs / "api").mkdir(parents=True)
    (docs / "guide.md").write_text("# User Profile Guide\n\nText.\n", encoding="utf-8")
    (docs / "getting-started.md").write_text("No heading here.\n", encoding="utf-8")
    (docs / "api" / "index.html").write_text("<html><title>Orders API</title></html>", encoding="utf-8")
    (docs / "notes.txt").write_text("ignored", encoding="utf-8")

    documents = load_documents(docs)

    assert [(document.source, document.title) for document in documents] == [
        ("api/index.html", "Orders API"),
        ("getting-started.md", "getting started"),
        ("guide.md", "User Profile Guide"),
    ]


def test_load_documents_missing_directory(tmp_path: Path) -> None:
    assert load_documents(tmp_path / "nope") == []

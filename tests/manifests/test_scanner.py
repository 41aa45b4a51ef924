from __future__ import annotations

import pytest

from repoinsight.manifests import ManifestScanner, match_ecosystem
from repoinsight.models import DIRECTORY, TreeItem

from tests._fixtures.repo_builder import make_tree


@pytest.mark.parametrize(
    ("path", "ecosystem"),
    [
        ("package.json", "npm"),
        ("services/api/pom.xml", "maven"),
        ("build.gradle", "gradle"),
        ("app/build.gradle.kts", "gradle"),
        ("requirements.txt", "pip"),
        ("Pipfile", "pipenv"),
        ("pyproject.toml", "poetry"),
        ("Cargo.toml", "cargo"),
        ("go.mod", "go"),
        ("Gemfile", "gemfile"),
        ("composer.json", "composer"),
        ("src/App/App.csproj", "nuget"),
    ],
)
def test_match_ecosystem_by_basename(path: str, ecosystem: str) -> None:
    assert match_ecosystem(path) == ecosystem


@pytest.mark.parametrize(
    "path",
    ["package-lock.json", "requirements-dev.txt", "Gemfile.lock", "go.sum", "docs/package.json.md", ".csproj"],
)
def test_match_ecosystem_ignores_lookalikes(path: str) -> None:
    assert match_ecosystem(path) is None


def test_scan_keeps_tree_order_and_skips_vendored_directories() -> None:
    tree = make_tree(
        [
            "package.json",
            "node_modules/react/package.json",
            "vendor/lib/composer.json",
            "services/api/requirements.txt",
            "target/classes/pom.xml",
            "frontend/package.json",
            "build/output/go.mod",
        ]
    )

    locations = ManifestScanner().scan(tree)

    assert [(location.path, location.ecosystem) for location in locations] == [
        ("package.json", "npm"),
        ("services/api/requirements.txt", "pip"),
        ("frontend/package.json", "npm"),
    ]


def test_scan_only_checks_directory_segments() -> None:
    # A manifest named like an excluded directory is still found; only parents count.
    tree = make_tree(["builder/go.mod", "dist-tools/Cargo.toml"])

    locations = ManifestScanner().scan(tree)

    assert [location.path for location in locations] == ["builder/go.mod", "dist-tools/Cargo.toml"]


def test_scan_skips_directory_entries() -> None:
    tree = [TreeItem(path="package.json", kind=DIRECTORY)]

    assert ManifestScanner().scan(tree) == []


def test_scan_honours_extra_excluded_directories() -> None:
    tree = make_tree(["package.json", "examples/demo/package.json"])

    locations = ManifestScanner(["examples"]).scan(tree)

    assert [location.path for location in locations] == ["package.json"]

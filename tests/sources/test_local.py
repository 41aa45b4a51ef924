from __future__ import annotations

from pathlib import Path

import pytest

from repoinsight.models import DIRECTORY, FILE, TreeItem
from repoinsight.sources import LocalRepositorySource

from tests._fixtures.repo_builder import RepoBuilder


def test_list_tree_walks_sorted_and_skips_tool_directories(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "b.txt": "bb",
            "a.txt": "a",
            "src/main.py": "print('hi')\n",
            "node_modules/pkg/index.js": "module.exports = 1;\n",
            ".git/HEAD": "ref: refs/heads/main\n",
        }
    )

    items = repo_builder.source().list_tree()

    assert items == [
        TreeItem(path="src", kind=DIRECTORY),
        TreeItem(path="a.txt", kind=FILE, size=1),
        TreeItem(path="b.txt", kind=FILE, size=2),
        TreeItem(path="src/main.py", kind=FILE, size=12),
    ]


def test_exclude_patterns(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "keep/app.py": "",
            "fixtures/data.json": "{}",
            "docs/api/generated.md": "",
            "docs/guide.md": "",
            "build.log": "",
        }
    )

    source = repo_builder.source(["fixtures", "docs/api", "*.log"])
    paths = [item.path for item in source.list_tree()]

    assert paths == ["docs", "keep", "docs/guide.md", "keep/app.py"]


def test_read_files_returns_text_and_skips_unreadable(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"package.json": '{"name": "demo"}'})
    (repo_builder.path() / "blob.bin").write_bytes(b"\xff\xfe\x00\x81")

    contents = repo_builder.source().read_files(["package.json", "blob.bin", "missing.txt", "../outside.txt"])

    assert contents == {"package.json": '{"name": "demo"}'}


def test_repository_info_uses_directory_name(repo_builder: RepoBuilder) -> None:
    info = repo_builder.source().repository_info()

    assert info.name == "repo"
    assert info.url == repo_builder.path().resolve().as_uri()


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        LocalRepositorySource(tmp_path / "nope")

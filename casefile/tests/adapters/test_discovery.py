"""Tests for filesystem discovery."""

from pathlib import Path

import pytest

from casefile.adapters.discovery.filesystem import FilesystemDiscovery


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """A small project tree with sources, noise and skipped directories."""
    for relative in [
        "b.test.yaml",
        "a.spec.yml",
        "notes.yaml",
        "module.py",
        "nested/deep/c.test.yml",
        "nested/d.spec.yaml",
        "node_modules/pkg/e.test.yaml",
        ".git/f.test.yaml",
    ]:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("file: ./module.py\n", encoding="utf-8")
    return tmp_path


class TestFilesystemDiscovery:
    """Test FilesystemDiscovery."""

    def test_finds_sources_sorted(self, tree: Path) -> None:
        found = FilesystemDiscovery().discover(tree)

        assert [path.relative_to(tree).as_posix() for path in found] == [
            "a.spec.yml",
            "b.test.yaml",
            "nested/d.spec.yaml",
            "nested/deep/c.test.yml",
        ]

    def test_custom_suffixes(self, tree: Path) -> None:
        found = FilesystemDiscovery([".spec.yml", ".spec.yaml"]).discover(tree)
        assert [path.name for path in found] == ["a.spec.yml", "d.spec.yaml"]

    def test_file_root_is_returned_as_is(self, tree: Path) -> None:
        assert FilesystemDiscovery().discover(tree / "notes.yaml") == [tree / "notes.yaml"]

    def test_missing_root(self, tmp_path: Path) -> None:
        assert FilesystemDiscovery().discover(tmp_path / "absent") == []

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("calc.test.yaml", True),
            ("calc.spec.yml", True),
            ("calc.yaml", False),
            ("test.yaml", False),
        ],
    )
    def test_matches(self, name: str, expected: bool) -> None:
        assert FilesystemDiscovery().matches(Path(name)) is expected

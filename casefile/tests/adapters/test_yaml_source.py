"""Tests for the YAML document source and include resolution."""

from pathlib import Path
from textwrap import dedent

import pytest

from casefile.adapters.source.yaml_source import (
    IncludeResolver,
    YamlDocumentSource,
    flatten_documents,
)
from casefile.core.errors import (
    CircularInclusionError,
    IncludeNotFoundError,
    InvalidDocumentError,
)


def write(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(content).lstrip(), encoding="utf-8")
    return path


class TestYamlDocumentSource:
    """Test loading flat document streams."""

    @pytest.mark.asyncio
    async def test_multi_document_file(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            "math.test.yaml",
            """
            file: ./math.py
            group: math
            ---
            suite: add
            ---
            case: one plus one
            in: [1, 1]
            out: 2
            """,
        )

        documents = await YamlDocumentSource().load_documents(path)

        assert documents == [
            {"file": "./math.py", "group": "math"},
            {"suite": "add"},
            {"case": "one plus one", "in": [1, 1], "out": 2},
        ]

    @pytest.mark.asyncio
    async def test_single_document_file(self, tmp_path: Path) -> None:
        path = write(tmp_path, "one.test.yaml", "file: ./m.py\n")
        assert await YamlDocumentSource().load_documents(path) == [{"file": "./m.py"}]

    @pytest.mark.asyncio
    async def test_whole_document_include_is_flattened(self, tmp_path: Path) -> None:
        """A multi-document include splices its documents into the stream."""
        write(
            tmp_path,
            "shared/suites.yaml",
            """
            suite: add
            ---
            case: shared case
            in: [2, 2]
            out: 4
            """,
        )
        path = write(
            tmp_path,
            "main.test.yaml",
            """
            file: ./math.py
            ---
            !include shared/suites.yaml
            ---
            case: local case
            in: [1, 1]
            out: 2
            """,
        )

        documents = await YamlDocumentSource().load_documents(path)

        assert [next(iter(doc)) for doc in documents] == ["file", "suite", "case", "case"]
        assert documents[2]["case"] == "shared case"

    @pytest.mark.asyncio
    async def test_value_include(self, tmp_path: Path) -> None:
        write(
            tmp_path,
            "mocks.yaml",
            """
            logger:
              calls:
                - in: [hello]
            """,
        )
        path = write(
            tmp_path,
            "main.test.yaml",
            """
            file: ./m.py
            mocks: !include mocks.yaml
            """,
        )

        documents = await YamlDocumentSource().load_documents(path)

        assert documents == [{"file": "./m.py", "mocks": {"logger": {"calls": [{"in": ["hello"]}]}}}]

    @pytest.mark.asyncio
    async def test_empty_file(self, tmp_path: Path) -> None:
        path = write(tmp_path, "empty.test.yaml", "# nothing here\n")
        assert await YamlDocumentSource().load_documents(path) == [None]


class TestIncludeResolver:
    """Test include paths, nesting and cycle detection."""

    def test_nested_includes_resolve_relative_to_including_file(self, tmp_path: Path) -> None:
        write(tmp_path, "a/b/leaf.yaml", "value: 42\n")
        write(tmp_path, "a/middle.yaml", "leaf: !include b/leaf.yaml\n")
        root = write(tmp_path, "root.yaml", "middle: !include a/middle.yaml\n")

        assert IncludeResolver().load(root) == {"middle": {"leaf": {"value": 42}}}

    def test_sibling_includes_of_same_file(self, tmp_path: Path) -> None:
        """Including one file twice on separate branches is not a cycle."""
        write(tmp_path, "shared.yaml", "x: 1\n")
        root = write(
            tmp_path,
            "root.yaml",
            """
            first: !include shared.yaml
            second: !include shared.yaml
            """,
        )

        assert IncludeResolver().load(root) == {"first": {"x": 1}, "second": {"x": 1}}

    def test_self_include(self, tmp_path: Path) -> None:
        root = write(tmp_path, "self.yaml", "again: !include self.yaml\n")

        with pytest.raises(CircularInclusionError, match="Circular dependency detected"):
            IncludeResolver().load(root)

    def test_indirect_cycle(self, tmp_path: Path) -> None:
        write(tmp_path, "a.yaml", "b: !include b.yaml\n")
        write(tmp_path, "b.yaml", "a: !include a.yaml\n")

        with pytest.raises(CircularInclusionError) as exc_info:
            IncludeResolver().load(tmp_path / "a.yaml")

        assert [Path(p).name for p in exc_info.value.chain] == ["a.yaml", "b.yaml"]
        assert Path(exc_info.value.path).name == "a.yaml"
        assert str(exc_info.value).count(" -> ") == 2

    def test_missing_include(self, tmp_path: Path) -> None:
        root = write(tmp_path, "root.yaml", "data: !include nope.yaml\n")

        with pytest.raises(IncludeNotFoundError) as exc_info:
            IncludeResolver().load(root)

        assert "nope.yaml" in str(exc_info.value)
        assert "root.yaml" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        root = write(tmp_path, "bad.yaml", "key: [unclosed\n")

        with pytest.raises(InvalidDocumentError, match="Invalid YAML"):
            IncludeResolver().load(root)

    def test_invalid_yaml_in_include(self, tmp_path: Path) -> None:
        write(tmp_path, "bad.yaml", "key: {unclosed\n")
        root = write(tmp_path, "root.yaml", "data: !include bad.yaml\n")

        with pytest.raises(InvalidDocumentError):
            IncludeResolver().load(root)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        root = tmp_path / "bad.yaml"
        root.write_bytes(b"file: \xff\n")

        with pytest.raises(InvalidDocumentError, match="Cannot decode") as exc_info:
            IncludeResolver().load(root)

        assert "bad.yaml" in str(exc_info.value)

    def test_undecodable_include(self, tmp_path: Path) -> None:
        (tmp_path / "bad.yaml").write_bytes(b"value: \xff\n")
        root = write(tmp_path, "root.yaml", "data: !include bad.yaml\n")

        with pytest.raises(InvalidDocumentError, match="Cannot decode"):
            IncludeResolver().load(root)

    def test_configured_encoding(self, tmp_path: Path) -> None:
        root = tmp_path / "latin.yaml"
        root.write_bytes("name: café\n".encode("latin-1"))

        assert IncludeResolver(encoding="latin-1").load(root) == {"name": "café"}

    def test_unknown_tags_are_rejected(self, tmp_path: Path) -> None:
        root = write(tmp_path, "tagged.yaml", "x: !!python/object:os.system ls\n")

        with pytest.raises(InvalidDocumentError):
            IncludeResolver().load(root)


class TestFlattenDocuments:
    """Test document-level flattening."""

    def test_scalar_document(self) -> None:
        assert flatten_documents({"a": 1}) == [{"a": 1}]

    def test_nested_lists(self) -> None:
        assert flatten_documents([{"a": 1}, [{"b": 2}, [{"c": 3}]], {"d": 4}]) == [
            {"a": 1},
            {"b": 2},
            {"c": 3},
            {"d": 4},
        ]

    def test_lists_inside_documents_are_kept(self) -> None:
        assert flatten_documents([{"in": [1, [2]]}]) == [{"in": [1, [2]]}]

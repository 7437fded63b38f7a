"""Unit tests for mock reference substitution."""

import pytest

from casefile.core.errors import UndefinedMockReferenceError
from casefile.core.substitution import substitute_mocks


def logger_mock(*args: object) -> None:
    return None


class TestSubstituteMocks:
    """Test the recursive `$mock:<name>` rewrite."""

    def test_replaces_top_level_reference(self) -> None:
        """A bare reference becomes the mock function itself."""
        assert substitute_mocks("$mock:logger", {"logger": logger_mock}) is logger_mock

    def test_replaces_nested_references_preserving_shape(self) -> None:
        """References inside lists and dicts are replaced in place."""
        value = [1, "$mock:logger", {"cb": "$mock:logger", "items": ["a", ("$mock:logger",)]}]
        result = substitute_mocks(value, {"logger": logger_mock})

        assert result[0] == 1
        assert result[1] is logger_mock
        assert result[2]["cb"] is logger_mock
        assert result[2]["items"][0] == "a"
        assert result[2]["items"][1] == (logger_mock,)

    def test_does_not_mutate_input(self) -> None:
        """The input tree still holds the sentinel strings."""
        value = {"cb": "$mock:logger"}
        substitute_mocks(value, {"logger": logger_mock})
        assert value == {"cb": "$mock:logger"}

    def test_scalars_pass_through(self) -> None:
        """Numbers, None and ordinary strings are untouched."""
        assert substitute_mocks(42, {}) == 42
        assert substitute_mocks(None, {}) is None
        assert substitute_mocks("mock:logger", {}) == "mock:logger"
        assert substitute_mocks("prefix $mock:logger", {}) == "prefix $mock:logger"

    def test_undefined_reference_raises(self) -> None:
        """A reference to an unknown mock names the missing mock."""
        with pytest.raises(UndefinedMockReferenceError) as exc_info:
            substitute_mocks([1, 2, "$mock:validator"], {"logger": logger_mock})

        assert exc_info.value.mock_name == "validator"
        assert "validator" in str(exc_info.value)

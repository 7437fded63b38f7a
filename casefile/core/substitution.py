"""Replace ``$mock:<name>`` references with live mock functions."""

from collections.abc import Mapping
from typing import Any

from .errors import UndefinedMockReferenceError

MOCK_PREFIX = "$mock:"


def substitute_mocks(value: Any, mock_functions: Mapping[str, Any]) -> Any:
    """Walk a value tree and swap mock references for mock functions.

    Lists, tuples and mappings are rebuilt with the same shape; every
    other value passes through unchanged. The input tree is not mutated.

    Raises:
        UndefinedMockReferenceError: If a reference names an undefined mock.
    """
    if isinstance(value, str):
        if value.startswith(MOCK_PREFIX):
            name = value[len(MOCK_PREFIX):]
            if name not in mock_functions:
                raise UndefinedMockReferenceError(name)
            return mock_functions[name]
        return value

    if isinstance(value, list):
        return [substitute_mocks(item, mock_functions) for item in value]

    if isinstance(value, tuple):
        return tuple(substitute_mocks(item, mock_functions) for item in value)

    if isinstance(value, Mapping):
        return {key: substitute_mocks(item, mock_functions) for key, item in value.items()}

    return value

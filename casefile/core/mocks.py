"""Mock hierarchy resolution and call-verifying mock functions.

Mocks are declared at three levels: globally in the header, per suite,
and per case. The most specific level wins, and it wins for the whole
definition: a case-level ``logger`` replaces a suite or global ``logger``
entirely, its calls are never merged with theirs.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .equality import deep_equal
from .errors import MockArgumentMismatchError, MockCallCountError, MockError, MockRaisedError
from .models import MockDef

logger = logging.getLogger(__name__)


def resolve_mocks(
    case_mocks: Mapping[str, MockDef] | None = None,
    suite_mocks: Mapping[str, MockDef] | None = None,
    global_mocks: Mapping[str, MockDef] | None = None,
) -> MappingProxyType[str, MockDef]:
    """Apply the precedence case > suite > global, per whole entry."""
    resolved: dict[str, MockDef] = {}
    for layer in (global_mocks, suite_mocks, case_mocks):
        if layer:
            for name, definition in layer.items():
                resolved[name] = definition
    return MappingProxyType(resolved)


class MockFunction:
    """A stateful stand-in that verifies an ordered sequence of calls.

    Each invocation is matched against the expected call at the cursor.
    The cursor advances only on a matching invocation. Every violation
    raised from ``__call__`` is also recorded, so `finalize` still sees it
    when the code under test catches and discards the exception.
    """

    def __init__(self, name: str, definition: MockDef):
        self.name = name
        self.definition = definition
        self.cursor = 0
        self.violations: list[MockError] = []

    @property
    def expected_calls(self) -> int:
        return len(self.definition.calls)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        calls = self.definition.calls
        if self.cursor >= len(calls):
            error: MockError = MockCallCountError(self.name, self.cursor + 1, len(calls))
            self.violations.append(error)
            raise error

        expected = calls[self.cursor]
        args_match = deep_equal(list(args), list(expected.input_args))
        kwargs_match = deep_equal(dict(kwargs), dict(expected.input_kwargs))
        if not (args_match and kwargs_match):
            actual: list[Any] = list(args)
            wanted: list[Any] = list(expected.input_args)
            if kwargs or expected.input_kwargs:
                actual.append(dict(kwargs))
                wanted.append(dict(expected.input_kwargs))
            error = MockArgumentMismatchError(self.name, wanted, actual)
            self.violations.append(error)
            raise error

        self.cursor += 1
        logger.debug(f"Mock '{self.name}' call {self.cursor}/{len(calls)} matched")

        if expected.expected_throw is not None:
            raise MockRaisedError(expected.expected_throw)
        return expected.expected_output

    def finalize(self) -> None:
        """Fail on the first recorded violation, then on under-invocation."""
        if self.violations:
            raise self.violations[0]
        if self.cursor != len(self.definition.calls):
            raise MockCallCountError(self.name, self.cursor, len(self.definition.calls))

    def reset(self) -> None:
        self.cursor = 0
        self.violations.clear()

    def __repr__(self) -> str:
        return f"<MockFunction {self.name} {self.cursor}/{self.expected_calls}>"


def create_mock_functions(resolved: Mapping[str, MockDef]) -> dict[str, MockFunction]:
    """Build one fresh MockFunction per resolved definition."""
    return {name: MockFunction(name, definition) for name, definition in resolved.items()}


def finalize_mocks(mock_functions: Mapping[str, MockFunction]) -> list[MockError]:
    """Finalize every mock and collect the failures instead of stopping at one."""
    errors: list[MockError] = []
    for mock in mock_functions.values():
        try:
            mock.finalize()
        except MockError as e:
            errors.append(e)
    return errors


def clear_mocks(mock_functions: dict[str, MockFunction]) -> None:
    """Reset and drop all mock state owned by a finished case."""
    for mock in mock_functions.values():
        mock.reset()
    mock_functions.clear()

"""Document-stream normalization into the typed test model.

A document source is an ordered stream of mappings. Three shapes are
recognized by marker key:

- ``file``: the header (target module, group name, global mocks, filter)
- ``suite``: opens a new suite, closing the previous one
- ``case``: a case appended to the currently open suite

Anything else (including comment-only documents) is ignored.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidDocumentError
from .models import (
    MISSING,
    Assertion,
    Case,
    ClassCase,
    Execution,
    ExpectedCall,
    FunctionCase,
    MethodAssertion,
    MockDef,
    PropertyAssertion,
    Suite,
    TestConfig,
    ThrowMatcher,
)

logger = logging.getLogger(__name__)

HEADER_KEY = "file"
SUITE_KEY = "suite"
CASE_KEY = "case"
DEFAULT_EXPORT = "default"

_REGEX_THROW = re.compile(r"^/(.*)/([imsx]*)$", re.DOTALL)


@dataclass
class _OpenSuite:
    """A suite still accepting cases during the single pass."""

    name: str
    export_name: str
    mode: str
    constructor_args: tuple[Any, ...]
    mocks: dict[str, MockDef]
    cases: list[Case] = field(default_factory=list)

    def close(self) -> Suite:
        return Suite(
            name=self.name,
            export_name=self.export_name,
            mode=self.mode,  # type: ignore[arg-type]
            constructor_args=self.constructor_args,
            mocks=self.mocks,
            cases=tuple(self.cases),
        )


class DocumentNormalizer:
    """Converts an ordered document list into a TestConfig.

    Pure function over plain values; the `source` argument is only used
    to make error messages point at the right file.
    """

    def normalize(
        self, documents: Iterable[Any], source: str | None = None
    ) -> TestConfig:
        header: Mapping[str, Any] | None = None
        suites: list[Suite] = []
        current: _OpenSuite | None = None
        dropped = 0

        for index, doc in enumerate(documents):
            if not isinstance(doc, Mapping):
                logger.debug(f"Ignoring non-mapping document #{index} in {source}")
                continue

            if doc.get(HEADER_KEY):
                # Last header wins
                header = doc
            elif doc.get(SUITE_KEY):
                if current is not None:
                    suites.append(current.close())
                current = self._open_suite(doc, source)
            elif doc.get(CASE_KEY):
                if current is None:
                    dropped += 1
                    continue
                current.cases.append(self._build_case(doc, current.mode, source))

        if current is not None:
            suites.append(current.close())

        if dropped:
            logger.warning(
                f"Dropped {dropped} case document(s) appearing before any suite in {source}"
            )

        return self._build_config(header, suites, source)

    def _build_config(
        self,
        header: Mapping[str, Any] | None,
        suites: list[Suite],
        source: str | None,
    ) -> TestConfig:
        if header is None:
            return TestConfig(
                file_path=None,
                group_name=None,
                suites=tuple(suites),
                source_path=source,
            )

        suite_filter = header.get("suites")
        if suite_filter is not None:
            if isinstance(suite_filter, str):
                suite_filter = [suite_filter]
            if not isinstance(suite_filter, list):
                raise InvalidDocumentError("'suites' must be a list of suite names", source)
            # Ordered set: keep the first occurrence of each name
            suite_filter = tuple(dict.fromkeys(str(name) for name in suite_filter))

        return TestConfig(
            file_path=str(header[HEADER_KEY]),
            group_name=_optional_str(header.get("group") or header.get("name")),
            global_mocks=self.parse_mocks(header.get("mocks"), source),
            suite_name_filter=suite_filter,
            suites=tuple(suites),
            skip=bool(header.get("skip", False)),
            source_path=source,
        )

    def _open_suite(self, doc: Mapping[str, Any], source: str | None) -> _OpenSuite:
        name = str(doc[SUITE_KEY])
        mode = doc.get("mode") or "function"
        if mode not in ("function", "class"):
            logger.warning(
                f"Suite '{name}' declares unknown mode {mode!r}; treating it as 'function'"
            )
            mode = "function"

        constructor_args: tuple[Any, ...] = ()
        if mode == "class":
            constructor_args = _as_args(doc.get("constructorArgs"))

        return _OpenSuite(
            name=name,
            export_name=str(doc.get("exportName") or name or DEFAULT_EXPORT),
            mode=mode,
            constructor_args=constructor_args,
            mocks=self.parse_mocks(doc.get("mocks"), source),
        )

    def _build_case(self, doc: Mapping[str, Any], mode: str, source: str | None) -> Case:
        name = str(doc[CASE_KEY])
        mocks = self.parse_mocks(doc.get("mocks"), source)

        # The suite decides the shape; fields of the other shape are dropped
        if mode == "class":
            raw_executions = doc.get("executions") or []
            if not isinstance(raw_executions, list):
                raise InvalidDocumentError(
                    f"Case '{name}': 'executions' must be a list", source
                )
            return ClassCase(
                name=name,
                executions=tuple(
                    self._build_execution(item, name, source) for item in raw_executions
                ),
                mocks=mocks,
            )

        return FunctionCase(
            name=name,
            input=_as_args(doc.get("in")),
            expected_output=doc.get("out"),
            expected_throw=parse_throw_matcher(doc.get("throws"), source),
            mocks=mocks,
        )

    def _build_execution(self, item: Any, case_name: str, source: str | None) -> Execution:
        if not isinstance(item, Mapping) or not str(item.get("method") or "").strip():
            raise InvalidDocumentError(
                f"Case '{case_name}': every execution needs a 'method'", source
            )
        raw_asserts = item.get("asserts") or []
        if not isinstance(raw_asserts, list):
            raise InvalidDocumentError(
                f"Case '{case_name}': 'asserts' must be a list", source
            )
        return Execution(
            method_path=str(item["method"]),
            input=_as_args(item.get("in")),
            expected_output=item["out"] if "out" in item else MISSING,
            expected_throw=parse_throw_matcher(item.get("throws"), source),
            asserts=tuple(self._build_assertion(a, case_name, source) for a in raw_asserts),
        )

    @staticmethod
    def _build_assertion(item: Any, case_name: str, source: str | None) -> Assertion:
        if isinstance(item, Mapping) and str(item.get("property") or "").strip():
            op = item.get("op", "eq")
            if op != "eq":
                raise InvalidDocumentError(
                    f"Case '{case_name}': unsupported assertion op {op!r}", source
                )
            return PropertyAssertion(
                property_path=str(item["property"]),
                expected_value=item.get("value"),
            )
        if isinstance(item, Mapping) and str(item.get("method") or "").strip():
            return MethodAssertion(
                method_path=str(item["method"]),
                input=_as_args(item.get("in")),
                expected_output=item["out"] if "out" in item else MISSING,
            )
        raise InvalidDocumentError(
            f"Case '{case_name}': an assertion needs either 'property' or 'method'",
            source,
        )

    @staticmethod
    def parse_mocks(raw: Any, source: str | None = None) -> dict[str, MockDef]:
        """Parse a ``mocks`` mapping into MockDefs keyed by mock name."""
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise InvalidDocumentError("'mocks' must be a mapping of mock names", source)

        mocks: dict[str, MockDef] = {}
        for name, definition in raw.items():
            calls = definition.get("calls") if isinstance(definition, Mapping) else None
            if calls is None:
                calls = []
            if not isinstance(calls, list):
                raise InvalidDocumentError(f"Mock '{name}': 'calls' must be a list", source)

            expected: list[ExpectedCall] = []
            for call in calls:
                if not isinstance(call, Mapping):
                    raise InvalidDocumentError(
                        f"Mock '{name}': every call must be a mapping", source
                    )
                kwargs = call.get("kwargs") or {}
                if not isinstance(kwargs, Mapping):
                    raise InvalidDocumentError(
                        f"Mock '{name}': 'kwargs' must be a mapping", source
                    )
                throws = call.get("throws")
                expected.append(
                    ExpectedCall(
                        input_args=_as_args(call.get("in")),
                        expected_output=call.get("out"),
                        expected_throw=str(throws) if throws is not None else None,
                        input_kwargs=dict(kwargs),
                    )
                )
            mocks[str(name)] = MockDef(calls=tuple(expected))
        return mocks


def parse_throw_matcher(raw: Any, source: str | None = None) -> ThrowMatcher | None:
    """Turn a ``throws`` value into a message fragment or compiled pattern.

    ``/regex/flags`` compiles to a pattern; anything else is a fragment.
    An invalid pattern raises InvalidDocumentError against `source`.
    """
    if raw is None:
        return None
    text = str(raw)
    match = _REGEX_THROW.match(text)
    if match and match.group(1):
        flags = 0
        for letter in match.group(2):
            flags |= {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}[letter]
        try:
            return re.compile(match.group(1), flags)
        except re.error as e:
            raise InvalidDocumentError(f"Invalid throws pattern {text!r}: {e}", source) from e
    return text


def _as_args(raw: Any) -> tuple[Any, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        return tuple(raw)
    return (raw,)


def _optional_str(value: Any) -> str | None:
    return str(value) if value is not None else None


def normalize_documents(documents: Iterable[Any], source: str | None = None) -> TestConfig:
    """Module-level convenience wrapper around DocumentNormalizer."""
    return DocumentNormalizer().normalize(documents, source)

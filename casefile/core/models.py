"""Domain models for the casefile test runner.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.

Input and output trees (case arguments, expected values, mock call
arguments) are kept as plain Python values: scalars, lists and dicts
exactly as the document parser produced them.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from types import MappingProxyType
from typing import Any, Literal, TypeAlias


class _Missing:
    """Marker for a field that was not declared in the document."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

SuiteMode: TypeAlias = Literal["function", "class"]
ThrowMatcher: TypeAlias = str | re.Pattern[str]


@dataclass(frozen=True)
class ExpectedCall:
    """One expected invocation of a mock, in declaration order."""

    input_args: tuple[Any, ...]
    expected_output: Any = None
    expected_throw: str | None = None
    input_kwargs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert kwargs dict to read-only proxy."""
        if isinstance(self.input_kwargs, dict):
            object.__setattr__(self, "input_kwargs", MappingProxyType(self.input_kwargs))


@dataclass(frozen=True)
class MockDef:
    """A mock definition: the ordered list of calls it must receive."""

    calls: tuple[ExpectedCall, ...] = ()


MockMap: TypeAlias = Mapping[str, MockDef]


def _freeze_mocks(mocks: Mapping[str, MockDef]) -> MappingProxyType[str, MockDef]:
    if isinstance(mocks, MappingProxyType):
        return mocks
    return MappingProxyType(dict(mocks))


@dataclass(frozen=True)
class PropertyAssertion:
    """Compare a dot-path property on the instance against a value."""

    property_path: str
    expected_value: Any
    op: Literal["eq"] = "eq"


@dataclass(frozen=True)
class MethodAssertion:
    """Call a dot-path method on the instance and compare its result."""

    method_path: str
    input: tuple[Any, ...] = ()
    expected_output: Any = MISSING


Assertion: TypeAlias = PropertyAssertion | MethodAssertion


@dataclass(frozen=True)
class Execution:
    """One step of a class-mode case: a method call plus follow-up asserts."""

    method_path: str
    input: tuple[Any, ...] = ()
    expected_output: Any = MISSING
    expected_throw: ThrowMatcher | None = None
    asserts: tuple[Assertion, ...] = ()

    def __post_init__(self) -> None:
        """Validate execution invariants on creation."""
        if not self.method_path or not self.method_path.strip():
            raise ValueError("method_path must be a non-empty string")


@dataclass(frozen=True)
class FunctionCase:
    """A function-mode case: one call of the export with fixed input."""

    name: str
    input: tuple[Any, ...] = ()
    expected_output: Any = None
    expected_throw: ThrowMatcher | None = None
    mocks: Mapping[str, MockDef] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert mocks dict to read-only proxy."""
        object.__setattr__(self, "mocks", _freeze_mocks(self.mocks))


@dataclass(frozen=True)
class ClassCase:
    """A class-mode case: an ordered execution script on one fresh instance."""

    name: str
    executions: tuple[Execution, ...] = ()
    mocks: Mapping[str, MockDef] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert mocks dict to read-only proxy."""
        object.__setattr__(self, "mocks", _freeze_mocks(self.mocks))


Case: TypeAlias = FunctionCase | ClassCase


@dataclass(frozen=True)
class Suite:
    """A named group of cases sharing one export and invocation mode."""

    name: str
    export_name: str
    mode: SuiteMode = "function"
    constructor_args: tuple[Any, ...] = ()
    mocks: Mapping[str, MockDef] = field(default_factory=dict)
    cases: tuple[Case, ...] = ()

    def __post_init__(self) -> None:
        """Validate suite invariants on creation."""
        if self.mode not in ("function", "class"):
            raise ValueError(f"mode must be 'function' or 'class', got {self.mode!r}")
        object.__setattr__(self, "mocks", _freeze_mocks(self.mocks))


@dataclass(frozen=True)
class TestConfig:
    """The resolved description of one document source.

    Created once per discovered file; immutable after resolution.
    """

    __test__ = False  # not a pytest test class

    file_path: str | None
    group_name: str | None
    global_mocks: Mapping[str, MockDef] = field(default_factory=dict)
    suite_name_filter: tuple[str, ...] | None = None
    suites: tuple[Suite, ...] = ()
    skip: bool = False
    source_path: str | None = None  # the document file this config came from

    def __post_init__(self) -> None:
        """Convert global mocks dict to read-only proxy."""
        object.__setattr__(self, "global_mocks", _freeze_mocks(self.global_mocks))

    def selected_suites(self) -> tuple[Suite, ...]:
        """Suites that pass the header's suite-name filter, in document order."""
        if self.suite_name_filter is None:
            return self.suites
        allowed = set(self.suite_name_filter)
        return tuple(suite for suite in self.suites if suite.name in allowed)

    @property
    def display_name(self) -> str:
        """Group name, falling back to the source file name."""
        if self.group_name:
            return self.group_name
        return PurePath(self.source_path).name if self.source_path else ""

    @property
    def case_count(self) -> int:
        return sum(len(suite.cases) for suite in self.suites)


class CaseStatus(Enum):
    """Lifecycle states for a case run.

    State transitions follow a directed workflow:
    - READY: Case has been resolved but not started
    - RUNNING: Case body is executing
    - PASSED: Terminal, every check succeeded
    - FAILED: Terminal, at least one check or mock validation failed
    """

    READY = "ready"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


@dataclass
class CaseResult:
    """Outcome of a single case.

    Mutable so the driver can move it through its states. Valid
    transitions are READY → RUNNING → PASSED | FAILED.
    """

    group: str
    suite: str
    case: str
    status: CaseStatus = CaseStatus.READY
    failures: list[str] = field(default_factory=list)
    errors: list[BaseException] = field(default_factory=list)

    def mark_running(self) -> None:
        """Transition case to running status."""
        if self.status != CaseStatus.READY:
            raise ValueError(f"Cannot start case in {self.status} status")
        self.status = CaseStatus.RUNNING

    def record_failure(self, message: str, error: BaseException | None = None) -> None:
        """Record one failure message while the case is running."""
        if self.status != CaseStatus.RUNNING:
            raise ValueError(f"Cannot record failure in {self.status} status")
        self.failures.append(message)
        if error is not None:
            self.errors.append(error)

    def finish(self) -> None:
        """Move to the terminal state implied by the recorded failures."""
        if self.status != CaseStatus.RUNNING:
            raise ValueError(f"Cannot finish case in {self.status} status")
        self.status = CaseStatus.FAILED if self.failures else CaseStatus.PASSED

    @property
    def passed(self) -> bool:
        return self.status == CaseStatus.PASSED

    @property
    def qualified_name(self) -> str:
        return " > ".join(part for part in (self.group, self.suite, self.case) if part)

    @property
    def message(self) -> str:
        return "\n".join(self.failures)


@dataclass(frozen=True)
class RunSummary:
    """Summary of a run over one or more document sources."""

    sources: int
    sources_failed: int
    cases_passed: int
    cases_failed: int
    cases_skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.sources_failed == 0 and self.cases_failed == 0

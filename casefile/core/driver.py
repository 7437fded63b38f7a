"""Case execution against the unit under test.

The driver binds each suite to its export, runs cases in document order
and decides pass/fail. Presentation is left to a ReporterPort.

Each case moves READY → RUNNING → PASSED | FAILED. Mock finalization
runs in a `finally` block after the case body, so a call-count violation
is reported even when an earlier check already failed the case.
"""

import functools
import logging
import re
from collections.abc import Callable, Mapping
from types import ModuleType
from typing import Any

from .equality import deep_equal
from .errors import CasefileError, NotCallableError, UndefinedExportError
from .mocks import MockFunction, clear_mocks, create_mock_functions, finalize_mocks, resolve_mocks
from .models import (
    MISSING,
    Case,
    CaseResult,
    ClassCase,
    FunctionCase,
    MethodAssertion,
    PropertyAssertion,
    Suite,
    TestConfig,
    ThrowMatcher,
)
from .paths import call_method, get_property
from .ports import ReporterPort
from .substitution import substitute_mocks

logger = logging.getLogger(__name__)

BoundSuite = tuple[Suite, Any]


class ExecutionDriver:
    """Runs resolved suites and cases.

    Stateless between cases: every case gets fresh mock functions and,
    in class mode, a fresh instance.
    """

    def __init__(self, fail_fast: bool = False):
        self.fail_fast = fail_fast

    def bind_targets(self, config: TestConfig, module: ModuleType) -> list[BoundSuite]:
        """Look up the export for every selected suite.

        Raises:
            UndefinedExportError: If a suite names an export the module lacks.
            NotCallableError: If the export cannot be called or instantiated.
        """
        bound: list[BoundSuite] = []
        module_path = getattr(module, "__file__", None) or getattr(module, "__name__", None)
        for suite in config.selected_suites():
            target = getattr(module, suite.export_name, MISSING)
            if target is MISSING:
                raise UndefinedExportError(suite.export_name, module_path)
            if not callable(target):
                raise NotCallableError(suite.export_name, suite.export_name)
            bound.append((suite, target))
        return bound

    def run(
        self,
        config: TestConfig,
        bound: list[BoundSuite],
        reporter: ReporterPort,
    ) -> list[CaseResult]:
        """Run every bound suite in order and report each case."""
        results: list[CaseResult] = []
        group = config.display_name

        reporter.start_group(group)
        try:
            for suite, target in bound:
                reporter.start_group(suite.name)
                try:
                    for case in suite.cases:
                        result = self.run_case(config, suite, case, target)
                        reporter.report_case(result)
                        results.append(result)
                        if self.fail_fast and not result.passed:
                            logger.info(f"Stopping after first failure: {result.qualified_name}")
                            return results
                finally:
                    reporter.end_group(suite.name)
        finally:
            reporter.end_group(group)

        return results

    def run_case(
        self,
        config: TestConfig,
        suite: Suite,
        case: Case,
        target: Any,
    ) -> CaseResult:
        """Execute one case and return its terminal result."""
        result = CaseResult(group=config.display_name, suite=suite.name, case=case.name)
        result.mark_running()
        logger.debug(f"Running case {result.qualified_name}")

        mocks = create_mock_functions(
            resolve_mocks(case.mocks, suite.mocks, config.global_mocks)
        )
        primary: BaseException | None = None
        try:
            if isinstance(case, ClassCase):
                self._run_class_case(suite, case, target, mocks)
            else:
                self._run_function_case(suite, case, target, mocks)
        except (AssertionError, CasefileError) as e:
            primary = e
            result.record_failure(str(e), e)
        except Exception as e:
            primary = e
            result.record_failure(f"Unexpected {type(e).__name__}: {e}", e)
        finally:
            for error in finalize_mocks(mocks):
                if error is not primary:
                    result.record_failure(str(error), error)
            clear_mocks(mocks)

        result.finish()
        if not result.passed:
            logger.debug(f"Case failed: {result.qualified_name}: {result.message}")
        return result

    def _run_function_case(
        self,
        suite: Suite,
        case: FunctionCase,
        target: Callable[..., Any],
        mocks: Mapping[str, MockFunction],
    ) -> None:
        args = substitute_mocks(list(case.input), mocks)
        expected = substitute_mocks(case.expected_output, mocks)
        _invoke_and_check(
            functools.partial(target, *args),
            expected,
            case.expected_throw,
            label=suite.export_name,
        )

    def _run_class_case(
        self,
        suite: Suite,
        case: ClassCase,
        target: Callable[..., Any],
        mocks: Mapping[str, MockFunction],
    ) -> None:
        # Substitute everything up front so an undefined reference fails
        # the case before the class is ever touched.
        constructor_args = substitute_mocks(list(suite.constructor_args), mocks)
        steps = [
            (
                execution,
                substitute_mocks(list(execution.input), mocks),
                substitute_mocks(execution.expected_output, mocks),
                [_substitute_assertion(assertion, mocks) for assertion in execution.asserts],
            )
            for execution in case.executions
        ]

        instance = target(*constructor_args)

        for execution, args, expected, asserts in steps:
            _invoke_and_check(
                functools.partial(call_method, instance, execution.method_path, args),
                expected,
                execution.expected_throw,
                label=execution.method_path,
            )
            for check in asserts:
                check(instance)


def _invoke_and_check(
    call: Callable[[], Any],
    expected: Any,
    expected_throw: ThrowMatcher | None,
    label: str,
) -> None:
    if expected_throw is not None:
        try:
            call()
        except CasefileError:
            raise
        except Exception as e:
            if not throw_matches(expected_throw, e):
                raise AssertionError(
                    f"{label} raised {type(e).__name__}: {e}, "
                    f"expected an exception matching {_describe_throw(expected_throw)}"
                ) from e
            return
        raise AssertionError(
            f"{label}: expected an exception matching "
            f"{_describe_throw(expected_throw)} but nothing was raised"
        )

    actual = call()
    if expected is not MISSING and not deep_equal(actual, expected):
        raise AssertionError(f"{label} returned {actual!r}, expected {expected!r}")


def _substitute_assertion(
    assertion: PropertyAssertion | MethodAssertion,
    mocks: Mapping[str, MockFunction],
) -> Callable[[Any], None]:
    if isinstance(assertion, PropertyAssertion):
        expected_value = substitute_mocks(assertion.expected_value, mocks)

        def check_property(instance: Any) -> None:
            actual = get_property(instance, assertion.property_path)
            if not deep_equal(actual, expected_value):
                raise AssertionError(
                    f"Property '{assertion.property_path}' is {actual!r}, "
                    f"expected {expected_value!r}"
                )

        return check_property

    args = substitute_mocks(list(assertion.input), mocks)
    expected_output = substitute_mocks(assertion.expected_output, mocks)

    def check_method(instance: Any) -> None:
        actual = call_method(instance, assertion.method_path, args)
        if expected_output is not MISSING and not deep_equal(actual, expected_output):
            raise AssertionError(
                f"Method '{assertion.method_path}' returned {actual!r}, "
                f"expected {expected_output!r}"
            )

    return check_method


def throw_matches(matcher: ThrowMatcher, error: BaseException) -> bool:
    """Match an exception message against a fragment or a compiled pattern."""
    message = str(error)
    if isinstance(matcher, re.Pattern):
        return matcher.search(message) is not None
    return matcher in message


def _describe_throw(matcher: ThrowMatcher) -> str:
    if isinstance(matcher, re.Pattern):
        return f"/{matcher.pattern}/"
    return repr(matcher)


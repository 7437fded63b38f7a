"""Core domain logic for the casefile test runner.

This package contains zero external dependencies and represents
the pure resolution and execution logic. Reading files, importing
modules and presenting results are handled by the adapters package.
"""

from .errors import (
    CasefileError,
    CircularInclusionError,
    IncludeNotFoundError,
    InvalidDocumentError,
    MockArgumentMismatchError,
    MockCallCountError,
    ModuleLoadError,
    NotCallableError,
    PathSegmentMissingError,
    UndefinedExportError,
    UndefinedMockReferenceError,
)
from .models import (
    CaseResult,
    CaseStatus,
    ClassCase,
    Execution,
    ExpectedCall,
    FunctionCase,
    MethodAssertion,
    MockDef,
    PropertyAssertion,
    RunSummary,
    Suite,
    TestConfig,
)

__all__ = [
    "CaseResult",
    "CaseStatus",
    "CasefileError",
    "CircularInclusionError",
    "ClassCase",
    "Execution",
    "ExpectedCall",
    "FunctionCase",
    "IncludeNotFoundError",
    "InvalidDocumentError",
    "MethodAssertion",
    "MockArgumentMismatchError",
    "MockCallCountError",
    "MockDef",
    "ModuleLoadError",
    "NotCallableError",
    "PathSegmentMissingError",
    "PropertyAssertion",
    "RunSummary",
    "Suite",
    "TestConfig",
    "UndefinedExportError",
    "UndefinedMockReferenceError",
]

"""Test doubles for a plugin host's action and filter hook API."""

from .api import HostAPI
from .config import HookMockConfig, load_effective_config
from .context import MockContext
from .counts import CountConstraint, parse_count_spec
from .errors import ConfigurationError, ExpectationFailedError, HookMockError, OverCallError, UnexpectedCallError
from .expectations import ExpectedCall, HookExpectation
from .functions import FunctionRegistry
from .matchers import AnyOf, AnyValue, Equals, FuzzyObject, Predicate, TypeOf
from .models import HookKind, HookRow, Verdict
from .registry import HookRegistry

__all__ = [
    "AnyOf",
    "AnyValue",
    "ConfigurationError",
    "CountConstraint",
    "Equals",
    "ExpectationFailedError",
    "ExpectedCall",
    "FunctionRegistry",
    "FuzzyObject",
    "HookExpectation",
    "HookKind",
    "HookMockConfig",
    "HookMockError",
    "HookRegistry",
    "HookRow",
    "HostAPI",
    "MockContext",
    "OverCallError",
    "Predicate",
    "TypeOf",
    "UnexpectedCallError",
    "Verdict",
    "load_effective_config",
    "parse_count_spec",
]

"""Exception types raised by hookmock."""

from __future__ import annotations


class HookMockError(Exception):
    """Base class for every hookmock error."""


class ConfigurationError(HookMockError, ValueError):
    """An expectation or config value was malformed at registration time."""


class ExpectationFailedError(HookMockError, AssertionError):
    """A verdict failed; surfaces as a failed assertion in the test runner."""

    def __init__(self, message: str, failures: list[str] | None = None) -> None:
        super().__init__(message)
        self.failures = list(failures or [])


class OverCallError(ExpectationFailedError):
    """A hook or function was invoked more often than its maximum allows."""

    def __init__(self, name: str, observed: int, maximum: int) -> None:
        super().__init__(
            f"{name} was called {observed} times, expected at most {maximum}",
            failures=[name],
        )
        self.name = name
        self.observed = observed
        self.maximum = maximum


class UnexpectedCallError(ExpectationFailedError):
    """A stubbed function was called with no registration accepting the call."""

    def __init__(self, name: str, args: tuple, kwargs: dict | None = None) -> None:
        parts = [repr(arg) for arg in args]
        parts.extend(f"{key}={value!r}" for key, value in (kwargs or {}).items())
        rendered = ", ".join(parts)
        super().__init__(f"Unexpected call: {name}({rendered})", failures=[name])
        self.name = name
        self.args_received = args
        self.kwargs_received = dict(kwargs or {})

"""Per-test lifecycle and the expectation-building surface used by tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from unittest import mock

from hookmock.api import HostAPI
from hookmock.config import HookMockConfig
from hookmock.counts import CountSpec
from hookmock.errors import ExpectationFailedError
from hookmock.expectations import HookExpectation
from hookmock.functions import FunctionExpectation, FunctionRegistry
from hookmock.logging_utils import configure_logging
from hookmock.matchers import FuzzyObject
from hookmock.models import HookKind, Verdict
from hookmock.registry import HookRegistry

logger = logging.getLogger(__name__)

_ADDED = "added"


def _unique(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))


class MockContext:
    """Everything one test registers against the simulated host.

    Construct it (or call ``set_up``) before the test and call ``tear_down``
    afterwards; nothing carries over from one test to the next.
    """

    def __init__(self, config: HookMockConfig | None = None) -> None:
        self.config = config or HookMockConfig()
        raise_on_over_call = self.config.hooks.raise_on_over_call
        self.registry = HookRegistry(raise_on_over_call=raise_on_over_call)
        self.functions = FunctionRegistry(raise_on_over_call=raise_on_over_call)
        self.api = HostAPI(self)
        self._intercepts: list[tuple[str, str, mock.Mock]] = []
        self.active = False

    def set_up(self) -> MockContext:
        self._flush()
        configure_logging(self.config.log_level, logger_name="hookmock")
        self.active = True
        return self

    def tear_down(self) -> None:
        try:
            if self.active and self.config.lifecycle.verify_on_teardown:
                self.verify()
        finally:
            self.abandon()

    def abandon(self) -> None:
        """Discard everything without verifying, for a test that already failed."""
        self._flush()
        self.active = False

    @contextmanager
    def session(self) -> Iterator[MockContext]:
        self.set_up()
        try:
            yield self
        except BaseException:
            self.abandon()
            raise
        self.tear_down()

    def _flush(self) -> None:
        self.registry.flush()
        self.functions.flush()
        self._intercepts.clear()

    # Expectation builders

    def on_action(self, action: str) -> HookExpectation:
        return self.registry.action(action)

    def on_filter(self, filter_name: str) -> HookExpectation:
        return self.registry.filter(filter_name)

    def on_hook_added(self, hook: str, kind: HookKind | str = HookKind.FILTER) -> HookExpectation:
        return self.registry.callback(hook, kind)

    def on_action_added(self, hook: str) -> HookExpectation:
        return self.on_hook_added(hook, HookKind.ACTION)

    def on_filter_added(self, hook: str) -> HookExpectation:
        return self.on_hook_added(hook, HookKind.FILTER)

    def invoke_action(self, action: str, *args: Any) -> None:
        self.registry.notify_invoked(HookKind.ACTION, action, args)

    def expect_action(self, action: str, *args: Any) -> mock.Mock:
        """Expect ``do_action(action, *args)`` at least once; no args means any."""
        intercept = mock.Mock(name=f"intercept:{action}")
        self.on_action(action).with_arguments(*args).perform(intercept)
        self._intercepts.append((HookKind.ACTION.value, action, intercept))
        return intercept

    def expect_filter(self, filter_name: str, *args: Any) -> mock.Mock:
        intercept = mock.Mock(name=f"intercept:{filter_name}")
        self.on_filter(filter_name).with_arguments(*args).perform(intercept)
        self._intercepts.append((HookKind.FILTER.value, filter_name, intercept))
        return intercept

    def expect_hook_added(
        self,
        kind: HookKind | str,
        hook: str,
        callback: Any,
        priority: int | None = None,
        accepted_args: int | None = None,
    ) -> mock.Mock:
        hooks_cfg = self.config.hooks
        kind = HookKind(kind)
        intercept = mock.Mock(name=f"intercept:{kind.value}::{hook}")
        self.on_hook_added(hook, kind).with_arguments(
            callback,
            hooks_cfg.default_priority if priority is None else priority,
            hooks_cfg.default_accepted_args if accepted_args is None else accepted_args,
        ).perform(intercept)
        self._intercepts.append((_ADDED, f"{kind.value}::{hook}", intercept))
        return intercept

    def expect_action_added(
        self, action: str, callback: Any, priority: int | None = None, accepted_args: int | None = None
    ) -> mock.Mock:
        return self.expect_hook_added(HookKind.ACTION, action, callback, priority, accepted_args)

    def expect_filter_added(
        self, filter_name: str, callback: Any, priority: int | None = None, accepted_args: int | None = None
    ) -> mock.Mock:
        return self.expect_hook_added(HookKind.FILTER, filter_name, callback, priority, accepted_args)

    def wp_function(self, function_name: str, **options: Any) -> FunctionExpectation:
        return self.functions.register(function_name, **options)

    def wp_passthru_function(
        self,
        function_name: str,
        *,
        times: CountSpec = None,
        args: list | None = None,
    ) -> FunctionExpectation:
        return self.functions.passthru(function_name, times=times, args=args)

    @staticmethod
    def fuzzy_object(thing: Any) -> FuzzyObject:
        return FuzzyObject(thing)

    # Verdicts

    def _uncalled(self, kind: str) -> list[str]:
        return [
            label
            for intercept_kind, label, observer in self._intercepts
            if intercept_kind == kind and not observer.called
        ]

    def verdict(self) -> Verdict:
        # Over-called names are reported once, as over-calls, not as never invoked.
        over_calls = _unique(self.registry.over_calls + self.functions.over_calls)

        def pending(names: list[str]) -> list[str]:
            return [name for name in _unique(names) if name not in over_calls]

        return Verdict(
            unsatisfied_actions=pending(self.registry.unsatisfied_names(HookKind.ACTION) + self._uncalled("action")),
            unsatisfied_filters=pending(self.registry.unsatisfied_names(HookKind.FILTER) + self._uncalled("filter")),
            missing_hooks=pending(self.registry.unsatisfied_hooks() + self._uncalled(_ADDED)),
            unsatisfied_functions=pending(self.functions.unsatisfied_names()),
            over_calls=over_calls,
        )

    def assert_actions_called(self) -> None:
        failed = self.verdict().unsatisfied_actions
        if failed:
            raise ExpectationFailedError("Method failed to invoke actions: " + ", ".join(failed), failed)

    def assert_filters_called(self) -> None:
        failed = self.verdict().unsatisfied_filters
        if failed:
            raise ExpectationFailedError("Method failed to invoke filters: " + ", ".join(failed), failed)

    def assert_hooks_added(self) -> None:
        failed = self.verdict().missing_hooks
        if failed:
            raise ExpectationFailedError("Method failed to add hooks: " + ", ".join(failed), failed)

    def assert_functions_called(self) -> None:
        failed = self.verdict().unsatisfied_functions
        if failed:
            raise ExpectationFailedError("Method failed to call functions: " + ", ".join(failed), failed)

    def verify(self) -> None:
        verdict = self.verdict()
        if verdict.passed:
            return
        failures = verdict.failures()
        logger.debug("Verification failed: %s", failures)
        raise ExpectationFailedError("\n".join(failures), failures)

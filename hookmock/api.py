"""Host API stand-ins that forward into a MockContext."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest import mock

from hookmock.models import HookKind

DEFAULT_CONSTANTS: dict[str, Any] = {
    "MINUTE_IN_SECONDS": 60,
    "HOUR_IN_SECONDS": 3600,
    "DAY_IN_SECONDS": 86400,
    "WEEK_IN_SECONDS": 604800,
    "MONTH_IN_SECONDS": 2592000,
    "YEAR_IN_SECONDS": 31536000,
}

if TYPE_CHECKING:
    from hookmock.context import MockContext


class HostAPI:
    """The functions plugin code calls, bound to one test's context.

    Hook functions are fixed methods; every other host function resolves by
    name through the context's function registry.
    """

    def __init__(self, context: MockContext) -> None:
        self._context = context

    def add_action(
        self,
        hook: str,
        callback: Any,
        priority: int | None = None,
        accepted_args: int | None = None,
    ) -> bool:
        return self._add_hook(HookKind.ACTION, hook, callback, priority, accepted_args)

    def add_filter(
        self,
        hook: str,
        callback: Any,
        priority: int | None = None,
        accepted_args: int | None = None,
    ) -> bool:
        return self._add_hook(HookKind.FILTER, hook, callback, priority, accepted_args)

    def _add_hook(
        self,
        kind: HookKind,
        hook: str,
        callback: Any,
        priority: int | None,
        accepted_args: int | None,
    ) -> bool:
        hooks_cfg = self._context.config.hooks
        self._context.registry.hook_added(
            kind,
            hook,
            callback,
            hooks_cfg.default_priority if priority is None else priority,
            hooks_cfg.default_accepted_args if accepted_args is None else accepted_args,
        )
        return True

    def do_action(self, hook: str, *args: Any) -> None:
        self._context.registry.notify_invoked(HookKind.ACTION, hook, args)

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        call_args = (value, *args)
        matched = self._context.registry.notify_invoked(HookKind.FILTER, hook, call_args)
        if matched is None:
            return value
        expectation = self._context.registry.find(HookKind.FILTER, hook)
        reply = expectation.reply_for(call_args) if expectation is not None else None
        if reply is None:
            return value
        return reply.resolve(call_args)

    def call(self, name: str, *args: Any) -> Any:
        return self._context.functions.call(name, *args)

    def function(self, name: str) -> mock.Mock:
        return self._context.functions.stub(name)

    def constant(self, name: str) -> Any:
        constants = self._context.config.constants
        if name in constants:
            return constants[name]
        if name in DEFAULT_CONSTANTS:
            return DEFAULT_CONSTANTS[name]
        raise KeyError(f"Undefined constant: {name}")

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if not self._context.functions.is_registered(name):
            raise AttributeError(f"No stub registered for host function {name!r}")
        return self._context.functions.stub(name)

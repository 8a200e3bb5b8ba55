"""Expectations configured against a single named hook."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from hookmock.counts import CountConstraint, CountSpec, parse_count_spec
from hookmock.matchers import Matcher, args_match, as_matcher
from hookmock.models import HookKind
from hookmock.returns import ComputedReturn, LiteralReturn, ReturnSpec

logger = logging.getLogger(__name__)

Responder = Callable[..., Any]


@dataclass(frozen=True)
class ExpectedCall:
    matchers: tuple[Matcher, ...] = ()
    responder: Responder | None = None
    reply: ReturnSpec | None = None

    def matches(self, args: Sequence[Any]) -> bool:
        return args_match(self.matchers, args)

    def describe(self) -> str:
        if not self.matchers:
            return "(*any*)"
        return "(" + ", ".join(repr(m) for m in self.matchers) + ")"


class HookExpectation:
    """Accumulates argument variants, a call count and responders for one hook.

    Repeated builder calls refine the same instance. The count constraint is
    shared by every argument variant: a call matching any of them counts once.
    """

    def __init__(self, kind: HookKind, name: str) -> None:
        self.kind = kind
        self.name = name
        self.calls: list[ExpectedCall] = []
        self.constraint = CountConstraint()

    @property
    def key(self) -> tuple[HookKind, str]:
        return (self.kind, self.name)

    def with_arguments(self, *expected: Any) -> HookExpectation:
        self.calls.append(ExpectedCall(matchers=tuple(as_matcher(value) for value in expected)))
        logger.debug("%s %s: accepting arguments %s", self.kind.value, self.name, self.calls[-1].describe())
        return self

    def with_count(self, spec: CountSpec) -> HookExpectation:
        observed = self.constraint.observed
        self.constraint = parse_count_spec(spec)
        self.constraint.observed = observed
        return self

    def perform(self, responder: Responder) -> HookExpectation:
        self._update_last(responder=responder)
        return self

    def reply(self, value: Any) -> HookExpectation:
        self._update_last(reply=LiteralReturn(value))
        return self

    def reply_with(self, func: Callable[..., Any]) -> HookExpectation:
        self._update_last(reply=ComputedReturn(func))
        return self

    def _update_last(self, **changes: Any) -> None:
        if not self.calls:
            self.calls.append(ExpectedCall())
        self.calls[-1] = replace(self.calls[-1], **changes)

    def matching_calls(self, args: Sequence[Any]) -> list[ExpectedCall]:
        if not self.calls:
            return [ExpectedCall()]
        return [call for call in self.calls if call.matches(args)]

    def notify(self, args: Sequence[Any]) -> ExpectedCall | None:
        """Record one matching invocation and run the responders it matched."""
        matched = self.matching_calls(args)
        if not matched:
            logger.debug("%s %s: no variant matched %r", self.kind.value, self.name, tuple(args))
            return None
        self.constraint.record()
        for call in matched:
            if call.responder is not None:
                call.responder(*args)
        return matched[0]

    def reply_for(self, args: Sequence[Any]) -> ReturnSpec | None:
        for call in self.matching_calls(args):
            if call.reply is not None:
                return call.reply
        return None

    def is_satisfied(self) -> bool:
        return self.constraint.is_satisfied()

    def describe(self) -> str:
        return f"{self.name} ({self.constraint.describe()})"

    def __repr__(self) -> str:
        return f"HookExpectation(kind={self.kind.value!r}, name={self.name!r}, calls={len(self.calls)})"

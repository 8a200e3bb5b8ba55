"""Hook registry: owns every hook expectation for one test."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from hookmock.errors import OverCallError
from hookmock.expectations import ExpectedCall, HookExpectation
from hookmock.models import HookKind

logger = logging.getLogger(__name__)

HookKey = tuple[HookKind, str]


class HookRegistry:
    """Expectations keyed by (kind, name) for fired hooks and for added callbacks.

    Fired hooks are ``do_action``/``apply_filters`` style invocations. Added
    callbacks are ``add_action``/``add_filter`` style registrations and live in
    a separate table.
    """

    def __init__(self, raise_on_over_call: bool = True) -> None:
        self.raise_on_over_call = raise_on_over_call
        self._fired: dict[HookKey, HookExpectation] = {}
        self._added: dict[HookKey, HookExpectation] = {}
        self.over_calls: list[str] = []

    def get_or_create(self, kind: HookKind, name: str) -> HookExpectation:
        key = (HookKind(kind), name)
        expectation = self._fired.get(key)
        if expectation is None:
            expectation = HookExpectation(key[0], name)
            self._fired[key] = expectation
            logger.debug("Registered %s expectation for %s", key[0].value, name)
        return expectation

    def action(self, name: str) -> HookExpectation:
        return self.get_or_create(HookKind.ACTION, name)

    def filter(self, name: str) -> HookExpectation:
        return self.get_or_create(HookKind.FILTER, name)

    def callback(self, name: str, kind: HookKind | str = HookKind.FILTER) -> HookExpectation:
        key = (HookKind(kind), name)
        expectation = self._added.get(key)
        if expectation is None:
            expectation = HookExpectation(key[0], name)
            self._added[key] = expectation
            logger.debug("Registered %s-added expectation for %s", key[0].value, name)
        return expectation

    def find(self, kind: HookKind, name: str) -> HookExpectation | None:
        return self._fired.get((HookKind(kind), name))

    def notify_invoked(self, kind: HookKind, name: str, args: Sequence[Any] = ()) -> ExpectedCall | None:
        expectation = self.find(kind, name)
        if expectation is None:
            return None
        return self._dispatch(expectation, tuple(args), expectation.name)

    def hook_added(
        self,
        kind: HookKind,
        name: str,
        callback: Any,
        priority: int = 10,
        accepted_args: int = 1,
    ) -> ExpectedCall | None:
        expectation = self._added.get((HookKind(kind), name))
        if expectation is None:
            return None
        return self._dispatch(expectation, (callback, priority, accepted_args), _added_label(expectation))

    def _dispatch(self, expectation: HookExpectation, args: tuple, label: str) -> ExpectedCall | None:
        matched = expectation.notify(args)
        if matched is None:
            return None
        constraint = expectation.constraint
        if not constraint.can_still_be_satisfied():
            logger.warning("%s over-called: %s", label, constraint.describe())
            if label not in self.over_calls:
                self.over_calls.append(label)
            if self.raise_on_over_call:
                raise OverCallError(label, constraint.observed, constraint.maximum or 0)
        return matched

    def expectations(self, kind: HookKind) -> list[HookExpectation]:
        return [exp for (exp_kind, _), exp in self._fired.items() if exp_kind == kind]

    def all_satisfied(self, kind: HookKind) -> bool:
        return all(exp.is_satisfied() for exp in self.expectations(HookKind(kind)))

    def unsatisfied_names(self, kind: HookKind) -> list[str]:
        return [exp.name for exp in self.expectations(HookKind(kind)) if not exp.is_satisfied()]

    def all_hooks_added(self) -> bool:
        return all(exp.is_satisfied() for exp in self._added.values())

    def unsatisfied_hooks(self) -> list[str]:
        return [_added_label(exp) for exp in self._added.values() if not exp.is_satisfied()]

    def reset(self) -> None:
        self._fired.clear()
        self._added.clear()
        self.over_calls.clear()

    flush = reset

    def __len__(self) -> int:
        return len(self._fired) + len(self._added)


def _added_label(expectation: HookExpectation) -> str:
    return f"{expectation.kind.value}::{expectation.name}"

"""Stand-ins for host API functions, with argument and call-count expectations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any
from unittest import mock

from hookmock.counts import CountSpec, parse_count_spec
from hookmock.errors import OverCallError, UnexpectedCallError
from hookmock.matchers import Matcher, args_match, as_matcher
from hookmock.returns import ReturnSpec, build_return_spec

logger = logging.getLogger(__name__)


class FunctionExpectation:
    def __init__(
        self,
        name: str,
        matchers: Sequence[Matcher] | None,
        times: CountSpec,
        returns: ReturnSpec,
    ) -> None:
        self.name = name
        self.matchers = tuple(matchers) if matchers is not None else None
        self.constraint = parse_count_spec(times)
        self.returns = returns

    def accepts(self, args: Sequence[Any]) -> bool:
        if self.matchers is None:
            return True
        if not self.matchers:
            return not args
        return args_match(self.matchers, args)

    def describe(self) -> str:
        return f"{self.name} ({self.constraint.describe()})"


class FunctionRegistry:
    """Named function stubs resolved through one dispatch table.

    A name may be registered several times, typically with different ``args``;
    each registration is its own expectation with its own count and return.
    """

    def __init__(self, raise_on_over_call: bool = True) -> None:
        self.raise_on_over_call = raise_on_over_call
        self._expectations: dict[str, list[FunctionExpectation]] = {}
        self._stubs: dict[str, mock.Mock] = {}
        self.over_calls: list[str] = []

    def register(
        self,
        name: str,
        *,
        times: CountSpec = None,
        args: Sequence[Any] | None = None,
        returns: Any = None,
        computed: Callable[..., Any] | None = None,
        return_in_order: Sequence[Any] | None = None,
        return_arg: int | bool | None = None,
    ) -> FunctionExpectation:
        expectation = FunctionExpectation(
            name,
            [as_matcher(value) for value in args] if args is not None else None,
            times,
            build_return_spec(
                returns=returns,
                computed=computed,
                return_in_order=return_in_order,
                return_arg=return_arg,
            ),
        )
        self._expectations.setdefault(name, []).append(expectation)
        self.stub(name)
        logger.debug("Registered function stub %s", name)
        return expectation

    def passthru(self, name: str, **options: Any) -> FunctionExpectation:
        options.pop("returns", None)
        options.pop("computed", None)
        options.pop("return_in_order", None)
        options["return_arg"] = 0
        return self.register(name, **options)

    def is_registered(self, name: str) -> bool:
        return name in self._expectations

    def stub(self, name: str) -> mock.Mock:
        stand_in = self._stubs.get(name)
        if stand_in is None:
            stand_in = mock.Mock(
                name=name,
                side_effect=lambda *args, **kwargs: self._resolve(name, args, kwargs),
            )
            self._stubs[name] = stand_in
        return stand_in

    def call(self, name: str, *args: Any) -> Any:
        if name not in self._expectations:
            raise UnexpectedCallError(name, args)
        return self.stub(name)(*args)

    def _resolve(self, name: str, args: tuple, kwargs: dict[str, Any] | None = None) -> Any:
        # Host functions take positional arguments only.
        if kwargs:
            raise UnexpectedCallError(name, args, kwargs)
        candidates = [exp for exp in self._expectations.get(name, []) if exp.accepts(args)]
        if not candidates:
            raise UnexpectedCallError(name, args)
        expectation = next((exp for exp in candidates if exp.constraint.has_capacity()), candidates[-1])
        expectation.constraint.record()
        if not expectation.constraint.can_still_be_satisfied():
            logger.warning("%s over-called: %s", name, expectation.constraint.describe())
            if name not in self.over_calls:
                self.over_calls.append(name)
            if self.raise_on_over_call:
                raise OverCallError(name, expectation.constraint.observed, expectation.constraint.maximum or 0)
        return expectation.returns.resolve(args)

    def unsatisfied_names(self) -> list[str]:
        names: list[str] = []
        for name, expectations in self._expectations.items():
            if any(not exp.constraint.is_satisfied() for exp in expectations) and name not in names:
                names.append(name)
        return names

    def all_satisfied(self) -> bool:
        return not self.unsatisfied_names()

    def flush(self) -> None:
        self._expectations.clear()
        self._stubs.clear()
        self.over_calls.clear()

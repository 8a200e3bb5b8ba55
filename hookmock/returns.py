"""Return-value strategies for stubbed functions and filter replies."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from hookmock.errors import ConfigurationError


class ReturnSpec:
    def resolve(self, args: Sequence[Any]) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class LiteralReturn(ReturnSpec):
    value: Any = None

    def resolve(self, args: Sequence[Any]) -> Any:
        return self.value


@dataclass(frozen=True)
class ComputedReturn(ReturnSpec):
    func: Callable[..., Any]

    def resolve(self, args: Sequence[Any]) -> Any:
        return self.func(*args)


@dataclass(frozen=True)
class ArgumentReturn(ReturnSpec):
    index: int = 0

    def resolve(self, args: Sequence[Any]) -> Any:
        if self.index >= len(args):
            raise IndexError(f"return_arg {self.index} out of range for {len(args)} arguments")
        return args[self.index]


@dataclass
class SequenceReturn(ReturnSpec):
    """Returns the values in order; the last one repeats once exhausted."""

    values: list[Any]
    _position: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        if not self.values:
            raise ConfigurationError("return_in_order needs at least one value")

    def resolve(self, args: Sequence[Any]) -> Any:
        value = self.values[min(self._position, len(self.values) - 1)]
        self._position += 1
        return value


def build_return_spec(
    *,
    returns: Any = None,
    computed: Callable[..., Any] | None = None,
    return_in_order: Sequence[Any] | None = None,
    return_arg: int | bool | None = None,
) -> ReturnSpec:
    """Pick one strategy: return_arg > return_in_order > computed > returns."""
    if return_arg is not None and return_arg is not False:
        index = 0 if return_arg is True else return_arg
        if not isinstance(index, int) or index < 0:
            raise ConfigurationError(f"return_arg must be a non-negative position, got {return_arg!r}")
        return ArgumentReturn(index)
    if return_in_order is not None:
        return SequenceReturn(list(return_in_order))
    if computed is not None:
        return ComputedReturn(computed)
    return LiteralReturn(returns)

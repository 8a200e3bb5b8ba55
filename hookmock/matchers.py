"""Argument matchers used to compare expected and received hook arguments."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from hookmock.errors import ConfigurationError

WILDCARD = "*"

_MISSING = object()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_NAMED_TYPES: dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    "str": lambda v: isinstance(v, str),
    "int": _is_int,
    "integer": _is_int,
    "float": lambda v: isinstance(v, float),
    "double": lambda v: isinstance(v, float),
    "bool": lambda v: isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "numeric": lambda v: _is_int(v) or isinstance(v, float),
    "array": lambda v: isinstance(v, (list, tuple, dict)),
    "list": lambda v: isinstance(v, (list, tuple)),
    "dict": lambda v: isinstance(v, Mapping),
    "mapping": lambda v: isinstance(v, Mapping),
    "callable": callable,
    "null": lambda v: v is None,
    "none": lambda v: v is None,
    "object": lambda v: v is not None and not isinstance(v, (str, int, float, bool, list, tuple, dict)),
}


class Matcher:
    """Pure predicate over a single received argument."""

    def matches(self, candidate: Any) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class AnyValue(Matcher):
    def matches(self, candidate: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return "'*'"


@dataclass(frozen=True)
class Equals(Matcher):
    value: Any

    def matches(self, candidate: Any) -> bool:
        if candidate is self.value:
            return True
        if isinstance(candidate, bool) != isinstance(self.value, bool):
            return False
        try:
            return bool(candidate == self.value)
        except (TypeError, ValueError):
            return False

    def __repr__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class TypeOf(Matcher):
    """Matches by Python type, a well-known type name, or a class name in the MRO."""

    expected: type | str

    def matches(self, candidate: Any) -> bool:
        if isinstance(self.expected, type):
            return isinstance(candidate, self.expected)
        check = _NAMED_TYPES.get(self.expected.lower())
        for cls in type(candidate).__mro__:
            # Built-in classes behind a well-known name are left to the table (bool is not "int").
            if check is not None and cls.__module__ == "builtins":
                continue
            if self.expected in (cls.__name__, cls.__qualname__, f"{cls.__module__}.{cls.__qualname__}"):
                return True
        return check is not None and bool(check(candidate))

    def __repr__(self) -> str:
        name = self.expected.__name__ if isinstance(self.expected, type) else self.expected
        return f"<type {name}>"


@dataclass(frozen=True)
class AnyOf(Matcher):
    values: tuple[Any, ...]

    def __init__(self, values: Iterable[Any]) -> None:
        object.__setattr__(self, "values", tuple(values))

    def matches(self, candidate: Any) -> bool:
        return any(Equals(value).matches(candidate) for value in self.values)

    def __repr__(self) -> str:
        return f"<any of {list(self.values)!r}>"


@dataclass(frozen=True)
class Predicate(Matcher):
    func: Callable[[Any], bool]

    def matches(self, candidate: Any) -> bool:
        return bool(self.func(candidate))

    def __repr__(self) -> str:
        return f"<predicate {getattr(self.func, '__name__', self.func)!r}>"


def _template_properties(thing: Any) -> dict[str, Any]:
    props: dict[str, Any] = dict(getattr(thing, "__dict__", {}))
    for cls in type(thing).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        for slot in (slots,) if isinstance(slots, str) else slots:
            if slot not in ("__dict__", "__weakref__") and hasattr(thing, slot):
                props.setdefault(slot, getattr(thing, slot))
    if not props and not hasattr(thing, "__dict__"):
        raise ConfigurationError(f"Cannot build a fuzzy template from {type(thing).__name__}: it has no attributes")
    return props


def _property(candidate: Any, key: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(key, _MISSING)
    return getattr(candidate, key, _MISSING)


@dataclass(frozen=True)
class FuzzyObject(Matcher):
    """Structural match: every declared property must be present and match.

    Properties the candidate carries beyond the declared ones are ignored.
    Nested mappings are matched fuzzily as well.
    """

    properties: dict[str, Any] = field(default_factory=dict)

    def __init__(self, thing: Mapping[str, Any] | Any) -> None:
        props = dict(thing) if isinstance(thing, Mapping) else _template_properties(thing)
        object.__setattr__(self, "properties", props)

    def matches(self, candidate: Any) -> bool:
        if candidate is None or isinstance(candidate, (str, bytes, int, float, bool, list, tuple)):
            return False
        for key, expected in self.properties.items():
            actual = _property(candidate, key)
            if actual is _MISSING:
                return False
            if not _nested_matcher(expected).matches(actual):
                return False
        return True

    def __repr__(self) -> str:
        return f"<fuzzy {self.properties!r}>"


def _nested_matcher(expected: Any) -> Matcher:
    if isinstance(expected, Mapping):
        return FuzzyObject(expected)
    return as_matcher(expected)


def as_matcher(value: Any) -> Matcher:
    if isinstance(value, Matcher):
        return value
    if isinstance(value, str) and value == WILDCARD:
        return AnyValue()
    return Equals(value)


def args_match(matchers: Sequence[Matcher], args: Sequence[Any]) -> bool:
    """Positional match; an empty matcher list accepts any arguments."""
    if not matchers:
        return True
    if len(matchers) != len(args):
        return False
    return all(matcher.matches(arg) for matcher, arg in zip(matchers, args))

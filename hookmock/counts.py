"""Call-count constraints and their compact text notation."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hookmock.errors import ConfigurationError

_SPEC_RE = re.compile(r"^\s*(\d+)\s*(?:([+-])|-\s*(\d+))?\s*$")

CountSpec = int | str | None


class CountConstraint(BaseModel):
    model_config = ConfigDict(extra="forbid")

    minimum: int = Field(default=0, ge=0)
    maximum: int | None = Field(default=None, ge=0)
    observed: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> CountConstraint:
        if self.maximum is not None and self.maximum < self.minimum:
            raise ValueError(f"maximum {self.maximum} is below minimum {self.minimum}")
        return self

    def record(self) -> None:
        self.observed += 1

    def is_satisfied(self) -> bool:
        return self.minimum <= self.observed and self.can_still_be_satisfied()

    def can_still_be_satisfied(self) -> bool:
        return self.maximum is None or self.observed <= self.maximum

    def has_capacity(self) -> bool:
        """True while one more call would stay within the maximum."""
        return self.maximum is None or self.observed < self.maximum

    def describe(self) -> str:
        if self.maximum is None:
            expected = f"at least {self.minimum}"
        elif self.minimum == self.maximum:
            expected = f"exactly {self.minimum}"
        elif self.minimum == 0:
            expected = f"at most {self.maximum}"
        else:
            expected = f"between {self.minimum} and {self.maximum}"
        return f"expected {expected} calls, got {self.observed}"


def parse_count_spec(spec: CountSpec) -> CountConstraint:
    """Build a constraint from ``None``, ``N``, ``"N+"``, ``"N-"`` or ``"A-B"``."""
    if spec is None:
        return CountConstraint()
    if isinstance(spec, bool):
        raise ConfigurationError(f"Invalid call count: {spec!r}")
    if isinstance(spec, int):
        if spec < 0:
            raise ConfigurationError(f"Call count must be non-negative: {spec}")
        return CountConstraint(minimum=spec, maximum=spec)
    if not isinstance(spec, str):
        raise ConfigurationError(f"Call count must be an int or string, got {type(spec).__name__}")

    match = _SPEC_RE.match(spec)
    if match is None:
        raise ConfigurationError(f"Invalid call count: {spec!r}")

    first = int(match.group(1))
    suffix, upper = match.group(2), match.group(3)
    if upper is not None:
        minimum, maximum = first, int(upper)
    elif suffix == "+":
        minimum, maximum = first, None
    elif suffix == "-":
        minimum, maximum = 0, first
    else:
        minimum, maximum = first, first

    if maximum is not None and maximum < minimum:
        raise ConfigurationError(f"Invalid call count {spec!r}: maximum {maximum} is below minimum {minimum}")
    return CountConstraint(minimum=minimum, maximum=maximum)

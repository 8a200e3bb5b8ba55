"""Core Pydantic domain models for hookmock."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HookKind(str, Enum):
    ACTION = "action"
    FILTER = "filter"


class HookRow(BaseModel):
    """One row of an expectation table: a hook and the callback wired to it."""

    model_config = ConfigDict(extra="forbid")

    hook: str = ""
    callback: str = ""
    priority: int = 10
    arguments: int = 1


class Verdict(BaseModel):
    model_config = ConfigDict(extra="forbid")

    unsatisfied_actions: list[str] = Field(default_factory=list)
    unsatisfied_filters: list[str] = Field(default_factory=list)
    missing_hooks: list[str] = Field(default_factory=list)
    unsatisfied_functions: list[str] = Field(default_factory=list)
    over_calls: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures()

    def failures(self) -> list[str]:
        lines: list[str] = []
        if self.unsatisfied_actions:
            lines.append("Method failed to invoke actions: " + ", ".join(self.unsatisfied_actions))
        if self.unsatisfied_filters:
            lines.append("Method failed to invoke filters: " + ", ".join(self.unsatisfied_filters))
        if self.missing_hooks:
            lines.append("Method failed to add hooks: " + ", ".join(self.missing_hooks))
        if self.unsatisfied_functions:
            lines.append("Method failed to call functions: " + ", ".join(self.unsatisfied_functions))
        if self.over_calls:
            lines.append("Called too many times: " + ", ".join(self.over_calls))
        return lines

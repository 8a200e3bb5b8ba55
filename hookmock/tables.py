"""Table front end: expectation rows written as Gherkin pipe tables or YAML."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from hookmock.api import HostAPI
from hookmock.context import MockContext
from hookmock.errors import ConfigurationError
from hookmock.models import HookKind, HookRow


def parse_table(text: str) -> list[dict[str, str]]:
    """Parse a pipe table whose first row holds the column names."""
    rows = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if not (stripped.startswith("|") and stripped.endswith("|")):
            raise ConfigurationError(f"Not a table row: {stripped!r}")
        rows.append([cell.strip() for cell in stripped[1:-1].split("|")])
    if not rows:
        return []

    header, body = rows[0], rows[1:]
    hashes = []
    for cells in body:
        if len(cells) != len(header):
            raise ConfigurationError(f"Row has {len(cells)} cells, header has {len(header)}: {cells}")
        hashes.append(dict(zip(header, cells)))
    return hashes


def load_table(path: str | Path) -> list[dict[str, Any]]:
    path = Path(path)
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise ConfigurationError(f"YAML at {path} must decode to a list of mappings")
        return data
    return parse_table(text)


def to_rows(kind: HookKind, table: Iterable[Mapping[str, Any]]) -> list[HookRow]:
    """Validate raw rows; the hook column may be named after the kind."""
    kind = HookKind(kind)
    rows = []
    for raw in table:
        data = {key: value for key, value in raw.items() if value != ""}
        if kind.value in data:
            data["hook"] = data.pop(kind.value)
        try:
            rows.append(HookRow.model_validate(data))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid {kind.value} row {dict(raw)}: {exc}") from exc
    return rows


def expect_hooks_added(context: MockContext, kind: HookKind, table: Iterable[Mapping[str, Any]]) -> list[HookRow]:
    rows = to_rows(kind, table)
    for row in rows:
        context.expect_hook_added(kind, row.hook, row.callback, row.priority, row.arguments)
    return rows


def add_hooks(api: HostAPI, kind: HookKind, table: Iterable[Mapping[str, Any]]) -> list[HookRow]:
    rows = to_rows(kind, table)
    add = api.add_action if HookKind(kind) == HookKind.ACTION else api.add_filter
    for row in rows:
        add(row.hook, row.callback, row.priority, row.arguments)
    return rows


def expect_actions_added(context: MockContext, table: Iterable[Mapping[str, Any]]) -> list[HookRow]:
    return expect_hooks_added(context, HookKind.ACTION, table)


def expect_filters_added(context: MockContext, table: Iterable[Mapping[str, Any]]) -> list[HookRow]:
    return expect_hooks_added(context, HookKind.FILTER, table)


def add_actions(api: HostAPI, table: Iterable[Mapping[str, Any]]) -> list[HookRow]:
    return add_hooks(api, HookKind.ACTION, table)


def add_filters(api: HostAPI, table: Iterable[Mapping[str, Any]]) -> list[HookRow]:
    return add_hooks(api, HookKind.FILTER, table)

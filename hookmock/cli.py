"""CLI entrypoint for validating expectation tables and inspecting config."""

from __future__ import annotations

import argparse
import json
import logging

import yaml

from hookmock.config import load_effective_config
from hookmock.logging_utils import configure_logging
from hookmock.models import HookKind
from hookmock.tables import load_table, to_rows

logger = logging.getLogger(__name__)


def _run_check(args: argparse.Namespace) -> int:
    rows = to_rows(HookKind(args.kind), load_table(args.table))
    logger.info("Validated %s %s rows from %s", len(rows), args.kind, args.table)
    print(json.dumps([row.model_dump() for row in rows], indent=2))
    return 0


def _run_show_config(args: argparse.Namespace) -> int:
    config = load_effective_config(args.project_path)
    print(yaml.safe_dump(config.model_dump(), sort_keys=False), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="hookmock expectation tooling")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate an expectation table (pipe table or YAML list)")
    check.add_argument("table", help="Path to the table file")
    check.add_argument(
        "--kind",
        choices=[kind.value for kind in HookKind],
        default=HookKind.ACTION.value,
        help="Hook kind the rows describe",
    )

    show = sub.add_parser("show-config", help="Print the effective configuration as YAML")
    show.add_argument("--project-path", default=".", help="Directory holding .hookmock.yaml")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "check":
        return _run_check(args)
    if args.command == "show-config":
        return _run_show_config(args)
    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

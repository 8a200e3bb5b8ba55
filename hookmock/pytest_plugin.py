"""Pytest integration: a ``hookmock`` fixture scoped to one test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from hookmock.config import load_effective_config
from hookmock.context import MockContext

_CALL_PASSED = pytest.StashKey[bool]()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> Iterator[None]:
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.stash[_CALL_PASSED] = report.passed


@pytest.fixture
def hookmock(request: pytest.FixtureRequest) -> Iterator[MockContext]:
    config = load_effective_config(request.config.rootpath)
    context = MockContext(config).set_up()
    yield context
    # A failed or skipped body already reported; verifying would add a second error.
    if request.node.stash.get(_CALL_PASSED, False):
        context.tear_down()
    else:
        context.abandon()

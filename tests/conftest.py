"""
Global pytest configuration and fixtures for sql-shuffle tests.

This module provides:
- In-memory fake clients and connectors (no database needed)
- Script builders
- E2E gating for tests that need a live Postgres (E2E_TEST=1 + DATABASE_URL)
"""

from __future__ import annotations

import os
from typing import Callable, Iterable, Optional

import pytest

from shuffler.connectors.postgres_client import StatementOutcome
from shuffler.core.errors import ConnectError, StatementError
from shuffler.models import Statement, build_script


def is_e2e_test() -> bool:
    """Check if we're running E2E tests (vs unit tests)."""
    return os.getenv("E2E_TEST", "").lower() in ("1", "true", "yes")


# =============================================================================
# Fake clients
# =============================================================================


class FakeClient:
    """Records every statement; fails those for which ``fail_when`` is true."""

    def __init__(
        self,
        client_id: int,
        log: list,
        fail_when: Optional[Callable[[int, str], bool]] = None,
    ):
        self.client_id = client_id
        self.log = log
        self.fail_when = fail_when
        self.closed = False

    async def execute(self, sql: str) -> StatementOutcome:
        self.log.append((self.client_id, sql))
        if self.fail_when is not None and self.fail_when(self.client_id, sql):
            raise StatementError(f"injected failure: {sql}", "40P01")
        return StatementOutcome(status="SELECT 1", rowcount=1)

    async def close(self) -> None:
        self.closed = True


class FakeConnector:
    """Connector callable for ClientPool that hands out FakeClients."""

    def __init__(
        self,
        fail_when: Optional[Callable[[int, str], bool]] = None,
        refuse: Iterable[int] = (),
    ):
        self.executed: list = []
        self.connects: list[int] = []
        self.clients: list[FakeClient] = []
        self.fail_when = fail_when
        self.refuse = set(refuse)

    async def __call__(self, client_id: int, db_url: str, timeout: float) -> FakeClient:
        if client_id in self.refuse:
            raise ConnectError(client_id, db_url, OSError("connection refused"))
        self.connects.append(client_id)
        client = FakeClient(client_id, self.executed, self.fail_when)
        self.clients.append(client)
        return client


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture
def make_scripts() -> Callable[..., list[list[Statement]]]:
    """
    Factory turning lists of SQL texts into client-tagged scripts.

    Usage:
        scripts = make_scripts(["A1", "A2"], ["B1"])
    """

    def _make(*texts: list[str]) -> list[list[Statement]]:
        return [build_script(i, t) for i, t in enumerate(texts)]

    return _make


# =============================================================================
# Test Markers
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """
    Automatically skip E2E tests unless E2E_TEST=1 is set.
    """
    skip_e2e = pytest.mark.skip(reason="E2E tests require E2E_TEST=1")

    for item in items:
        if "e2e" in item.keywords and not is_e2e_test():
            item.add_marker(skip_e2e)

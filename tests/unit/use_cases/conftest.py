"""Fixtures for use case tests."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def ledger():
    return AsyncMock()


@pytest.fixture
def unit_of_work(ledger):
    """Unit of work whose ``begin()`` yields the mocked ledger."""
    uow = MagicMock()
    uow.entered = 0

    @asynccontextmanager
    async def begin():
        uow.entered += 1
        yield ledger

    uow.begin = begin
    return uow

"""Pytest configuration and fixtures."""

import pytest_asyncio

from devdecision.db import close_db, init_db
from devdecision.inventory import seed_inventory


@pytest_asyncio.fixture
async def catalog_db(tmp_path, monkeypatch):
    """Empty catalog database in a temporary DATA_DIR."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    await close_db()
    await init_db()
    yield tmp_path
    await close_db()


@pytest_asyncio.fixture
async def seeded_db(catalog_db):
    """Catalog database loaded with the default criteria and technologies."""
    await seed_inventory()
    yield catalog_db

"""Shared fixtures for catalogue tests."""

from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.infrastructure.config import settings
from catalogue_api.infrastructure.database import Database
from catalogue_api.main import app

ItemFactory = Callable[..., dict[str, Any]]


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def make_item() -> ItemFactory:
    """Build valid catalogue records; keyword arguments override fields."""

    def factory(sku: int, /, **overrides: Any) -> dict[str, Any]:
        item = {
            "sku": sku,
            "name": f"Item {sku}",
            "type": "HardGood",
            "price": 100,
            "upc": f"{sku:012d}",
            "category": [{"id": "abcat0100000", "name": "Electronics"}],
            "shipping": 0,
            "description": f"Description of item {sku}",
            "manufacturer": "Acme",
            "model": f"MOD-{sku}",
            "url": f"https://example.com/products/{sku}",
            "image": f"https://example.com/images/{sku}.jpg",
        }
        item.update(overrides)
        return item

    return factory


# ============================================================================
# Database Fixtures
# ============================================================================


def sqlite_url(path: Path) -> str:
    """SQLite URL for a database file under path."""
    return f"sqlite+aiosqlite:///{path / 'catalogue.db'}"


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Connected database with the catalogue schema."""
    database = Database(sqlite_url(tmp_path))
    await database.connect()
    await database.create_schema()
    yield database
    await database.disconnect()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session on the test database."""
    async with database.session() as session:
        yield session


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """Test client running the app lifespan against a fresh SQLite database."""
    monkeypatch.setattr(settings, "database_url", sqlite_url(tmp_path))
    monkeypatch.setattr(settings, "create_schema", True)
    with TestClient(app) as client:
        yield client

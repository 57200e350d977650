"""Shared fixtures.

Canonical loan: $100K boat, $20K down, 6.5% APR, 240 months.
Storage runs against an in-memory SQLite database per test.
"""

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from harbor_finance.api.app import app
from harbor_finance.api.deps import get_manager
from harbor_finance.config import Settings
from harbor_finance.models.calculation import CalculationParameters
from harbor_finance.service.records import CalculationRecordManager
from harbor_finance.storage.sql import SqlCalculationStore, create_tables

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class BrokenStore:
    """Store whose every call fails like an unreachable database."""

    def _fail(self):
        raise ConnectionError("connection refused by 10.0.0.5:5432")

    async def create(self, calculation):
        self._fail()

    async def get(self, calculation_id):
        self._fail()

    async def get_by_share_token(self, share_token):
        self._fail()

    async def list_by_user(self, user_id, limit=20, listing_id=None):
        self._fail()

    async def set_share_token(self, calculation_id, share_token, updated_at):
        self._fail()

    async def delete(self, calculation_id):
        self._fail()


@pytest.fixture
def boat_loan() -> CalculationParameters:
    """$100K boat, $20K down, 6.5% for 20 years."""
    return CalculationParameters(
        boat_price=Decimal("100000"),
        down_payment=Decimal("20000"),
        interest_rate=Decimal("6.5"),
        term_months=240,
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, frontend_url="https://boats.example.com")


@pytest_asyncio.fixture
async def store():
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await create_tables(engine)
    yield SqlCalculationStore(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()


@pytest.fixture
def manager(store, test_settings) -> CalculationRecordManager:
    return CalculationRecordManager(store, test_settings)


@pytest_asyncio.fixture
async def client(manager):
    app.dependency_overrides[get_manager] = lambda: manager
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()

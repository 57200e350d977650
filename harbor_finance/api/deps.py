"""FastAPI dependency injection."""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from harbor_finance.config import settings
from harbor_finance.service.records import CalculationRecordManager
from harbor_finance.storage.base import CalculationStore
from harbor_finance.storage.sql import SqlCalculationStore

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


def get_store() -> CalculationStore:
    return SqlCalculationStore(async_session)


def get_manager(store: CalculationStore = Depends(get_store)) -> CalculationRecordManager:
    return CalculationRecordManager(store, settings)


def get_caller_id(x_user_id: str | None = Header(None, alias="X-User-Id")) -> str | None:
    """Caller identity as resolved by the authentication layer in front of this service."""
    return x_user_id or None

"""SQLAlchemy-backed calculation store.

Works with any async SQLAlchemy URL (PostgreSQL via asyncpg in production,
SQLite via aiosqlite for local development and tests).
"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from harbor_finance.models.calculation import (
    FinanceCalculation,
    LenderInfo,
    PaymentScheduleItem,
)
from harbor_finance.models.db import Base, FinanceCalculationRecord

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _schedule_to_json(schedule: tuple[PaymentScheduleItem, ...] | None) -> list[dict] | None:
    if schedule is None:
        return None
    return [
        {
            "payment_number": item.payment_number,
            "payment_date": item.payment_date.isoformat(),
            "principal_amount": str(item.principal_amount),
            "interest_amount": str(item.interest_amount),
            "total_payment": str(item.total_payment),
            "remaining_balance": str(item.remaining_balance),
        }
        for item in schedule
    ]


def _schedule_from_json(rows: list[dict] | None) -> tuple[PaymentScheduleItem, ...] | None:
    if rows is None:
        return None
    return tuple(
        PaymentScheduleItem(
            payment_number=row["payment_number"],
            payment_date=date.fromisoformat(row["payment_date"]),
            principal_amount=Decimal(row["principal_amount"]),
            interest_amount=Decimal(row["interest_amount"]),
            total_payment=Decimal(row["total_payment"]),
            remaining_balance=Decimal(row["remaining_balance"]),
        )
        for row in rows
    )


def _lender_to_json(lender: LenderInfo | None) -> dict | None:
    if lender is None:
        return None
    return {
        "name": lender.name,
        "rate": str(lender.rate) if lender.rate is not None else None,
        "terms": lender.terms,
    }


def _lender_from_json(data: dict | None) -> LenderInfo | None:
    if data is None:
        return None
    rate = data.get("rate")
    return LenderInfo(
        name=data.get("name"),
        rate=Decimal(rate) if rate is not None else None,
        terms=data.get("terms"),
    )


def to_record(calc: FinanceCalculation) -> FinanceCalculationRecord:
    return FinanceCalculationRecord(
        id=calc.calculation_id,
        created_at=calc.created_at,
        updated_at=calc.updated_at,
        user_id=calc.user_id,
        listing_id=calc.listing_id,
        boat_price=calc.boat_price,
        down_payment=calc.down_payment,
        loan_amount=calc.loan_amount,
        interest_rate=calc.interest_rate,
        term_months=calc.term_months,
        monthly_payment=calc.monthly_payment,
        total_interest=calc.total_interest,
        total_cost=calc.total_cost,
        payment_schedule=_schedule_to_json(calc.payment_schedule),
        saved=calc.saved,
        shared=calc.shared,
        share_token=calc.share_token,
        calculation_notes=calc.calculation_notes,
        lender_info=_lender_to_json(calc.lender_info),
    )


def to_domain(row: FinanceCalculationRecord) -> FinanceCalculation:
    return FinanceCalculation(
        calculation_id=row.id,
        created_at=_utc(row.created_at),
        updated_at=_utc(row.updated_at),
        user_id=row.user_id,
        listing_id=row.listing_id,
        boat_price=row.boat_price,
        down_payment=row.down_payment,
        loan_amount=row.loan_amount,
        interest_rate=row.interest_rate,
        term_months=row.term_months,
        monthly_payment=row.monthly_payment,
        total_interest=row.total_interest,
        total_cost=row.total_cost,
        payment_schedule=_schedule_from_json(row.payment_schedule),
        saved=row.saved,
        shared=row.shared,
        share_token=row.share_token,
        calculation_notes=row.calculation_notes,
        lender_info=_lender_from_json(row.lender_info),
    )


class SqlCalculationStore:
    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def create(self, calculation: FinanceCalculation) -> None:
        async with self._session_factory() as session:
            session.add(to_record(calculation))
            await session.commit()

    async def get(self, calculation_id: str) -> FinanceCalculation | None:
        async with self._session_factory() as session:
            row = await session.get(FinanceCalculationRecord, calculation_id)
            return to_domain(row) if row else None

    async def get_by_share_token(self, share_token: str) -> FinanceCalculation | None:
        async with self._session_factory() as session:
            row = (await session.execute(
                select(FinanceCalculationRecord)
                .where(FinanceCalculationRecord.share_token == share_token)
            )).scalar_one_or_none()
            return to_domain(row) if row else None

    async def list_by_user(
        self, user_id: str, limit: int = 20, listing_id: str | None = None
    ) -> list[FinanceCalculation]:
        query = (
            select(FinanceCalculationRecord)
            .where(FinanceCalculationRecord.user_id == user_id)
            .order_by(FinanceCalculationRecord.created_at.desc())
            .limit(limit)
        )
        if listing_id:
            query = query.where(FinanceCalculationRecord.listing_id == listing_id)
        async with self._session_factory() as session:
            rows = (await session.execute(query)).scalars().all()
            return [to_domain(row) for row in rows]

    async def set_share_token(
        self, calculation_id: str, share_token: str, updated_at: datetime
    ) -> bool:
        # Conditional write: a concurrent share that already set a token wins
        stmt = (
            update(FinanceCalculationRecord)
            .where(
                FinanceCalculationRecord.id == calculation_id,
                FinanceCalculationRecord.share_token.is_(None),
            )
            .values(shared=True, share_token=share_token, updated_at=updated_at)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()
            if result.rowcount != 1:
                logger.debug("Share token already present for %s", calculation_id)
            return result.rowcount == 1

    async def delete(self, calculation_id: str) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(FinanceCalculationRecord)
                .where(FinanceCalculationRecord.id == calculation_id)
            )
            await session.commit()
            return result.rowcount > 0

"""SQLAlchemy ORM models for calculation persistence."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Integer, Numeric, DateTime, Boolean, JSON, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class FinanceCalculationRecord(Base):
    __tablename__ = "finance_calculations"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user_id: Mapped[str] = mapped_column(String(128), index=True)
    listing_id: Mapped[str | None] = mapped_column(String(128), index=True, nullable=True)

    # Inputs
    boat_price: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    down_payment: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    loan_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    interest_rate: Mapped[Decimal] = mapped_column(Numeric(7, 4))
    term_months: Mapped[int] = mapped_column(Integer)

    # Outputs
    monthly_payment: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    total_interest: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    total_cost: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    payment_schedule: Mapped[list | None] = mapped_column(JSON, nullable=True)

    saved: Mapped[bool] = mapped_column(Boolean, default=True)
    shared: Mapped[bool] = mapped_column(Boolean, default=False)
    share_token: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)

    calculation_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    lender_info: Mapped[dict | None] = mapped_column(JSON, nullable=True)

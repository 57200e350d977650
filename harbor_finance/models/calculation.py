"""Domain models for boat loan calculations."""

from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class CalculationParameters:
    boat_price: Decimal
    down_payment: Decimal
    interest_rate: Decimal  # Annual percent, e.g. 6.5
    term_months: int
    include_schedule: bool = False

    @property
    def loan_amount(self) -> Decimal:
        return self.boat_price - self.down_payment


@dataclass(frozen=True)
class ScenarioOverride:
    """Partial parameters for a comparison scenario. None means keep the base value."""
    boat_price: Decimal | None = None
    down_payment: Decimal | None = None
    interest_rate: Decimal | None = None
    term_months: int | None = None
    include_schedule: bool | None = None

    def apply_to(self, base: CalculationParameters) -> CalculationParameters:
        changes = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
        return replace(base, **changes)


@dataclass(frozen=True)
class LenderInfo:
    name: str | None = None
    rate: Decimal | None = None
    terms: str | None = None


@dataclass(frozen=True)
class PaymentScheduleItem:
    payment_number: int
    payment_date: date
    principal_amount: Decimal
    interest_amount: Decimal
    total_payment: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class LoanResult:
    boat_price: Decimal
    down_payment: Decimal
    loan_amount: Decimal
    interest_rate: Decimal
    term_months: int
    monthly_payment: Decimal
    total_interest: Decimal
    total_cost: Decimal
    payment_schedule: tuple[PaymentScheduleItem, ...] | None = None


@dataclass(frozen=True)
class FinanceCalculation:
    calculation_id: str
    created_at: datetime

    # Inputs
    boat_price: Decimal
    down_payment: Decimal
    loan_amount: Decimal
    interest_rate: Decimal
    term_months: int

    # Outputs
    monthly_payment: Decimal
    total_interest: Decimal
    total_cost: Decimal
    payment_schedule: tuple[PaymentScheduleItem, ...] | None = None

    # Ownership
    listing_id: str | None = None
    user_id: str | None = None  # None = anonymous, never persisted

    saved: bool = False
    shared: bool = False
    share_token: str | None = None

    calculation_notes: str | None = None
    lender_info: LenderInfo | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_result(cls, calculation_id: str, created_at: datetime, result: LoanResult, **extra) -> "FinanceCalculation":
        return cls(
            calculation_id=calculation_id,
            created_at=created_at,
            boat_price=result.boat_price,
            down_payment=result.down_payment,
            loan_amount=result.loan_amount,
            interest_rate=result.interest_rate,
            term_months=result.term_months,
            monthly_payment=result.monthly_payment,
            total_interest=result.total_interest,
            total_cost=result.total_cost,
            payment_schedule=result.payment_schedule,
            **extra,
        )

    def redacted(self) -> "FinanceCalculation":
        """Public view for share links: owner identity and private notes removed."""
        return replace(self, user_id=None, calculation_notes=None)


@dataclass(frozen=True)
class LoanScenario:
    scenario_id: str
    name: str
    params: CalculationParameters
    result: FinanceCalculation | None = None
    error: str | None = None  # Set when this scenario could not be computed


@dataclass(frozen=True)
class ShareLink:
    calculation_id: str
    share_token: str
    share_url: str


@dataclass(frozen=True)
class CalculationPage:
    calculations: list[FinanceCalculation] = field(default_factory=list)
    user_id: str = ""

    @property
    def total(self) -> int:
        return len(self.calculations)

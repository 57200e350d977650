"""Amortized loan math and payment schedule generation.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import calendar
from dataclasses import replace
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from harbor_finance.models.calculation import (
    CalculationParameters,
    LoanResult,
    PaymentScheduleItem,
)

TWO_PLACES = Decimal("0.01")
RATE_PLACES = Decimal("0.0001")


def to_cents(value: Decimal) -> Decimal:
    rounded = value.quantize(TWO_PLACES, ROUND_HALF_UP)
    # -0.00 from sub-cent drift (e.g. zero-rate interest) reports as 0.00
    return rounded if rounded else rounded.copy_abs()


def normalize_parameters(params: CalculationParameters) -> CalculationParameters:
    """Round inputs to stored precision: money to cents, rate to 4 places (half-up)."""
    return replace(
        params,
        boat_price=to_cents(params.boat_price),
        down_payment=to_cents(params.down_payment),
        interest_rate=params.interest_rate.quantize(RATE_PLACES, ROUND_HALF_UP),
    )


def add_months(dt: date, months: int) -> date:
    """Return ``dt`` shifted by ``months`` calendar months.

    The day is clamped to the last day of the target month (Jan 31 + 1 -> Feb 28/29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def monthly_rate(interest_rate: Decimal) -> Decimal:
    """Annual percentage (6.5) -> monthly decimal fraction."""
    return interest_rate / 100 / 12


def monthly_payment(loan_amount: Decimal, interest_rate: Decimal, term_months: int) -> Decimal:
    """Unrounded fixed monthly payment.

    M = P * [r(1+r)^n] / [(1+r)^n - 1], or P / n at zero interest.
    """
    r = monthly_rate(interest_rate)
    if r == 0:
        return loan_amount / term_months
    factor = (1 + r) ** term_months
    return loan_amount * r * factor / (factor - 1)


def payment_schedule(
    loan_amount: Decimal,
    rate_per_month: Decimal,
    payment: Decimal,
    term_months: int,
    start_date: date,
) -> tuple[PaymentScheduleItem, ...]:
    """Greedy month-by-month amortization.

    Each row is rounded as it is emitted. The running balance is clamped at
    zero but the last row is not forced to exactly zero, so rounding drift can
    leave a residual of a few cents.
    """
    rows: list[PaymentScheduleItem] = []
    balance = loan_amount
    total_payment = to_cents(payment)

    for number in range(1, term_months + 1):
        interest = balance * rate_per_month
        principal = payment - interest
        balance = max(Decimal("0"), balance - principal)

        rows.append(PaymentScheduleItem(
            payment_number=number,
            payment_date=add_months(start_date, number),
            principal_amount=to_cents(principal),
            interest_amount=to_cents(interest),
            total_payment=total_payment,
            remaining_balance=to_cents(balance),
        ))

    return tuple(rows)


def calculate_loan(params: CalculationParameters, start_date: date | None = None) -> LoanResult:
    """Compute payment, totals and (optionally) the schedule for validated parameters.

    Args:
        params: Parameters that already passed ``validate_parameters``
        start_date: Schedule anchor; payment N falls N months later (default: today)
    """
    loan_amount = params.loan_amount
    r = monthly_rate(params.interest_rate)
    pmt = monthly_payment(loan_amount, params.interest_rate, params.term_months)

    total_payments = pmt * params.term_months
    total_interest = total_payments - loan_amount
    total_cost = params.boat_price + total_interest

    schedule = None
    if params.include_schedule:
        schedule = payment_schedule(
            loan_amount, r, pmt, params.term_months, start_date or date.today()
        )

    return LoanResult(
        boat_price=params.boat_price,
        down_payment=params.down_payment,
        loan_amount=loan_amount,
        interest_rate=params.interest_rate,
        term_months=params.term_months,
        monthly_payment=to_cents(pmt),
        total_interest=to_cents(total_interest),
        total_cost=to_cents(total_cost),
        payment_schedule=schedule,
    )

"""Business-rule bounds for loan calculation requests.

Pure functions. The first failing rule wins; messages are never aggregated.
"""

from decimal import Decimal

from harbor_finance.models.calculation import CalculationParameters

MIN_BOAT_PRICE = Decimal("1000")
MAX_BOAT_PRICE = Decimal("10000000")
MAX_DOWN_PAYMENT_PCT = Decimal("0.90")
MIN_INTEREST_RATE = Decimal("0")
MAX_INTEREST_RATE = Decimal("30")
MIN_TERM_MONTHS = 12
MAX_TERM_MONTHS = 360
MIN_LOAN_AMOUNT = Decimal("1000")


def validate_parameters(params: CalculationParameters) -> str | None:
    """Return None when valid, otherwise a human-readable violation message."""
    if not MIN_BOAT_PRICE <= params.boat_price <= MAX_BOAT_PRICE:
        return "Boat price must be between $1,000 and $10,000,000"

    if params.down_payment < 0 or params.down_payment > params.boat_price * MAX_DOWN_PAYMENT_PCT:
        return "Down payment must be between $0 and 90% of boat price"

    if not MIN_INTEREST_RATE <= params.interest_rate <= MAX_INTEREST_RATE:
        return "Interest rate must be between 0% and 30%"

    if not MIN_TERM_MONTHS <= params.term_months <= MAX_TERM_MONTHS:
        return "Loan term must be between 12 and 360 months"

    if params.loan_amount < MIN_LOAN_AMOUNT:
        return "Loan amount must be at least $1,000"

    return None

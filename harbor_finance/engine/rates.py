"""Advisory interest rate suggestions for a boat loan.

Table-driven heuristic. Suggestions never gate a user-chosen rate.
"""

from decimal import Decimal

from harbor_finance.engine.amortization import to_cents

DEFAULT_BASE_RATE = Decimal("6.5")

# (minimum loan amount, base rate), checked top to bottom
LOAN_SIZE_TIERS = [
    (Decimal("500000"), Decimal("5.5")),
    (Decimal("100000"), Decimal("6.0")),
]
SMALL_LOAN_THRESHOLD = Decimal("25000")
SMALL_LOAN_RATE = Decimal("8.0")

LONG_TERM_MONTHS = 240
LONG_TERM_PREMIUM = Decimal("0.5")
SHORT_TERM_MONTHS = 60
SHORT_TERM_DISCOUNT = Decimal("0.25")

RATE_OFFSETS = [Decimal("-1.0"), Decimal("0"), Decimal("1.0"), Decimal("2.0")]


def check_rate_inputs(loan_amount: Decimal, term_months: int) -> str | None:
    """Sanity guard for the public suggestion endpoint."""
    if not loan_amount or loan_amount < 1000:
        return "Valid loan amount is required (minimum $1,000)"
    if not term_months or term_months < 12:
        return "Valid loan term is required (minimum 12 months)"
    return None


def base_rate(loan_amount: Decimal, term_months: int) -> Decimal:
    """Base annual rate (percent) before the suggestion spread.

    Loan size:
        >= $500K:  5.50%
        >= $100K:  6.00%
        <  $25K:   8.00%
        otherwise: 6.50%
    Term:
        > 240 months: +0.50
        < 60 months:  -0.25
    """
    rate = DEFAULT_BASE_RATE
    for threshold, tier_rate in LOAN_SIZE_TIERS:
        if loan_amount >= threshold:
            rate = tier_rate
            break
    else:
        if loan_amount < SMALL_LOAN_THRESHOLD:
            rate = SMALL_LOAN_RATE

    if term_months > LONG_TERM_MONTHS:
        rate += LONG_TERM_PREMIUM
    elif term_months < SHORT_TERM_MONTHS:
        rate -= SHORT_TERM_DISCOUNT

    return rate


def suggested_rates(loan_amount: Decimal, term_months: int) -> list[Decimal]:
    """Four ascending annual rates around the base rate."""
    rate = base_rate(loan_amount, term_months)
    return [to_cents(rate + offset) for offset in RATE_OFFSETS]

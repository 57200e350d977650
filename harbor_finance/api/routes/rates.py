"""Suggested interest rate routes."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from harbor_finance.api.deps import get_manager
from harbor_finance.api.schemas import SuggestedRatesResponse
from harbor_finance.service.records import CalculationRecordManager

router = APIRouter(prefix="/finance/rates", tags=["rates"])


@router.get("/suggested", response_model=SuggestedRatesResponse)
async def get_suggested_rates(
    loan_amount: Decimal = Query(Decimal("0"), alias="loanAmount"),
    term_months: int = Query(0, alias="termMonths"),
    manager: CalculationRecordManager = Depends(get_manager),
):
    """Advisory rates for a loan size and term. Never used to reject a chosen rate."""
    rates = await manager.suggested_rates(loan_amount, term_months)
    return SuggestedRatesResponse(
        suggested_rates=rates,
        loan_amount=loan_amount,
        term_months=term_months,
    )

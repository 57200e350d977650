"""Pydantic schemas for API request/response models.

Wire field names are camelCase (``boatPrice``, ``termMonths``); snake_case is
accepted on input as well. Currency values serialize as JSON numbers.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from harbor_finance.engine.validation import MAX_BOAT_PRICE, MAX_TERM_MONTHS
from harbor_finance.models.calculation import (
    CalculationParameters,
    LenderInfo,
    ScenarioOverride,
)

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

MAX_OVERRIDE_RATE = Decimal("100")


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---- Request schemas ----

class CalculationParamsRequest(ApiModel):
    boat_price: Decimal
    down_payment: Decimal
    interest_rate: Decimal
    term_months: int
    include_schedule: bool = False

    def to_domain(self) -> CalculationParameters:
        return CalculationParameters(
            boat_price=self.boat_price,
            down_payment=self.down_payment,
            interest_rate=self.interest_rate,
            term_months=self.term_months,
            include_schedule=self.include_schedule,
        )


class CalculateRequest(CalculationParamsRequest):
    listing_id: str | None = None


class ScenarioOverrideRequest(ApiModel):
    # Merged scenarios skip business-rule validation; these bounds keep the math
    # finite and cap the schedule length
    boat_price: Decimal | None = Field(None, gt=0, le=MAX_BOAT_PRICE)
    down_payment: Decimal | None = Field(None, ge=0, le=MAX_BOAT_PRICE)
    interest_rate: Decimal | None = Field(None, ge=0, le=MAX_OVERRIDE_RATE)
    term_months: int | None = Field(None, gt=0, le=MAX_TERM_MONTHS)
    include_schedule: bool | None = None

    def to_domain(self) -> ScenarioOverride:
        return ScenarioOverride(**self.model_dump())


class ScenariosRequest(ApiModel):
    base_params: CalculationParamsRequest
    scenarios: list[ScenarioOverrideRequest]
    listing_id: str | None = None


class LenderInfoRequest(ApiModel):
    name: str | None = None
    rate: Decimal | None = None
    terms: str | None = None


class SaveCalculationRequest(CalculateRequest):
    calculation_notes: str | None = None
    lender_info: LenderInfoRequest | None = None

    def lender_to_domain(self) -> LenderInfo | None:
        if self.lender_info is None:
            return None
        return LenderInfo(**self.lender_info.model_dump())


# ---- Response schemas ----

class PaymentScheduleItemResponse(ApiModel):
    payment_number: int
    payment_date: date
    principal_amount: Money
    interest_amount: Money
    total_payment: Money
    remaining_balance: Money


class LenderInfoResponse(ApiModel):
    name: str | None = None
    rate: Money | None = None
    terms: str | None = None


class CalculationResponse(ApiModel):
    calculation_id: str
    listing_id: str | None = None
    user_id: str | None = None
    boat_price: Money
    down_payment: Money
    loan_amount: Money
    interest_rate: Money
    term_months: int
    monthly_payment: Money
    total_interest: Money
    total_cost: Money
    payment_schedule: list[PaymentScheduleItemResponse] | None = None
    saved: bool = False
    shared: bool = False
    share_token: str | None = None
    calculation_notes: str | None = None
    lender_info: LenderInfoResponse | None = None
    created_at: datetime
    updated_at: datetime | None = None


class CalculateResponse(ApiModel):
    calculation: CalculationResponse
    message: str = "Calculation completed successfully"


class ScenarioParamsResponse(ApiModel):
    boat_price: Money
    down_payment: Money
    interest_rate: Money
    term_months: int
    include_schedule: bool = False


class ScenarioResponse(ApiModel):
    scenario_id: str
    name: str
    params: ScenarioParamsResponse
    result: CalculationResponse | None = None
    error: str | None = None


class ScenariosResponse(ApiModel):
    scenarios: list[ScenarioResponse]
    base_params: ScenarioParamsResponse
    message: str


class SaveCalculationResponse(ApiModel):
    calculation_id: str
    calculation: CalculationResponse
    message: str = "Calculation saved successfully"


class CalculationListResponse(ApiModel):
    calculations: list[CalculationResponse]
    total: int
    user_id: str
    message: str = "Calculations retrieved successfully"


class ShareResponse(ApiModel):
    share_token: str
    share_url: str
    calculation_id: str
    message: str = "Calculation shared successfully"


class SharedCalculationResponse(ApiModel):
    calculation: CalculationResponse
    shared: bool = True
    message: str = "Shared calculation retrieved successfully"


class DeleteResponse(ApiModel):
    calculation_id: str
    message: str = "Calculation deleted successfully"


class SuggestedRatesResponse(ApiModel):
    suggested_rates: list[Money]
    loan_amount: Money
    term_months: int
    message: str = "Suggested rates calculated successfully"


class ErrorDetail(ApiModel):
    code: str
    message: str
    request_id: str


class ErrorResponse(ApiModel):
    error: ErrorDetail

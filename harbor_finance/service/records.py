"""Calculation record manager.

Orchestrates validation, computation and the storage collaborator. Enforces
ownership (exact owner match, no admin bypass) and share visibility. Every
operation validates before it computes and computes before it persists.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

from harbor_finance.config import Settings, settings as default_settings
from harbor_finance.engine.amortization import calculate_loan, normalize_parameters
from harbor_finance.engine.rates import check_rate_inputs, suggested_rates
from harbor_finance.engine.scenarios import calculate_scenarios
from harbor_finance.engine.validation import validate_parameters
from harbor_finance.errors import (
    CalculationError,
    FinanceError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from harbor_finance.models.calculation import (
    CalculationPage,
    CalculationParameters,
    FinanceCalculation,
    LenderInfo,
    LoanScenario,
    ScenarioOverride,
    ShareLink,
)
from harbor_finance.storage.base import CalculationStore

logger = logging.getLogger(__name__)


def sanitize_text(value: str | None) -> str | None:
    """Trim and strip angle brackets from user-supplied free text."""
    if value is None:
        return None
    cleaned = value.strip().replace("<", "").replace(">", "")
    return cleaned or None


def _sanitize_lender(lender: LenderInfo | None) -> LenderInfo | None:
    if lender is None:
        return None
    return LenderInfo(
        name=sanitize_text(lender.name),
        rate=lender.rate,
        terms=sanitize_text(lender.terms),
    )


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


class CalculationRecordManager:
    def __init__(self, store: CalculationStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or default_settings

    # ---- Pure operations (no storage) ----

    async def calculate(
        self,
        params: CalculationParameters,
        listing_id: str | None = None,
        start_date: date | None = None,
    ) -> FinanceCalculation:
        """Ephemeral calculation. Never touches storage."""
        params = self._validated(params)
        result = calculate_loan(params, start_date)
        return FinanceCalculation.from_result(
            _new_id(), _now(), result, listing_id=listing_id or None,
        )

    async def calculate_scenarios(
        self,
        base: CalculationParameters,
        overrides: list[ScenarioOverride],
        listing_id: str | None = None,
        start_date: date | None = None,
    ) -> list[LoanScenario]:
        return calculate_scenarios(
            base,
            overrides,
            listing_id=listing_id,
            start_date=start_date,
            max_scenarios=self.settings.max_scenarios,
        )

    async def suggested_rates(self, loan_amount: Decimal, term_months: int) -> list[Decimal]:
        error = check_rate_inputs(loan_amount, term_months)
        if error:
            raise ValidationError(error)
        return suggested_rates(loan_amount, term_months)

    # ---- Owned records ----

    async def save(
        self,
        caller_id: str | None,
        params: CalculationParameters,
        listing_id: str | None = None,
        calculation_notes: str | None = None,
        lender_info: LenderInfo | None = None,
    ) -> FinanceCalculation:
        """Validate, compute with the full schedule and persist for ``caller_id``."""
        self._require_identity(caller_id)
        params = self._validated(params)

        result = calculate_loan(replace(params, include_schedule=True))
        calculation = FinanceCalculation.from_result(
            _new_id(),
            _now(),
            result,
            listing_id=listing_id or None,
            user_id=caller_id,
            saved=True,
            shared=False,
            calculation_notes=sanitize_text(calculation_notes),
            lender_info=_sanitize_lender(lender_info),
        )

        await self._storage_call("save calculation", self.store.create(calculation))
        logger.info("Saved calculation %s for user %s", calculation.calculation_id, caller_id)
        return calculation

    async def list_for_user(
        self,
        caller_id: str | None,
        owner_id: str,
        limit: int | None = None,
        listing_id: str | None = None,
    ) -> CalculationPage:
        self._require_identity(caller_id)
        if caller_id != owner_id:
            raise ForbiddenError("You can only access your own calculations")

        limit = limit or self.settings.default_list_limit
        limit = max(1, min(limit, self.settings.max_list_limit))

        calculations = await self._storage_call(
            "retrieve calculations",
            self.store.list_by_user(owner_id, limit=limit, listing_id=listing_id),
        )
        calculations = sorted(calculations, key=lambda c: c.created_at, reverse=True)
        return CalculationPage(calculations=calculations, user_id=owner_id)

    async def share(self, caller_id: str | None, calculation_id: str) -> ShareLink:
        """Issue (or reuse) the share token for an owned calculation."""
        self._require_identity(caller_id)
        calculation = await self._get_owned(
            caller_id, calculation_id, "You can only share your own calculations", "share calculation",
        )

        token = calculation.share_token
        if not token:
            candidate = _new_id()
            written = await self._storage_call(
                "share calculation",
                self.store.set_share_token(calculation_id, candidate, _now()),
            )
            if written:
                token = candidate
                logger.info("Shared calculation %s", calculation_id)
            else:
                # Lost a race with a concurrent share; hand back the stored token
                current = await self._storage_call("share calculation", self.store.get(calculation_id))
                if current is None or not current.share_token:
                    raise NotFoundError("Calculation not found")
                token = current.share_token

        return ShareLink(
            calculation_id=calculation_id,
            share_token=token,
            share_url=self.share_url(token),
        )

    async def get_shared(self, share_token: str) -> FinanceCalculation:
        """Public lookup by token. Returns the redacted view."""
        calculation = await self._storage_call(
            "retrieve shared calculation", self.store.get_by_share_token(share_token),
        )
        if calculation is None or not calculation.shared:
            raise NotFoundError("Shared calculation not found or expired")
        return calculation.redacted()

    async def delete(self, caller_id: str | None, calculation_id: str) -> str:
        self._require_identity(caller_id)
        await self._get_owned(
            caller_id, calculation_id, "You can only delete your own calculations", "delete calculation",
        )
        await self._storage_call("delete calculation", self.store.delete(calculation_id))
        logger.info("Deleted calculation %s", calculation_id)
        return calculation_id

    def share_url(self, share_token: str) -> str:
        base = self.settings.frontend_url.rstrip("/")
        return f"{base}{self.settings.share_path}/{share_token}"

    # ---- Helpers ----

    @staticmethod
    def _validated(params: CalculationParameters) -> CalculationParameters:
        """Check business bounds, then round inputs to the precision they are stored at."""
        error = validate_parameters(params)
        if error:
            logger.debug("Rejected calculation parameters: %s", error)
            raise ValidationError(error)
        return normalize_parameters(params)

    @staticmethod
    def _require_identity(caller_id: str | None) -> None:
        if not caller_id:
            raise UnauthorizedError()

    async def _get_owned(
        self, caller_id: str, calculation_id: str, forbidden_message: str, action: str,
    ) -> FinanceCalculation:
        calculation = await self._storage_call(action, self.store.get(calculation_id))
        if calculation is None:
            raise NotFoundError("Calculation not found")
        if calculation.user_id != caller_id:
            raise ForbiddenError(forbidden_message)
        return calculation

    @staticmethod
    async def _storage_call(action: str, awaitable):
        """Await a storage operation, hiding backend failures behind CALCULATION_ERROR."""
        try:
            return await awaitable
        except FinanceError:
            raise
        except Exception as e:
            logger.error("Storage failure during %s", action, exc_info=True)
            raise CalculationError(f"Failed to {action}") from e

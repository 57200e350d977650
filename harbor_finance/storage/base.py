"""Protocol definition for the calculation storage collaborator.

The record manager only depends on this interface; concrete backends live
alongside it.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from harbor_finance.models.calculation import FinanceCalculation


@runtime_checkable
class CalculationStore(Protocol):
    async def create(self, calculation: FinanceCalculation) -> None:
        """Persist a new calculation. Fails if the id already exists."""
        ...

    async def get(self, calculation_id: str) -> FinanceCalculation | None:
        ...

    async def get_by_share_token(self, share_token: str) -> FinanceCalculation | None:
        ...

    async def list_by_user(
        self, user_id: str, limit: int = 20, listing_id: str | None = None
    ) -> list[FinanceCalculation]:
        """Calculations owned by ``user_id``, newest first."""
        ...

    async def set_share_token(
        self, calculation_id: str, share_token: str, updated_at: datetime
    ) -> bool:
        """Mark shared with ``share_token`` only if no token is set yet.

        Returns True when this call wrote the token.
        """
        ...

    async def delete(self, calculation_id: str) -> bool:
        """Hard delete. Returns False when nothing was removed."""
        ...

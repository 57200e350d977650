"""Side-by-side loan scenario comparison.

Only the base parameters are validated. Each override is merged onto the base
and computed on its own; merged scenarios are not re-validated. A scenario
whose numbers cannot be computed carries an error instead of a result and
leaves its siblings intact.
"""

import logging
from datetime import date, datetime, timezone
from uuid import uuid4

from harbor_finance.engine.amortization import calculate_loan, normalize_parameters
from harbor_finance.engine.validation import validate_parameters
from harbor_finance.errors import ValidationError
from harbor_finance.models.calculation import (
    CalculationParameters,
    FinanceCalculation,
    LoanScenario,
    ScenarioOverride,
)

logger = logging.getLogger(__name__)

MAX_SCENARIOS = 10
SCENARIO_FAILED_MESSAGE = "Unable to calculate loan for these parameters"


def calculate_scenarios(
    base: CalculationParameters,
    overrides: list[ScenarioOverride],
    listing_id: str | None = None,
    start_date: date | None = None,
    max_scenarios: int = MAX_SCENARIOS,
) -> list[LoanScenario]:
    """Compute one ephemeral calculation per override, labelled "Scenario N".

    Raises:
        ValidationError: empty or oversized batch, or invalid base parameters
    """
    if not overrides:
        raise ValidationError("At least one scenario is required")
    if len(overrides) > max_scenarios:
        raise ValidationError(f"Maximum of {max_scenarios} scenarios allowed")

    error = validate_parameters(base)
    if error:
        raise ValidationError(f"Base parameters: {error}")
    base = normalize_parameters(base)

    created_at = datetime.now(timezone.utc)
    scenarios: list[LoanScenario] = []
    for index, override in enumerate(overrides, start=1):
        name = f"Scenario {index}"
        params = override.apply_to(base)
        try:
            params = normalize_parameters(params)
            result = calculate_loan(params, start_date)
        except (ArithmeticError, ValueError) as e:
            # Decimal overflow or schedule dates past year 9999
            logger.warning("%s could not be calculated: %r", name, e)
            scenarios.append(LoanScenario(
                scenario_id=uuid4().hex,
                name=name,
                params=params,
                error=SCENARIO_FAILED_MESSAGE,
            ))
            continue

        scenarios.append(LoanScenario(
            scenario_id=uuid4().hex,
            name=name,
            params=params,
            result=FinanceCalculation.from_result(
                uuid4().hex, created_at, result, listing_id=listing_id or None,
            ),
        ))
    return scenarios

"""Loan calculation routes: compute, compare, save, list, share, delete."""

from fastapi import APIRouter, Depends, Query

from harbor_finance.api.deps import get_caller_id, get_manager
from harbor_finance.api.schemas import (
    CalculateRequest,
    CalculateResponse,
    CalculationListResponse,
    CalculationResponse,
    DeleteResponse,
    SaveCalculationRequest,
    SaveCalculationResponse,
    ScenarioResponse,
    ScenarioParamsResponse,
    ScenariosRequest,
    ScenariosResponse,
    SharedCalculationResponse,
    ShareResponse,
)
from harbor_finance.errors import NotFoundError
from harbor_finance.service.records import CalculationRecordManager

router = APIRouter(prefix="/finance", tags=["finance"])


@router.post("/calculate", response_model=CalculateResponse)
async def calculate(
    req: CalculateRequest,
    manager: CalculationRecordManager = Depends(get_manager),
):
    """Ephemeral calculation; nothing is stored."""
    calc = await manager.calculate(req.to_domain(), listing_id=req.listing_id)
    return CalculateResponse(calculation=CalculationResponse.model_validate(calc))


@router.post("/calculate/scenarios", response_model=ScenariosResponse)
async def calculate_scenarios(
    req: ScenariosRequest,
    manager: CalculationRecordManager = Depends(get_manager),
):
    """Compare up to 10 variants of a base loan."""
    base = req.base_params.to_domain()
    scenarios = await manager.calculate_scenarios(
        base,
        [s.to_domain() for s in req.scenarios],
        listing_id=req.listing_id,
    )
    calculated = sum(1 for s in scenarios if s.error is None)
    return ScenariosResponse(
        scenarios=[ScenarioResponse.model_validate(s) for s in scenarios],
        base_params=ScenarioParamsResponse.model_validate(base),
        message=f"{calculated} scenarios calculated successfully",
    )


@router.post("/calculate/save", response_model=SaveCalculationResponse, status_code=201)
async def save_calculation(
    req: SaveCalculationRequest,
    caller_id: str | None = Depends(get_caller_id),
    manager: CalculationRecordManager = Depends(get_manager),
):
    calc = await manager.save(
        caller_id,
        req.to_domain(),
        listing_id=req.listing_id,
        calculation_notes=req.calculation_notes,
        lender_info=req.lender_to_domain(),
    )
    return SaveCalculationResponse(
        calculation_id=calc.calculation_id,
        calculation=CalculationResponse.model_validate(calc),
    )


@router.get("/calculations/shared", include_in_schema=False)
async def shared_calculation_without_token():
    # Keeps "shared" from being read as a user id by the list route
    raise NotFoundError("Shared calculation not found or expired")


@router.get(
    "/calculations/shared/{share_token}",
    response_model=SharedCalculationResponse,
    response_model_exclude_none=True,
)
async def get_shared_calculation(
    share_token: str,
    manager: CalculationRecordManager = Depends(get_manager),
):
    """Public, read-only view of a shared calculation (owner and notes removed)."""
    calc = await manager.get_shared(share_token)
    return SharedCalculationResponse(calculation=CalculationResponse.model_validate(calc))


@router.get("/calculations/{user_id}", response_model=CalculationListResponse)
async def list_user_calculations(
    user_id: str,
    limit: int | None = Query(None, ge=1),
    listing_id: str | None = Query(None, alias="listingId"),
    caller_id: str | None = Depends(get_caller_id),
    manager: CalculationRecordManager = Depends(get_manager),
):
    page = await manager.list_for_user(caller_id, user_id, limit=limit, listing_id=listing_id)
    return CalculationListResponse(
        calculations=[CalculationResponse.model_validate(c) for c in page.calculations],
        total=page.total,
        user_id=page.user_id,
    )


@router.post("/share/{calculation_id}", response_model=ShareResponse)
async def share_calculation(
    calculation_id: str,
    caller_id: str | None = Depends(get_caller_id),
    manager: CalculationRecordManager = Depends(get_manager),
):
    link = await manager.share(caller_id, calculation_id)
    return ShareResponse(
        share_token=link.share_token,
        share_url=link.share_url,
        calculation_id=link.calculation_id,
    )


@router.delete("/calculations/{calculation_id}", response_model=DeleteResponse)
async def delete_calculation(
    calculation_id: str,
    caller_id: str | None = Depends(get_caller_id),
    manager: CalculationRecordManager = Depends(get_manager),
):
    deleted_id = await manager.delete(caller_id, calculation_id)
    return DeleteResponse(calculation_id=deleted_id)

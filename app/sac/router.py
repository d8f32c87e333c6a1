"""
FastAPI Router for SAC simulation endpoints.
Exposes the amortization calculator over HTTP with CSV export and a health probe.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import Response

from app.core.config import settings
from app.core.logger import audit_log, get_logger_with_correlation
from app.sac.export import export_csv, export_filename
from app.sac.schemas import HealthResponse, SimulationRequest, SimulationResponse
from app.sac.service import SacCalculationService, SimulationValidationError, get_sac_service

router = APIRouter(tags=["SAC"])


@router.post("/simulate", response_model=SimulationResponse)
def simulate_sac(
    data: SimulationRequest,
    service: SacCalculationService = Depends(get_sac_service),
    x_correlation_id: Annotated[Optional[str], Header()] = None
) -> SimulationResponse:
    """
    **SAC (Constant Amortization System) simulation**

    - **financedAmount**: Financed principal (R$), greater than zero
    - **annualInterestRatePercent**: Annual rate in percent, not negative
    - **installmentCount**: Number of monthly installments (1-480)

    **Returns:**
    - Monthly rate and constant amortization
    - Total interest and total payable
    - Full installment schedule with cumulative totals
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    logger.info(
        "Starting SAC simulation: value=%s, rate=%s%%, installments=%s",
        data.financed_amount,
        data.annual_interest_rate_percent,
        data.installment_count
    )

    try:
        result = service.compute(data)
    except SimulationValidationError as e:
        logger.warning(f"Invalid SAC simulation parameters: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    audit_log(
        action="sac_simulation",
        user="anonymous",
        resource="simulation",
        details={
            "correlation_id": correlation_id,
            "value": data.financed_amount,
            "installments": data.installment_count,
            "total_interest": result.total_interest
        }
    )

    logger.info(f"SAC simulation completed successfully: total_interest={result.total_interest}")

    return SimulationResponse.model_validate(result)


@router.get("/export")
def export_sac_csv(
    financed_amount: Annotated[Decimal, Query(alias="financedAmount")],
    annual_interest_rate_percent: Annotated[Decimal, Query(alias="annualInterestRatePercent")],
    installment_count: Annotated[int, Query(alias="installmentCount")],
    service: SacCalculationService = Depends(get_sac_service),
    x_correlation_id: Annotated[Optional[str], Header()] = None
) -> Response:
    """
    Downloads the SAC schedule as CSV.
    Accepts the same parameters as the simulation endpoint, as query string.
    """
    logger = get_logger_with_correlation(x_correlation_id or str(uuid4()))

    data = SimulationRequest(
        financed_amount=financed_amount,
        annual_interest_rate_percent=annual_interest_rate_percent,
        installment_count=installment_count
    )

    try:
        result = service.compute(data)
    except SimulationValidationError as e:
        logger.warning(f"Invalid SAC export parameters: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    filename = export_filename()
    logger.info(f"SAC schedule exported: file={filename}, rows={result.installment_count}")

    return Response(
        content=export_csv(result),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check for the SAC API."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.VERSION
    )

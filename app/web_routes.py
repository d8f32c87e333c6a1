from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, Query
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse
from app.core.logger import logger
from app.core.utils import format_brl
from app.sac.schemas import SimulationRequest
from app.sac.service import SacCalculationService, SimulationValidationError, get_sac_service
import os

# Using absolute path to ensure it works regardless of where python is run
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))
templates.env.filters["brl"] = format_brl

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def read_root(
    request: Request,
    financed_amount: Optional[Decimal] = Query(None, alias="financedAmount"),
    annual_interest_rate_percent: Optional[Decimal] = Query(None, alias="annualInterestRatePercent"),
    installment_count: Optional[int] = Query(None, alias="installmentCount"),
    service: SacCalculationService = Depends(get_sac_service)
):
    """Simulation form, plus the schedule when all parameters are supplied."""
    context: Dict[str, Any] = {
        "page": "home",
        "form": {
            "financedAmount": financed_amount,
            "annualInterestRatePercent": annual_interest_rate_percent,
            "installmentCount": installment_count,
        },
        "result": None,
        "error": None,
        "query": request.url.query,
    }

    if None not in (financed_amount, annual_interest_rate_percent, installment_count):
        data = SimulationRequest(
            financed_amount=financed_amount,
            annual_interest_rate_percent=annual_interest_rate_percent,
            installment_count=installment_count
        )
        try:
            context["result"] = service.compute(data)
        except SimulationValidationError as e:
            logger.info(f"Web simulation rejected: {e}")
            context["error"] = str(e)

    return templates.TemplateResponse(request, "index.html", context)

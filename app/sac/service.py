"""
Business logic for the Constant Amortization System (SAC).
Principal is repaid in equal parts; interest accrues on the declining balance.
All arithmetic uses Decimal and nothing is rounded here.
"""
from decimal import Decimal
from typing import List

from app.core.logger import logger
from app.sac.models import Installment, SimulationResult
from app.sac.schemas import SimulationRequest

MAX_INSTALLMENTS = 480  # 40 years
ZERO = Decimal("0")


class SimulationValidationError(ValueError):
    """Raised when simulation parameters violate a business rule."""


def validate_request(data: SimulationRequest) -> None:
    """
    Checks the business rules in a fixed order and raises on the first violation,
    so multi-violation inputs always report the same message.
    """
    if data.financed_amount <= 0:
        raise SimulationValidationError("Financed amount must be greater than zero.")

    if data.annual_interest_rate_percent < 0:
        raise SimulationValidationError("Annual interest rate cannot be negative.")

    if data.installment_count <= 0:
        raise SimulationValidationError("Number of installments must be greater than zero.")

    if data.installment_count > MAX_INSTALLMENTS:
        raise SimulationValidationError(f"Number of installments cannot exceed {MAX_INSTALLMENTS} months.")


def calculate_sac(data: SimulationRequest) -> SimulationResult:
    """
    Builds the full SAC schedule.

    amortization = PV / n
    interest_i   = balance_(i-1) * (annual% / 100 / 12)
    payment_i    = amortization + interest_i
    """
    validate_request(data)

    financed_amount = data.financed_amount
    annual_rate = data.annual_interest_rate_percent
    count = data.installment_count

    monthly_rate = annual_rate / 100 / 12
    amortization = financed_amount / count

    installments: List[Installment] = []
    balance = financed_amount
    cumulative_interest = ZERO
    cumulative_amortization = ZERO

    for index in range(1, count + 1):
        interest = balance * monthly_rate
        payment = amortization + interest

        cumulative_interest += interest
        cumulative_amortization += amortization
        balance -= amortization

        installments.append(Installment(
            index=index,
            amortization=amortization,
            interest=interest,
            payment_amount=payment,
            # Clamp only the reported value; the carried balance stays exact
            remaining_balance=max(ZERO, balance),
            cumulative_interest=cumulative_interest,
            cumulative_amortization=cumulative_amortization
        ))

    logger.info(
        f"SAC schedule calculated: value={financed_amount}, installments={count}, "
        f"total_interest={cumulative_interest}"
    )

    return SimulationResult(
        financed_amount=financed_amount,
        annual_interest_rate_percent=annual_rate,
        monthly_interest_rate=monthly_rate,
        installment_count=count,
        amortization_amount=amortization,
        total_interest=cumulative_interest,
        total_payable=financed_amount + cumulative_interest,
        installments=tuple(installments)
    )


class SacCalculationService:
    """
    Stateless calculator handed to request handlers through dependency injection.
    Safe to share between concurrent requests.
    """

    def compute(self, data: SimulationRequest) -> SimulationResult:
        return calculate_sac(data)


def get_sac_service() -> SacCalculationService:
    """FastAPI dependency provider for the SAC calculator."""
    return SacCalculationService()

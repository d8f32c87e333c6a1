"""
Domain entities for SAC simulations.
Built once per request and never mutated afterwards.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class Installment:
    """A single row of the amortization schedule."""

    index: int
    amortization: Decimal
    interest: Decimal
    payment_amount: Decimal
    remaining_balance: Decimal
    cumulative_interest: Decimal
    cumulative_amortization: Decimal


@dataclass(frozen=True)
class SimulationResult:
    """Complete SAC schedule together with the inputs that produced it."""

    financed_amount: Decimal
    annual_interest_rate_percent: Decimal
    monthly_interest_rate: Decimal
    installment_count: int
    amortization_amount: Decimal
    total_interest: Decimal
    total_payable: Decimal
    installments: Tuple[Installment, ...]

    def __repr__(self):
        return (
            f"<SimulationResult(financed_amount={self.financed_amount}, "
            f"installment_count={self.installment_count}, total_interest={self.total_interest})>"
        )

"""
Pydantic schemas for the SAC simulation API.
Enforces the wire types and camelCase field names; business rules live in the service.
"""
from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SimulationRequest(BaseModel):
    """SAC simulation request payload."""
    financed_amount: Decimal = Field(..., description="Financed principal (R$)")
    annual_interest_rate_percent: Decimal = Field(..., description="Annual interest rate in percent (e.g., 12 = 12%)")
    installment_count: int = Field(..., description="Number of monthly installments (1-480)")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InstallmentResponse(BaseModel):
    """Represents a single row in the amortization schedule."""
    index: int = Field(..., ge=1, description="Installment number")
    amortization: Decimal = Field(..., description="Principal amortization")
    interest: Decimal = Field(..., description="Interest amount")
    payment_amount: Decimal = Field(..., description="Amortization plus interest")
    remaining_balance: Decimal = Field(..., description="Outstanding balance after payment")
    cumulative_interest: Decimal = Field(..., description="Interest paid so far")
    cumulative_amortization: Decimal = Field(..., description="Principal repaid so far")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SimulationResponse(BaseModel):
    """
    SAC simulation result payload.
    Decimal fields are emitted as exact JSON strings so no digits are lost.
    """
    financed_amount: Decimal
    annual_interest_rate_percent: Decimal
    monthly_interest_rate: Decimal
    installment_count: int
    amortization_amount: Decimal = Field(..., description="Constant principal portion of each installment")
    total_interest: Decimal
    total_payable: Decimal
    installments: List[InstallmentResponse] = Field(..., description="Full amortization schedule")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class HealthResponse(BaseModel):
    """Health probe payload."""
    status: str
    timestamp: datetime
    version: str

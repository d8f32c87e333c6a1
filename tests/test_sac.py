"""
Unit tests for the SAC calculator.
Validates schedule arithmetic, invariants, and input rules.
"""
import dataclasses
from decimal import Decimal

import pytest
from app.sac.schemas import SimulationRequest
from app.sac.service import (
    MAX_INSTALLMENTS,
    SacCalculationService,
    SimulationValidationError,
    calculate_sac,
)

CENT = Decimal("0.01")


def make_request(value, rate, count) -> SimulationRequest:
    return SimulationRequest(
        financed_amount=Decimal(str(value)),
        annual_interest_rate_percent=Decimal(str(rate)),
        installment_count=count
    )


def test_reference_scenario():
    """1200 at 12% a year over 12 months."""
    result = calculate_sac(make_request(1200, 12, 12))

    assert result.monthly_interest_rate == Decimal("0.01")
    assert result.amortization_amount == Decimal("100")

    first = result.installments[0]
    assert first.index == 1
    assert first.interest == Decimal("12.00")
    assert first.payment_amount == Decimal("112.00")
    assert first.remaining_balance == Decimal("1100.00")

    last = result.installments[-1]
    assert last.index == 12
    assert last.interest == Decimal("1.00")
    assert last.payment_amount == Decimal("101.00")
    assert last.remaining_balance == Decimal("0.00")

    assert result.total_interest == Decimal("78.00")
    assert result.total_payable == Decimal("1278.00")


def test_result_echoes_inputs():
    result = calculate_sac(make_request("2500.50", "9.5", 24))

    assert result.financed_amount == Decimal("2500.50")
    assert result.annual_interest_rate_percent == Decimal("9.5")
    assert result.installment_count == 24


def test_uses_decimal_arithmetic():
    """No binary floats leak into the schedule."""
    result = calculate_sac(make_request("1000", "7.3", 36))

    assert isinstance(result.total_interest, Decimal)
    for item in result.installments:
        assert isinstance(item.interest, Decimal)
        assert isinstance(item.remaining_balance, Decimal)


@pytest.mark.parametrize("value, rate, count", [
    (1200, 12, 12),
    (1000, 10, 3),
    ("100000.00", "8.75", 360),
    ("999.99", "0", 7),
    ("350000", "11.49", 480),
])
def test_schedule_invariants(value, rate, count):
    """Data-driven check of the schedule properties for assorted inputs."""
    result = calculate_sac(make_request(value, rate, count))
    items = result.installments

    assert len(items) == count
    assert [item.index for item in items] == list(range(1, count + 1))

    # Constant amortization summing to the financed amount
    assert all(item.amortization == result.amortization_amount for item in items)
    total_amortized = sum((item.amortization for item in items), Decimal("0"))
    assert abs(total_amortized - result.financed_amount) <= CENT

    # Payment is amortization plus interest
    for item in items:
        assert item.payment_amount == item.amortization + item.interest

    # Balance never grows and is settled at the end
    for previous, current in zip(items, items[1:]):
        assert current.remaining_balance <= previous.remaining_balance
        assert current.cumulative_interest >= previous.cumulative_interest
        assert current.cumulative_amortization >= previous.cumulative_amortization
    assert items[-1].remaining_balance <= result.amortization_amount
    assert items[-1].remaining_balance.quantize(CENT) == Decimal("0.00")
    assert items[-1].remaining_balance >= 0

    # Totals match the final running sums
    assert items[-1].cumulative_interest == result.total_interest
    assert abs(items[-1].cumulative_amortization - result.financed_amount) <= CENT
    assert result.total_payable == result.financed_amount + result.total_interest


def test_interest_accrues_on_previous_balance():
    """Each installment's interest is the prior outstanding balance times the monthly rate."""
    result = calculate_sac(make_request(1000, 10, 3))
    items = result.installments

    assert items[0].interest == result.financed_amount * result.monthly_interest_rate
    for previous, current in zip(items, items[1:]):
        assert current.interest == previous.remaining_balance * result.monthly_interest_rate


def test_total_interest_is_sum_of_installment_interest():
    result = calculate_sac(make_request("48000", "13.2", 48))

    assert result.total_interest == sum((item.interest for item in result.installments), Decimal("0"))


def test_zero_rate_has_no_interest():
    result = calculate_sac(make_request(600, 0, 6))

    assert result.total_interest == 0
    assert result.total_payable == Decimal("600")
    assert all(item.payment_amount == Decimal("100") for item in result.installments)


def test_single_installment():
    """A one-installment loan repays the whole principal at once."""
    result = calculate_sac(make_request(5000, 24, 1))

    assert len(result.installments) == 1
    only = result.installments[0]
    assert only.amortization == Decimal("5000")
    assert only.interest == Decimal("100")
    assert only.remaining_balance == 0


def test_maximum_installments_accepted():
    result = calculate_sac(make_request(480000, 6, MAX_INSTALLMENTS))

    assert len(result.installments) == 480


def test_total_payment_decreases_over_time():
    """SAC payments shrink as the balance shrinks."""
    result = calculate_sac(make_request(10000, 18, 10))

    payments = [item.payment_amount for item in result.installments]
    assert payments == sorted(payments, reverse=True)


def test_result_is_immutable():
    result = calculate_sac(make_request(1200, 12, 12))

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.total_interest = Decimal("0")  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.installments[0].interest = Decimal("0")  # type: ignore[misc]
    assert isinstance(result.installments, tuple)


def test_service_is_reentrant():
    """The same service instance yields identical, independent results."""
    service = SacCalculationService()

    first = service.compute(make_request(1200, 12, 12))
    other = service.compute(make_request(3000, 5, 30))
    again = service.compute(make_request(1200, 12, 12))

    assert first == again
    assert other.installment_count == 30


@pytest.mark.parametrize("value, rate, count, message", [
    (0, 12, 12, "Financed amount must be greater than zero."),
    (-100, 12, 12, "Financed amount must be greater than zero."),
    (1000, -1, 12, "Annual interest rate cannot be negative."),
    (1000, 12, 0, "Number of installments must be greater than zero."),
    (1000, 12, -3, "Number of installments must be greater than zero."),
    (1000, 12, 481, "Number of installments cannot exceed 480 months."),
])
def test_validation_rules(value, rate, count, message):
    """Validates each rejection rule and its message."""
    with pytest.raises(SimulationValidationError) as exc_info:
        calculate_sac(make_request(value, rate, count))

    assert str(exc_info.value) == message


@pytest.mark.parametrize("value, rate, count, message", [
    (0, -1, 0, "Financed amount must be greater than zero."),
    (1000, -1, 0, "Annual interest rate cannot be negative."),
    (1000, -1, 481, "Annual interest rate cannot be negative."),
    (-5, 12, 481, "Financed amount must be greater than zero."),
])
def test_validation_reports_first_violation(value, rate, count, message):
    """Multi-violation inputs report the first rule in amount, rate, count order."""
    with pytest.raises(SimulationValidationError, match=message):
        calculate_sac(make_request(value, rate, count))


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        calculate_sac(make_request(0, 12, 12))

# tests/unit/test_loan_validation.py
from __future__ import annotations

import math

import pytest

from propcalc.core.finance import (
    LoanValidationError,
    build_amortization_table,
    compute_loan_summary,
    validate_inputs,
)
from propcalc.schemas.models import SimpleInsurance
from tests.utils import make_amount_down_payment, make_loan_inputs, make_rate_insurance


def test_baseline_inputs_are_valid():
    assert validate_inputs(make_loan_inputs()) == []


def test_down_payment_equal_to_price_is_rejected():
    inputs = make_loan_inputs(down_payment=make_amount_down_payment(4000.0))
    errors = validate_inputs(inputs)
    assert any("lower than the property price" in e for e in errors)

    with pytest.raises(LoanValidationError):
        build_amortization_table(inputs)


def test_down_payment_percent_of_100_is_rejected():
    from propcalc.schemas.models import PercentDownPayment

    inputs = make_loan_inputs(down_payment=PercentDownPayment(percent=100.0))
    with pytest.raises(LoanValidationError, match="lower than the property price"):
        compute_loan_summary(inputs)


def test_all_problems_are_collected_together():
    inputs = make_loan_inputs(
        property_price=-1.0,
        annual_rate=-2.0,
        term_years=0,
        insurance=SimpleInsurance(life_monthly=-0.1, fire_quake_monthly=0.0),
    )
    errors = validate_inputs(inputs)
    assert len(errors) == 4

    with pytest.raises(LoanValidationError) as exc_info:
        build_amortization_table(inputs)
    assert exc_info.value.errors == tuple(errors)
    # Composite message carries every problem
    for msg in errors:
        assert msg in str(exc_info.value)


def test_non_finite_values_are_rejected():
    inputs = make_loan_inputs(property_price=math.nan, annual_rate=math.inf)
    errors = validate_inputs(inputs)
    assert "Property price must be greater than 0." in errors
    assert "Annual interest rate cannot be negative." in errors


def test_negative_down_payment_amount_is_rejected():
    errors = validate_inputs(make_loan_inputs(down_payment=make_amount_down_payment(-5.0)))
    assert errors == ["Down payment amount must be a valid, non-negative number."]


def test_negative_rates_only_checked_for_active_insurance_mode():
    errors = validate_inputs(make_loan_inputs(insurance=make_rate_insurance(-0.001, 0.0)))
    assert errors == ["Insurance rates cannot be negative."]


def test_term_rounding_to_zero_months_is_rejected():
    errors = validate_inputs(make_loan_inputs(term_years=0.01))
    assert errors == ["Term must cover at least one monthly installment."]


def test_invalid_price_does_not_add_down_payment_error():
    # Without a usable price the down-payment comparison is skipped
    errors = validate_inputs(make_loan_inputs(property_price=0.0))
    assert errors == ["Property price must be greater than 0."]


def test_validate_inputs_never_raises_for_bad_values():
    inputs = make_loan_inputs(property_price=math.nan, term_years=math.nan, annual_rate=math.nan)
    assert isinstance(validate_inputs(inputs), list)


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        build_amortization_table(make_loan_inputs(term_years=-1))

# propcalc/core/finance/amortization.py

from __future__ import annotations

import logging
import math
from collections.abc import Iterator

from propcalc.schemas.models import (
    AmortizationResult,
    AmortizationRow,
    AmortizationTotals,
    AmountDownPayment,
    LoanInputs,
    LoanSummary,
    PercentDownPayment,
    RateInsurance,
    SimpleInsurance,
)

from .errors import LoanValidationError

logger = logging.getLogger(__name__)


def _is_valid_amount(x: float | None) -> bool:
    return x is not None and math.isfinite(x) and x >= 0


def term_months(term_years: float) -> int:
    """Number of monthly periods, rounding half up (2.5 years -> 30, 1.0417 years -> 13)."""
    return int(math.floor(term_years * 12 + 0.5))


def monthly_installment(principal: float, monthly_rate: float, months: float) -> float:
    """
    Fixed (French) installment for a fully amortizing loan.

    Formula (standard annuity):
        PMT = P * r / (1 - (1 + r)^-n)

    Where:
        P = principal
        r = monthly rate as a fraction (annual percent / 100 / 12)
        n = number of monthly payments

    Notes:
        - If monthly_rate == 0, the formula reduces to principal / n. The annuity
          form is never evaluated at r == 0 (it would be 0 / 0).
        - n == 0 yields NaN, or 0.0 when there is nothing to finance; callers
          that must not see NaN validate the term first.
    """
    if months == 0:
        return 0.0 if principal == 0 else math.nan
    if monthly_rate == 0:
        return principal / months
    return principal * monthly_rate / (1.0 - (1.0 + monthly_rate) ** (-months))


def compute_down_payment(inputs: LoanInputs) -> float:
    """Down payment in UF for whichever mode the inputs select."""
    dp = inputs.down_payment
    if isinstance(dp, AmountDownPayment):
        return dp.amount
    if isinstance(dp, PercentDownPayment):
        return inputs.property_price * (dp.percent / 100.0)
    raise TypeError(f"Unsupported down payment mode: {dp!r}")


def validate_inputs(inputs: LoanInputs) -> list[str]:
    """
    Collect every problem with the loan inputs. Never raises.

    An empty list means build_amortization_table() will accept the inputs.
    """
    errors: list[str] = []

    price_ok = _is_valid_amount(inputs.property_price) and inputs.property_price > 0
    if not price_ok:
        errors.append("Property price must be greater than 0.")

    dp = inputs.down_payment
    if isinstance(dp, AmountDownPayment):
        dp_ok = _is_valid_amount(dp.amount)
        if not dp_ok:
            errors.append("Down payment amount must be a valid, non-negative number.")
    elif isinstance(dp, PercentDownPayment):
        dp_ok = _is_valid_amount(dp.percent)
        if not dp_ok:
            errors.append("Down payment percentage cannot be negative.")
    else:
        raise TypeError(f"Unsupported down payment mode: {dp!r}")

    if not _is_valid_amount(inputs.annual_rate):
        errors.append("Annual interest rate cannot be negative.")

    if not (math.isfinite(inputs.term_years) and inputs.term_years > 0):
        errors.append("Term in years must be greater than 0.")
    elif term_months(inputs.term_years) < 1:
        errors.append("Term must cover at least one monthly installment.")

    ins = inputs.insurance
    if isinstance(ins, SimpleInsurance):
        if not (_is_valid_amount(ins.life_monthly) and _is_valid_amount(ins.fire_quake_monthly)):
            errors.append("Monthly insurance charges cannot be negative.")
    elif isinstance(ins, RateInsurance):
        if not (_is_valid_amount(ins.life_rate) and _is_valid_amount(ins.fire_quake_rate)):
            errors.append("Insurance rates cannot be negative.")
    else:
        raise TypeError(f"Unsupported insurance mode: {ins!r}")

    # Only meaningful once both sides are usable numbers
    if price_ok and dp_ok and compute_down_payment(inputs) >= inputs.property_price:
        errors.append("Down payment must be lower than the property price.")

    return errors


def _insurance_for(inputs: LoanInputs, opening_balance: float, principal: float) -> float:
    ins = inputs.insurance
    if isinstance(ins, SimpleInsurance):
        return ins.life_monthly + ins.fire_quake_monthly
    if isinstance(ins, RateInsurance):
        base = opening_balance if ins.base == "balance" else principal
        return (base * ins.life_rate) + (base * ins.fire_quake_rate)
    raise TypeError(f"Unsupported insurance mode: {ins!r}")


def _schedule_rows(
    inputs: LoanInputs,
    principal: float,
    monthly_rate: float,
    months: int,
    installment: float,
) -> Iterator[AmortizationRow]:
    """Fold over periods 1..months, threading the balance from one row into the next."""
    balance = principal
    for t in range(1, months + 1):
        opening = balance
        interest = opening * monthly_rate
        if t == months:
            # Last period absorbs accumulated drift so the loan closes at exactly 0
            principal_paid = opening
            installment_part = interest + principal_paid
        else:
            principal_paid = installment - interest
            installment_part = installment
        closing = max(0.0, opening - principal_paid)
        insurance = _insurance_for(inputs, opening, principal)

        yield AmortizationRow(
            period=t,
            opening_balance=opening,
            interest=interest,
            principal_paid=principal_paid,
            closing_balance=closing,
            insurance=insurance,
            total_payment=installment_part + insurance,
        )
        balance = closing


def build_amortization_table(inputs: LoanInputs) -> AmortizationResult:
    """
    Build the full monthly French schedule with insurance add-ons.

    Raises:
        LoanValidationError: with every collected problem when the inputs are invalid.
    """
    errors = validate_inputs(inputs)
    if errors:
        raise LoanValidationError(errors)

    principal = inputs.property_price - compute_down_payment(inputs)
    months = term_months(inputs.term_years)
    monthly_rate = (inputs.annual_rate / 100.0) / 12.0
    installment = monthly_installment(principal, monthly_rate, months)

    rows = tuple(_schedule_rows(inputs, principal, monthly_rate, months, installment))

    totals = AmortizationTotals(
        interest=sum(r.interest for r in rows),
        insurance=sum(r.insurance for r in rows),
        total_paid=sum(r.total_payment for r in rows),
        principal=sum(r.principal_paid for r in rows),
    )

    logger.debug(
        "amortization: principal=%.6f months=%d monthly_rate=%.8f installment=%.6f",
        principal,
        months,
        monthly_rate,
        installment,
    )

    return AmortizationResult(
        rows=rows,
        totals=totals,
        principal=principal,
        base_installment=installment,
        total_installment=rows[0].total_payment if rows else installment,
    )


def compute_loan_summary(inputs: LoanInputs) -> LoanSummary:
    """Headline figures only; same validation and failure mode as build_amortization_table()."""
    result = build_amortization_table(inputs)
    return LoanSummary(
        principal=result.principal,
        base_installment=result.base_installment,
        total_installment=result.total_installment,
        total_interest=result.totals.interest,
        total_insurance=result.totals.insurance,
        total_paid=result.totals.total_paid,
        total_principal=result.totals.principal,
    )

# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import math
from typing import Any

from propcalc.schemas.models import (
    AmountDownPayment,
    FlippingInputs,
    FlippingMetrics,
    LoanInputs,
    PercentDownPayment,
    RateInsurance,
    SimpleInsurance,
)

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_PRICE_UF = 4000.0
DEFAULT_DOWN_PCT = 20.0
DEFAULT_RATE_PCT = 4.6
DEFAULT_TERM_YEARS = 20
DEFAULT_LIFE_UF = 0.12
DEFAULT_FIRE_UF = 0.08
DEFAULT_UF_VALUE = 37_000.0

# -----------------------------
# Loan factories
# -----------------------------


def make_loan_inputs(**overrides: Any) -> LoanInputs:
    """Baseline mortgage: 4,000 UF, 20% down, 4.6%, 20 years, fixed insurance 0.12 + 0.08 UF."""
    base = LoanInputs(
        property_price=DEFAULT_PRICE_UF,
        down_payment=PercentDownPayment(percent=DEFAULT_DOWN_PCT),
        annual_rate=DEFAULT_RATE_PCT,
        term_years=DEFAULT_TERM_YEARS,
        insurance=SimpleInsurance(life_monthly=DEFAULT_LIFE_UF, fire_quake_monthly=DEFAULT_FIRE_UF),
    )
    return base.model_copy(update=overrides) if overrides else base


def make_rate_insurance(
    life_rate: float = 0.0012,
    fire_quake_rate: float = 0.0008,
    base: str = "balance",
) -> RateInsurance:
    return RateInsurance(life_rate=life_rate, fire_quake_rate=fire_quake_rate, base=base)


def make_amount_down_payment(amount: float) -> AmountDownPayment:
    return AmountDownPayment(amount=amount)


def principal_from(inputs: LoanInputs) -> float:
    """Independent principal derivation used to cross-check the engine."""
    dp = inputs.down_payment
    down = dp.amount if dp.mode == "amount" else inputs.property_price * (dp.percent / 100)
    return inputs.property_price - down


# -----------------------------
# Flipping factories
# -----------------------------


def make_flipping_inputs(**overrides: Any) -> FlippingInputs:
    """
    Canonical flip with round numbers (CLP):
      price 100M, ARV 160M (100 m² × 1.6M × 1.0), renovation 15M, notary 5M,
      no percentage costs, 0% rate, no installments paid → total cost 120M,
      equity 20M, profit 40M, 12-month hold.
    """
    base = FlippingInputs(
        purchase_price=100_000_000.0,
        area_m2=100.0,
        price_per_m2=1_600_000.0,
        safety_factor=1.0,
        renovation_cost=15_000_000.0,
        contingency_pct=0.0,
        acquisition_costs_pct=0.0,
        broker_commission_pct=0.0,
        notary_cost=5_000_000.0,
        down_payment_pct=20.0,
        annual_rate_pct=0.0,
        loan_term_months=240.0,
        holding_months=12.0,
        months_paying_installment=0.0,
        target_margin_pct=20.0,
        uf_value=DEFAULT_UF_VALUE,
    )
    return base.model_copy(update=overrides) if overrides else base


def make_metrics(
    gross_profit: float = 10.0,
    annualized_roi_pct: float = 20.0,
    safety_margin_pct: float = 20.0,
    project_margin_pct: float = 10.0,
    **overrides: Any,
) -> FlippingMetrics:
    """FlippingMetrics with only the classification-relevant fields meaningful (yellow by default)."""
    fields: dict[str, Any] = {
        "arv": 0.0,
        "acquisition_cost": 0.0,
        "renovation_total": 0.0,
        "financing_cost": 0.0,
        "selling_cost": 0.0,
        "total_cost": 0.0,
        "gross_profit": gross_profit,
        "roi_pct": math.nan,
        "annualized_roi_pct": annualized_roi_pct,
        "project_margin_pct": project_margin_pct,
        "safety_margin_pct": safety_margin_pct,
        "equity": 0.0,
        "monthly_installment": 0.0,
        "months_paying_installment": 0.0,
        "mao": 0.0,
        "mao_uf": 0.0,
        "mao_delta": 0.0,
        "mao_delta_uf": 0.0,
    }
    fields.update(overrides)
    return FlippingMetrics(**fields)

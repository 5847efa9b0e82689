# propcalc/core/finance/flipping.py

from __future__ import annotations

import logging
import math

from propcalc.schemas.models import FlippingInputs, FlippingMetrics

from .amortization import monthly_installment
from .errors import FlippingInputError

logger = logging.getLogger(__name__)

NAN = math.nan

# Numeric fields checked by validate_flipping_inputs(), in form order
FLIPPING_NUMERIC_FIELDS: tuple[str, ...] = (
    "purchase_price",
    "area_m2",
    "price_per_m2",
    "safety_factor",
    "renovation_cost",
    "contingency_pct",
    "acquisition_costs_pct",
    "broker_commission_pct",
    "notary_cost",
    "down_payment_pct",
    "annual_rate_pct",
    "loan_term_months",
    "holding_months",
    "months_paying_installment",
    "target_margin_pct",
)


def _ratio(num: float, den: float) -> float:
    """num / den, or NaN when the denominator is not positive."""
    return num / den if den > 0 else NAN


def validate_flipping_inputs(inputs: FlippingInputs) -> None:
    """
    Raise FlippingInputError on the first problem found.

    The UF reference value is checked before anything else: every money
    conversion depends on it.
    """
    uf = inputs.uf_value
    if uf is None or not math.isfinite(uf) or uf <= 0:
        raise FlippingInputError("Enter a UF value greater than 0.")

    for name in FLIPPING_NUMERIC_FIELDS:
        value = getattr(inputs, name)
        if not math.isfinite(value) or value < 0:
            raise FlippingInputError(f"Check the fields: they must be valid, non-negative numbers ({name}={value!r}).")


def compute_indicators(inputs: FlippingInputs) -> FlippingMetrics:
    """
    Derive the flip's resale value, cost buckets, returns and MAO.

    Each step only depends on earlier ones:
      1) ARV = price_per_m2 * area * safety_factor
      2) Equity (down payment) and financed amount
      3) Monthly installment (annuity; straight-line at 0%)
      4) Financing cost = installment * months actually paid
      5) Renovation total incl. contingency
      6) Purchase-side costs = price * acquisition% + notary
      7) Selling cost = ARV * commission%
      8) Total cost = price + purchase-side + renovation + financing + selling
      9) Gross profit = ARV - total cost
      10-13) ROI, annualized ROI, project margin, safety margin (NaN when undefined)
      14) MAO = ARV - (renovation + purchase-side + selling) - ARV * target%

    Does not validate; call validate_flipping_inputs() first when inputs come
    from a user.
    """
    p = inputs

    market_value = p.price_per_m2 * p.area_m2
    arv = market_value * p.safety_factor

    equity = p.purchase_price * (p.down_payment_pct / 100.0)
    financed = p.purchase_price - equity
    monthly_rate = (p.annual_rate_pct / 100.0) / 12.0
    if p.loan_term_months == 0:
        # No term to spread the loan over: any financed amount is due at once
        installment = math.inf if financed > 0 else 0.0
    else:
        installment = monthly_installment(financed, monthly_rate, p.loan_term_months)

    financing_cost = installment * p.months_paying_installment if p.months_paying_installment > 0 else 0.0

    renovation_total = p.renovation_cost * (1.0 + p.contingency_pct / 100.0)

    operational_costs = p.purchase_price * (p.acquisition_costs_pct / 100.0) + p.notary_cost

    selling_cost = arv * (p.broker_commission_pct / 100.0)

    acquisition_cost = p.purchase_price + operational_costs
    total_cost = acquisition_cost + renovation_total + financing_cost + selling_cost
    gross_profit = arv - total_cost

    simple_return = _ratio(gross_profit, equity)
    roi_pct = simple_return * 100.0
    annualized_roi_pct = (
        (simple_return / p.holding_months) * 12.0 * 100.0
        if math.isfinite(simple_return) and p.holding_months > 0
        else NAN
    )
    project_margin_pct = _ratio(gross_profit, total_cost) * 100.0
    safety_margin_pct = _ratio(arv - total_cost, arv) * 100.0

    target_profit = arv * (p.target_margin_pct / 100.0)
    non_purchase_costs = renovation_total + operational_costs + selling_cost
    mao = arv - non_purchase_costs - target_profit
    mao_delta = mao - p.purchase_price

    uf = p.uf_value if p.uf_value is not None and p.uf_value > 0 else NAN

    logger.debug(
        "flipping: arv=%.2f total_cost=%.2f profit=%.2f mao=%.2f",
        arv,
        total_cost,
        gross_profit,
        mao,
    )

    return FlippingMetrics(
        arv=arv,
        acquisition_cost=acquisition_cost,
        renovation_total=renovation_total,
        financing_cost=financing_cost,
        selling_cost=selling_cost,
        total_cost=total_cost,
        gross_profit=gross_profit,
        roi_pct=roi_pct,
        annualized_roi_pct=annualized_roi_pct,
        project_margin_pct=project_margin_pct,
        safety_margin_pct=safety_margin_pct,
        equity=equity,
        monthly_installment=installment,
        months_paying_installment=p.months_paying_installment,
        mao=mao,
        mao_uf=mao / uf,
        mao_delta=mao_delta,
        mao_delta_uf=mao_delta / uf,
    )

# propcalc/schemas/models.py

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# =========================
# Loan inputs
# =========================


class PercentDownPayment(BaseModel):
    """Down payment expressed as a percentage of the property price."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["percent"] = "percent"
    percent: float = Field(..., description="Down payment as a percent of price (e.g., 20 = 20%).")


class AmountDownPayment(BaseModel):
    """Down payment expressed as an absolute amount (same unit as the price)."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["amount"] = "amount"
    amount: float = Field(..., description="Down payment amount in UF.")


DownPayment = Annotated[PercentDownPayment | AmountDownPayment, Field(discriminator="mode")]


class SimpleInsurance(BaseModel):
    """Two fixed monthly insurance charges added to every installment."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["simple"] = "simple"
    life_monthly: float = Field(0.0, description="Mortgage life (desgravamen) insurance, UF per month.")
    fire_quake_monthly: float = Field(0.0, description="Fire and earthquake insurance, UF per month.")


class RateInsurance(BaseModel):
    """
    Two monthly insurance rates applied to a base amount each period.

    base="balance" uses the period's opening balance (declining charge);
    base="principal" uses the original financed principal (flat charge).
    """

    model_config = ConfigDict(frozen=True)

    mode: Literal["rate"] = "rate"
    life_rate: float = Field(0.0, description="Monthly life insurance rate as a fraction (e.g., 0.0009).")
    fire_quake_rate: float = Field(0.0, description="Monthly fire/earthquake rate as a fraction (e.g., 0.0006).")
    base: Literal["balance", "principal"] = Field("balance", description="Amount the rates are applied to.")


Insurance = Annotated[SimpleInsurance | RateInsurance, Field(discriminator="mode")]


class LoanInputs(BaseModel):
    """
    Mortgage parameters. Amounts are in UF; rates are percents unless noted.

    Values are deliberately unconstrained here: range checks live in
    validate_inputs() so every problem can be reported at once.
    """

    model_config = ConfigDict(frozen=True)

    property_price: float = Field(..., description="Property price in UF.")
    down_payment: DownPayment = Field(
        default_factory=lambda: PercentDownPayment(percent=20.0),
        description="Down payment, either a percent of price or an absolute amount.",
    )
    annual_rate: float = Field(..., description="Annual nominal interest rate in percent (e.g., 4.6).")
    term_years: float = Field(..., description="Loan term in years; months = round(term_years * 12).")
    insurance: Insurance = Field(default_factory=SimpleInsurance, description="Insurance add-on configuration.")


# =========================
# Loan outputs
# =========================


class AmortizationRow(BaseModel):
    """One period of a French (fixed-installment) schedule."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(..., description="1-based installment number.")
    opening_balance: float = Field(..., description="Balance before this period's payment.")
    interest: float = Field(..., description="Interest charged on the opening balance.")
    principal_paid: float = Field(..., description="Portion of the installment that amortizes principal.")
    closing_balance: float = Field(..., description="Balance after the payment, floored at 0.")
    insurance: float = Field(..., description="Insurance charged this period.")
    total_payment: float = Field(..., description="interest + principal_paid + insurance.")


class AmortizationTotals(BaseModel):
    """Column sums over the whole schedule (each summed independently)."""

    model_config = ConfigDict(frozen=True)

    interest: float
    insurance: float
    total_paid: float
    principal: float


class AmortizationResult(BaseModel):
    """Full schedule plus headline figures."""

    model_config = ConfigDict(frozen=True)

    rows: tuple[AmortizationRow, ...] = Field(..., description="One row per month, in order.")
    totals: AmortizationTotals
    principal: float = Field(..., description="Financed principal (price - down payment).")
    base_installment: float = Field(..., description="Fixed installment before insurance.")
    total_installment: float = Field(..., description="First period's total payment (installment + insurance).")


class LoanSummary(BaseModel):
    """Reduced projection of AmortizationResult for summary cards."""

    model_config = ConfigDict(frozen=True)

    principal: float
    base_installment: float
    total_installment: float
    total_interest: float
    total_insurance: float
    total_paid: float
    total_principal: float


# =========================
# Flipping inputs / outputs
# =========================


class FlippingInputs(BaseModel):
    """
    Fix-and-flip project parameters. All money amounts share one currency (CLP in the core).
    Percent fields are percents (e.g., 2 = 2%), not fractions.
    """

    model_config = ConfigDict(frozen=True)

    purchase_price: float = Field(..., description="Acquisition price.")
    area_m2: float = Field(..., description="Property area in square meters.")
    price_per_m2: float = Field(..., description="Comparable sale price per square meter in the sector.")
    safety_factor: float = Field(1.0, description="Discount applied to the theoretical market value (e.g., 0.9).")
    renovation_cost: float = Field(0.0, description="Budgeted renovation cost.")
    contingency_pct: float = Field(0.0, description="Contingency on renovation, percent.")
    acquisition_costs_pct: float = Field(0.0, description="Purchase-side costs as a percent of price.")
    broker_commission_pct: float = Field(0.0, description="Broker commission as a percent of resale value.")
    notary_cost: float = Field(0.0, description="Fixed notary and registry cost.")
    down_payment_pct: float = Field(20.0, description="Down payment as a percent of price.")
    annual_rate_pct: float = Field(0.0, description="Annual interest rate, percent.")
    loan_term_months: float = Field(240.0, description="Financing term in months.")
    holding_months: float = Field(6.0, description="Project duration in months.")
    months_paying_installment: float = Field(0.0, description="Months the installment is actually paid during the project.")
    target_margin_pct: float = Field(20.0, description="Target profit as a percent of resale value (used for MAO).")
    uf_value: float | None = Field(None, description="CLP per UF; required by validation, used for UF figures.")


class FlippingMetrics(BaseModel):
    """Derived feasibility metrics. Undefined ratios are NaN rather than errors."""

    model_config = ConfigDict(frozen=True)

    arv: float = Field(..., description="Theoretical resale value: price_per_m2 * area * safety_factor.")
    acquisition_cost: float = Field(..., description="Purchase price + purchase-side costs + notary.")
    renovation_total: float = Field(..., description="Renovation including contingency.")
    financing_cost: float = Field(..., description="Installments paid during the project.")
    selling_cost: float = Field(..., description="Broker commission on resale.")
    total_cost: float = Field(..., description="All-in project cost.")
    gross_profit: float = Field(..., description="arv - total_cost.")
    roi_pct: float = Field(..., description="Return on equity (down payment), percent.")
    annualized_roi_pct: float = Field(..., description="ROI scaled to a 12-month basis, percent.")
    project_margin_pct: float = Field(..., description="gross_profit / total_cost, percent.")
    safety_margin_pct: float = Field(..., description="(arv - total_cost) / arv, percent.")
    equity: float = Field(..., description="Own capital invested (down payment amount).")
    monthly_installment: float = Field(..., description="Monthly loan installment.")
    months_paying_installment: float = Field(..., description="Months of installments counted in financing_cost.")
    mao: float = Field(..., description="Maximum allowable offer preserving the target margin.")
    mao_uf: float = Field(..., description="MAO expressed in UF (NaN without a UF value).")
    mao_delta: float = Field(..., description="mao - purchase_price; positive means room below the MAO.")
    mao_delta_uf: float = Field(..., description="mao_delta in UF (NaN without a UF value).")


class Stoplight(BaseModel):
    """Three-tier recommendation with fixed display strings."""

    model_config = ConfigDict(frozen=True)

    tier: Literal["red", "yellow", "green"]
    title: str
    message: str

# propcalc/reports/generator.py
from __future__ import annotations

import math
from pathlib import Path

from propcalc.core.finance.units import Unit, from_clp
from propcalc.core.strategy.stoplight import describe_mao_delta
from propcalc.schemas.models import (
    AmortizationResult,
    AmortizationRow,
    FlippingMetrics,
    LoanInputs,
    Stoplight,
)

PLACEHOLDER = "—"


def fmt_money(clp: float, unit: Unit = "clp", uf_value: float | None = None) -> str:
    """
    Format a CLP amount for display in the chosen unit.

    Example:
        fmt_money(1_234_567.8)                   -> $ 1,234,568
        fmt_money(74_000, "uf", uf_value=37_000) -> UF 2.00

    Falls back to CLP when UF is requested without a usable UF value.
    """
    if not math.isfinite(clp):
        return PLACEHOLDER
    if unit == "uf" and uf_value is not None and uf_value > 0:
        return f"UF {from_clp(clp, 'uf', uf_value):,.2f}"
    return f"$ {round(clp):,}"


def fmt_uf(x: float, decimals: int = 2) -> str:
    """UF amount with fixed decimals, or the placeholder for non-finite values."""
    return f"UF {x:,.{decimals}f}" if math.isfinite(x) else PLACEHOLDER


def fmt_pct(x: float) -> str:
    """
    Format a percent value (already x100) with one decimal.

    Example:
        12.345 -> 12.3 %
        nan    -> —
    """
    if not math.isfinite(x):
        return PLACEHOLDER
    return f"{x:.1f} %"


def _fmt_num(x: float, decimals: int = 2) -> str:
    return f"{x:,.{decimals}f}" if math.isfinite(x) else PLACEHOLDER


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


# -----------------------
# Mortgage report
# -----------------------


def _render_loan_header(inputs: LoanInputs | None) -> str:
    body = ["# Mortgage Simulation", ""]
    if inputs is None:
        return "\n".join(body) + "\n"

    body.append(f"- **Property Price:** {fmt_uf(inputs.property_price)}")
    dp = inputs.down_payment
    if dp.mode == "percent":
        body.append(f"- **Down Payment:** {dp.percent:g}% of price")
    else:
        body.append(f"- **Down Payment:** {fmt_uf(dp.amount)}")
    body.append(f"- **Annual Rate:** {inputs.annual_rate:g}%")
    body.append(f"- **Term:** {inputs.term_years:g} years")
    ins = inputs.insurance
    if ins.mode == "simple":
        body.append(f"- **Insurance:** fixed {fmt_uf(ins.life_monthly, 4)} + {fmt_uf(ins.fire_quake_monthly, 4)} per month")
    else:
        base = "outstanding balance" if ins.base == "balance" else "original principal"
        body.append(f"- **Insurance:** {ins.life_rate:g} + {ins.fire_quake_rate:g} monthly rate on {base}")
    return "\n".join(body) + "\n"


def _render_loan_summary(result: AmortizationResult) -> str:
    t = result.totals
    lines = [
        _section("Summary"),
        f"- **Monthly Payment (with insurance):** {fmt_uf(result.total_installment)} / month",
        f"- **Loan Amount:** {fmt_uf(result.principal)}",
        f"- **Base Installment:** {fmt_uf(result.base_installment)}",
        f"- **Total Interest:** {fmt_uf(t.interest)}",
        f"- **Total Insurance:** {fmt_uf(t.insurance)}",
        f"- **Total Paid:** {fmt_uf(t.total_paid)}",
    ]
    return "\n".join(lines) + "\n"


def _render_schedule_table(result: AmortizationResult) -> str:
    """
    Columns:
      # | Opening Balance | Interest | Principal | Closing Balance | Insurance | Total Payment
    followed by a totals line.
    """
    rows: tuple[AmortizationRow, ...] = result.rows
    header = [
        _section(f"Amortization Table ({len(rows)} installments, French system)"),
        "| # | Opening Balance | Interest | Principal | Closing Balance | Insurance | Total Payment |",
        "| ---: | ---: | ---: | ---: | ---: | ---: | ---: |",
    ]
    body = [
        f"| {r.period} "
        f"| {_fmt_num(r.opening_balance)} "
        f"| {_fmt_num(r.interest)} "
        f"| {_fmt_num(r.principal_paid)} "
        f"| {_fmt_num(r.closing_balance)} "
        f"| {_fmt_num(r.insurance)} "
        f"| {_fmt_num(r.total_payment)} |"
        for r in rows
    ]
    t = result.totals
    body.append(
        f"| **Total** | | {_fmt_num(t.interest)} | {_fmt_num(t.principal)} | | {_fmt_num(t.insurance)} | {_fmt_num(t.total_paid)} |"
    )
    return "\n".join(header + body) + "\n"


def generate_loan_report(result: AmortizationResult, inputs: LoanInputs | None = None) -> str:
    """
    Markdown report for a mortgage simulation: inputs, summary, full schedule.
    """
    parts = [
        _render_loan_header(inputs),
        _render_loan_summary(result),
        _render_schedule_table(result),
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


# -----------------------
# Flipping report
# -----------------------


def _render_stoplight(light: Stoplight) -> str:
    lines = [
        _section("Recommendation"),
        f"- **Status:** {light.title}",
        f"- {light.message}",
    ]
    return "\n".join(lines) + "\n"


def _render_flipping_results(m: FlippingMetrics, unit: Unit, uf_value: float | None) -> str:
    def money(x: float) -> str:
        return fmt_money(x, unit, uf_value)

    months = m.months_paying_installment
    lines = [
        _section("Results"),
        f"- **Resale Value (ARV):** {money(m.arv)}",
        f"- **Acquisition Cost:** {money(m.acquisition_cost)}",
        f"- **Renovation (incl. contingency):** {money(m.renovation_total)}",
        f"- **Financing Cost:** {money(m.financing_cost)}",
        f"- **Selling Cost:** {money(m.selling_cost)}",
        f"- **Total Project Cost:** {money(m.total_cost)}",
        f"- **Monthly Installment:** {money(m.monthly_installment)} / month ({months:g} months)",
        f"- **Gross Profit:** {money(m.gross_profit)}",
        f"- **ROI on Equity:** {fmt_pct(m.roi_pct)}",
        f"- **Annualized ROI:** {fmt_pct(m.annualized_roi_pct)}",
        f"- **Project Margin:** {fmt_pct(m.project_margin_pct)}",
        f"- **Safety Margin:** {fmt_pct(m.safety_margin_pct)}",
    ]
    return "\n".join(lines) + "\n"


def _render_mao(m: FlippingMetrics, unit: Unit, uf_value: float | None) -> str:
    use_uf = unit == "uf" and uf_value is not None and uf_value > 0
    label = "UF" if use_uf else "$"
    mao = m.mao_uf if use_uf else m.mao
    delta = m.mao_delta_uf if use_uf else m.mao_delta
    lines = [
        _section("Maximum Allowable Offer (MAO)"),
        f"- **MAO:** {label} {_fmt_num(mao)}",
        f"- {describe_mao_delta(delta, label)}",
    ]
    return "\n".join(lines) + "\n"


def generate_flipping_report(
    metrics: FlippingMetrics,
    light: Stoplight,
    *,
    unit: Unit = "clp",
    uf_value: float | None = None,
) -> str:
    """
    Markdown report for a flip: recommendation, metric breakdown and MAO.
    Money is shown in `unit` (CLP by default; UF when a UF value is available).
    """
    parts = [
        "# Flipping Feasibility\n",
        _render_stoplight(light),
        _render_flipping_results(metrics, unit, uf_value),
        _render_mao(metrics, unit, uf_value),
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


def write_report(path: str | Path, markdown: str) -> None:
    """
    Convenience helper to write a generated report to disk.
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(markdown)

# propcalc/core/strategy/stoplight.py

from __future__ import annotations

import math

from propcalc.schemas.models import FlippingMetrics, Stoplight

# Red if any of these is breached
RED_MIN_ANNUALIZED_ROI_PCT = 12.0
RED_MIN_SAFETY_MARGIN_PCT = 12.0
RED_MIN_PROJECT_MARGIN_PCT = 8.0

# Green only if all of these are met
GREEN_MIN_ANNUALIZED_ROI_PCT = 30.0
GREEN_MIN_SAFETY_MARGIN_PCT = 25.0
GREEN_MIN_PROJECT_MARGIN_PCT = 18.0

RED = Stoplight(
    tier="red",
    title="NOT RECOMMENDED (RED)",
    message="Red - Not a good investment: returns and/or the safety margin are too low for a flip.",
)
GREEN = Stoplight(
    tier="green",
    title="OPTIMAL INVESTMENT (GREEN)",
    message="Green - Strong flipping opportunity: good annualized return and an adequate safety cushion.",
)
YELLOW = Stoplight(
    tier="yellow",
    title="INVESTMENT WITH RESERVATIONS (YELLOW)",
    message="Yellow - Could be an opportunity, but assumptions, timing and risks need a closer review.",
)


def determine_stoplight(m: FlippingMetrics) -> Stoplight:
    # NaN ratios compare False both ways: they never trip red and never earn green
    if (
        m.gross_profit <= 0
        or m.annualized_roi_pct < RED_MIN_ANNUALIZED_ROI_PCT
        or m.safety_margin_pct < RED_MIN_SAFETY_MARGIN_PCT
        or m.project_margin_pct < RED_MIN_PROJECT_MARGIN_PCT
    ):
        return RED

    if (
        m.gross_profit > 0
        and m.annualized_roi_pct >= GREEN_MIN_ANNUALIZED_ROI_PCT
        and m.safety_margin_pct >= GREEN_MIN_SAFETY_MARGIN_PCT
        and m.project_margin_pct >= GREEN_MIN_PROJECT_MARGIN_PCT
    ):
        return GREEN

    return YELLOW


def _fmt_amount(x: float) -> str:
    """Thousands separators, at most two decimals, no trailing zeros."""
    text = f"{x:,.2f}"
    return text.rstrip("0").rstrip(".")


def describe_mao_delta(delta: float, label: str = "$") -> str:
    """
    Advisory line comparing the purchase price against the MAO.

    Args:
        delta: mao - purchase_price, already expressed in the display unit.
        label: Currency label shown before the amount ("$" or "UF").
    """
    if math.isnan(delta):
        return "—"
    if delta > 0:
        return f"{label} {_fmt_amount(delta)} BELOW the MAO (there is room to buy)."
    if delta < 0:
        return f"{label} {_fmt_amount(abs(delta))} ABOVE the MAO (the offer is high for the target margin)."
    return "The purchase price matches the MAO exactly."

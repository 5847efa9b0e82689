# propcalc/core/finance/units.py
"""
CLP <-> UF conversion.

The engines work in a single unit; these helpers move user-entered amounts
in and out of it. Conversions are plain multiplications by the UF value
(CLP per UF), so they never round.
"""

from __future__ import annotations

import math
from typing import Literal

from propcalc.schemas.models import FlippingInputs

from .errors import UnitConversionError

Unit = Literal["clp", "uf"]

# FlippingInputs fields denominated in currency (everything else is a count, area or percent)
MONEY_FIELDS: tuple[str, ...] = ("purchase_price", "price_per_m2", "renovation_cost", "notary_cost")


def _require_uf(uf_value: float | None) -> float:
    if uf_value is None or not math.isfinite(uf_value) or uf_value <= 0:
        raise UnitConversionError("Enter a UF value greater than 0.")
    return uf_value


def to_clp(value: float, unit: Unit, uf_value: float | None = None) -> float:
    """Express an amount entered in `unit` as CLP."""
    if unit == "clp":
        return value
    if unit == "uf":
        return value * _require_uf(uf_value)
    raise ValueError(f"Unknown unit: {unit!r}")


def from_clp(value: float, unit: Unit, uf_value: float | None = None) -> float:
    """Express a CLP amount in `unit`."""
    if unit == "clp":
        return value
    if unit == "uf":
        return value / _require_uf(uf_value)
    raise ValueError(f"Unknown unit: {unit!r}")


def convert_money_fields(
    inputs: FlippingInputs,
    from_unit: Unit,
    to_unit: Unit,
    uf_value: float | None = None,
) -> FlippingInputs:
    """
    Return a copy of `inputs` with the money fields re-expressed in `to_unit`.

    Non-money fields (area, percents, months) and uf_value itself are left alone.
    """
    if from_unit == to_unit:
        return inputs
    updates = {name: from_clp(to_clp(getattr(inputs, name), from_unit, uf_value), to_unit, uf_value) for name in MONEY_FIELDS}
    return inputs.model_copy(update=updates)


__all__ = ["Unit", "MONEY_FIELDS", "to_clp", "from_clp", "convert_money_fields"]

# tests/unit/test_units.py
from __future__ import annotations

import pytest

from propcalc.core.finance.errors import UnitConversionError
from propcalc.core.finance.units import MONEY_FIELDS, convert_money_fields, from_clp, to_clp
from tests.utils import make_flipping_inputs


def test_clp_is_identity():
    assert to_clp(1234.5, "clp") == 1234.5
    assert from_clp(1234.5, "clp") == 1234.5


def test_uf_round_trip_is_multiplicative():
    assert to_clp(2.0, "uf", 37_000.0) == pytest.approx(74_000.0)
    assert from_clp(74_000.0, "uf", 37_000.0) == pytest.approx(2.0)


@pytest.mark.parametrize("uf_value", [None, 0.0, -10.0])
def test_uf_conversion_requires_positive_uf_value(uf_value):
    with pytest.raises(UnitConversionError):
        to_clp(1.0, "uf", uf_value)
    with pytest.raises(UnitConversionError):
        from_clp(1.0, "uf", uf_value)


def test_unknown_unit_is_rejected():
    with pytest.raises(ValueError):
        to_clp(1.0, "usd", 1.0)  # type: ignore[arg-type]


def test_convert_money_fields_only_touches_money():
    fi = make_flipping_inputs()
    in_uf = convert_money_fields(fi, "clp", "uf", 40_000.0)

    for name in MONEY_FIELDS:
        assert getattr(in_uf, name) == pytest.approx(getattr(fi, name) / 40_000.0)
    # Areas, percents and months are unit-free
    assert in_uf.area_m2 == fi.area_m2
    assert in_uf.down_payment_pct == fi.down_payment_pct
    assert in_uf.holding_months == fi.holding_months
    assert in_uf.uf_value == fi.uf_value
    # Original untouched
    assert fi.purchase_price == 100_000_000.0


def test_convert_money_fields_same_unit_returns_inputs():
    fi = make_flipping_inputs()
    assert convert_money_fields(fi, "uf", "uf", 40_000.0) is fi

# propcalc/core/finance/__init__.py

from .amortization import (
    build_amortization_table,
    compute_down_payment,
    compute_loan_summary,
    monthly_installment,
    term_months,
    validate_inputs,
)
from .errors import (
    CALCULATION_ERRORS,
    FlippingInputError,
    LoanValidationError,
    PropcalcError,
    UnitConversionError,
)
from .flipping import compute_indicators, validate_flipping_inputs
from .units import convert_money_fields, from_clp, to_clp

__all__ = [
    "build_amortization_table",
    "compute_loan_summary",
    "validate_inputs",
    "compute_down_payment",
    "monthly_installment",
    "term_months",
    "compute_indicators",
    "validate_flipping_inputs",
    "to_clp",
    "from_clp",
    "convert_money_fields",
    "PropcalcError",
    "LoanValidationError",
    "FlippingInputError",
    "UnitConversionError",
    "CALCULATION_ERRORS",
]

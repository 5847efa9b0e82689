# propcalc/core/finance/errors.py
"""
Typed errors for the calculation engines.

Exports
-------
- PropcalcError           (base, subclass of ValueError)
- LoanValidationError     (aggregated loan input problems; carries .errors)
- FlippingInputError      (first problem found in flipping inputs)
- UnitConversionError     (missing/invalid UF reference value)
- CALCULATION_ERRORS
"""

from __future__ import annotations

from collections.abc import Sequence


class PropcalcError(ValueError):
    """Base class for input problems reported by the calculators."""


class LoanValidationError(PropcalcError):
    """
    One or more loan inputs are invalid.

    The message joins every collected problem; the individual messages stay
    available on ``errors`` for callers that render them separately.
    """

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors: tuple[str, ...] = tuple(errors)
        super().__init__(" ".join(self.errors))


class FlippingInputError(PropcalcError):
    """A flipping input is missing, negative or non-finite."""


class UnitConversionError(PropcalcError):
    """A UF conversion was requested without a positive UF value."""


CALCULATION_ERRORS = (
    LoanValidationError,
    FlippingInputError,
    UnitConversionError,
)

__all__ = [
    "PropcalcError",
    "LoanValidationError",
    "FlippingInputError",
    "UnitConversionError",
    "CALCULATION_ERRORS",
]

# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_loan_inputs, make_flipping_inputs
"""

from .utils import make_flipping_inputs, make_loan_inputs, make_metrics

__all__ = ["make_loan_inputs", "make_flipping_inputs", "make_metrics"]

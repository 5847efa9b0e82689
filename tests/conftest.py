# tests/conftest.py
from __future__ import annotations

import os

import pytest

from propcalc.core.finance import build_amortization_table, compute_indicators
from tests.utils import make_flipping_inputs, make_loan_inputs


# -------- Isolate env-driven configuration --------
@pytest.fixture(autouse=True)
def _clear_propcalc_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("PROPCALC_"):
            monkeypatch.delenv(key, raising=False)
    yield


# -------- Loan fixtures --------
@pytest.fixture
def baseline_loan_inputs():
    """Factory for canonical mortgage inputs (overridable)."""

    def _factory(**overrides):
        return make_loan_inputs(**overrides)

    return _factory


@pytest.fixture
def baseline_schedule():
    """Factory to run the amortization engine on provided (or baseline) inputs."""

    def _factory(inputs=None):
        return build_amortization_table(inputs if inputs is not None else make_loan_inputs())

    return _factory


# -------- Flipping fixtures --------
@pytest.fixture
def baseline_flipping_inputs():
    """Factory for the canonical 100M → 160M flip (overridable)."""

    def _factory(**overrides):
        return make_flipping_inputs(**overrides)

    return _factory


@pytest.fixture
def baseline_metrics():
    """Factory to compute metrics for provided (or baseline) flipping inputs."""

    def _factory(inputs=None):
        return compute_indicators(inputs if inputs is not None else make_flipping_inputs())

    return _factory

# main.py
"""
Entry Point — Mortgage & Flipping Calculators

Purpose
-------
Run one of the two calculators and emit a Markdown report:
  - loan: French amortization schedule with insurance add-ons
          (+ optional CSV export of the full table).
  - flip: flipping feasibility metrics, MAO and stoplight recommendation.

Design
------
- CLI-friendly; pure Python. All math lives in propcalc.core.
- Inputs come from a JSON config (--config) or built-in sample values.
- Flipping money fields may be entered in UF (--unit uf --uf-value X);
  they are converted to CLP before the engine runs.

Usage
-----
    python main.py loan
    python main.py loan --config data/sample/loan.json --out loan.md --csv table.csv
    python main.py flip --config data/sample/flip.json --unit uf --uf-value 37000
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from propcalc.core.finance import build_amortization_table, compute_indicators
from propcalc.core.finance.errors import CALCULATION_ERRORS
from propcalc.core.strategy.stoplight import determine_stoplight
from propcalc.inputs.inputs import AppInputs, InputsLoader, RunOptions
from propcalc.reports.csv_export import write_amortization_csv
from propcalc.reports.generator import generate_flipping_report, generate_loan_report, write_report
from propcalc.schemas.models import (
    FlippingInputs,
    LoanInputs,
    PercentDownPayment,
    SimpleInsurance,
)

logger = logging.getLogger("propcalc")


def build_sample_loan_inputs() -> LoanInputs:
    """Return baseline LoanInputs for demo purposes (4,000 UF, 20% down, 4.6%, 25 years)."""
    return LoanInputs(
        property_price=4000.0,
        down_payment=PercentDownPayment(percent=20.0),
        annual_rate=4.6,
        term_years=25,
        insurance=SimpleInsurance(life_monthly=0.12, fire_quake_monthly=0.08),
    )


def build_sample_flipping_inputs() -> FlippingInputs:
    """Return baseline FlippingInputs for demo purposes (amounts in CLP)."""
    return FlippingInputs(
        purchase_price=100_000_000.0,
        area_m2=80.0,
        price_per_m2=2_200_000.0,
        safety_factor=0.95,
        renovation_cost=12_000_000.0,
        contingency_pct=10.0,
        acquisition_costs_pct=2.0,
        broker_commission_pct=2.0,
        notary_cost=1_000_000.0,
        down_payment_pct=20.0,
        annual_rate_pct=4.5,
        loan_term_months=240,
        holding_months=8,
        months_paying_installment=6,
        target_margin_pct=15.0,
        uf_value=37_000.0,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Mortgage & Flipping Calculators")
    p.add_argument("command", choices=["loan", "flip"], help='"loan" for an amortization table, "flip" for feasibility.')
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (bare inputs or AppInputs).")
    p.add_argument("--out", type=str, default=None, help="Output Markdown path (overrides config).")
    p.add_argument("--csv", type=str, default=None, help="Amortization CSV path, loan only (overrides config).")
    p.add_argument("--unit", type=str, default=None, choices=["clp", "uf"], help="Unit for flipping money fields.")
    p.add_argument("--uf-value", type=float, default=None, help="CLP per UF (overrides config).")
    p.add_argument(
        "--log-level",
        type=str,
        default=os.getenv("PROPCALC_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $PROPCALC_LOG_LEVEL or WARNING).",
    )
    return p.parse_args(argv)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.strip().upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="(%Y-%m-%d %H:%M:%S)",
    )


def _load_config(args: argparse.Namespace) -> AppInputs:
    loader = InputsLoader()
    if args.config:
        cfg = loader.load(args.config)
    else:
        # No config file → use demo inputs for the requested calculator
        cfg = AppInputs(
            loan=build_sample_loan_inputs() if args.command == "loan" else None,
            flipping=build_sample_flipping_inputs() if args.command == "flip" else None,
            run=RunOptions(out="loan_report.md" if args.command == "loan" else "flip_report.md"),
        )
    return loader.with_overrides(cfg, out=args.out, csv=args.csv, unit=args.unit, uf_value=args.uf_value)


def run_loan(cfg: AppInputs) -> str:
    if cfg.loan is None:
        raise ValueError("Inputs have no 'loan' section.")
    result = build_amortization_table(cfg.loan)
    md = generate_loan_report(result, cfg.loan)
    write_report(cfg.run.out, md)
    print(f"Report written to {cfg.run.out}")
    if cfg.run.csv:
        write_amortization_csv(cfg.run.csv, result)
        print(f"Amortization CSV written to {cfg.run.csv}")
    return md


def run_flip(cfg: AppInputs) -> str:
    inputs = InputsLoader().flipping_inputs(cfg)
    metrics = compute_indicators(inputs)
    light = determine_stoplight(metrics)
    md = generate_flipping_report(metrics, light, unit=cfg.run.unit, uf_value=inputs.uf_value)
    write_report(cfg.run.out, md)
    print(f"{light.title}: {light.message}")
    print(f"Report written to {cfg.run.out}")
    return md


def main(argv: list[str] | None = None) -> int:
    """Run the selected calculator; returns a process exit code."""
    args = parse_args(argv)
    _configure_logging(args.log_level)

    try:
        cfg = _load_config(args)
        logger.debug("running %s with unit=%s out=%s", args.command, cfg.run.unit, cfg.run.out)
        if args.command == "loan":
            run_loan(cfg)
        else:
            run_flip(cfg)
    except CALCULATION_ERRORS as e:
        # Bad inputs: the fix is corrected input, not a retry
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

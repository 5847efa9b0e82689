# propcalc/reports/csv_export.py
"""
CSV export of an amortization schedule.

Column names follow the spreadsheet layout users already import:
    cuota,saldo_inicial,interes,amortizacion,saldo_final,seguros,pago_total
Money columns use fixed 6-decimal precision so totals reconcile after import.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path

from propcalc.schemas.models import AmortizationResult, AmortizationRow

CSV_HEADER: tuple[str, ...] = (
    "cuota",
    "saldo_inicial",
    "interes",
    "amortizacion",
    "saldo_final",
    "seguros",
    "pago_total",
)

DEFAULT_CSV_NAME = "amortizacion_hipotecario.csv"


def _row_values(row: AmortizationRow) -> list[str]:
    return [
        str(row.period),
        f"{row.opening_balance:.6f}",
        f"{row.interest:.6f}",
        f"{row.principal_paid:.6f}",
        f"{row.closing_balance:.6f}",
        f"{row.insurance:.6f}",
        f"{row.total_payment:.6f}",
    ]


def amortization_csv(result: AmortizationResult) -> str:
    """Render the schedule as CSV text: header line plus one line per period."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in result.rows:
        writer.writerow(_row_values(row))
    return buf.getvalue()


def write_amortization_csv(path: str | Path, result: AmortizationResult) -> Path:
    """Write amortization_csv(result) to `path` (UTF-8) and return the path."""
    p = Path(path)
    p.write_text(amortization_csv(result), encoding="utf-8")
    return p

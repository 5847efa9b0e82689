# propcalc/inputs/inputs.py
"""
Inputs loader for the mortgage and flipping calculators.

Goals
-----
- Deterministic, file-first inputs with validation via Pydantic.
- Accept either a bare calculator payload or a structured document with
  run options (output paths, display unit, UF value).
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Bare (root = LoanInputs or FlippingInputs), detected by its fields:
   { "property_price": 4000, "annual_rate": 4.6, "term_years": 25, ... }
   { "purchase_price": 100000000, "area_m2": 80, ... }

2) Structured (root = AppInputs)
   {
     "loan": { ... LoanInputs ... },
     "flipping": { ... FlippingInputs ... },
     "run": {
       "out": "report.md",
       "csv": "amortizacion_hipotecario.csv",
       "unit": "uf",
       "uf_value": 37000
     }
   }

Environment overrides (optional)
--------------------------------
- PROPCALC_OUT       -> AppInputs.run.out
- PROPCALC_CSV       -> AppInputs.run.csv
- PROPCALC_UNIT      -> AppInputs.run.unit ("clp" | "uf")
- PROPCALC_UF_VALUE  -> AppInputs.run.uf_value (float)

Notes
-----
- Flipping money fields are read in run.unit and normalized to CLP by
  flipping_inputs(); the engines only ever see CLP.
- This module does not validate business rules beyond types; the engines do.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, ValidationError

from propcalc.core.finance.flipping import validate_flipping_inputs
from propcalc.core.finance.units import convert_money_fields
from propcalc.schemas.models import FlippingInputs, LoanInputs

logger = logging.getLogger(__name__)

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the run."""

    out: str = Field("report.md", description="Path to write the Markdown report.")
    csv: str | None = Field(None, description="Path to write the amortization CSV (loan runs only).")
    unit: Literal["clp", "uf"] = Field("clp", description="Unit flipping money fields are entered and displayed in.")
    uf_value: float | None = Field(None, description="CLP per UF; overrides flipping.uf_value when set.")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        loan:     Mortgage parameters, if a loan simulation is requested.
        flipping: Flip parameters, if a feasibility check is requested.
        run:      Non-financial, runtime options for the current execution.
    """

    loan: LoanInputs | None = None
    flipping: FlippingInputs | None = None
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Default search (when path=None):
        1) ./data/sample/inputs.json
        2) ./config.json
    """

    env_prefix: str = "PROPCALC_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        data = self._maybe_wrap_bare(raw)
        cfg = self._parse_root(data)
        cfg = self._apply_env_overrides(cfg)
        logger.debug("loaded inputs from %s", p)
        return cfg

    def load_json(self, text: str) -> AppInputs:
        """
        Load inputs from a JSON string (bare or structured shape).
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Invalid JSON payload: root must be an object.")
        data = self._maybe_wrap_bare(raw)
        cfg = self._parse_root(data)
        cfg = self._apply_env_overrides(cfg)
        return cfg

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        csv: str | None = None,
        unit: str | None = None,
        uf_value: float | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied to RunOptions.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if out is not None:
            updates["out"] = out
        if csv is not None:
            updates["csv"] = csv
        if unit is not None:
            updates["unit"] = unit
        if uf_value is not None:
            updates["uf_value"] = uf_value

        if not updates:
            return cfg

        run_new = RunOptions.model_validate({**cfg.run.model_dump(), **updates})
        return cfg.model_copy(update={"run": run_new})

    def flipping_inputs(self, cfg: AppInputs) -> FlippingInputs:
        """
        Resolve the flipping section into CLP-denominated, validated inputs.

        - run.uf_value (if set) replaces flipping.uf_value.
        - Validation runs before any conversion, so a missing UF value is
          reported as such rather than as a conversion failure.
        - Money fields entered in UF are multiplied into CLP.

        Raises:
            ValueError: if the document has no flipping section.
            FlippingInputError: on the first invalid field.
        """
        if cfg.flipping is None:
            raise ValueError("Inputs have no 'flipping' section.")

        fi = cfg.flipping
        if cfg.run.uf_value is not None:
            fi = fi.model_copy(update={"uf_value": cfg.run.uf_value})

        validate_flipping_inputs(fi)
        return convert_money_fields(fi, cfg.run.unit, "clp", fi.uf_value)

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        # Default search order
        for candidate in (Path("data/sample/inputs.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No inputs path provided and no default inputs found. Looked for ./data/sample/inputs.json and ./config.json."
        )

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            json_file = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(json_file, dict):
            raise ValueError(f"Invalid JSON in {p}: root must be an object.")
        return cast(dict[str, Any], json_file)

    def _maybe_wrap_bare(self, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Accept a bare LoanInputs / FlippingInputs document by wrapping it into
        the structured shape. Structured documents pass through untouched.
        """
        if any(k in raw for k in ("loan", "flipping", "run")):
            return raw
        if "property_price" in raw:
            return {"loan": raw}
        if "purchase_price" in raw:
            return {"flipping": raw}
        return raw

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        """
        Validate and return structured AppInputs.
        """
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """
        Apply light, optional overrides from environment variables to run options.
        """
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        csv_path = os.getenv(f"{prefix}CSV")
        if csv_path:
            updates["csv"] = csv_path

        unit = os.getenv(f"{prefix}UNIT")
        if unit:
            normalized = unit.strip().lower()
            if normalized in ("clp", "uf"):
                updates["unit"] = normalized
            else:
                logger.warning("ignoring %sUNIT=%r (expected 'clp' or 'uf')", prefix, unit)

        uf_value = os.getenv(f"{prefix}UF_VALUE")
        if uf_value:
            try:
                updates["uf_value"] = float(uf_value)
            except ValueError:
                logger.warning("ignoring %sUF_VALUE=%r (not a number)", prefix, uf_value)

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)

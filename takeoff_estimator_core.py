# takeoff_estimator_core.py — v1.3.0
# Simplified takeoff-distance-over-obstacle estimator for a light single (P2010 class).
# One reference point (960 kg, 0 °C, 0 ft, 0 kt, paved -> 418 m over the obstacle) scaled by:
# - mass (quadratic), temperature (linear about 15 °C), elevation (+18% / 1000 ft)
# - wind (additive: -10 m/kt headwind, +20 m/kt tailwind)
# - 355 m floor (before surface), then +10% for grass
#
# NOTE: this is a scaling model, NOT a certified performance chart.
# Constants are calibration knobs; see MODEL_CFG below and data/estimator_config.json.

from __future__ import annotations

import copy
import logging
import math
import numbers
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

__version__ = "v1.3.0"

logger = logging.getLogger(__name__)

SURFACES = ("asphalt", "grass")
NUMERIC_FIELDS = ("weight_kg", "oat_c", "field_elev_ft", "wind_kts")
# plain ASCII decimal, as typed into a form field; no digit-group underscores or non-ASCII digits
_NUMBER_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)

# ---- Model Configuration (CALIBRATION KNOBS) ----
MODEL_CFG: Dict[str, Any] = {
    "base_distance_m": 418.0,       # over the obstacle at the reference point
    "ref_mass_kg": 960.0,
    "mass_band_kg": {"min": 960.0, "max": 1160.0},   # range covered by the source tables
    "temp_anchor_c": 15.0,
    "temp_factor_per_c": 0.01,
    "alt_factor_per_1000ft": 0.18,
    "wind_m_per_kt": {"headwind": -10.0, "tailwind": -20.0},
    "floor_m": 355.0,
    "surface_factor": {"asphalt": 1.00, "grass": 1.10},
}

MSG_NOT_A_NUMBER = "Please fill in all fields with valid numbers."
MSG_MASS_NOT_POSITIVE = "Takeoff mass must be a positive value."
MSG_ALT_NEGATIVE = "Airfield elevation cannot be negative."
MSG_SURFACE_UNKNOWN = "Runway surface must be one of: asphalt, grass."
MSG_MASS_FACTOR = "Cannot compute the mass factor (check the mass)."
MSG_CALC_FAILED = "An error occurred during the calculation. Check the entered values."
MSG_MASS_BELOW = ("Warning: takeoff mass below the minimum table value ({lo:.0f} kg). "
                  "Results may be unreliable.")
MSG_MASS_ABOVE = ("Warning: takeoff mass exceeds the maximum table value ({hi:.0f} kg). "
                  "Results may be unreliable.")


class EstimatorError(ValueError):
    """Fatal condition: the input set cannot produce a distance."""


class InputParseError(EstimatorError):
    """Raw text input could not be turned into a finite number."""


@dataclass(frozen=True)
class EstimatorInputs:
    weight_kg: float
    oat_c: float
    field_elev_ft: float
    wind_kts: float          # + headwind, - tailwind
    surface: str = "asphalt"


DEFAULT_INPUTS = EstimatorInputs(weight_kg=960.0, oat_c=15.0, field_elev_ft=0.0, wind_kts=0.0, surface="asphalt")


@dataclass(frozen=True)
class Outcome:
    kind: str                          # "ok" | "error"
    distance_m: Optional[int] = None
    warning: Optional[str] = None
    message: Optional[str] = None
    surface: Optional[str] = None
    breakdown: Dict[str, float] = field(default_factory=dict, compare=False)

    @property
    def ok(self) -> bool:
        return self.kind == "ok"

    @classmethod
    def error(cls, message: str) -> "Outcome":
        return cls(kind="error", message=message)

    def as_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"kind": "error", "message": self.message}
        out: Dict[str, Any] = {"kind": "ok", "distance_m": self.distance_m, "surface": self.surface}
        if self.warning:
            out["warning"] = self.warning
        return out


def merge_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return MODEL_CFG with `overrides` applied (one level deep for nested tables)."""
    cfg = copy.deepcopy(MODEL_CFG)
    for k, v in (overrides or {}).items():
        if isinstance(v, Mapping) and isinstance(cfg.get(k), dict):
            cfg[k].update({kk: float(vv) for kk, vv in v.items()})
        elif k in cfg:
            cfg[k] = float(v)
    return cfg


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


# ---------- Validation ----------
def validate_inputs(inputs: EstimatorInputs, cfg: Optional[Mapping[str, Any]] = None) -> Tuple[Optional[str], Optional[str]]:
    """
    Classify an input record before any arithmetic.
    Returns (fatal_message, advisory_message); each call starts from a clean slate.
    Fatal checks short-circuit in order: numeric -> mass > 0 -> elevation >= 0 -> surface.
    The mass-band advisory is only reported for records that pass the fatal checks.
    A partial `cfg` is merged over MODEL_CFG.
    """
    cfg = merge_config(cfg) if cfg is not None else MODEL_CFG
    for name in NUMERIC_FIELDS:
        v = getattr(inputs, name)
        if isinstance(v, bool) or not isinstance(v, numbers.Real) or not math.isfinite(v):
            return MSG_NOT_A_NUMBER, None
    if inputs.weight_kg <= 0:
        return MSG_MASS_NOT_POSITIVE, None
    if inputs.field_elev_ft < 0:
        return MSG_ALT_NEGATIVE, None
    if inputs.surface not in SURFACES:
        return MSG_SURFACE_UNKNOWN, None

    band = cfg["mass_band_kg"]
    warning = None
    if inputs.weight_kg < band["min"]:
        warning = MSG_MASS_BELOW.format(lo=band["min"])
    if inputs.weight_kg > band["max"]:
        warning = MSG_MASS_ABOVE.format(hi=band["max"])
    return None, warning


# ---------- Correction pipeline ----------
def correction_pipeline(inputs: EstimatorInputs, cfg: Optional[Mapping[str, Any]] = None) -> Dict[str, float]:
    """
    Apply the correction chain to a validated record. Order is fixed; every step after
    the mass correction acts on the accumulated distance. Raises EstimatorError at the
    two guards (mass factor, final distance). Nothing is rounded here.
    A partial `cfg` is merged over MODEL_CFG.
    """
    cfg = merge_config(cfg) if cfg is not None else MODEL_CFG
    distance = float(cfg["base_distance_m"])

    weight_ratio = inputs.weight_kg / cfg["ref_mass_kg"]
    weight_factor = weight_ratio * weight_ratio
    if not math.isfinite(weight_factor) or weight_factor <= 0:
        raise EstimatorError(MSG_MASS_FACTOR)
    distance *= weight_factor

    # may reach zero or go negative for extreme cold; the floor below catches it
    temp_factor = 1.0 + (inputs.oat_c - cfg["temp_anchor_c"]) * cfg["temp_factor_per_c"]
    distance *= temp_factor

    alt_factor = 1.0
    if inputs.field_elev_ft >= 0:
        alt_factor = 1.0 + (inputs.field_elev_ft / 1000.0) * cfg["alt_factor_per_1000ft"]
        distance *= alt_factor

    wind_adj = 0.0
    if inputs.wind_kts > 0:
        wind_adj = cfg["wind_m_per_kt"]["headwind"] * inputs.wind_kts
    elif inputs.wind_kts < 0:
        wind_adj = cfg["wind_m_per_kt"]["tailwind"] * inputs.wind_kts
    distance += wind_adj

    before_surface = max(distance, cfg["floor_m"])

    surface_factor = float(cfg["surface_factor"].get(inputs.surface, 1.0))
    final = before_surface * surface_factor
    if not math.isfinite(final) or final < 0:
        raise EstimatorError(MSG_CALC_FAILED)

    return {
        "weight_factor": weight_factor,
        "temp_factor": temp_factor,
        "alt_factor": alt_factor,
        "wind_adjustment_m": wind_adj,
        "distance_uncapped_m": distance,
        "distance_before_surface_m": before_surface,
        "surface_factor": surface_factor,
        "distance_final_m": final,
    }


# ---------- Facade ----------
def estimate(inputs: EstimatorInputs, cfg: Optional[Mapping[str, Any]] = None) -> Outcome:
    """Validate + run the pipeline. Always returns an Outcome; fatal faults become kind='error'."""
    cfg = merge_config(cfg) if cfg is not None else MODEL_CFG
    fatal, warning = validate_inputs(inputs, cfg)
    if fatal:
        logger.info("estimate rejected: %s (%s)", fatal, inputs)
        return Outcome.error(fatal)
    try:
        steps = correction_pipeline(inputs, cfg)
    except EstimatorError as e:
        logger.info("estimate failed: %s (%s)", e, inputs)
        return Outcome.error(str(e))

    distance_m = round_half_up(steps["distance_final_m"])
    logger.debug("estimate %s -> %d m %s", inputs, distance_m, steps)
    return Outcome(kind="ok", distance_m=distance_m, warning=warning,
                   surface=inputs.surface, breakdown=steps)


# ---------- Text adapter ----------
def _parse_number(text: Any) -> float:
    s = str(text if text is not None else "").strip().replace(",", ".")
    if not _NUMBER_RE.fullmatch(s):
        raise InputParseError(MSG_NOT_A_NUMBER)
    try:
        v = float(s)
    except ValueError:
        raise InputParseError(MSG_NOT_A_NUMBER) from None
    if not math.isfinite(v):
        raise InputParseError(MSG_NOT_A_NUMBER)
    return v


def parse_text_inputs(raw: Mapping[str, Any]) -> EstimatorInputs:
    """
    Turn text fields (weight, temperature, altitude, wind, surface) into EstimatorInputs.
    Raises InputParseError if any numeric field is empty, non-numeric or not finite.
    """
    numbers_in = {
        "weight_kg": _parse_number(raw.get("weight")),
        "oat_c": _parse_number(raw.get("temperature")),
        "field_elev_ft": _parse_number(raw.get("altitude")),
        "wind_kts": _parse_number(raw.get("wind")),
    }
    surface = str(raw.get("surface") or "asphalt").strip().lower()
    if surface not in SURFACES:
        raise InputParseError(MSG_SURFACE_UNKNOWN)
    return EstimatorInputs(surface=surface, **numbers_in)


def estimate_from_text(raw: Mapping[str, Any], cfg: Optional[Mapping[str, Any]] = None) -> Outcome:
    try:
        inputs = parse_text_inputs(raw)
    except InputParseError as e:
        logger.info("text input rejected: %s", e)
        return Outcome.error(str(e))
    return estimate(inputs, cfg)


# ---------- Sensitivity sweep ----------
def sweep(base: EstimatorInputs, field_name: str, values: Iterable[float],
          cfg: Optional[Mapping[str, Any]] = None) -> pd.DataFrame:
    """
    Evaluate the estimator along one numeric input, others held at `base`.
    Returns columns [field_name, distance_m, warning, error]; distance_m is NaN on error.
    """
    if field_name not in NUMERIC_FIELDS:
        raise ValueError(f"Cannot sweep over {field_name!r}; expected one of {NUMERIC_FIELDS}")
    rows = []
    for v in np.asarray(list(values), dtype=float):
        out = estimate(replace(base, **{field_name: float(v)}), cfg)
        rows.append({
            field_name: float(v),
            "distance_m": float(out.distance_m) if out.ok else np.nan,
            "warning": out.warning,
            "error": out.message,
        })
    return pd.DataFrame(rows, columns=[field_name, "distance_m", "warning", "error"])

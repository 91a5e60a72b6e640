# data_loaders.py — v1.3.0-data
# Path-hardening: all data loads default to ./data relative to this file.
# Smart fallback: if a caller passes a bare filename or a non-existent path,
# we transparently try ./data/<name> before failing.

from __future__ import annotations
import json
import logging
import os
from functools import lru_cache
from typing import Optional

import pandas as pd

from takeoff_estimator_core import MODEL_CFG, SURFACES, merge_config

logger = logging.getLogger(__name__)

# Resolve ./data relative to this file (works in Streamlit Cloud, local, etc.)
DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

REFERENCE_COLUMNS = ("name", "weight_kg", "oat_c", "field_elev_ft", "wind_kts", "surface", "expected_m")


def _data_path(name: str) -> str:
    return os.path.join(DATA_DIR, name)


def resolve_data_path(path: Optional[str], default_name: str) -> str:
    """
    Resolution rules:
      1) If path is None → use ./data/<default_name>.
      2) If path exists (absolute, relative or bare filename in CWD) → use as-is.
      3) Otherwise → try ./data/<basename(path)>.
      4) If that still doesn't exist → raise FileNotFoundError (with all tried paths).
    """
    if path is None:
        p = _data_path(default_name)
        if os.path.isfile(p):
            return p
        raise FileNotFoundError(f"Missing required data file: {p}")

    tried = []
    if os.path.isfile(path):
        return path
    tried.append(path)

    candidate = _data_path(os.path.basename(path))
    if os.path.isfile(candidate):
        return candidate
    tried.append(candidate)
    raise FileNotFoundError(f"No such file. Tried: {tried}")


@lru_cache(maxsize=None)
def load_model_config(path: str | None = None) -> dict:
    """
    Estimator calibration knobs.
    Default location: ./data/estimator_config.json
    Keys not present in the file keep their MODEL_CFG defaults; a missing file means
    all defaults. Unknown keys are ignored.
    """
    try:
        resolved = resolve_data_path(path, "estimator_config.json")
    except FileNotFoundError:
        logger.info("estimator_config.json not found, using built-in model constants")
        return merge_config(None)
    with open(resolved) as f:
        cfg = json.load(f)
    unknown = set(cfg) - set(MODEL_CFG)
    if unknown:
        logger.info("ignoring unknown config keys: %s", sorted(unknown))
    return merge_config({k: v for k, v in cfg.items() if k in MODEL_CFG})


@lru_cache(maxsize=None)
def load_reference_points(path: str | None = None) -> pd.DataFrame:
    """
    Reference scenarios with the distance the model is expected to produce.
    Columns required: name, weight_kg, oat_c, field_elev_ft, wind_kts, surface, expected_m
    (expected_m left blank for scenarios that must end in a fatal error).
    Default location: ./data/reference_points.csv
    """
    resolved = resolve_data_path(path, "reference_points.csv")
    df = pd.read_csv(resolved)
    missing = set(REFERENCE_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"Reference CSV missing columns: {sorted(missing)}")
    for c in ("weight_kg", "oat_c", "field_elev_ft", "wind_kts", "expected_m"):
        df[c] = pd.to_numeric(df[c], errors="coerce")
    df["surface"] = df["surface"].astype(str).str.lower().str.strip()
    bad = sorted(set(df["surface"]) - set(SURFACES))
    if bad:
        raise ValueError(f"Reference CSV has unknown surfaces: {bad}")
    return df

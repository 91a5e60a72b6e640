# tests/test_sanity.py — imports, data folder and loaders
import importlib
import json
import pathlib
import types

import pandas as pd
import pytest

import data_loaders
import takeoff_estimator_core as core
from takeoff_estimator_core import EstimatorInputs


def test_imports_and_symbols():
    m = importlib.import_module("takeoff_estimator_core")
    assert isinstance(m, types.ModuleType)
    assert hasattr(m, "__version__")
    for name in ["validate_inputs", "correction_pipeline", "estimate",
                 "parse_text_inputs", "estimate_from_text", "sweep"]:
        assert hasattr(m, name), f"missing symbol: {name}"
    r = importlib.import_module("recompute")
    assert hasattr(r, "RecomputeController")


def test_data_folder_presence():
    data_dir = pathlib.Path(data_loaders.DATA_DIR)
    assert data_dir.exists(), f"DATA_DIR not found: {data_dir}"
    assert (data_dir / "estimator_config.json").is_file()
    assert (data_dir / "reference_points.csv").is_file()


def test_shipped_config_equals_defaults():
    assert data_loaders.load_model_config() == core.MODEL_CFG


def test_config_partial_file_keeps_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"floor_m": 300, "wind_m_per_kt": {"tailwind": -25}, "bogus": 1}))
    cfg = data_loaders.load_model_config(str(p))
    assert cfg["floor_m"] == 300.0
    assert cfg["wind_m_per_kt"] == {"headwind": -10.0, "tailwind": -25.0}
    assert cfg["base_distance_m"] == 418.0
    assert "bogus" not in cfg


def test_config_missing_file_falls_back(tmp_path):
    cfg = data_loaders.load_model_config(str(tmp_path / "nope" / "does_not_exist.json"))
    assert cfg == core.MODEL_CFG


def test_resolve_data_path_fallback(tmp_path):
    # non-existent directory, known basename -> ./data/<basename>
    p = data_loaders.resolve_data_path(str(tmp_path / "reference_points.csv"), "x.csv")
    assert pathlib.Path(p) == pathlib.Path(data_loaders.DATA_DIR) / "reference_points.csv"
    with pytest.raises(FileNotFoundError):
        data_loaders.resolve_data_path(str(tmp_path / "missing.csv"), "missing.csv")


def test_reference_points_match_model():
    ref = data_loaders.load_reference_points()
    assert len(ref) >= 10
    for _, r in ref.iterrows():
        out = core.estimate(EstimatorInputs(float(r.weight_kg), float(r.oat_c), float(r.field_elev_ft),
                                            float(r.wind_kts), r.surface))
        if pd.isna(r.expected_m):
            assert not out.ok, r["name"]
        else:
            assert out.distance_m == int(r.expected_m), r["name"]


def test_reference_points_missing_columns(tmp_path):
    p = tmp_path / "ref.csv"
    p.write_text("name,weight_kg\nx,960\n")
    with pytest.raises(ValueError):
        data_loaders.load_reference_points(str(p))

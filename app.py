# app.py — Streamlit UI for the light-aircraft takeoff distance estimator (reactive / sliders)

from __future__ import annotations
import logging

import streamlit as st

from data_loaders import load_model_config
from recompute import RecomputeController
from takeoff_estimator_core import EstimatorInputs, Outcome, __version__

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="Takeoff Distance Estimator", page_icon="✈️", layout="centered")

cfg = load_model_config()


def _controller() -> RecomputeController:
    ss = st.session_state
    if "reactive_ctrl" not in ss:
        ss["reactive_ctrl"] = RecomputeController(mode="reactive", cfg=cfg)
    return ss["reactive_ctrl"]


def render_outcome(out: Outcome | None) -> None:
    if out is None:
        st.info("Adjust the inputs to compute the takeoff distance.")
        return
    if out.warning:
        st.warning(out.warning, icon="⚠️")
    if not out.ok:
        st.error(out.message)
        return
    label = "grass" if out.surface == "grass" else "asphalt"
    st.metric(f"Estimated takeoff distance over the obstacle ({label})", f"{out.distance_m} m")
    with st.expander("Correction breakdown", expanded=False):
        b = out.breakdown
        st.write({
            "Mass factor": round(b["weight_factor"], 4),
            "Temperature factor": round(b["temp_factor"], 4),
            "Elevation factor": round(b["alt_factor"], 4),
            "Wind adjustment (m)": round(b["wind_adjustment_m"], 1),
            "Before floor (m)": round(b["distance_uncapped_m"], 1),
            "Before surface (m)": round(b["distance_before_surface_m"], 1),
            "Surface factor": b["surface_factor"],
        })


# ------------------------------ UI ------------------------------
st.title(f"Takeoff Distance Estimator — P2010 ({__version__})")
st.caption(f"Scaled from one reference point: {cfg['ref_mass_kg']:.0f} kg / {cfg['base_distance_m']:.0f} m "
           "(0 ft, 0 kt, asphalt). Accounts for surface and mass-range advisories.")
st.caption(":red[Estimates only. They do not replace the aircraft's official performance tables.]")

band = cfg["mass_band_kg"]
c1, c2 = st.columns(2)
with c1:
    weight = st.slider(f"Takeoff mass (kg) [tables: {band['min']:.0f}–{band['max']:.0f}]",
                       min_value=700, max_value=1300, value=int(cfg["ref_mass_kg"]), step=5)
    altitude = st.slider("Field elevation (ft)", min_value=0, max_value=10000, value=0, step=50)
with c2:
    temperature = st.slider("Air temperature (°C)", min_value=-30, max_value=50, value=15, step=1)
    wind = st.slider("Wind component (kt, + headwind / − tailwind)", min_value=-20, max_value=30, value=0, step=1)

surface = st.radio("Runway surface", ["asphalt", "grass"], horizontal=True,
                   format_func=lambda s: "Asphalt / paved" if s == "asphalt" else "Grass (+10% distance)")

# ------------------------------ autorun compute ------------------------------
ctrl = _controller()
outcome = ctrl.set_inputs(EstimatorInputs(
    weight_kg=float(weight), oat_c=float(temperature),
    field_elev_ft=float(altitude), wind_kts=float(wind), surface=surface,
))
render_outcome(outcome)

st.caption("Model: mass² scaling, +1%/°C above 15 °C, +18%/1000 ft, −10 m/kt headwind, "
           "+20 m/kt tailwind, 355 m floor before the surface factor.")

import logging

import streamlit as st

from data_loaders import load_model_config
from recompute import RecomputeController
from takeoff_estimator_core import InputParseError, parse_text_inputs

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="Manual Entry", layout="centered")
st.title("Takeoff Distance — Manual Entry")
st.caption("Type the values and press Calculate. Decimal comma is accepted.")

cfg = load_model_config()
if "manual_ctrl" not in st.session_state:
    st.session_state["manual_ctrl"] = RecomputeController(mode="manual", cfg=cfg)
ctrl: RecomputeController = st.session_state["manual_ctrl"]

band = cfg["mass_band_kg"]
c1, c2 = st.columns(2)
with c1:
    weight = st.text_input(f"Takeoff mass (kg) [range: {band['min']:.0f}-{band['max']:.0f}]", placeholder="e.g. 960")
    altitude = st.text_input("Field elevation (ft)", placeholder="e.g. 0")
with c2:
    temperature = st.text_input("Air temperature (°C)", placeholder="e.g. 0")
    wind = st.text_input("Headwind component (kt)", placeholder="e.g. 0 (negative for tailwind)")
surface = st.radio("Runway surface", ["asphalt", "grass"], horizontal=True,
                   format_func=lambda s: "Asphalt / paved" if s == "asphalt" else "Grass (+10% distance)")

raw = {
    "weight": weight, "temperature": temperature,
    "altitude": altitude, "wind": wind, "surface": surface,
}
if st.button("Calculate takeoff distance", type="primary"):
    ctrl.recalculate_from_text(raw)
else:
    # stage parseable edits so the page can tell the shown result is out of date
    try:
        ctrl.set_inputs(parse_text_inputs(raw))
    except InputParseError:
        pass

out = ctrl.outcome
if out is not None:
    if out.warning:
        st.warning(out.warning, icon="⚠️")
    if out.ok:
        st.metric(f"Estimated takeoff distance over the obstacle ({out.surface})", f"{out.distance_m} m")
    else:
        st.error(out.message)
    if out.ok and ctrl.stale:
        st.caption("Inputs changed since the last calculation. Press Calculate to refresh.")

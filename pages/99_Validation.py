import numpy as np
import pandas as pd
import streamlit as st

from data_loaders import load_model_config, load_reference_points
from takeoff_estimator_core import EstimatorInputs, estimate, sweep

st.set_page_config(page_title="Validation Harness", layout="wide")
st.title("Validation Harness — Reference Scenarios & Sensitivities")

cfg = load_model_config()

with st.sidebar:
    st.header("Sweep base point")
    weight = st.number_input("Mass (kg)", 500.0, 1500.0, float(cfg["ref_mass_kg"]), step=10.0)
    oat = st.number_input("OAT (°C)", -40.0, 50.0, 15.0, step=1.0)
    elev = st.number_input("Field Elevation (ft)", 0.0, 12000.0, 0.0, step=100.0)
    wind = st.number_input("Headwind (+) / Tailwind (-) (kt)", -30.0, 30.0, 0.0, step=1.0)
    surface = st.selectbox("Surface", ["asphalt", "grass"], index=0)

base = EstimatorInputs(weight_kg=weight, oat_c=oat, field_elev_ft=elev, wind_kts=wind, surface=surface)

# ------------------------------ reference table ------------------------------
st.subheader("Reference scenarios")
ref = load_reference_points()
rows = []
for _, r in ref.iterrows():
    out = estimate(EstimatorInputs(float(r.weight_kg), float(r.oat_c), float(r.field_elev_ft),
                                   float(r.wind_kts), r.surface), cfg)
    expected = None if pd.isna(r.expected_m) else int(r.expected_m)
    got = out.distance_m if out.ok else None
    rows.append({
        "scenario": r["name"],
        "expected_m": expected,
        "model_m": got,
        "warning": out.warning or "",
        "error": out.message or "",
        "match": expected == got,
    })
table = pd.DataFrame(rows)
st.dataframe(table, use_container_width=True)
n_bad = int((~table["match"]).sum())
if n_bad:
    st.error(f"{n_bad} scenario(s) disagree with the reference table.")
else:
    st.success("All reference scenarios match.")

# ------------------------------ sensitivities ------------------------------
st.subheader("Sensitivities")
ranges = {
    "weight_kg": ("Mass (kg)", np.linspace(800, 1250, 46)),
    "oat_c": ("OAT (°C)", np.linspace(-20, 45, 66)),
    "field_elev_ft": ("Field elevation (ft)", np.linspace(0, 8000, 81)),
    "wind_kts": ("Wind (kt)", np.linspace(-15, 25, 41)),
}
cols = st.columns(2)
for i, (name, (label, values)) in enumerate(ranges.items()):
    df = sweep(base, name, values, cfg)
    with cols[i % 2]:
        st.caption(label)
        st.line_chart(df.set_index(name)["distance_m"])

st.caption("The 355 m floor flattens the low end of each curve; grass scales the whole curve by 1.10.")

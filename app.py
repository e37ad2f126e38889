import pandas as pd
import streamlit as st
from bestfit.analysis.selection import fit_all
from bestfit.config import FitOptions, MAX_POLYNOMIAL_DEGREE, MIN_POLYNOMIAL_DEGREE
from bestfit.constants import FIT_MODELS, SAMPLE_DATA
from bestfit.core.errors import InvalidInputError, NoValidModelError
from bestfit.core.points import parse_text, read_upload
from bestfit.project.serializer import (
    comparison_frame,
    residuals_frame,
    result_to_json,
)
from bestfit.viz.builder import fit_and_residuals, fit_figure, residual_figure

st.set_page_config(page_title="bestfit", layout="wide")
st.title("Best-fit curve finder")

# --- Data input ---
with st.sidebar.expander("Data", expanded=True):
    mode = st.radio("Source", ["Paste", "Upload"], index=0, key="source_mode")
    parsed = None
    if mode == "Paste":
        sample = st.selectbox(
            "Load sample", list(SAMPLE_DATA), index=0, key="sample_name"
        )
        # one text state per sample so switching samples reloads the data
        text = st.text_area(
            "x, y pairs (comma, tab, semicolon or space separated)",
            value=SAMPLE_DATA[sample],
            height=220,
            key=f"pasted_text_{sample}",
        )
        parsed = parse_text(text)
    else:
        upload = st.file_uploader(
            "Upload CSV/XLSX", type=["csv", "xlsx", "xls"], key="upload_widget",
            help="The first two columns are used as x and y.",
        )
        if upload is not None:
            try:
                parsed = read_upload(upload)
            except InvalidInputError as e:
                st.error(str(e))

with st.sidebar.expander("Options", expanded=True):
    degree = st.slider(
        "Polynomial degree",
        MIN_POLYNOMIAL_DEGREE,
        MAX_POLYNOMIAL_DEGREE,
        3,
        help="Degree of the fourth polynomial family (capped at 4).",
    )

if parsed is None:
    st.info("Paste data or upload a file to start.")
    st.stop()

st.caption(
    f"Rows: {parsed.total} | valid: {parsed.valid} | "
    f"rejected: {len(parsed.rejected)}"
)
if parsed.rejected:
    with st.expander(f"Rejected rows ({len(parsed.rejected)})"):
        st.dataframe(pd.DataFrame([
            {"row": r.row_number, "data": ", ".join(map(str, r.row_data)),
             "reason": r.reason}
            for r in parsed.rejected
        ]))

try:
    result = fit_all(parsed.points, FitOptions(polynomial_degree=degree))
except InvalidInputError as e:
    st.error(f"At least two valid data points are required ({e}).")
    st.stop()
except NoValidModelError:
    st.error("Regression analysis failed: no model fits this data.")
    st.stop()

best = result.best_model
c1, c2, c3 = st.columns(3)
c1.metric("Best model", best.model.value)
c2.metric("R²", f"{best.r_squared:.6f}")
c3.metric("AIC (R²-based)", f"{best.aic:.3f}")
st.code(best.equation)

stacked = st.checkbox(
    "Stacked view (best fit over its residuals)", value=False, key="stacked_view"
)
if stacked:
    resid_model = best.model.value
    resid_fit = best
    st.plotly_chart(
        fit_and_residuals(parsed.points, result), use_container_width=True
    )
else:
    shown = st.multiselect(
        "Curves to draw",
        [f.model.value for f in result.all_models],
        default=[best.model.value],
    )
    left, right = st.columns([3, 2])
    with left:
        st.plotly_chart(
            fit_figure(parsed.points, result, models=shown),
            use_container_width=True,
        )
    with right:
        labels = [f.model.value for f in result.all_models]
        resid_model = st.selectbox(
            "Residuals for", labels, index=labels.index(best.model.value),
        )
        resid_fit = result.get(resid_model)
        st.plotly_chart(
            residual_figure(parsed.points, resid_fit), use_container_width=True
        )

st.subheader("Model comparison")
st.dataframe(comparison_frame(result), use_container_width=True)
st.caption(
    "AIC here is approximated from R² and only ranks models fitted to the same "
    f"data. Families attempted in order: {', '.join(FIT_MODELS)}."
)

with st.expander("Residual table"):
    st.dataframe(residuals_frame(parsed.points, resid_fit))

st.download_button(
    "Download result (JSON)",
    data=result_to_json(result),
    file_name="bestfit_result.json",
    mime="application/json",
)
st.download_button(
    "Download residuals (CSV)",
    data=residuals_frame(parsed.points, resid_fit).to_csv(index=False),
    file_name=f"residuals_{resid_model.lower()}.csv",
    mime="text/csv",
)

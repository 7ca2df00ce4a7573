import altair as alt
import streamlit as st
from contextlib import contextmanager
from typing import List, Optional

from core.charts import ChartSpec, build_chart, chart_frame
from core.data import available_values, load_dashboard_data, prepare_context
from core.errors import EmptyIntersection
from core.filters import normalize_filters
from core.presentation import VIEW_OPTIONS, VIEWS
from core.view_combined import combined_spec
from core.view_normalized import normalized_spec

alt.data_transformers.disable_max_rows()


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chart-note {font-size: 0.8rem;text-align: center;color: #4b5563;margin-top: 10px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_advisories(advisories: List[str]):
    for message in advisories:
        st.warning(message)


def render_chart(spec: ChartSpec, export_name: Optional[str] = None):
    st.altair_chart(build_chart(spec), use_container_width=True)
    if spec.note:
        st.markdown(f"<div class='chart-note'>Note: {spec.note}</div>", unsafe_allow_html=True)
    if export_name:
        export_df = chart_frame(spec).drop(columns=["tooltip"])
        st.download_button(
            "Export CSV",
            data=export_df.to_csv(index=False).encode("utf-8"),
            file_name=export_name,
            mime="text/csv",
        )


# ---------- UI setup ----------
st.set_page_config(page_title="Depression vs. Digital Media", layout="wide")
inject_base_styles()

labels = {opt["label"]: opt["value"] for opt in VIEW_OPTIONS}
data_ctx = load_dashboard_data()

with st.sidebar:
    st.markdown("### Select Chart")
    chart_label = st.selectbox("Select Chart", list(labels), index=0)
    selected_view = labels[chart_label]

    st.markdown("---")
    strata_options = available_values(data_ctx, "Strata") or ["Total"]
    default_index = strata_options.index("Total") if "Total" in strata_options else 0
    strata = st.selectbox("Strata", strata_options, index=default_index)

config = VIEWS[selected_view]
st.title(config.title)
st.subheader("Adult Depression Percentage Over Years")

filters = normalize_filters({"filter_value": strata})
ctx = prepare_context(filters, data_ctx)
render_advisories(ctx["advisories"])

with card(config.title):
    if selected_view == "normalized-chart":
        try:
            spec = normalized_spec(ctx)
        except EmptyIntersection as exc:
            st.info(exc.advisory)
        else:
            render_chart(spec, export_name="normalized-chart.csv")
            st.caption("Values normalized to 0-100% scale for comparison.")
    else:
        render_chart(combined_spec(ctx), export_name="combined-chart.csv")

with st.expander("Source data", expanded=False):
    st.dataframe(ctx["depression"].to_frame(), hide_index=True, use_container_width=True)
    st.caption(f"Source: {ctx['source']} ({ctx['status']})")

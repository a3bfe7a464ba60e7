"""Reusable UI components for the pneumonia classifier.

Components are stateless: they take ``st`` plus view data and render it.
Nothing in here mutates the session.
"""

from __future__ import annotations

from typing import Sequence

import altair as alt

from pneumo_ui.core.contracts import BatchResult, HealthStatus, ModelInfo, Preview, SingleResult
from pneumo_ui.ui import formatting


# =============================================================================
# THEME & STYLING
# =============================================================================

def inject_custom_css(st) -> None:
    """Inject the small stylesheet used by diagnosis cards and badges."""
    st.markdown("""
    <style>
        .status-badge {
            display: inline-block;
            padding: 0.25rem 0.75rem;
            border-radius: 9999px;
            font-size: 0.75rem;
            font-weight: 600;
            letter-spacing: 0.05em;
            color: white;
        }
        .status-green { background-color: #48bb78; }
        .status-orange { background-color: #ed8936; }

        .diagnosis-card {
            padding: 1.25rem;
            border-radius: 0.75rem;
            border: 2px solid;
            margin-bottom: 1rem;
        }
        .diagnosis-red { background: #fff5f5; border-color: #fed7d7; color: #c53030; }
        .diagnosis-green { background: #f0fff4; border-color: #c6f6d5; color: #2f855a; }
        .diagnosis-value { font-size: 2rem; font-weight: 700; line-height: 1.2; }
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# HEADER
# =============================================================================

def render_health_badge(st, health: HealthStatus | None) -> None:
    """Render the service health badge; nothing when the probe failed."""
    badge = formatting.health_badge(health)
    if badge is None:
        return
    text, color = badge
    st.markdown(f'<span class="status-badge status-{color}">{text}</span>', unsafe_allow_html=True)


def render_model_info(st, info: ModelInfo | None) -> None:
    if info is None:
        return
    with st.expander("Model Information", expanded=False):
        col1, col2, col3 = st.columns(3)
        col1.markdown(f"**Architecture:** {info.model_architecture}")
        col2.markdown(f"**Input Size:** {info.input_size}")
        col3.markdown(f"**Parameters:** {formatting.format_parameters(info.parameters)}")


# =============================================================================
# SELECTION
# =============================================================================

def render_preview_grid(st, previews: Sequence[Preview], *, ready: bool, columns: int = 4) -> None:
    """Render decoded previews, or a spinner-like placeholder while pending.

    Args:
        st: Streamlit module
        previews: Published previews (complete collection)
        ready: False while decoding is still in progress
        columns: Grid width
    """
    if not ready:
        st.info("Preparing previews...")
        return
    if not previews:
        return

    cols = st.columns(min(columns, len(previews)))
    for preview in previews:
        with cols[preview.index % len(cols)]:
            if preview.ok:
                st.image(formatting.data_url_bytes(preview.data_url), caption=preview.filename, width="stretch")
            else:
                st.warning(f"{preview.filename}: preview unavailable ({preview.error})")


# =============================================================================
# RESULTS
# =============================================================================

def render_empty_results(st) -> None:
    st.markdown("**No results yet**")
    st.caption("Upload and analyze an image to see results")


def render_confidence_bar(st, label: str, value: float) -> None:
    st.markdown(f"{label} **{formatting.format_percent(value, 2)}%**")
    st.progress(min(max(float(value), 0.0), 1.0))


def probability_chart(result: SingleResult) -> alt.Chart:
    df = formatting.probability_frame(result)
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("probability:Q", title="Probability", scale=alt.Scale(domain=[0, 1])),
            y=alt.Y("label:N", title=None),
            color=alt.Color(
                "label:N",
                scale=alt.Scale(domain=["Normal", "Pneumonia"], range=["#48bb78", "#f56565"]),
                legend=None,
            ),
            tooltip=["label", alt.Tooltip("probability:Q", format=".2%")],
        )
        .properties(height=120)
    )


def render_single_result(st, result: SingleResult) -> None:
    """Render the diagnosis card, probability distribution and model details."""
    view = formatting.single_result_summary(result)
    color = formatting.diagnosis_color(result.prediction)

    st.markdown(
        f"""
        <div class="diagnosis-card diagnosis-{color}">
            <div>Diagnosis</div>
            <div class="diagnosis-value">{view['prediction']}</div>
            <div>Confidence: {view['confidence']}%</div>
        </div>
        """,
        unsafe_allow_html=True,
    )

    st.subheader("Probability Distribution")
    render_confidence_bar(st, "Normal", result.probability_normal)
    render_confidence_bar(st, "Pneumonia", result.probability_pneumonia)
    st.altair_chart(probability_chart(result), width="stretch")

    st.caption(f"Device: {view['device_used']}")
    st.caption(f"Model: {view['model_architecture']}")


def render_batch_result(st, batch: BatchResult) -> None:
    """Render batch summary metrics and the per-file table."""
    st.subheader("Batch Summary")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total", batch.total_images)
    col2.metric("Normal", batch.normal)
    col3.metric("Pneumonia", batch.pneumonia)

    df = formatting.batch_results_frame(batch)
    st.dataframe(df, width="stretch", hide_index=True)

from unittest.mock import MagicMock

import altair as alt
import pytest

from pneumo_ui.core.contracts import BatchResult, HealthStatus, ModelInfo, Preview, SingleResult
from pneumo_ui.ui import components


@pytest.fixture
def st():
    mock = MagicMock()
    mock.columns.side_effect = lambda spec: [MagicMock() for _ in range(spec if isinstance(spec, int) else len(spec))]
    return mock


def test_health_badge_hidden_when_probe_failed(st):
    components.render_health_badge(st, None)
    st.markdown.assert_not_called()


def test_health_badge_uppercases_status(st):
    components.render_health_badge(st, HealthStatus("degraded"))
    html = st.markdown.call_args[0][0]
    assert "DEGRADED" in html
    assert "status-orange" in html


def test_model_info_formats_parameters(st):
    cols = [MagicMock(), MagicMock(), MagicMock()]
    st.columns.side_effect = None
    st.columns.return_value = cols

    components.render_model_info(st, ModelInfo("DenseNet121", "224x224", 7978856))

    st.expander.assert_called_once()
    cols[0].markdown.assert_called_once_with("**Architecture:** DenseNet121")
    cols[2].markdown.assert_called_once_with("**Parameters:** 7,978,856")


def test_preview_grid_pending(st):
    components.render_preview_grid(st, [], ready=False)
    st.info.assert_called_once()
    st.image.assert_not_called()


def test_preview_grid_renders_ok_and_failed_slots(st):
    previews = [
        Preview(0, "a.png", data_url="data:image/png;base64,AAEC"),
        Preview(1, "b.png", error="corrupt"),
    ]
    components.render_preview_grid(st, previews, ready=True)

    st.image.assert_called_once_with(b"\x00\x01\x02", caption="a.png", width="stretch")
    assert "b.png" in st.warning.call_args[0][0]


def test_single_result_card(st, single_payload):
    components.render_single_result(st, SingleResult.from_dict(single_payload))

    card_html = st.markdown.call_args_list[0][0][0]
    assert "diagnosis-red" in card_html
    assert "Confidence: 88.00%" in card_html
    assert st.progress.call_count == 2
    st.altair_chart.assert_called_once()
    st.caption.assert_any_call("Device: cuda")


def test_probability_chart_is_altair(single_payload):
    chart = components.probability_chart(SingleResult.from_dict(single_payload))
    assert isinstance(chart, alt.Chart)


def test_batch_result(st, batch_payload):
    components.render_batch_result(st, BatchResult.from_dict(batch_payload))

    df = st.dataframe.call_args[0][0]
    assert len(df) == 3
    assert st.dataframe.call_args.kwargs["width"] == "stretch"


def test_empty_results(st):
    components.render_empty_results(st)
    assert "No results yet" in st.markdown.call_args[0][0]

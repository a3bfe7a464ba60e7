from unittest.mock import MagicMock, patch

import pytest

from helpers import fake_decode, make_image
from pneumo_ui.core.contracts import HealthStatus, InferenceServiceError
from pneumo_ui.core.session import ClassifierSession
from pneumo_ui.inference_client import InferenceClient
from pneumo_ui.ui import state as ui_state


class Upload:
    def __init__(self, file_id, name, data=b"", mime="image/png"):
        self.file_id = file_id
        self.name = name
        self.size = len(data)
        self.type = mime
        self._data = data

    def getvalue(self):
        return self._data


@pytest.fixture
def fake_st():
    st = MagicMock()
    st.session_state = {}
    with patch.object(ui_state, "st", st):
        yield st


@pytest.fixture
def session():
    return ClassifierSession(MagicMock(spec=InferenceClient), decode=fake_decode)


def test_get_session_created_once(fake_st):
    with patch.object(ui_state, "create_session") as create:
        first = ui_state.get_session()
        second = ui_state.get_session()

    create.assert_called_once()
    assert first is second


def test_service_info_probed_once(fake_st, session):
    session.client.health.return_value = HealthStatus("healthy")
    session.client.model_info.side_effect = InferenceServiceError("404")

    health, info = ui_state.get_service_info(session)
    ui_state.get_service_info(session)

    assert health.is_healthy
    assert info is None
    assert session.client.health.call_count == 1


def test_sync_uploads_selects_only_on_change(fake_st, session):
    png = make_image().data
    uploads = [Upload("1", "a.png", png)]

    assert ui_state.sync_uploads(session, uploads) is True
    assert [f.name for f in session.state.files] == ["a.png"]
    assert session.state.previews_ready

    with patch.object(session, "select_and_wait") as select:
        assert ui_state.sync_uploads(session, uploads) is False
    select.assert_not_called()


def test_sync_uploads_single_upload_object(fake_st, session):
    assert ui_state.sync_uploads(session, Upload("9", "one.png", b"x")) is True
    assert session.state.files[0].name == "one.png"


def test_sync_uploads_removal_clears(fake_st, session):
    ui_state.sync_uploads(session, [Upload("1", "a.png", b"x")])
    assert ui_state.sync_uploads(session, []) is True
    assert session.state.files == ()


def test_reset_uploader_changes_widget_key(fake_st):
    before = ui_state.uploader_key("batch")
    fake_st.session_state[ui_state.UPLOAD_SIGNATURE_KEY] = (("1", "a.png", 1),)

    ui_state.reset_uploader()

    assert ui_state.uploader_key("batch") != before
    assert ui_state.UPLOAD_SIGNATURE_KEY not in fake_st.session_state

from __future__ import annotations
from pathlib import Path
from streamlit.testing.v1 import AppTest
from config import DATA_DIR_ENV, LOCALE_ENV
from engine import generate_study_schedule
from storage import JsonStore
from conftest import TODAY

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


def test_chat_replies_in_schedule_locale(tmp_path, monkeypatch, study_data):
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    monkeypatch.delenv(LOCALE_ENV, raising=False)
    schedule = generate_study_schedule(study_data, seed=3, locale="ja", today=TODAY)
    store = JsonStore(tmp_path)
    store.put("study_data", study_data.model_dump(mode="json"))
    store.put("schedule_data", schedule.model_dump(mode="json"))

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["nav_page"] = "Chat"
    at.run()
    assert not at.exception
    # the sidebar still shows English
    assert at.sidebar.selectbox[0].value == "en"

    at.chat_input[0].set_value("study tips").run()
    assert not at.exception
    reply = at.chat_message[-1].markdown[0].value
    assert reply.startswith("効果的な勉強のために")

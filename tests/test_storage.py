from __future__ import annotations
import pytest
from config import DATA_DIR_ENV, LOCALE_ENV, get_data_dir, get_default_locale
from engine import generate_study_schedule
from models import ScheduleData, StudyData
from storage import JsonStore
from conftest import TODAY


def test_put_and_get(tmp_path):
    store = JsonStore(tmp_path)
    store.put("study_data", {"name": "Alex", "subjects": []})
    assert store.get("study_data") == {"name": "Alex", "subjects": []}
    assert not list(tmp_path.glob("*.tmp"))


def test_missing_key_is_none(tmp_path):
    assert JsonStore(tmp_path).get("schedule_data") is None


def test_delete(tmp_path):
    store = JsonStore(tmp_path)
    store.put("schedule_data", [1, 2])
    store.delete("schedule_data")
    store.delete("schedule_data")
    assert store.get("schedule_data") is None


def test_corrupt_file_is_backed_up(tmp_path):
    store = JsonStore(tmp_path)
    (tmp_path / "study_data.json").write_text("{not json", encoding="utf-8")
    assert store.get("study_data") is None
    assert (tmp_path / "study_data.json.bak").read_text(encoding="utf-8") == "{not json"
    assert not (tmp_path / "study_data.json").exists()


def test_non_utf8_file_is_backed_up(tmp_path):
    store = JsonStore(tmp_path)
    (tmp_path / "study_data.json").write_bytes(b"\xff\xfe{bad")
    assert store.get("study_data") is None
    assert (tmp_path / "study_data.json.bak").read_bytes() == b"\xff\xfe{bad"
    assert not (tmp_path / "study_data.json").exists()


def test_empty_file_reads_as_missing(tmp_path):
    store = JsonStore(tmp_path)
    (tmp_path / "study_data.json").write_text("  \n", encoding="utf-8")
    assert store.get("study_data") is None


def test_keys_are_sanitized(tmp_path):
    store = JsonStore(tmp_path)
    store.put("../weird key", 1)
    assert (tmp_path / "weird_key.json").exists()
    with pytest.raises(ValueError):
        store.put("///", 1)


def test_models_round_trip_through_store(tmp_path, study_data):
    store = JsonStore(tmp_path)
    schedule = generate_study_schedule(study_data, seed=1, today=TODAY)
    store.put("study_data", study_data.model_dump(mode="json"))
    store.put("schedule_data", schedule.model_dump(mode="json"))
    assert StudyData.model_validate(store.get("study_data")) == study_data
    assert ScheduleData.model_validate(store.get("schedule_data")) == schedule


def test_default_store_uses_env_dir(tmp_path, monkeypatch):
    target = tmp_path / "data"
    monkeypatch.setenv(DATA_DIR_ENV, str(target))
    assert get_data_dir() == target
    store = JsonStore()
    store.put("k", {"v": 1})
    assert (target / "k.json").exists()


def test_default_locale(monkeypatch):
    monkeypatch.delenv(LOCALE_ENV, raising=False)
    assert get_default_locale() == "en"
    monkeypatch.setenv(LOCALE_ENV, "JA")
    assert get_default_locale() == "ja"
    monkeypatch.setenv(LOCALE_ENV, "klingon")
    assert get_default_locale() == "en"

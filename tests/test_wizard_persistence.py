"""Tests for the persisted subset of wizard state."""

from __future__ import annotations

import json
from dataclasses import replace

from resume_wizard.wizard import transitions as t
from resume_wizard.wizard.persistence import STORAGE_KEY, WizardStorage, dump_persisted, load_persisted
from resume_wizard.wizard.state import ResumeFile, initial_state


def _filled_state():
    state = t.set_session_id(initial_state(), "sess-42")
    state = t.set_job_source(state, "url")
    state = t.set_job_url(state, "https://jobs.example.com/7")
    state = t.set_job_text(state, "j" * 80)
    state = t.set_job_loading(state, True)
    state = t.set_resume_file(state, ResumeFile("cv.pdf", b"%PDF-1.4", "application/pdf"))
    state = t.set_resume_text(state, "r" * 80)
    state = t.set_analysis_data(state, {"questions": [{"id": "q1", "question": "?"}]})
    state = t.answer_question(state, "q1", "Plenty")
    state = t.set_optimized_resume(state, {"atsScore": 90})
    return replace(state, current_step=5)


def test_dump_only_contains_listed_fields():
    persisted = dump_persisted(_filled_state())

    assert persisted == {
        "sessionId": "sess-42",
        "currentStep": 5,
        "jobDescription": {"source": "url", "url": "https://jobs.example.com/7", "rawText": "j" * 80},
        "resume": {"source": "file", "rawText": "r" * 80, "fileName": "cv.pdf"},
        "analysis": {"answers": {"q1": "Plenty"}},
    }
    json.dumps(persisted)


def test_load_drops_transient_fields_and_clamps_step():
    restored = load_persisted(dump_persisted(_filled_state()))

    assert restored.session_id == "sess-42"
    assert restored.job_description.url == "https://jobs.example.com/7"
    assert restored.job_description.is_loading is False
    assert restored.resume.file is None
    assert restored.resume.file_name == "cv.pdf"
    assert restored.analysis.answers == {"q1": "Plenty"}
    assert restored.analysis.data is None
    assert restored.optimized_resume is None
    # Analysis and optimized resume are not persisted, so step 3 is the furthest gate that holds.
    assert restored.current_step == 3


def test_load_tolerates_garbage():
    restored = load_persisted(
        {
            "currentStep": "five",
            "jobDescription": {"source": "fax", "rawText": 12},
            "resume": None,
            "analysis": {"answers": ["not", "a", "dict"]},
            "extra": True,
        }
    )

    assert restored == initial_state()


def test_storage_save_load_and_clear(tmp_path):
    path = tmp_path / "storage.json"
    storage = WizardStorage(path)

    assert storage.load() is None

    storage.save(_filled_state())
    assert STORAGE_KEY in json.loads(path.read_text(encoding="utf-8"))
    assert storage.load().session_id == "sess-42"

    storage.clear()
    assert storage.load() is None


def test_storage_keeps_other_keys(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    storage = WizardStorage(path)

    storage.save(initial_state())
    storage.clear()

    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}


def test_unreadable_storage_is_treated_as_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")

    assert WizardStorage(path).load() is None


def test_reload_keeps_step_three_for_file_only_resume():
    state = t.set_job_text(initial_state(), "j" * 80)
    state = t.set_resume_file(state, ResumeFile("cv.pdf", b"%PDF-1.4", "application/pdf"))
    state = t.advance(t.advance(state))
    assert state.current_step == 3

    restored = load_persisted(dump_persisted(state))

    assert restored.resume.file is None
    assert restored.resume.file_name == "cv.pdf"
    assert restored.current_step == 3


def test_malformed_field_keeps_valid_siblings():
    restored = load_persisted(
        {
            "sessionId": "sess-9",
            "currentStep": True,
            "jobDescription": {"source": "url", "url": 42, "rawText": "j" * 80},
            "resume": {"source": "text", "rawText": "r" * 80, "fileName": ["cv.pdf"]},
        }
    )

    assert restored.session_id == "sess-9"
    assert restored.current_step == 1
    assert restored.job_description.source == "url"
    assert restored.job_description.url is None
    assert restored.job_description.raw_text == "j" * 80
    assert restored.resume.source == "text"
    assert restored.resume.file_name is None

"""Tests for the caller-owned editing session."""

import json

import pytest

from homescreen.services.defaults import default_payload
from homescreen.services.editor import MAX_SLIDES, EditorError, EditorSession
from tests.helpers import make_payload


def test_starts_from_defaults():
    session = EditorSession()
    assert session.config == default_payload()
    assert session.has_unsaved_changes is False


def test_sessions_do_not_share_state():
    first = EditorSession()
    second = EditorSession()
    first.update_text(heading="Changed")
    assert second.config["text"]["heading"] == default_payload()["text"]["heading"]


def test_section_update_merges_and_marks_unsaved():
    session = EditorSession(make_payload())
    session.update_text(heading_color="#112233")
    session.update_cta(primaryText="Buy")
    config = session.config
    assert config["text"]["headingColor"] == "#112233"
    assert config["text"]["heading"] == "H"
    assert config["cta"]["primaryText"] == "Buy"
    assert session.has_unsaved_changes


def test_add_slide_appends_blank_landscape_slide():
    session = EditorSession(make_payload())
    slide = session.add_slide()
    assert slide["id"].startswith("slide-")
    assert slide["aspectRatio"] == "landscape"
    assert session.slides[-1] == slide
    # blank slides are saved only once filled in
    assert not session.validate().is_valid


def test_add_slide_stops_at_limit():
    session = EditorSession(make_payload(carousel={"slides": []}))
    for _ in range(MAX_SLIDES):
        session.add_slide()
    with pytest.raises(EditorError):
        session.add_slide()
    assert len(session.slides) == MAX_SLIDES


def test_update_and_remove_slide():
    session = EditorSession(make_payload())
    session.update_slide("s1", alt_text="A dog", link_url="/dogs")
    assert session.slides[0]["altText"] == "A dog"
    assert session.slides[0]["linkUrl"] == "/dogs"
    session.remove_slide("s1")
    assert session.slides == []


def test_move_slide():
    session = EditorSession()
    ids = [s["id"] for s in session.slides]
    session.move_slide(0, "down")
    assert [s["id"] for s in session.slides] == [ids[1], ids[0], ids[2]]
    session.move_slide(0, "up")
    session.move_slide(2, "down")
    assert [s["id"] for s in session.slides] == [ids[1], ids[0], ids[2]]


def test_edits_recover_from_non_object_sections():
    session = EditorSession()
    session.set_config({"carousel": "x", "text": None, "cta": []})
    assert session.slides == []

    slide = session.add_slide()
    session.update_text(heading="H")
    session.update_cta(primary_text="Go")

    config = session.config
    assert [s["id"] for s in config["carousel"]["slides"]] == [slide["id"]]
    assert config["text"] == {"heading": "H"}
    assert config["cta"] == {"primaryText": "Go"}


def test_slide_edits_skip_non_object_entries():
    session = EditorSession(make_payload(carousel={"slides": ["junk", {"id": "s1"}]}))
    session.update_slide("s1", alt_text="A")
    session.remove_slide("missing")
    assert session.slides == ["junk", {"id": "s1", "altText": "A"}]


def test_reset_returns_to_last_saved():
    session = EditorSession(make_payload())
    session.update_text(heading="Saved")
    session.mark_saved()
    session.update_text(heading="Draft")
    session.reset()
    assert session.config["text"]["heading"] == "Saved"
    assert session.has_unsaved_changes is False


def test_import_document_replaces_state_as_unsaved():
    session = EditorSession()
    imported = make_payload(text={"heading": "Imported"})
    result = session.import_document(json.dumps(imported))
    assert result.success
    assert session.config == imported
    assert session.has_unsaved_changes


def test_failed_import_leaves_state_alone():
    session = EditorSession()
    result = session.import_document("{}")
    assert not result.success
    assert session.config == default_payload()
    assert session.has_unsaved_changes is False

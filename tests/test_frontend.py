"""Tests for the generated front-end assets."""
import re

import pytest

from templates_static import APP_JS, INDEX_HTML, ensure_assets


def test_assets_are_written_once(tmp_path):
    ensure_assets(tmp_path)
    app_js = tmp_path / "static" / "app.js"
    assert app_js.read_text(encoding="utf-8") == APP_JS
    assert (tmp_path / "templates" / "index.html").is_file()

    app_js.write_text("custom", encoding="utf-8")
    ensure_assets(tmp_path)
    assert app_js.read_text(encoding="utf-8") == "custom"


def test_names_never_reach_markup():
    assert "innerHTML" not in APP_JS
    assert "insertAdjacentHTML" not in APP_JS
    assert "node.textContent = value" in APP_JS


@pytest.mark.parametrize("context, keys", [
    ("browse", ["enter", "arrowup", "arrowdown"]),
    ("images", ["enter", "space", "a", "escape", "arrowleft", "arrowright", "arrowup", "arrowdown"]),
    ("compare", ["arrowleft", "arrowright", "a", "d", "space", "enter", "s", "x", "u", "escape", "q"]),
])
def test_key_maps(context, keys):
    block = re.search(context + r": \{\n(.*?)\n  \},", APP_JS, re.S).group(1)
    bound = re.findall(r"'([a-z]+)':", block)
    for key in keys:
        assert key in bound


def test_comparison_state_and_help():
    for field in ("currentBest", "candidates", "currentCandidateIndex", "savedImages", "rejectedImages"):
        assert field in APP_JS
    assert 'id="help"' in INDEX_HTML
    assert "key === '?'" in APP_JS


def test_served_page_carries_help_overlay(client):
    page = client.get("/")
    assert 'id="help"' in page.text
    assert 'id="undo"' in page.text

import json

import pytest

from config_manager import DEFAULT_CONFIG
from run_headless import run
from services.storage import DOCUMENT_KEY, ORDER_KEY


@pytest.fixture
def profile(tmp_path):
    storage_dir = tmp_path / "storage"
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({**DEFAULT_CONFIG, "storage_dir": str(storage_dir)}))
    return path, storage_dir


def test_validate_reports_missing_fields(profile):
    path, storage_dir = profile
    storage_dir.mkdir()
    (storage_dir / f"{DOCUMENT_KEY}.json").write_text(json.dumps({"summary": ""}))
    logs = []

    code = run(["--config", str(path), "--validate"], logger=logs.append)

    assert code == 1
    assert any("summary: A summary is required" in line for line in logs)


def test_validate_passes_for_defaults(profile):
    path, _ = profile
    logs = []
    assert run(["--config", str(path), "--validate"], logger=logs.append) == 0


def test_export_html_uses_saved_order(profile, tmp_path):
    path, storage_dir = profile
    storage_dir.mkdir()
    (storage_dir / f"{ORDER_KEY}.json").write_text(json.dumps(["references", "summary"]))
    output = tmp_path / "resume.html"

    code = run(["--config", str(path), "--export-html", str(output)], logger=lambda msg: None)

    html = output.read_text(encoding="utf-8")
    assert code == 0
    assert html.index("References") < html.index("Professional Summary")


def test_reset_clears_storage(profile):
    path, storage_dir = profile
    storage_dir.mkdir()
    (storage_dir / f"{DOCUMENT_KEY}.json").write_text("{}")
    (storage_dir / f"{ORDER_KEY}.json").write_text("[]")

    assert run(["--config", str(path), "--reset"], logger=lambda msg: None) == 0

    assert not (storage_dir / f"{DOCUMENT_KEY}.json").exists()
    assert not (storage_dir / f"{ORDER_KEY}.json").exists()

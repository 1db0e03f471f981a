import json
import subprocess
import sys
from pathlib import Path

import pytest

from pagegist.utils.logging_config import setup_logging
from tools.extract_file import extract_file, main


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging(force=True)


def _write_page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(
        "<html><head><title>Saved</title></head>"
        "<body><main><p>Offline copy</p><img src='cover.png'></main></body></html>",
        encoding="utf-8",
    )
    return path


def test_extract_file_returns_result_dict(tmp_path):
    result = extract_file(_write_page(tmp_path), "https://example.com/a/", "yesterday")

    assert result["title"] == "Saved"
    assert result["text"] == "Offline copy"
    assert result["images"] == ["https://example.com/a/cover.png"]
    assert result["lastModified"] == "yesterday"


def test_main_prints_json(tmp_path, capsys):
    exit_code = main([str(_write_page(tmp_path)), "https://example.com/a/"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["title"] == "Saved"


def test_main_reports_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.html"), "https://example.com/"]) == 1


def test_script_runs_from_outside_the_checkout(tmp_path):
    script = Path(__file__).resolve().parent.parent / "tools" / "extract_file.py"
    page = _write_page(tmp_path)

    completed = subprocess.run(
        [sys.executable, str(script), str(page), "https://example.com/a/"],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert json.loads(completed.stdout)["title"] == "Saved"

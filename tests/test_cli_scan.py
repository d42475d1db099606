"""Tests for the CLI ``scan`` command and the result renderers."""

import json

import pytest
from typer.testing import CliRunner

from blankscan.scanner.batch import BatchValidationError
from blankscan.scanner.models import RedirectStep, ScanResult
from cli.main import app, parse_url_list
from cli.rendering import CSV_HEADERS, render_csv, render_json, render_table

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from replacing the root logger's handlers during tests."""
    monkeypatch.setattr("cli.main.configure_logging", lambda level: None)


def _results():
    return [
        ScanResult(
            original_url="old.test",
            final_url="https://new.test/",
            status_code=200,
            redirected=True,
            redirect_hops=1,
            redirect_chain=(
                RedirectStep("https://old.test", 301),
                RedirectStep("https://new.test/", 200),
            ),
            content_length=2048,
            visible_text_length=640,
        ),
        ScanResult(
            original_url='quote"d.test',
            final_url='https://quote"d.test',
            is_blank_page=True,
            blank_reason="Request Failed: timed out",
            error="timed out",
        ),
    ]


# ---------------------------------------------------------------------------
# parse_url_list
# ---------------------------------------------------------------------------

def test_parse_url_list_splits_on_newlines_and_commas():
    text = "a.test, b.test\n\n c.test ,,\nd.test"
    assert parse_url_list(text) == ["a.test", "b.test", "c.test", "d.test"]


def test_parse_url_list_empty():
    assert parse_url_list(" \n , ") == []


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def test_render_csv_header_and_quoting():
    lines = render_csv(_results()).split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == '"old.test","https://new.test/","200","1","2048","640","false",""'
    assert lines[2] == (
        '"quote""d.test","https://quote""d.test","0","0","0","0","true",'
        '"Request Failed: timed out"'
    )


def test_render_json_is_exact_result_array():
    data = json.loads(render_json(_results()))
    assert data == [r.to_dict() for r in _results()]


def test_render_table_shows_chain_and_summary():
    table = render_table(_results())
    assert "[200] OK" in table
    assert "[ERR] BLANK" in table
    assert "301 https://old.test" in table
    assert "Request Failed: timed out" in table
    assert "2 scanned, 1 blank, 1 with content" in table


# ---------------------------------------------------------------------------
# scan command
# ---------------------------------------------------------------------------

def test_scan_table_output(monkeypatch):
    seen = {}

    def fake_scan(urls, settings=None):
        seen["urls"] = urls
        seen["settings"] = settings
        return _results()

    monkeypatch.setattr("cli.main.scan_urls", fake_scan)
    result = runner.invoke(app, ["scan", "old.test", "x.test,y.test", "--concurrency", "3"])

    assert result.exit_code == 0
    assert seen["urls"] == ["old.test", "x.test", "y.test"]
    assert seen["settings"].concurrency == 3
    assert "2 scanned, 1 blank" in result.stdout


def test_scan_reads_file_and_writes_json(monkeypatch, tmp_path):
    url_file = tmp_path / "urls.txt"
    url_file.write_text("old.test\n\nquote\"d.test\n", encoding="utf-8")
    out = tmp_path / "results.json"
    captured = {}

    def fake_scan(urls, settings=None):
        captured["urls"] = urls
        return _results()

    monkeypatch.setattr("cli.main.scan_urls", fake_scan)
    result = runner.invoke(
        app, ["scan", "--file", str(url_file), "--format", "json", "--output", str(out)]
    )

    assert result.exit_code == 0
    assert captured["urls"] == ["old.test", 'quote"d.test']
    assert json.loads(out.read_text(encoding="utf-8"))[0]["original_url"] == "old.test"


def test_scan_csv_to_file(monkeypatch, tmp_path):
    out = tmp_path / "results.csv"
    monkeypatch.setattr("cli.main.scan_urls", lambda urls, settings=None: _results())
    result = runner.invoke(app, ["scan", "old.test", "--format", "csv", "-o", str(out)])

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").startswith(",".join(CSV_HEADERS))


def test_scan_without_urls_fails():
    result = runner.invoke(app, ["scan"])
    assert result.exit_code == 1
    assert "No URLs given" in result.stdout


def test_scan_unknown_format_fails():
    result = runner.invoke(app, ["scan", "a.test", "--format", "xml"])
    assert result.exit_code == 1
    assert "Unknown format" in result.stdout


def test_scan_validation_error(monkeypatch):
    def fake_scan(urls, settings=None):
        raise BatchValidationError("Batch size limit exceeded. Max 1000 URLs per request.")

    monkeypatch.setattr("cli.main.scan_urls", fake_scan)
    result = runner.invoke(app, ["scan", "a.test"])
    assert result.exit_code == 1
    assert "Batch size limit exceeded" in result.stdout

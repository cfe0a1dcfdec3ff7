"""Unit tests for the CLI.

Tests for showcase/cli.py - output formatting against canned API responses.

Run with:
    pytest tests/unit/test_cli.py -v
"""

import httpx
import pytest
from click.testing import CliRunner

from showcase import cli


def _response(method: str, status_code: int, payload: dict) -> httpx.Response:
    return httpx.Response(
        status_code,
        json=payload,
        request=httpx.Request(method, "http://localhost:8000"),
    )


@pytest.fixture
def runner():
    return CliRunner()


@pytest.mark.fast
class TestFormatBytes:
    """Tests for format_bytes()."""

    def test_bytes(self):
        assert cli.format_bytes(512) == "512 B"

    def test_megabytes(self):
        assert cli.format_bytes(3 * 1024 * 1024) == "3.0 MB"

    def test_gigabytes(self):
        assert cli.format_bytes(5 * 1024 ** 3) == "5.0 GB"


@pytest.mark.fast
class TestCommands:
    """Tests for CLI commands with httpx stubbed out."""

    def test_list_empty(self, runner, monkeypatch):
        monkeypatch.setattr(
            cli.httpx, "get", lambda *a, **kw: _response("GET", 200, {"items": [], "total": 0})
        )
        result = runner.invoke(cli.main, ["list"])
        assert result.exit_code == 0
        assert "No websites yet" in result.output

    def test_usage_marks_degraded_folder(self, runner, monkeypatch):
        report = {
            "fileCount": 2,
            "totalSize": 2 * 1024 * 1024,
            "folders": {
                "videos/": {"count": 2, "size": 2 * 1024 * 1024},
                "websites/": {"count": 0, "size": 0},
            },
            "degradedFolders": ["websites/"],
            "quotaBytes": 4 * 1024 * 1024,
            "usagePercent": 50.0,
        }
        monkeypatch.setattr(cli.httpx, "get", lambda *a, **kw: _response("GET", 200, report))

        result = runner.invoke(cli.main, ["usage"])
        assert result.exit_code == 0
        assert "unavailable" in result.output
        assert "50.0% used" in result.output

    def test_submit_reports_api_error(self, runner, monkeypatch):
        monkeypatch.setattr(
            cli.httpx,
            "post",
            lambda *a, **kw: _response(
                "POST", 422, {"error": "Invalid submission", "detail": "Video file must be smaller than 100MB"}
            ),
        )
        result = runner.invoke(cli.main, ["submit", "Acme", "https://acme.dev"])
        assert result.exit_code == 1
        assert "smaller than 100MB" in result.output

    def test_delete_requires_confirmation(self, runner, monkeypatch):
        calls = []
        monkeypatch.setattr(
            cli.httpx,
            "delete",
            lambda url, **kw: calls.append(url) or _response("DELETE", 200, {"deleted": True}),
        )
        result = runner.invoke(cli.main, ["delete", "abc", "--yes"])
        assert result.exit_code == 0
        assert calls == [f"{cli.API_BASE}/api/v1/websites/abc"]

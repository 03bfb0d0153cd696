"""Tests for the command-line interface."""

import json

import pytest

from shortspace.cli import main
from shortspace.partition import label_for_now


@pytest.fixture
def run_cli(data_dir, capsys):
    """Run the CLI against a temporary data directory, return (code, json output)."""

    def run(*args):
        code = main(["--data-dir", data_dir, *args])
        captured = capsys.readouterr()
        output = captured.out if code == 0 else captured.err
        return code, json.loads(output) if output.strip() else None

    return run


class TestCLI:
    """Test CLI commands."""

    def test_label_for_year(self, run_cli):
        code, output = run_cli("label", "--year", "2049")

        assert code == 0
        assert output["space"] == "aa"

    def test_label_before_epoch(self, run_cli):
        code, output = run_cli("label", "--year", "2000")

        assert code == 1
        assert output["success"] is False

    def test_shorten_get_list_delete(self, run_cli):
        space = label_for_now()

        code, created = run_cli("shorten", "https://example.com/page", "--custom-id", "clitest", "--no-scrape")
        assert code == 0
        assert created["id"] == "clitest"
        assert created["space"] == space
        assert created["path"] == f"/{space}/clitest"

        code, record = run_cli("get", space, "clitest")
        assert code == 0
        assert record["target_url"] == "https://example.com/page"
        assert record["visit_count"] == 0

        code, listing = run_cli("list", space)
        assert code == 0
        assert listing["count"] == 1

        code, stats = run_cli("stats", space)
        assert stats["total_urls"] == 1

        code, _ = run_cli("delete", space, "clitest")
        assert code == 0

        code, missing = run_cli("get", space, "clitest")
        assert code == 1
        assert "not found" in missing["error"]

    def test_shorten_invalid_url(self, run_cli):
        code, output = run_cli("shorten", "not-a-url", "--no-scrape")

        assert code == 1
        assert output["success"] is False

    def test_health(self, run_cli):
        code, output = run_cli("health")

        assert code == 0
        assert output["health"]["overall"] is True

    def test_no_command(self, capsys):
        assert main([]) == 1

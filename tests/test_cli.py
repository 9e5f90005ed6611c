"""Tests for the CLI and the text rendering it uses."""

import asyncio
import json
from datetime import datetime
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from countdown.cli import _watch, main
from countdown.clock import Clock
from countdown.config import Config
from countdown.core.tasks import Task
from countdown.errors import FetchFailure
from countdown.render import build_rows, format_row, render_lines
from countdown.store import StoreSnapshot, TaskStore


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_gateway(gateway):
    with patch("countdown.cli.HttpTaskGateway", return_value=gateway), patch(
        "countdown.cli.load_config", return_value=Config()
    ):
        yield gateway


class TestRender:
    @pytest.fixture
    def now(self):
        return datetime(2025, 1, 15, 12, 0, 0)

    def test_row_with_countdown(self, now):
        row = build_rows([Task(id="1", title="Buy milk", deadline="2025-01-15T14:05")], now)[0]
        assert format_row(row) == "[ ] Buy milk (due 2025-01-15 14:05) - 2h 5m  #1"
        assert row.inactive is False

    def test_expired_row_is_inactive(self, now):
        row = build_rows([Task(id="1", title="Buy milk", deadline="2025-01-15T11:00")], now)[0]
        assert format_row(row).endswith("- expired  #1")
        assert row.inactive is True

    def test_completed_row(self, now):
        row = build_rows([Task(id="3", title="Call mom", completed=True)], now)[0]
        assert format_row(row) == "[x] Call mom  #3"
        assert row.inactive is True

    def test_view_lines(self, now, sample_tasks):
        snapshot = StoreSnapshot(tasks=tuple(sample_tasks), error="Failed to add task.")
        lines = render_lines(snapshot, now)
        assert lines[0] == "Now: 2025-01-15 12:00:00"
        assert "Error: Failed to add task." in lines
        assert sum("#" in line for line in lines) == 3

    def test_empty_and_loading(self, now):
        assert "No tasks yet." in render_lines(StoreSnapshot(), now)
        assert "Loading..." in render_lines(StoreSnapshot(loading=True), now)


class TestListCommand:
    def test_lists_tasks(self, runner, cli_gateway):
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0
        assert "Buy milk" in result.output
        assert "#3" in result.output

    def test_json(self, runner, cli_gateway):
        result = runner.invoke(main, ["list", "--json"])
        data = json.loads(result.output)
        assert [d["id"] for d in data] == ["1", "2", "3"]
        assert data[0]["status"] == "active"
        assert data[2]["status"] == "completed"

    def test_error_exits(self, runner, cli_gateway):
        cli_gateway.fail_with = FetchFailure(500)
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 1
        assert "Failed to load tasks. (500)" in result.output


class TestWriteCommands:
    def test_add(self, runner, cli_gateway):
        result = runner.invoke(main, ["add", "New task", "--deadline", "2099-12-31T23:59"])
        assert result.exit_code == 0
        assert "Added New task" in result.output
        assert cli_gateway.calls[-1] == ("create", "New task", "2099-12-31T23:59")

    def test_add_blank(self, runner, cli_gateway):
        result = runner.invoke(main, ["add", "   "])
        assert result.exit_code == 1
        assert cli_gateway.calls == []

    def test_add_bad_deadline(self, runner, cli_gateway):
        result = runner.invoke(main, ["add", "New task", "--deadline", "someday"])
        assert result.exit_code == 2
        assert cli_gateway.calls == []

    def test_toggle(self, runner, cli_gateway):
        result = runner.invoke(main, ["toggle", "1"])
        assert result.exit_code == 0
        assert "Buy milk marked done" in result.output

    def test_edit_title(self, runner, cli_gateway):
        result = runner.invoke(main, ["edit", "2", "--title", "Write final report"])
        assert result.exit_code == 0
        assert cli_gateway.calls[-1] == ("update", "2", "Write final report", None, None)

    def test_edit_clear_deadline(self, runner, cli_gateway):
        result = runner.invoke(main, ["edit", "1", "--clear-deadline"])
        assert result.exit_code == 0
        assert cli_gateway.calls[-1] == ("update", "1", "Buy milk", None, None)

    def test_clear_deadline_help_leaves_it_to_server(self, runner):
        result = runner.invoke(main, ["edit", "--help"])
        text = " ".join(result.output.split())
        assert "whether the server drops a stored one is up to it" in text

    def test_edit_unknown_task(self, runner, cli_gateway):
        result = runner.invoke(main, ["edit", "99", "--title", "x"])
        assert result.exit_code == 1
        assert "update" not in cli_gateway.call_names()

    def test_delete_confirmed(self, runner, cli_gateway):
        result = runner.invoke(main, ["delete", "1"], input="y\n")
        assert result.exit_code == 0
        assert ("delete", "1") in cli_gateway.calls

    def test_delete_declined(self, runner, cli_gateway):
        result = runner.invoke(main, ["delete", "1"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled." in result.output
        assert "delete" not in cli_gateway.call_names()

    def test_delete_yes_flag(self, runner, cli_gateway):
        result = runner.invoke(main, ["delete", "2", "--yes"])
        assert result.exit_code == 0
        assert ("delete", "2") in cli_gateway.calls


class TestConfigCommand:
    def test_shows_url(self, runner):
        with patch("countdown.cli.load_config", return_value=Config(api_base_url="http://api.test")):
            result = runner.invoke(main, ["config"])
        assert result.exit_code == 0
        assert "http://api.test/todos" in result.output

    def test_deployed_without_url(self, runner):
        with patch("countdown.cli.load_config", return_value=Config(deployed=True)):
            result = runner.invoke(main, ["config"])
        assert result.exit_code == 1
        assert "not configured" in result.output


class TestWatch:
    def test_draws_and_tears_down_clock(self, gateway, capsys):
        store = TaskStore(gateway)
        clock = Clock(interval=0.05)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(asyncio.wait_for(_watch(store, clock), timeout=0.3))

        assert clock.running is False
        out = capsys.readouterr().out
        assert "Now:" in out
        assert "Buy milk" in out

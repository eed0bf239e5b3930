"""Tests for the CLI entry point."""

import asyncio
import json
import os
from datetime import datetime

import pytest
from click.testing import CliRunner
from loguru import logger

from wordtally import __version__
from wordtally.core.cli import main
from wordtally.core.cli.watch_cmd import _watch
from wordtally.core.config import Config
from wordtally.tracker.clock import day_key


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path / "data")


@pytest.fixture(autouse=True)
def _isolate_cli(monkeypatch, tmp_path):
    """Keep a real ~/.wordtally/config.yaml out of the tests; drop CLI log handlers afterwards."""
    monkeypatch.setattr("wordtally.core.cli.common.CONFIG_PATH", tmp_path / "missing.yaml")
    yield
    logger.remove()


def _state(data_dir):
    with open(os.path.join(data_dir, "storage", "state.json")) as f:
        return json.load(f)


def _write(path, words: int) -> None:
    path.write_text(" ".join(["word"] * words), encoding="utf-8")


class TestCliGroup:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("watch", "record", "today", "history"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bad_config_file_is_a_cli_error(self, runner, tmp_path, data_dir):
        bad = tmp_path / "config.yaml"
        bad.write_text("tracking: [unclosed\n")
        result = runner.invoke(main, ["--config", str(bad), "--data-dir", data_dir, "today"])
        assert result.exit_code != 0
        assert "Cannot parse" in result.output


class TestRecordCommand:
    def test_record_sets_baseline_then_counts_growth(self, runner, tmp_path, data_dir):
        note = tmp_path / "note.md"
        _write(note, 100)

        result = runner.invoke(main, ["--data-dir", data_dir, "record", str(note)])
        assert result.exit_code == 0, result.output
        assert "0 words today" in result.output

        _write(note, 130)
        result = runner.invoke(main, ["--data-dir", data_dir, "record", str(note)])
        assert result.exit_code == 0, result.output
        assert "30 words today" in result.output

        state = _state(data_dir)
        today = day_key(datetime.now())
        assert state["dayCounts"][today] == 30
        assert state["dayToWordCount"][today][str(note.resolve())] == {"initial": 100, "current": 130}

    def test_record_directory_skips_untracked_files(self, runner, tmp_path, data_dir):
        docs = tmp_path / "docs"
        docs.mkdir()
        _write(docs / "a.md", 3)
        _write(docs / "b.txt", 4)
        _write(docs / "c.py", 5)

        result = runner.invoke(main, ["--data-dir", data_dir, "record", str(docs)])
        assert result.exit_code == 0, result.output
        assert "Recorded 2 document(s)" in result.output

    def test_record_extensions_from_env(self, runner, tmp_path, data_dir):
        docs = tmp_path / "docs"
        docs.mkdir()
        _write(docs / "a.md", 3)
        _write(docs / "b.txt", 4)

        result = runner.invoke(
            main, ["--data-dir", data_dir, "record", str(docs)], env={"WORDTALLY_WATCH__EXTENSIONS": ".md"}
        )
        assert result.exit_code == 0, result.output
        assert "Recorded 1 document(s)" in result.output

    def test_record_nothing_trackable(self, runner, tmp_path, data_dir):
        script = tmp_path / "script.py"
        script.write_text("print('hi')")
        result = runner.invoke(main, ["--data-dir", data_dir, "record", str(script)])
        assert result.exit_code == 0
        assert "No trackable documents" in result.output


class TestTodayCommand:
    def test_today_without_state(self, runner, data_dir):
        result = runner.invoke(main, ["--data-dir", data_dir, "today"])
        assert result.exit_code == 0, result.output
        assert "0 words today" in result.output
        # read-only: nothing written
        assert not os.path.exists(os.path.join(data_dir, "storage", "state.json"))

    def test_corrupt_state_is_reported(self, runner, data_dir):
        os.makedirs(os.path.join(data_dir, "storage"))
        with open(os.path.join(data_dir, "storage", "state.json"), "w") as f:
            f.write("{not json")
        result = runner.invoke(main, ["--data-dir", data_dir, "today"])
        assert result.exit_code != 0
        assert "not valid JSON" in result.output


class TestHistoryCommand:
    def test_history_lists_days_in_date_order(self, runner, data_dir):
        os.makedirs(os.path.join(data_dir, "storage"))
        state = {"dayCounts": {"2024/0/10": 50, "2023/11/31": 20, "2024/0/9": 0}}
        with open(os.path.join(data_dir, "storage", "state.json"), "w") as f:
            json.dump(state, f)

        result = runner.invoke(main, ["--data-dir", data_dir, "history"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0].startswith("2023-12-31")
        assert lines[1].startswith("2024-01-09")
        assert lines[2].startswith("2024-01-10")
        assert "Total: 70 words over 2 active day(s)" in result.output
        assert "Best day: 2024-01-10 (50 words)" in result.output

    def test_history_empty(self, runner, data_dir):
        result = runner.invoke(main, ["--data-dir", data_dir, "history"])
        assert result.exit_code == 0
        assert "No history yet." in result.output


class TestWatchCommand:
    def test_watch_help(self, runner):
        result = runner.invoke(main, ["watch", "--help"])
        assert result.exit_code == 0
        assert "Ctrl+C" in result.output

    async def test_watch_saves_state_when_cancelled(self, tmp_path):
        note = tmp_path / "note.md"
        _write(note, 5)
        data_dir = str(tmp_path / "data")
        config = Config(data_dir=data_dir, env_prefix="")

        task = asyncio.create_task(_watch(config, (str(note),)))
        await asyncio.sleep(0.3)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        state = _state(data_dir)
        today = day_key(datetime.now())
        assert state["dayCounts"] == {today: 0}
        assert state["dayToWordCount"][today][str(note.resolve())] == {"initial": 5, "current": 5}

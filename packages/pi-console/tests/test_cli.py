"""Tests for the pi-console CLI."""

from __future__ import annotations

from click.testing import CliRunner

from pi.console.cli import main


class TestCli:
    def test_dump_vocabulary(self) -> None:
        result = CliRunner().invoke(main, ["--dump-vocabulary"])
        assert result.exit_code == 0
        assert "Word to here: quit" in result.output
        assert "Word to here: history" in result.output

    def test_extra_word_in_dump(self) -> None:
        result = CliRunner().invoke(main, ["--dump-vocabulary", "--word", "deploy"])
        assert result.exit_code == 0
        assert "Word to here: deploy" in result.output

    def test_invalid_word_is_usage_error(self) -> None:
        result = CliRunner().invoke(main, ["--dump-vocabulary", "--word", "bad word"])
        assert result.exit_code == 2
        assert "Invalid character" in result.output

    def test_help(self) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--dump-vocabulary" in result.output

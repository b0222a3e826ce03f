"""Tests for the process boundary (cli/app.py): error sink, ``run`` and ``cli``."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from slana.cli import app as app_module
from slana.cli import exit_codes
from slana.cli.app import run, stop_with_error
from slana.exceptions import MissingManifestError, SlanaError, UnknownCommandError

from conftest import read_record

FAILING_EXECUTOR = """\
def execute(command):
    raise RuntimeError("executor blew up")
"""


# ---------------------------------------------------------------------------
# stop_with_error
# ---------------------------------------------------------------------------

class TestStopWithError:
    def test_banner_and_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            stop_with_error(SlanaError("Something broke"))
        assert exc_info.value.code == exit_codes.GENERAL_ERROR

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error:\n  ✗ Something broke\n" in captured.err

    def test_hint_is_rendered(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            stop_with_error(SlanaError("Something broke", hint="Do this"))
        assert "Hint: Do this" in capsys.readouterr().err

    def test_markup_in_message_is_literal(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            stop_with_error(SlanaError("bad [bold]value[/bold]"))
        assert "bad [bold]value[/bold]" in capsys.readouterr().err

    def test_plain_exceptions(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            stop_with_error(ValueError("plain"))
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert "✗ plain" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# run — host tool entry point
# ---------------------------------------------------------------------------

class TestRun:
    def test_success_exits_zero(self, project: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run(project, ["deploy"])
        assert exc_info.value.code == exit_codes.SUCCESS
        assert read_record(project, "deploy") == {
            "name": "deploy",
            "options": {"env": "staging", "force": False},
        }

    def test_no_command_exits_one(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run(project, [])
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        captured = capsys.readouterr()
        assert "usage: tool" in captured.out
        assert "Error:" not in captured.err

    def test_unknown_command_reports_error(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run(project, ["frobnicate"])
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        captured = capsys.readouterr()
        assert "usage: tool" in captured.out
        assert "Sorry, the frobnicate command is not supported." in captured.err

    def test_load_failure_reports_error(
        self, make_project: Callable[..., Path], capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = make_project(inventory=None)
        with pytest.raises(SystemExit) as exc_info:
            run(root, ["deploy"])
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert "Looks like your Slana file is missing." in capsys.readouterr().err

    def test_executor_errors_are_not_caught(self, make_project: Callable[..., Path]) -> None:
        root = make_project(
            executors={"commands/deploy.py": FAILING_EXECUTOR, "commands/status.py": FAILING_EXECUTOR}
        )
        with pytest.raises(RuntimeError, match="executor blew up"):
            run(root, ["deploy"])

    def test_defaults_to_slana_home(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLANA_HOME", str(project))
        with pytest.raises(SystemExit) as exc_info:
            run(argv=["status"])
        assert exc_info.value.code == exit_codes.SUCCESS
        assert read_record(project, "status") == {"name": "status", "options": {}}

    def test_inventory_file_from_environment(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (project / "slana.yml").rename(project / "commands.yaml")
        monkeypatch.setenv("SLANA_INVENTORY", "commands.yaml")
        with pytest.raises(SystemExit) as exc_info:
            run(project, ["status"])
        assert exc_info.value.code == exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# cli — ``slana`` script error boundary
# ---------------------------------------------------------------------------

class TestCliBoundary:
    def _patch_main(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> None:
        def _raise() -> int:
            raise exc

        monkeypatch.setattr(app_module, "main", _raise)

    def test_success(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "main", lambda: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            app_module.cli()
        assert exc_info.value.code == exit_codes.SUCCESS

    def test_slana_error(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        self._patch_main(monkeypatch, UnknownCommandError("Sorry"))
        with pytest.raises(SystemExit) as exc_info:
            app_module.cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert "✗ Sorry" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._patch_main(monkeypatch, KeyboardInterrupt())
        with pytest.raises(SystemExit) as exc_info:
            app_module.cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        self._patch_main(monkeypatch, ValueError("weird"))
        with pytest.raises(SystemExit) as exc_info:
            app_module.cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
        assert "ValueError: weird" in capsys.readouterr().err

    def test_manifest_error_from_exec(
        self,
        make_project: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        root = make_project(inventory=None)
        monkeypatch.setattr("sys.argv", ["slana", "exec", "--dir", str(root), "deploy"])
        with pytest.raises(SystemExit) as exc_info:
            app_module.cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert MissingManifestError.__name__ not in capsys.readouterr().err

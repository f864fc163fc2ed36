"""Tests for the command-line interface."""

from unittest.mock import patch

import pytest
from _pytest.capture import CaptureFixture

from ai_cli_apps import __version__, cli
from ai_cli_apps.actions import Action, ActionResult, Outcome, RemovedPath, UninstallReport
from ai_cli_apps.models import ToolRecord
from ai_cli_apps.tools import amp, catalog, codex, copilot


def run_main(*argv: str) -> int:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(list(argv))
    return excinfo.value.code


@pytest.fixture(autouse=True)
def isolated_home(home):
    return home


def test_version_command(capsys: CaptureFixture[str]) -> None:
    assert run_main("version") == 0
    assert f"ai-cli-apps v{__version__}" in capsys.readouterr().out


def test_unknown_tool_exits_with_error(capsys: CaptureFixture[str]) -> None:
    with patch("ai_cli_apps.cli.perform") as perform:
        assert run_main("install", "nope") == 1
    perform.assert_not_called()
    out = capsys.readouterr().out
    assert "Tool 'nope' not found" in out
    assert "Claude Code (claude)" in out


def test_list_groups_tools(capsys: CaptureFixture[str]) -> None:
    records = [
        ToolRecord(copilot.definition(), installed_version="0.0.350", latest_version="0.0.357"),
        ToolRecord(codex.definition(), installed_version="codex-cli 0.46.0", latest_version="0.46.0"),
        ToolRecord(amp.definition(), latest_version="0.0.1"),
    ]
    with (
        patch("ai_cli_apps.cli.installed_versions", return_value=records),
        patch("ai_cli_apps.cli.resolve_all") as resolve,
    ):
        assert run_main() == 0

    resolve.assert_called_once()
    out = capsys.readouterr().out
    assert "Installed:" in out
    assert "Not Installed:" in out
    assert "0.0.350 → 0.0.357 available" in out
    assert "not installed (0.0.1)" in out
    assert "All tools are up to date" not in out


def test_list_reports_all_up_to_date(capsys: CaptureFixture[str]) -> None:
    records = [ToolRecord(codex.definition(), installed_version="0.46.0", latest_version=None)]
    with (
        patch("ai_cli_apps.cli.installed_versions", return_value=records),
        patch("ai_cli_apps.cli.resolve_all"),
    ):
        assert run_main("list") == 0
    assert "All tools are up to date" in capsys.readouterr().out


def test_check_lists_every_tool(capsys: CaptureFixture[str]) -> None:
    records = [ToolRecord(tool) for tool in catalog()]
    with (
        patch("ai_cli_apps.cli.installed_versions", return_value=records),
        patch("ai_cli_apps.cli.resolve_all"),
    ):
        assert run_main("check") == 0
    out = capsys.readouterr().out
    for tool in catalog():
        assert f"{tool.name}:" in out


def test_uninstall_single_tool_passes_flags(capsys: CaptureFixture[str]) -> None:
    report = UninstallReport("Amp", removed=[RemovedPath("binary", "/home/u/.local/bin/amp")])
    result = ActionResult("Amp", Action.UNINSTALL, Outcome.SUCCEEDED, "Amp uninstalled successfully", report)
    with patch("ai_cli_apps.cli.perform", return_value=result) as perform:
        assert run_main("remove", "amp", "--remove-config", "--force") == 0

    tool, action = perform.call_args.args
    assert tool.name == "Amp"
    assert action is Action.UNINSTALL
    assert perform.call_args.kwargs["remove_config"] is True
    assert perform.call_args.kwargs["force"] is True
    out = capsys.readouterr().out
    assert "Amp uninstalled successfully" in out
    assert "binary: /home/u/.local/bin/amp" in out


def test_failed_single_action_exits_non_zero(capsys: CaptureFixture[str]) -> None:
    result = ActionResult("Codex CLI", Action.UPGRADE, Outcome.FAILED, "Failed to brew upgrade codex")
    with patch("ai_cli_apps.cli.perform", return_value=result):
        assert run_main("update", "codex") == 1
    assert "Failed to upgrade Codex CLI" in capsys.readouterr().out


def test_noop_single_action_exits_zero() -> None:
    result = ActionResult("Codex CLI", Action.INSTALL, Outcome.NOOP, "Codex CLI is already installed")
    with patch("ai_cli_apps.cli.perform", return_value=result):
        assert run_main("add", "codex") == 0


def test_interactive_install_runs_selection() -> None:
    with (
        patch("ai_cli_apps.cli.is_installed", side_effect=lambda t: t.name == "Amp"),
        patch("ai_cli_apps.cli.Prompt.ask", return_value="1 3"),
        patch("ai_cli_apps.cli.run_batch", return_value=[]) as batch,
    ):
        assert run_main("install") == 0

    tools, action = batch.call_args.args
    assert action is Action.INSTALL
    # Missing tools are offered sorted by name.
    assert [t.name for t in tools] == ["Claude Code", "Codex CLI"]


def test_interactive_uninstall_with_nothing_installed(capsys: CaptureFixture[str]) -> None:
    with patch("ai_cli_apps.cli.is_installed", return_value=False):
        assert run_main("uninstall") == 0
    assert "No tools are currently installed" in capsys.readouterr().out


def test_interactive_upgrade_empty_selection(capsys: CaptureFixture[str]) -> None:
    with (
        patch("ai_cli_apps.cli.is_installed", return_value=True),
        patch("ai_cli_apps.cli.Prompt.ask", return_value=""),
        patch("ai_cli_apps.cli.run_batch") as batch,
    ):
        assert run_main("upgrade") == 0
    batch.assert_not_called()
    assert "No tools selected" in capsys.readouterr().out


@pytest.mark.parametrize(
    ("answer", "expected"),
    [
        ("1 3", [0, 2]),
        ("2,1", [1, 0]),
        ("1 1", [0]),
        ("all", [0, 1, 2]),
        ("", []),
        ("9 x 2", [1]),
    ],
)
def test_parse_selection(answer: str, expected: list[int]) -> None:
    assert cli.parse_selection(answer, 3) == expected


def test_config_file_pointing_at_directory_still_runs(tmp_path, capsys: CaptureFixture[str]) -> None:
    assert run_main("--config-file", str(tmp_path), "version") == 0
    assert f"ai-cli-apps v{__version__}" in capsys.readouterr().out


def test_version_flag(capsys: CaptureFixture[str]) -> None:
    assert run_main("--version") == 0
    assert f"ai-cli-apps v{__version__}" in capsys.readouterr().out

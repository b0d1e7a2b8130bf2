"""Test the typer command surface."""

import json
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from npmmenu.cli.app import MENU, app

cli = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    data = {
        "name": "demo",
        "scripts": {"build": "tsc"},
        "dependencies": {"express": "^4.18.0"},
        "devDependencies": {"jest": "^29.0.0"},
    }
    (tmp_path / "package.json").write_text(json.dumps(data))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NPM_MENU_GLOBAL_ARGS", raising=False)
    monkeypatch.delenv("NPM_MENU_VERB_ARGS", raising=False)
    return tmp_path


@pytest.fixture
def runner():
    """Replace the process runner the action service creates."""
    with patch("npmmenu.core.actions.ProcessRunner") as runner_class:
        instance = runner_class.return_value
        handle = Mock(log_path=None, buffer_name="*npm: demo*")
        handle.stream.side_effect = lambda sink: sink("added 1 package")
        handle.wait.return_value = 0
        instance.start.return_value = handle
        yield instance


def started_command(runner):
    return str(runner.start.call_args[0][0])


def test_install_with_name(project, runner):
    result = cli.invoke(app, ["install", "left-pad", "--destination", "dev"])
    assert result.exit_code == 0, result.output
    assert started_command(runner) == "npm install left-pad --save-dev"
    assert "added 1 package" in result.output
    assert "exit code 0" in result.output


def test_install_prompts_for_name_and_destination(project, runner):
    with patch("npmmenu.cli.commands.install.ask_text", return_value="left-pad"), \
            patch("npmmenu.cli.commands.install.ask_choice", return_value="peer"):
        result = cli.invoke(app, ["install"])
    assert result.exit_code == 0, result.output
    assert started_command(runner) == "npm install left-pad --save-peer"


def test_global_options_reach_command(project, runner):
    result = cli.invoke(app, ["--global-args=--prefix web", "--verb-args=--no-audit", "install-all"])
    assert result.exit_code == 0, result.output
    assert started_command(runner) == "npm --prefix web install --no-audit"


def test_uninstall_choice_maps_label_to_name(project, runner):
    with patch("npmmenu.rich_utils.ui_helpers.Prompt.ask", return_value="jest (dev)"):
        result = cli.invoke(app, ["uninstall"])
    assert result.exit_code == 0, result.output
    assert started_command(runner) == "npm uninstall jest"


def test_run_passes_double_dash_args(project, runner):
    result = cli.invoke(app, ["run", "build", "--", "--watch"])
    assert result.exit_code == 0, result.output
    assert started_command(runner) == "npm run build -- --watch"


def test_subprocess_failure_exit_code(project, runner):
    runner.start.return_value.wait.return_value = 2
    result = cli.invoke(app, ["test"])
    assert result.exit_code == 2
    assert "exit code 2" in result.output


def test_list_renders_table(project, runner):
    runner.capture.return_value = "demo@1.0.0 /demo\n├── express@4.18.2\n"
    result = cli.invoke(app, ["list", "--sort", "version"])
    assert result.exit_code == 0, result.output
    assert "express" in result.output
    assert "4.18.2" in result.output


def test_list_unknown_sort_key(project, runner):
    runner.capture.return_value = ""
    result = cli.invoke(app, ["list", "--sort", "size"])
    assert result.exit_code == 1
    assert "Unknown value 'size'" in result.output


def test_missing_manifest_is_reported(project, runner):
    (project / "npm-menu.config.yaml").write_text("npm:\n  manifest_name: absent.json\n")
    result = cli.invoke(app, ["install-all"])
    assert result.exit_code == 1
    assert "No absent.json found" in result.output
    runner.start.assert_not_called()


def test_invalid_config_is_reported(project, runner):
    (project / "npm-menu.config.yaml").write_text("npm:\n  install_destination: global\n")
    result = cli.invoke(app, ["config"])
    assert result.exit_code == 1
    assert "install_destination" in result.output


def test_malformed_config_file_is_reported(project, runner):
    (project / "npm-menu.config.yaml").write_text("npm: [unclosed\n")
    result = cli.invoke(app, ["config"])
    assert result.exit_code == 1
    assert "❌" in result.output
    assert "Cannot read configuration" in result.output


def test_unbalanced_quote_in_global_args_is_reported(project, runner):
    result = cli.invoke(app, ["--global-args=--prefix 'web", "install-all"])
    assert result.exit_code == 1
    assert "not a valid argument string" in result.output
    runner.start.assert_not_called()


def test_clean_yes(project, runner):
    (project / "node_modules").mkdir()
    (project / "package-lock.json").write_text("{}")
    result = cli.invoke(app, ["clean", "--yes"])
    assert result.exit_code == 0, result.output
    assert not (project / "node_modules").exists()
    assert not (project / "package-lock.json").exists()


def test_clean_asks_for_each_target(project, runner):
    (project / "node_modules").mkdir()
    (project / "package-lock.json").write_text("{}")
    with patch("npmmenu.cli.commands.project.confirm", side_effect=[True, False]):
        result = cli.invoke(app, ["clean"])
    assert result.exit_code == 0, result.output
    assert not (project / "node_modules").exists()
    assert (project / "package-lock.json").exists()


def test_edit_opens_manifest(project, runner):
    with patch("npmmenu.cli.commands.project.click.edit") as mock_edit:
        result = cli.invoke(app, ["edit"])
    assert result.exit_code == 0, result.output
    assert mock_edit.call_args.kwargs["filename"] == str((project / "package.json").resolve())


def test_config_shows_effective_settings(project, runner):
    result = cli.invoke(app, ["--verb-args=--no-fund", "config"])
    assert result.exit_code == 0, result.output
    assert "--no-fund" in result.output


def test_menu_dispatches_to_command(project, runner):
    install_all = next(entry for entry in MENU if entry[0] == "Install all dependencies")
    with patch("npmmenu.cli.app.choose", return_value=install_all):
        result = cli.invoke(app, [])
    assert result.exit_code == 0, result.output
    assert started_command(runner) == "npm install"


def test_detach_announces_log(project, runner, tmp_path):
    runner.start.return_value = Mock(log_path=tmp_path / "out.log", pid=99, command="npm install")
    result = cli.invoke(app, ["--detach", "install-all"])
    assert result.exit_code == 0, result.output
    assert "pid 99" in result.output
    assert runner.start.call_args.kwargs["detach"] is True

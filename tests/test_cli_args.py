from __future__ import annotations

import io
import json
from contextlib import redirect_stderr
from pathlib import Path

import pytest

from qtclaunch import cli
from qtclaunch.config import AppConfig, save_config
from qtclaunch.errors import ExitCode
from qtclaunch.store import load_run_configurations, put_run_configuration


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    resources = tmp_path / "share"
    (resources / "themes").mkdir(parents=True)
    for name in ("dark", "default", "flat"):
        (resources / "themes" / f"{name}.creatortheme").write_text("", encoding="utf-8")
    path = tmp_path / "config.toml"
    save_config(
        AppConfig(
            resource_path=str(resources),
            active_theme="flat",
            path_case_sensitivity="sensitive",
            store_path=str(tmp_path / "runconfigs.toml"),
            variables={"buildDir": "/build"},
        ),
        path,
    )
    return path


def _run(config_path: Path, *args: str) -> tuple[int, str]:
    out = io.StringIO()
    code = cli.main(["--config", str(config_path), *args], stdout=out)
    return code, out.getvalue()


def test_cli_help_includes_public_commands() -> None:
    help_text = cli.build_parser().format_help()
    for command in ("themes", "show", "edit", "list", "remove"):
        assert command in help_text
    assert "--log-level" in help_text


def test_missing_command_returns_error_code() -> None:
    assert cli.main([]) == 2


def test_themes_lists_default_first(config_path: Path) -> None:
    code, output = _run(config_path, "themes")
    assert code == 0
    assert output.splitlines() == ["default", "dark", "flat"]


def test_edit_then_show(config_path: Path, tmp_path: Path) -> None:
    code, _ = _run(
        config_path,
        "edit",
        "dev",
        "--working-directory",
        "%{buildDir}/bin",
        "--settings-path",
        "/home/user/my settings",
    )
    assert code == 0
    stored = load_run_configurations(tmp_path / "runconfigs.toml")
    assert stored["dev"] == {
        "DisplayName": "dev",
        "WorkingDirectory": "%{buildDir}/bin",
        "SettingsPath": "/home/user/my settings",
    }

    code, output = _run(config_path, "show", "dev", "--plugin-path", "/opt/plugins", "--json")
    assert code == 0
    payload = json.loads(output)
    assert payload["working_directory"] == "/build/bin"
    assert payload["argv"] == [
        "-theme",
        "flat",
        "-pluginpath",
        "/opt/plugins",
        "-settingspath",
        '"/home/user/my settings"',
    ]


def test_edit_defaults_are_not_persisted(config_path: Path, tmp_path: Path) -> None:
    code, _ = _run(config_path, "edit", "plain", "--working-directory", "%{buildDir}")
    assert code == 0
    stored = load_run_configurations(tmp_path / "runconfigs.toml")
    assert stored["plain"] == {"DisplayName": "plain"}


def test_no_settings_path_removes_key(config_path: Path, tmp_path: Path) -> None:
    store = tmp_path / "runconfigs.toml"
    put_run_configuration("dev", {"DisplayName": "dev", "SettingsPath": "/alt"}, store)

    code, _ = _run(config_path, "edit", "dev", "--no-settings-path")
    assert code == 0
    assert load_run_configurations(store)["dev"] == {"DisplayName": "dev"}


def test_show_plain_output_with_variable_override(config_path: Path, tmp_path: Path) -> None:
    put_run_configuration("dev", {"DisplayName": "dev"}, tmp_path / "runconfigs.toml")
    code, output = _run(
        config_path,
        "show",
        "dev",
        "--plugin-path",
        "/p",
        "--theme",
        "dark",
        "--var",
        "buildDir=/other",
    )
    assert code == 0
    assert output.splitlines() == [
        "working_directory: /other",
        "-theme",
        "dark",
        "-pluginpath",
        "/p",
    ]


def test_show_unknown_theme_is_rejected(config_path: Path, tmp_path: Path) -> None:
    put_run_configuration("dev", {"DisplayName": "dev"}, tmp_path / "runconfigs.toml")
    stream = io.StringIO()
    with redirect_stderr(stream):
        code, _ = _run(config_path, "show", "dev", "--theme", "neon")
    assert code == int(ExitCode.VALIDATION_ERROR)
    assert "Unknown theme: neon" in stream.getvalue()


def test_show_missing_configuration(config_path: Path) -> None:
    stream = io.StringIO()
    with redirect_stderr(stream):
        code, _ = _run(config_path, "show", "missing")
    assert code == int(ExitCode.NOT_FOUND)
    assert stream.getvalue().splitlines()[-1].startswith("Error: Run configuration not found")


def test_show_malformed_configuration(config_path: Path, tmp_path: Path) -> None:
    put_run_configuration("bad", {"WorkingDirectory": 7}, tmp_path / "runconfigs.toml")
    stream = io.StringIO()
    with redirect_stderr(stream):
        code, _ = _run(config_path, "show", "bad")
    assert code == int(ExitCode.CONFIG_ERROR)
    assert "WorkingDirectory" in stream.getvalue()


def test_list_and_remove(config_path: Path, tmp_path: Path) -> None:
    store = tmp_path / "runconfigs.toml"
    put_run_configuration("b", {"DisplayName": "b"}, store)
    put_run_configuration("a", {"DisplayName": "a"}, store)

    code, output = _run(config_path, "list")
    assert code == 0
    assert output.splitlines() == ["a", "b"]

    code, _ = _run(config_path, "remove", "a")
    assert code == 0
    assert list(load_run_configurations(store)) == ["b"]


def test_store_flag_overrides_config(config_path: Path, tmp_path: Path) -> None:
    other = tmp_path / "other.toml"
    code, _ = _run(config_path, "--store", str(other), "edit", "x")
    assert code == 0
    assert list(load_run_configurations(other)) == ["x"]


def test_invalid_var_is_rejected(config_path: Path) -> None:
    code, _ = _run(config_path, "show", "dev", "--var", "novalue")
    assert code == 2


def test_warning_alias_for_log_level_is_accepted(config_path: Path) -> None:
    code, _ = _run(config_path, "--log-level", "warning", "list")
    assert code == 0


def test_unexpected_error_maps_to_runtime_error(
    config_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def boom(*args: object, **kwargs: object) -> int:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "run_command", boom)
    stream = io.StringIO()
    with redirect_stderr(stream):
        code, _ = _run(config_path, "list")
    assert code == int(ExitCode.RUNTIME_ERROR)
    assert "Unexpected runtime failure" in stream.getvalue()


def test_edit_with_control_character_keeps_store_readable(
    config_path: Path, tmp_path: Path
) -> None:
    store = tmp_path / "runconfigs.toml"
    put_run_configuration("ok", {"DisplayName": "ok"}, store)

    code, _ = _run(config_path, "edit", "odd", "--settings-path", "/tmp/a\x1bb")
    assert code == 0

    code, output = _run(config_path, "list")
    assert code == 0
    assert output.splitlines() == ["odd", "ok"]
    assert load_run_configurations(store)["odd"]["SettingsPath"] == "/tmp/a\x1bb"


def test_themes_reads_user_resource_path_from_config(tmp_path: Path) -> None:
    user = tmp_path / "user"
    (user / "themes").mkdir(parents=True)
    (user / "themes" / "mine.creatortheme").write_text("", encoding="utf-8")
    path = tmp_path / "config.toml"
    save_config(AppConfig(user_resource_path=str(user)), path)

    code, output = _run(path, "themes")
    assert code == 0
    assert output.splitlines() == ["mine"]

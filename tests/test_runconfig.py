from __future__ import annotations

import pytest

from qtclaunch.errors import MalformedConfigError
from qtclaunch.macros import MacroExpander
from qtclaunch.runconfig import DEFAULT_DISPLAY_NAME, RunConfiguration


def test_create_uses_active_theme() -> None:
    run_config = RunConfiguration.create(active_theme="flat")
    assert run_config.display_name == DEFAULT_DISPLAY_NAME
    assert run_config.launch.theme_name == "flat"
    assert run_config.to_map() == {"DisplayName": DEFAULT_DISPLAY_NAME}


def test_to_map_and_from_map_roundtrip_keeps_host_keys() -> None:
    source = {
        "DisplayName": "Run dev build",
        "WorkingDirectory": "/work",
        "SettingsPath": "/alt",
        "Host.Option": 3,
    }
    run_config = RunConfiguration.create(active_theme="dark")
    run_config.from_map(source)

    assert run_config.display_name == "Run dev build"
    assert run_config.launch.working_directory == "/work"
    assert run_config.launch.settings_path == "/alt"
    assert run_config.launch.theme_name == "dark"
    assert run_config.to_map() == source


def test_from_map_rejects_malformed_display_name() -> None:
    run_config = RunConfiguration()
    with pytest.raises(MalformedConfigError):
        run_config.from_map({"DisplayName": 12})


def test_case_insensitive_host_suppresses_default_variants() -> None:
    run_config = RunConfiguration(case_sensitive=False)
    run_config.from_map({"WorkingDirectory": "%{BuildDir}"})
    assert "WorkingDirectory" not in run_config.to_map()


def test_working_directory_and_arguments_use_expander() -> None:
    run_config = RunConfiguration.create(
        active_theme="default",
        plugins_path="/opt/my plugins",
        expander=MacroExpander({"buildDir": "/build"}),
    )
    run_config.from_map({"SettingsPath": "%{buildDir}/settings"})

    assert run_config.working_directory() == "/build"
    assert run_config.command_line_arguments() == [
        "-theme",
        "default",
        "-pluginpath",
        '"/opt/my plugins"',
        "-settingspath",
        "/build/settings",
    ]

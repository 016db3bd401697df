from __future__ import annotations

import pytest

from qtclaunch.edits import (
    ClearSettingsPath,
    SetSettingsPath,
    SetTheme,
    SetWorkingDirectory,
    apply_edit,
    apply_edits,
)
from qtclaunch.errors import ExitCode, QtcLaunchError
from qtclaunch.launch_config import LaunchConfig


def test_apply_edit_returns_updated_copy() -> None:
    original = LaunchConfig()
    updated = apply_edit(original, SetWorkingDirectory("  /work  "))
    assert updated.working_directory == "/work"
    assert original.working_directory == "%{buildDir}"


def test_blank_working_directory_is_rejected() -> None:
    with pytest.raises(QtcLaunchError) as excinfo:
        apply_edit(LaunchConfig(), SetWorkingDirectory("   "))
    assert excinfo.value.code == ExitCode.VALIDATION_ERROR


def test_settings_path_toggle() -> None:
    cfg = apply_edit(LaunchConfig(), SetSettingsPath("/alt"))
    assert cfg.settings_path == "/alt"
    cfg = apply_edit(cfg, ClearSettingsPath())
    assert cfg.settings_path is None


def test_theme_is_validated_against_available_themes() -> None:
    cfg = apply_edit(LaunchConfig(), SetTheme("dark"), available_themes=["default", "dark"])
    assert cfg.theme_name == "dark"

    with pytest.raises(QtcLaunchError) as excinfo:
        apply_edit(cfg, SetTheme("missing"), available_themes=["default", "dark"])
    assert excinfo.value.code == ExitCode.VALIDATION_ERROR
    assert "default, dark" in excinfo.value.hint


def test_theme_without_catalog_is_accepted() -> None:
    assert apply_edit(LaunchConfig(), SetTheme("anything")).theme_name == "anything"


def test_apply_edits_in_order() -> None:
    cfg = apply_edits(
        LaunchConfig(),
        [SetSettingsPath("/a"), SetWorkingDirectory("/w"), SetSettingsPath("/b")],
    )
    assert cfg == LaunchConfig(working_directory="/w", settings_path="/b")


def test_unknown_edit_type_raises() -> None:
    with pytest.raises(TypeError):
        apply_edit(LaunchConfig(), "not-an-edit")  # type: ignore[arg-type]

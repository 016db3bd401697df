"""Explicit edit messages applied to a launch configuration."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from qtclaunch.errors import ExitCode, QtcLaunchError
from qtclaunch.launch_config import LaunchConfig


@dataclass(frozen=True)
class SetWorkingDirectory:
    path: str


@dataclass(frozen=True)
class SetSettingsPath:
    path: str


@dataclass(frozen=True)
class ClearSettingsPath:
    pass


@dataclass(frozen=True)
class SetTheme:
    name: str


LaunchConfigEdit = SetWorkingDirectory | SetSettingsPath | ClearSettingsPath | SetTheme


def _validate_theme(name: str, available_themes: Sequence[str] | None) -> str:
    if available_themes is not None and name not in available_themes:
        shown = ", ".join(available_themes) or "none"
        raise QtcLaunchError(
            f"Unknown theme: {name}",
            code=ExitCode.VALIDATION_ERROR,
            hint=f"Use one of: {shown}.",
        )
    return name


def apply_edit(
    config: LaunchConfig,
    edit: LaunchConfigEdit,
    *,
    available_themes: Sequence[str] | None = None,
) -> LaunchConfig:
    """Return a copy of ``config`` with ``edit`` applied.

    Theme names are checked against ``available_themes`` when given.
    """
    if isinstance(edit, SetWorkingDirectory):
        path = edit.path.strip()
        if not path:
            raise QtcLaunchError(
                "Working directory cannot be empty.",
                code=ExitCode.VALIDATION_ERROR,
                hint="Provide a directory or a template such as %{buildDir}.",
            )
        return replace(config, working_directory=path)
    if isinstance(edit, SetSettingsPath):
        return replace(config, settings_path=edit.path.strip())
    if isinstance(edit, ClearSettingsPath):
        return replace(config, settings_path=None)
    if isinstance(edit, SetTheme):
        return replace(config, theme_name=_validate_theme(edit.name, available_themes))
    raise TypeError(f"Unsupported launch config edit: {edit!r}")


def apply_edits(
    config: LaunchConfig,
    edits: Sequence[LaunchConfigEdit],
    *,
    available_themes: Sequence[str] | None = None,
) -> LaunchConfig:
    for edit in edits:
        config = apply_edit(config, edit, available_themes=available_themes)
    return config

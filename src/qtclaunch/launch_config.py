"""Launch configuration model and its key/value persistence contract."""

from __future__ import annotations

import platform
from collections.abc import Mapping
from dataclasses import dataclass

from qtclaunch.errors import MalformedConfigError

DEFAULT_WORKING_DIRECTORY = "%{buildDir}"
DEFAULT_THEME = "default"
WORKING_DIRECTORY_KEY = "WorkingDirectory"
SETTINGS_PATH_KEY = "SettingsPath"

_CASE_INSENSITIVE_SYSTEMS = {"Windows", "Darwin"}

Scalar = str | int | float | bool


@dataclass
class LaunchConfig:
    """User-editable parameters used to start a Qt Creator build.

    ``settings_path`` is ``None`` when no alternative settings path is used.
    ``theme_name`` is not persisted; it follows the host's active theme.
    """

    working_directory: str = DEFAULT_WORKING_DIRECTORY
    settings_path: str | None = None
    theme_name: str = DEFAULT_THEME


def new_launch_config(active_theme: str = DEFAULT_THEME) -> LaunchConfig:
    return LaunchConfig(theme_name=active_theme)


def host_paths_case_sensitive(*, system_name: str | None = None) -> bool:
    system = system_name or platform.system()
    return system not in _CASE_INSENSITIVE_SYSTEMS


def same_path(left: str, right: str, *, case_sensitive: bool) -> bool:
    if case_sensitive:
        return left == right
    return left.casefold() == right.casefold()


def is_default_working_directory(value: str, *, case_sensitive: bool) -> bool:
    return same_path(value, DEFAULT_WORKING_DIRECTORY, case_sensitive=case_sensitive)


def serialize(config: LaunchConfig, *, case_sensitive: bool = True) -> dict[str, Scalar]:
    """Return the persisted keys of ``config``.

    Keys holding their default value are omitted so saved run configurations
    only record what the user changed.
    """
    data: dict[str, Scalar] = {}
    if not is_default_working_directory(config.working_directory, case_sensitive=case_sensitive):
        data[WORKING_DIRECTORY_KEY] = config.working_directory
    if config.settings_path is not None:
        data[SETTINGS_PATH_KEY] = config.settings_path
    return data


def _read_string(data: Mapping[str, object], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise MalformedConfigError(key, value)
    return value


def deserialize(data: Mapping[str, object], *, theme_name: str = DEFAULT_THEME) -> LaunchConfig:
    """Build a launch config from persisted keys.

    Missing keys take their default; unknown keys are ignored. A key holding a
    non-string value raises :class:`MalformedConfigError`. A stored empty
    settings path stays present, only a missing key means "no override".
    """
    working_directory = _read_string(data, WORKING_DIRECTORY_KEY, DEFAULT_WORKING_DIRECTORY)
    settings_path: str | None = None
    if SETTINGS_PATH_KEY in data:
        settings_path = _read_string(data, SETTINGS_PATH_KEY, "")
    return LaunchConfig(
        working_directory=working_directory or DEFAULT_WORKING_DIRECTORY,
        settings_path=settings_path,
        theme_name=theme_name,
    )

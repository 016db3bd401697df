"""Host run-configuration adapter around :class:`LaunchConfig`."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from qtclaunch.arguments import Expander, build_argv, resolve_working_directory
from qtclaunch.errors import MalformedConfigError
from qtclaunch.launch_config import (
    DEFAULT_THEME,
    SETTINGS_PATH_KEY,
    WORKING_DIRECTORY_KEY,
    LaunchConfig,
    Scalar,
    deserialize,
    new_launch_config,
    serialize,
)

logger = py_logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Run Qt Creator"
DISPLAY_NAME_KEY = "DisplayName"
_OWNED_KEYS = {DISPLAY_NAME_KEY, WORKING_DIRECTORY_KEY, SETTINGS_PATH_KEY}


@dataclass
class RunConfiguration:
    display_name: str = DEFAULT_DISPLAY_NAME
    launch: LaunchConfig = field(default_factory=LaunchConfig)
    plugins_path: str = ""
    expander: Expander | None = None
    extra: dict[str, Scalar] = field(default_factory=dict)
    case_sensitive: bool = True

    @classmethod
    def create(
        cls,
        *,
        active_theme: str = DEFAULT_THEME,
        display_name: str = DEFAULT_DISPLAY_NAME,
        plugins_path: str = "",
        expander: Expander | None = None,
        case_sensitive: bool = True,
    ) -> RunConfiguration:
        return cls(
            display_name=display_name,
            launch=new_launch_config(active_theme),
            plugins_path=plugins_path,
            expander=expander,
            case_sensitive=case_sensitive,
        )

    def to_map(self) -> dict[str, Scalar]:
        data: dict[str, Scalar] = dict(self.extra)
        data[DISPLAY_NAME_KEY] = self.display_name
        data.update(serialize(self.launch, case_sensitive=self.case_sensitive))
        return data

    def from_map(self, data: Mapping[str, object]) -> None:
        """Restore state from a host map; the current theme is kept."""
        self.launch = deserialize(data, theme_name=self.launch.theme_name)
        display_name = data.get(DISPLAY_NAME_KEY, self.display_name)
        if not isinstance(display_name, str):
            raise MalformedConfigError(DISPLAY_NAME_KEY, display_name)
        self.display_name = display_name
        self.extra = {
            key: value
            for key, value in data.items()
            if key not in _OWNED_KEYS and isinstance(value, (str, int, float, bool))
        }
        logger.debug(
            "Restored run configuration %r working_directory=%s settings_path=%s",
            self.display_name,
            self.launch.working_directory,
            self.launch.settings_path,
        )

    def working_directory(self) -> str:
        return resolve_working_directory(self.launch, self.expander)

    def command_line_arguments(self) -> list[str]:
        return build_argv(self.launch, self.plugins_path, self.expander)

"""Working directory and command-line synthesis for a launch configuration."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable

from qtclaunch.launch_config import LaunchConfig

logger = py_logging.getLogger(__name__)

Expander = Callable[[str], str]

THEME_FLAG = "-theme"
PLUGIN_PATH_FLAG = "-pluginpath"
SETTINGS_PATH_FLAG = "-settingspath"


def escape_path_argument(value: str) -> str:
    # Quotes are escaped first so the space check sees the final text.
    escaped = value.replace('"', '\\"')
    if " " in escaped:
        return f'"{escaped}"'
    return escaped


def _expand(value: str, expand: Expander | None) -> str:
    if expand is None:
        return value
    return expand(value)


def resolve_working_directory(config: LaunchConfig, expand: Expander | None = None) -> str:
    return _expand(config.working_directory, expand)


def build_argv(
    config: LaunchConfig,
    plugins_path: str,
    expand: Expander | None = None,
) -> list[str]:
    """Return the arguments passed to the launched application.

    The order is ``-theme``, ``-pluginpath`` and, only when the config holds a
    settings path, ``-settingspath``. An empty plugins path or an expansion
    yielding an empty settings path still produce their flag.
    """
    argv = [THEME_FLAG, config.theme_name]
    argv.extend([PLUGIN_PATH_FLAG, escape_path_argument(plugins_path)])

    if config.settings_path is not None:
        settings_path = _expand(config.settings_path, expand)
        argv.extend([SETTINGS_PATH_FLAG, escape_path_argument(settings_path)])

    logger.debug("Run config command line arguments: %s", argv)
    return argv

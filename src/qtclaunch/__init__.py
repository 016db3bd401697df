"""Launch configurations for running a Qt Creator build from a host IDE."""

from qtclaunch.arguments import build_argv, escape_path_argument, resolve_working_directory
from qtclaunch.errors import MalformedConfigError, QtcLaunchError
from qtclaunch.launch_config import LaunchConfig, deserialize, serialize
from qtclaunch.themes import list_available_themes

__all__ = [
    "LaunchConfig",
    "MalformedConfigError",
    "QtcLaunchError",
    "build_argv",
    "deserialize",
    "escape_path_argument",
    "list_available_themes",
    "resolve_working_directory",
    "serialize",
]

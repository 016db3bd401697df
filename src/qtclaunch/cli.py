"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import json
import logging as py_logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from .arguments import Expander
from .config import AppConfig, load_config
from .edits import (
    ClearSettingsPath,
    LaunchConfigEdit,
    SetSettingsPath,
    SetTheme,
    SetWorkingDirectory,
    apply_edit,
    apply_edits,
)
from .errors import ExitCode, QtcLaunchError, user_facing_error
from .logging import LOG_LEVELS, configure_logging, default_log_path, normalize_level
from .macros import MacroExpander, parse_variable_assignment
from .runconfig import RunConfiguration
from .store import (
    get_run_configuration,
    load_run_configurations,
    put_run_configuration,
    remove_run_configuration,
)
from .themes import list_available_themes

logger = py_logging.getLogger(__name__)


def _log_level_type(value: str) -> str:
    normalized = normalize_level(value)
    if normalized is None:
        accepted = ", ".join(LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def _variable_type(value: str) -> tuple[str, str]:
    try:
        return parse_variable_assignment(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--var {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qtclaunch")
    parser.add_argument("--config", type=Path, default=None, help="Application config file")
    parser.add_argument("--store", type=Path, default=None, help="Run configuration store")
    parser.add_argument("--log-level", type=_log_level_type, default="INFO")
    parser.add_argument("--log-file", type=Path, default=None)

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("themes", help="List available themes")
    commands.add_parser("list", help="List stored run configurations")

    remove = commands.add_parser("remove", help="Delete a stored run configuration")
    remove.add_argument("name")

    show = commands.add_parser("show", help="Print working directory and arguments")
    show.add_argument("name")
    show.add_argument("--plugin-path", default="", help="Plugin destination directory")
    show.add_argument("--theme", default=None, help="Theme overriding the active theme")
    show.add_argument(
        "--var",
        dest="variables",
        type=_variable_type,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Macro variable, e.g. buildDir=/path/to/build",
    )
    show.add_argument("--json", action="store_true", help="Print a JSON document")

    edit = commands.add_parser("edit", help="Create or update a run configuration")
    edit.add_argument("name")
    edit.add_argument("--working-directory", default=None)
    settings = edit.add_mutually_exclusive_group()
    settings.add_argument("--settings-path", default=None)
    settings.add_argument("--no-settings-path", action="store_true")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def _expander_for(config: AppConfig, variables: Sequence[tuple[str, str]]) -> Expander:
    expander = MacroExpander(config.variables)
    for name, value in variables:
        expander.set_variable(name, value)
    return expander


def _load_run_configuration(
    namespace: argparse.Namespace,
    config: AppConfig,
    *,
    create_missing: bool = False,
) -> RunConfiguration:
    store_path = namespace.store or config.store_path or None
    run_config = RunConfiguration.create(
        active_theme=config.active_theme,
        display_name=namespace.name,
        case_sensitive=config.paths_case_sensitive(),
    )
    if create_missing and namespace.name not in load_run_configurations(store_path):
        logger.info("Creating run configuration %r", namespace.name)
        return run_config
    run_config.from_map(get_run_configuration(namespace.name, store_path))
    return run_config


def _themes(config: AppConfig, out: TextIO) -> int:
    for name in list_available_themes(**config.theme_sources()):
        print(name, file=out)
    return int(ExitCode.SUCCESS)


def _show(namespace: argparse.Namespace, config: AppConfig, out: TextIO) -> int:
    run_config = _load_run_configuration(namespace, config)
    run_config.plugins_path = namespace.plugin_path
    run_config.expander = _expander_for(config, namespace.variables)

    if namespace.theme is not None:
        themes = list_available_themes(**config.theme_sources())
        run_config.launch = apply_edit(
            run_config.launch,
            SetTheme(namespace.theme),
            available_themes=themes or None,
        )

    working_directory = run_config.working_directory()
    argv = run_config.command_line_arguments()
    if namespace.json:
        payload = {"working_directory": working_directory, "argv": argv}
        print(json.dumps(payload, indent=2), file=out)
    else:
        print(f"working_directory: {working_directory}", file=out)
        for item in argv:
            print(item, file=out)
    return int(ExitCode.SUCCESS)


def _edit(namespace: argparse.Namespace, config: AppConfig) -> int:
    run_config = _load_run_configuration(namespace, config, create_missing=True)

    edits: list[LaunchConfigEdit] = []
    if namespace.working_directory is not None:
        edits.append(SetWorkingDirectory(namespace.working_directory))
    if namespace.settings_path is not None:
        edits.append(SetSettingsPath(namespace.settings_path))
    if namespace.no_settings_path:
        edits.append(ClearSettingsPath())
    run_config.launch = apply_edits(run_config.launch, edits)

    store_path = namespace.store or config.store_path or None
    saved = put_run_configuration(namespace.name, run_config.to_map(), store_path)
    logger.info("Saved run configuration %r to %s", namespace.name, saved)
    return int(ExitCode.SUCCESS)


def _list(namespace: argparse.Namespace, config: AppConfig, out: TextIO) -> int:
    store_path = namespace.store or config.store_path or None
    for name in sorted(load_run_configurations(store_path)):
        print(name, file=out)
    return int(ExitCode.SUCCESS)


def _remove(namespace: argparse.Namespace, config: AppConfig) -> int:
    store_path = namespace.store or config.store_path or None
    remove_run_configuration(namespace.name, store_path)
    logger.info("Removed run configuration %r", namespace.name)
    return int(ExitCode.SUCCESS)


def run_command(namespace: argparse.Namespace, *, stdout: TextIO | None = None) -> int:
    out = stdout or sys.stdout
    config = load_config(namespace.config)
    if namespace.command == "themes":
        return _themes(config, out)
    if namespace.command == "show":
        return _show(namespace, config, out)
    if namespace.command == "edit":
        return _edit(namespace, config)
    if namespace.command == "list":
        return _list(namespace, config, out)
    if namespace.command == "remove":
        return _remove(namespace, config)
    raise QtcLaunchError(
        f"Unknown command: {namespace.command}",
        code=ExitCode.INVALID_ARGS,
        hint="Run `qtclaunch --help` for the list of commands.",
    )


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None) -> int:
    log_path = default_log_path()
    app_logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            app_logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    app_logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        app_logger.debug("Running command %s", namespace.command)
        return run_command(namespace, stdout=stdout)
    except QtcLaunchError as exc:
        app_logger.error(
            "Handled QtcLaunchError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=app_logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        app_logger.exception("Unhandled exception in CLI entrypoint")
        try:
            hint = f"Inspect logs: {log_path}"
            print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        except Exception:
            pass
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)

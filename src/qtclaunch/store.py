"""Named run-configuration maps persisted to a TOML file."""

from __future__ import annotations

import logging as py_logging
import sys
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from qtclaunch.errors import ExitCode, QtcLaunchError

logger = py_logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("~/.config/qtclaunch/runconfigs.toml")
_SECTION = "run_configurations"

RunConfigurationMap = dict[str, object]


def get_store_path(path: str | Path | None = None) -> Path:
    if not path:
        return DEFAULT_STORE_PATH.expanduser()
    return Path(path).expanduser()


_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def escape_toml_string(value: str) -> str:
    """Escape ``value`` for a TOML basic string.

    Control characters TOML forbids in basic strings are written as ``\\uXXXX``.
    """
    parts: list[str] = []
    for char in value:
        if char in _SHORT_ESCAPES:
            parts.append(_SHORT_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{ord(char):04X}")
        else:
            parts.append(char)
    return "".join(parts)


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return f'"{escape_toml_string(value)}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_scalar(item) for item in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(
            f'"{escape_toml_string(str(key))}" = {_toml_scalar(item)}' for key, item in value.items()
        )
        return "{" + items + "}"
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def load_run_configurations(path: str | Path | None = None) -> dict[str, RunConfigurationMap]:
    resolved = get_store_path(path)
    if not resolved.exists():
        return {}
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise QtcLaunchError(
            f"Run configuration store is not valid TOML: {resolved}",
            code=ExitCode.CONFIG_ERROR,
            hint=f"Fix or delete the file ({exc}).",
        ) from exc
    except OSError as exc:
        raise QtcLaunchError(
            f"Run configuration store could not be read: {resolved}",
            code=ExitCode.CONFIG_ERROR,
            hint=str(exc),
        ) from exc

    section = raw.get(_SECTION, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring non-table %s entry in %s", _SECTION, resolved)
        return {}

    configurations: dict[str, RunConfigurationMap] = {}
    for name, payload in section.items():
        if not isinstance(payload, dict):
            logger.warning("Ignoring run configuration %r: not a table", name)
            continue
        configurations[name] = dict(payload)
    return configurations


def save_run_configurations(
    configurations: Mapping[str, Mapping[str, object]],
    path: str | Path | None = None,
) -> Path:
    resolved = get_store_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    for name, payload in sorted(configurations.items()):
        if lines:
            lines.append("")
        lines.append(f'[{_SECTION}."{escape_toml_string(name)}"]')
        for key, value in sorted(payload.items()):
            lines.append(f'"{escape_toml_string(key)}" = {_toml_scalar(value)}')

    resolved.write_text("\n".join(lines) + "\n" if lines else "", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    logger.debug("Saved %s run configuration(s) to %s", len(configurations), resolved)
    return resolved


def get_run_configuration(name: str, path: str | Path | None = None) -> RunConfigurationMap:
    configurations = load_run_configurations(path)
    if name not in configurations:
        raise QtcLaunchError(
            f"Run configuration not found: {name}",
            code=ExitCode.NOT_FOUND,
            hint="Create it with `qtclaunch edit` or pick an existing name from `qtclaunch list`.",
        )
    return configurations[name]


def put_run_configuration(
    name: str,
    data: Mapping[str, object],
    path: str | Path | None = None,
) -> Path:
    configurations = load_run_configurations(path)
    configurations[name] = dict(data)
    return save_run_configurations(configurations, path)


def remove_run_configuration(name: str, path: str | Path | None = None) -> None:
    configurations = load_run_configurations(path)
    if configurations.pop(name, None) is None:
        raise QtcLaunchError(
            f"Run configuration not found: {name}",
            code=ExitCode.NOT_FOUND,
            hint="Pick an existing name from `qtclaunch list`.",
        )
    save_run_configurations(configurations, path)

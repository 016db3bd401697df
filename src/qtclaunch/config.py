"""XDG config loading/saving."""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import TypedDict

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from qtclaunch.launch_config import DEFAULT_THEME, host_paths_case_sensitive
from qtclaunch.store import escape_toml_string

DEFAULT_CONFIG_PATH = Path("~/.config/qtclaunch/config.toml").expanduser()
DEFAULT_CASE_SENSITIVITY: Literal["auto", "sensitive", "insensitive"] = "auto"
ACTIVE_THEME_ENV = "QTCLAUNCH_ACTIVE_THEME"

_VALID_CASE_SENSITIVITY = {"auto", "sensitive", "insensitive"}


class ThemeSources(TypedDict):
    resource_path: str
    user_resource_path: str


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    resource_path: str = ""
    user_resource_path: str = ""
    active_theme: str = DEFAULT_THEME
    path_case_sensitivity: Literal["auto", "sensitive", "insensitive"] = DEFAULT_CASE_SENSITIVITY
    store_path: str = ""
    variables: dict[str, str] = Field(default_factory=dict)

    @field_validator("active_theme")
    @classmethod
    def _validate_theme(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Active theme cannot be empty")
        return value

    def theme_sources(self) -> ThemeSources:
        return ThemeSources(
            resource_path=self.resource_path,
            user_resource_path=self.user_resource_path,
        )

    def paths_case_sensitive(self, *, system_name: str | None = None) -> bool:
        if self.path_case_sensitivity == "sensitive":
            return True
        if self.path_case_sensitivity == "insensitive":
            return False
        return host_paths_case_sensitive(system_name=system_name)


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return f'"{escape_toml_string(value)}"'
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _normalize_variables(value: object) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    normalized: dict[str, str] = {}
    for name, item in value.items():
        if not isinstance(name, str) or not isinstance(item, str):
            continue
        key = name.strip()
        if not key:
            continue
        normalized[key] = item
    return normalized


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    resource_path = raw.get("resource_path", cfg.resource_path)
    if isinstance(resource_path, str):
        cfg.resource_path = resource_path

    user_resource_path = raw.get("user_resource_path", cfg.user_resource_path)
    if isinstance(user_resource_path, str):
        cfg.user_resource_path = user_resource_path

    active_theme = raw.get("active_theme", cfg.active_theme)
    if isinstance(active_theme, str) and active_theme.strip():
        cfg.active_theme = active_theme.strip()
    env_theme = os.getenv(ACTIVE_THEME_ENV, "").strip()
    if env_theme:
        cfg.active_theme = env_theme

    case_sensitivity = raw.get("path_case_sensitivity", cfg.path_case_sensitivity)
    if isinstance(case_sensitivity, str) and case_sensitivity in _VALID_CASE_SENSITIVITY:
        cfg.path_case_sensitivity = cast(
            Literal["auto", "sensitive", "insensitive"],
            case_sensitivity,
        )

    store_path = raw.get("store_path", cfg.store_path)
    if isinstance(store_path, str):
        cfg.store_path = store_path

    cfg.variables = _normalize_variables(raw.get("variables", {}))
    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _sanitize({})
    if not isinstance(raw, dict):
        return _sanitize({})
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        f"resource_path = {_toml_scalar(config.resource_path)}",
        f"user_resource_path = {_toml_scalar(config.user_resource_path)}",
        f"active_theme = {_toml_scalar(config.active_theme)}",
        f"path_case_sensitivity = {_toml_scalar(config.path_case_sensitivity)}",
        f"store_path = {_toml_scalar(config.store_path)}",
    ]

    if config.variables:
        lines.append("")
        lines.append("[variables]")
        for name, value in sorted(config.variables.items()):
            lines.append(f'"{escape_toml_string(name)}" = {_toml_scalar(value)}')

    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved

"""Theme discovery from Qt Creator resource directories."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Iterable
from pathlib import Path

logger = py_logging.getLogger(__name__)

DEFAULT_THEME_NAME = "default"
THEMES_DIRNAME = "themes"
THEME_SUFFIX = ".creatortheme"


def theme_names_in(resource_path: str | Path | None) -> list[str]:
    """Theme names found in ``<resource_path>/themes``, sorted by name."""
    if not resource_path:
        return []
    themes_dir = Path(resource_path).expanduser() / THEMES_DIRNAME
    if not themes_dir.is_dir():
        logger.debug("Theme directory not found: %s", themes_dir)
        return []
    entries = [
        entry
        for entry in themes_dir.iterdir()
        if entry.is_file()
        and entry.name.endswith(THEME_SUFFIX)
        and not entry.name.startswith(".")
    ]
    entries.sort(key=lambda item: item.name.casefold())
    return [entry.stem for entry in entries]


def merge_theme_names(builtin: Iterable[str], user: Iterable[str]) -> list[str]:
    themes: list[str] = []
    for name in builtin:
        if name not in themes:
            themes.append(name)

    if DEFAULT_THEME_NAME in themes:
        themes.remove(DEFAULT_THEME_NAME)
        themes.insert(0, DEFAULT_THEME_NAME)
    else:
        logger.warning('"%s" theme not found in resource path.', DEFAULT_THEME_NAME)

    for name in user:
        if name not in themes:
            themes.append(name)
    return themes


def list_available_themes(
    resource_path: str | Path | None,
    user_resource_path: str | Path | None = None,
) -> list[str]:
    themes = merge_theme_names(
        theme_names_in(resource_path),
        theme_names_in(user_resource_path),
    )
    logger.debug(
        "Available themes %s resource=%s user_resource=%s",
        themes,
        resource_path,
        user_resource_path,
    )
    return themes

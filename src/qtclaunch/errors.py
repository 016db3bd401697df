"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    VALIDATION_ERROR = 7
    NOT_FOUND = 9


@dataclass
class QtcLaunchError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


class MalformedConfigError(QtcLaunchError):
    """A persisted value under a known key has the wrong scalar kind."""

    def __init__(self, key: str, value: object, *, expected: type = str) -> None:
        self.key = key
        self.expected = expected.__name__
        self.actual = type(value).__name__
        super().__init__(
            f"Malformed value for {key}: expected {self.expected}, got {self.actual}",
            code=ExitCode.CONFIG_ERROR,
            hint=f"Fix or remove the {key} entry of the run configuration.",
        )


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."

"""Exceptions raised while parsing procfs data."""

from __future__ import annotations

from os import PathLike


class ProcError(Exception):
    """Base class for every error raised by this package."""


class IncompleteError(ProcError):
    """The data was missing a field or held a value that could not be read."""

    def __init__(self, path: str | PathLike[str] | None = None) -> None:
        self.path = path
        if path is None:
            message = "data is incomplete"
        else:
            message = f"data is incomplete: {path}"
        super().__init__(message)


class InternalError(ProcError):
    """The data did not have the shape the parser expected."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
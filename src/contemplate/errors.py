"""Exception types raised while resolving and materializing templates."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

__all__ = [
    "ContemplateError",
    "DestinationExistsError",
    "MaterializeIOError",
    "TemplateFetchError",
    "TemplateSourceError",
    "UnknownClassError",
]


class ContemplateError(RuntimeError):
    """Base class for every error reported by the command line tool."""


class UnknownClassError(ContemplateError):
    """Raised when a template class is not present in the registry."""

    def __init__(self, class_name: str, supported: Iterable[str]) -> None:
        self.class_name = class_name
        self.supported = tuple(supported)
        choices = ", ".join(self.supported) or "(none)"
        super().__init__(f"unknown template class '{class_name}'; supported classes: {choices}")


class DestinationExistsError(ContemplateError):
    """Raised when the destination directory is already taken."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"destination '{self.path}' already exists")


class MaterializeIOError(ContemplateError):
    """Raised when writing part of the destination tree fails.

    The destination is left as-is; delete it and retry.
    """

    def __init__(self, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"failed to write '{self.path}': {reason}")


class TemplateSourceError(ContemplateError):
    """Raised when a template source cannot be read."""


class TemplateFetchError(TemplateSourceError):
    """Raised when a remote template cannot be fetched."""

    def __init__(self, message: str, *, stderr: str = "") -> None:
        self.stderr = stderr
        detail = f"{message}\n{stderr}" if stderr else message
        super().__init__(detail)

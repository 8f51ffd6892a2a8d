"""Template sources yielding the files that make up a starter project."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from importlib import resources
from pathlib import Path, PurePosixPath
from typing import ContextManager, Iterator
from urllib.parse import urlparse

from .errors import TemplateFetchError, TemplateSourceError

__all__ = [
    "BundledTemplateSource",
    "DirectoryTemplateSource",
    "GitTemplateSource",
    "TemplateFileEntry",
    "TemplateSource",
    "repository_name",
]


LOGGER = logging.getLogger(__name__)

IGNORED_NAMES = frozenset({".git", ".hg", ".svn", "__pycache__"})


@dataclass(frozen=True, slots=True)
class TemplateFileEntry:
    """One file or directory of a template tree."""

    path: PurePosixPath
    is_dir: bool = False
    content: bytes = b""
    mode: int | None = None


class TemplateSource(ABC):
    """Provider of :class:`TemplateFileEntry` items for one template."""

    @abstractmethod
    def open(self) -> ContextManager[Iterator[TemplateFileEntry]]:
        """Return a context manager yielding an iterator of entries, parents before children.

        Resources backing the iterator (temporary checkouts and the like) are
        released when the context exits.
        """

    def describe(self) -> str:
        """Return a short human readable location for log messages."""

        return type(self).__name__


def _check_link_cycle(base: Path, name: str) -> None:
    candidate = base / name
    if not candidate.is_symlink():
        return
    target = candidate.resolve()
    if base.resolve().is_relative_to(target):
        raise TemplateSourceError(f"symlink '{candidate}' points back into its own parent tree")


def _walk_directory(root: Path) -> Iterator[TemplateFileEntry]:
    # linked directories are walked like real ones, so their files are copied
    for current, dirnames, filenames in os.walk(root, followlinks=True):
        base = Path(current)
        dirnames[:] = sorted(name for name in dirnames if name not in IGNORED_NAMES)
        for name in dirnames:
            _check_link_cycle(base, name)
        relative_base = PurePosixPath(base.relative_to(root).as_posix())

        for name in dirnames:
            yield TemplateFileEntry(path=relative_base / name, is_dir=True)

        for name in sorted(filenames):
            if name in IGNORED_NAMES:
                continue
            source = base / name
            try:
                content = source.read_bytes()
                mode = source.stat().st_mode & 0o777
            except OSError as exc:
                raise TemplateSourceError(f"cannot read template file '{source}': {exc}") from exc
            yield TemplateFileEntry(path=relative_base / name, content=content, mode=mode)


class DirectoryTemplateSource(TemplateSource):
    """Template stored as a plain directory on the local filesystem."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def describe(self) -> str:
        return str(self.root)

    @contextmanager
    def open(self) -> Iterator[Iterator[TemplateFileEntry]]:
        if not self.root.is_dir():
            raise TemplateSourceError(f"template directory '{self.root}' does not exist")
        yield _walk_directory(self.root)


class BundledTemplateSource(TemplateSource):
    """Template shipped as package data under ``contemplate/templates``."""

    package = "contemplate"

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def describe(self) -> str:
        return f"bundled:{self.name}"

    @contextmanager
    def open(self) -> Iterator[Iterator[TemplateFileEntry]]:
        traversable = resources.files(self.package).joinpath("templates", self.name)
        if not traversable.is_dir():
            raise TemplateSourceError(f"bundled template '{self._name}' is missing from the installation")
        with resources.as_file(traversable) as root:
            with DirectoryTemplateSource(root).open() as entries:
                yield entries


def repository_name(url: str) -> str:
    """Return the repository base name of a git ``url``.

    ``https://github.com/org/starter.git`` yields ``starter``.
    """

    parsed = urlparse(url)
    path = parsed.path if parsed.scheme or parsed.netloc else url
    stem = PurePosixPath(path.rstrip("/")).name
    if stem.endswith(".git"):
        stem = stem[: -len(".git")]
    if not stem:
        raise TemplateSourceError(f"cannot parse repository url '{url}'")
    return stem


class GitTemplateSource(TemplateSource):
    """Template fetched by shallow-cloning a git repository.

    The clone lands in a temporary directory which is removed once the
    entries have been consumed. Repository metadata is never yielded.
    """

    def __init__(self, url: str, *, ref: str | None = None, git: str = "git", timeout: float = 300.0) -> None:
        self._url = url
        self._ref = ref
        self._git = git
        self._timeout = timeout
        self._name = repository_name(url)

    @property
    def url(self) -> str:
        return self._url

    @property
    def repository(self) -> str:
        return self._name

    def describe(self) -> str:
        return self.url if self._ref is None else f"{self.url}@{self._ref}"

    def _clone(self, checkout: Path) -> None:
        executable = shutil.which(self._git)
        if executable is None:
            raise TemplateFetchError(f"'{self._git}' executable not found; cannot fetch {self._url}")

        cmd = [executable, "clone", "--depth", "1", "--quiet"]
        if self._ref:
            cmd.extend(["--branch", self._ref])
        cmd.extend([self._url, str(checkout)])

        LOGGER.info("%s -> %s", self.describe(), checkout)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise TemplateFetchError(f"git clone of {self._url} timed out after {self._timeout}s") from exc

        if result.returncode != 0:
            raise TemplateFetchError(
                f"git clone of {self._url} failed (exit {result.returncode})",
                stderr=result.stderr.strip(),
            )

    @contextmanager
    def open(self) -> Iterator[Iterator[TemplateFileEntry]]:
        with tempfile.TemporaryDirectory(prefix="contemplate-") as tmp:
            checkout = Path(tmp) / self.repository
            self._clone(checkout)
            yield _walk_directory(checkout)

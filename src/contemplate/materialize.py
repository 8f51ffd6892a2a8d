"""Copy a resolved template into a fresh destination directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from .config import ProjectSettings
from .errors import ContemplateError, DestinationExistsError, MaterializeIOError
from .naming import validate_destination_name
from .registry import TemplateDescriptor
from .sources import TemplateFileEntry
from .template import TemplateRenderer, TemplateRenderingError

__all__ = ["Materializer", "materialize"]


LOGGER = logging.getLogger(__name__)


class Materializer:
    """Render template entries into a new directory.

    The destination must not exist beforehand. Failures after the directory
    has been created leave the partial tree on disk; nothing is rolled back.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def materialize(
        self,
        descriptor: TemplateDescriptor,
        destination_name: str | None = None,
        *,
        base_dir: str | Path | None = None,
    ) -> Path:
        """Materialize ``descriptor`` and return the created directory."""

        name = destination_name if destination_name is not None else descriptor.default_destination()
        try:
            validate_destination_name(name)
        except ValueError as exc:
            raise ContemplateError(str(exc)) from exc

        base = Path.cwd() if base_dir is None else Path(base_dir).expanduser()
        destination = (base / name).absolute()
        settings = ProjectSettings.for_destination(descriptor, name)

        if os.path.lexists(destination):
            raise DestinationExistsError(destination)

        LOGGER.info(
            "materializing %s from %s into %s",
            descriptor.class_name,
            descriptor.source.describe(),
            destination,
        )

        count = 0
        # the root is only created once the source has produced its entries
        with descriptor.source.open() as entries:
            self._create_root(destination)
            try:
                for entry in entries:
                    self._write_entry(destination, entry, settings)
                    count += 1
            except ContemplateError:
                LOGGER.error(
                    "materialization of %s stopped; partial output left in %s", descriptor.class_name, destination
                )
                raise

        LOGGER.info("wrote %d entries to %s", count, destination)
        return destination

    def _render_content(self, entry: TemplateFileEntry, context: Mapping[str, str]) -> bytes:
        try:
            return self.renderer.render_bytes(entry.content, context)
        except TemplateRenderingError as exc:
            raise ContemplateError(f"cannot render '{entry.path}': {exc}") from exc

    @staticmethod
    def _create_root(destination: Path) -> None:
        if os.path.lexists(destination):
            raise DestinationExistsError(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.mkdir()
        except FileExistsError as exc:
            raise DestinationExistsError(destination) from exc
        except OSError as exc:
            raise MaterializeIOError(destination, exc) from exc

    def _write_entry(self, destination: Path, entry: TemplateFileEntry, settings: ProjectSettings) -> None:
        context = settings.context()
        try:
            relative = self.renderer.render_path(entry.path, context)
        except TemplateRenderingError as exc:
            raise ContemplateError(str(exc)) from exc

        target = destination.joinpath(*relative.parts)
        LOGGER.debug("%s -> %s", entry.path, target)

        try:
            if entry.is_dir:
                target.mkdir(parents=True, exist_ok=True)
                return

            content = self._render_content(entry, context)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            if entry.mode is not None:
                os.chmod(target, entry.mode)
        except OSError as exc:
            raise MaterializeIOError(target, exc) from exc


def materialize(
    descriptor: TemplateDescriptor,
    destination_name: str | None = None,
    *,
    base_dir: str | Path | None = None,
) -> Path:
    """Materialize ``descriptor`` with a default :class:`Materializer`."""

    return Materializer().materialize(descriptor, destination_name, base_dir=base_dir)

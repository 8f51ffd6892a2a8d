"""Project settings derived from the destination of a materialization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from .naming import crate_name, type_name

if TYPE_CHECKING:
    from .registry import TemplateDescriptor


@dataclass(frozen=True, slots=True)
class ProjectSettings:
    """Identifiers exposed to template placeholders.

    Attributes
    ----------
    project_name:
        The effective destination name, verbatim. Templates reference it as
        ``{{ project_name }}``.
    crate_name:
        :attr:`project_name` as a Rust identifier, e.g. for ``use`` paths.
    type_name:
        :attr:`project_name` in PascalCase, e.g. for the contract struct.
    class_name:
        The template class the project was created from.
    """

    project_name: str
    crate_name: str
    type_name: str
    class_name: str

    @classmethod
    def from_name(cls, project_name: str, *, class_name: str = "") -> "ProjectSettings":
        if not project_name.strip():
            raise ValueError("project name must not be empty")

        return cls(
            project_name=project_name,
            crate_name=crate_name(project_name),
            type_name=type_name(project_name),
            class_name=class_name,
        )

    @classmethod
    def for_destination(cls, descriptor: "TemplateDescriptor", destination_name: str) -> "ProjectSettings":
        return cls.from_name(destination_name, class_name=descriptor.class_name)

    def context(self) -> Mapping[str, str]:
        """Return a dictionary compatible with :class:`TemplateRenderer`."""

        return {
            "project_name": self.project_name,
            "crate_name": self.crate_name,
            "type_name": self.type_name,
            "class_name": self.class_name,
        }

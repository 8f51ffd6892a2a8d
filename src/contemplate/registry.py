"""Static registry mapping template class names to their descriptors."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .sources import BundledTemplateSource, TemplateSource

__all__ = [
    "REGISTRY",
    "TemplateDescriptor",
    "build_registry",
    "supported_classes",
]


class TemplateDescriptor(BaseModel):
    """Description of one template class."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    class_name: str = Field(..., min_length=1, description="Registry key selecting this template.")
    source: TemplateSource = Field(..., description="Where the template files are read from.")
    destination_pattern: str = Field(
        default="{class}-start",
        description="Pattern for the default destination name; '{class}' is replaced by the class name.",
    )
    description: str = Field(default="", description="One line summary shown by --list.")
    upstream: str | None = Field(default=None, description="Git repository the bundled template mirrors.")

    @field_validator("destination_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            value.format_map({"class": "x"})
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"invalid destination pattern '{value}': only '{{class}}' is supported") from exc
        return value

    def default_destination(self) -> str:
        """Return the destination name used when none is given explicitly."""

        return self.destination_pattern.format_map({"class": self.class_name})


def build_registry(descriptors: Iterable[TemplateDescriptor]) -> Mapping[str, TemplateDescriptor]:
    """Return a read-only mapping of ``descriptors`` keyed by class name."""

    table: dict[str, TemplateDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.class_name in table:
            raise ValueError(f"duplicate template class '{descriptor.class_name}'")
        table[descriptor.class_name] = descriptor
    return MappingProxyType(table)


def supported_classes(registry: Mapping[str, TemplateDescriptor] | None = None) -> tuple[str, ...]:
    """Return the registered class names in sorted order."""

    return tuple(sorted(REGISTRY if registry is None else registry))


REGISTRY: Mapping[str, TemplateDescriptor] = build_registry(
    [
        TemplateDescriptor(
            class_name="phat-contract",
            source=BundledTemplateSource("phat-contract"),
            description="Phat Contract built with ink! and pink-extension",
            upstream="https://github.com/tenheadedlion/phat-contract-starter.git",
        ),
        TemplateDescriptor(
            class_name="phat-contract-with-sideprog",
            source=BundledTemplateSource("phat-contract-with-sideprog"),
            description="Phat Contract paired with a sidevm side program",
        ),
    ]
)

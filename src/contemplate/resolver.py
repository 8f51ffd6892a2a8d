"""Lookup of template classes in the registry."""

from __future__ import annotations

from typing import Mapping

from .errors import UnknownClassError
from .registry import REGISTRY, TemplateDescriptor, supported_classes

__all__ = ["resolve"]


def resolve(class_name: str, registry: Mapping[str, TemplateDescriptor] | None = None) -> TemplateDescriptor:
    """Return the descriptor registered under ``class_name``.

    Matching is exact and case-sensitive. The raised
    :class:`~contemplate.errors.UnknownClassError` lists every supported
    class so the caller can correct the request.
    """

    table = REGISTRY if registry is None else registry
    try:
        return table[class_name]
    except KeyError:
        raise UnknownClassError(class_name, supported_classes(table)) from None

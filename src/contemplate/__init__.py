"""Materialize starter projects from named template classes.

A template class such as ``phat-contract`` is looked up in a static registry
and its files are rendered into a new directory, substituting the project
name wherever a template references ``{{ project_name }}``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ProjectSettings
from .errors import (
    ContemplateError,
    DestinationExistsError,
    MaterializeIOError,
    TemplateFetchError,
    TemplateSourceError,
    UnknownClassError,
)
from .materialize import Materializer, materialize
from .registry import REGISTRY, TemplateDescriptor, build_registry, supported_classes
from .resolver import resolve
from .sources import (
    BundledTemplateSource,
    DirectoryTemplateSource,
    GitTemplateSource,
    TemplateFileEntry,
    TemplateSource,
)
from .template import TemplateRenderer, TemplateRenderingError

__all__ = [
    "BundledTemplateSource",
    "ContemplateError",
    "DestinationExistsError",
    "DirectoryTemplateSource",
    "GitTemplateSource",
    "MaterializeIOError",
    "Materializer",
    "ProjectSettings",
    "REGISTRY",
    "TemplateDescriptor",
    "TemplateFetchError",
    "TemplateFileEntry",
    "TemplateRenderer",
    "TemplateRenderingError",
    "TemplateSource",
    "TemplateSourceError",
    "UnknownClassError",
    "build_registry",
    "materialize",
    "resolve",
    "supported_classes",
]

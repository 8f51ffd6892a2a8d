"""Placeholder substitution for template file contents and paths."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Callable, Mapping, MutableMapping

from .naming import crate_name, slugify, type_name

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")


class TemplateRenderingError(RuntimeError):
    """Raised when the renderer cannot evaluate a placeholder."""


DEFAULT_FILTERS: Mapping[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
    "strip": str.strip,
    "slug": slugify,
    "crate": crate_name,
    "type": type_name,
}


@dataclass(slots=True)
class TemplateRenderer:
    """Render ``{{ key|filters }}`` expressions against a flat context.

    Only keys present in the context are substituted. Anything else that
    looks like a placeholder is left untouched unless ``missing`` says
    otherwise, so template files may carry their own brace syntax.
    """

    filters: MutableMapping[str, Callable[[str], str]] = field(default_factory=lambda: dict(DEFAULT_FILTERS))

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        *,
        missing: str = "keep",
    ) -> str:
        """Substitute the placeholders of ``template`` whose key is in ``context``.

        ``missing`` decides what happens to the others: ``"keep"`` leaves them
        verbatim, ``"empty"`` drops them and ``"error"`` raises.
        """

        if missing not in {"keep", "empty", "error"}:
            raise ValueError("missing must be 'keep', 'empty', or 'error'")

        def substitute(match: re.Match[str]) -> str:
            expression = match.group("expression")
            parts = [part.strip() for part in expression.split("|") if part.strip()]
            if not parts:
                return match.group(0)

            key, *filters = parts
            if key not in context:
                if missing == "keep":
                    return match.group(0)
                if missing == "empty":
                    return ""
                raise TemplateRenderingError(f"missing value for '{key}'")

            return self._apply_filters(str(context[key]), filters)

        return _PLACEHOLDER_PATTERN.sub(substitute, template)

    def _apply_filters(self, value: str, names: list[str]) -> str:
        for name in names:
            if name not in self.filters:
                raise TemplateRenderingError(f"unknown filter '{name}'")
            value = self.filters[name](value)
        return value

    def render_bytes(self, content: bytes, context: Mapping[str, Any], *, missing: str = "keep") -> bytes:
        """Render UTF-8 text content; anything that does not decode is returned as-is."""

        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError:
            return content

        if "{{" not in text:
            return content

        return self.render_string(text, context, missing=missing).encode("utf-8")

    def render_path(self, path: PurePosixPath, context: Mapping[str, Any]) -> PurePosixPath:
        """Render each component of a relative template path."""

        rendered = [self.render_string(part, context) for part in path.parts]
        for part in rendered:
            if not part or part in {".", ".."} or "/" in part:
                raise TemplateRenderingError(f"path component '{part}' rendered from '{path}' is invalid")
        return PurePosixPath(*rendered)

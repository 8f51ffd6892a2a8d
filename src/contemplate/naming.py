"""String normalisation helpers for project and destination names."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["crate_name", "slugify", "type_name", "validate_destination_name"]


_SEPARATORS = re.compile(r"[\s\-_]+")
_INVALID_CRATE_CHARS = re.compile(r"[^a-z0-9_]")
_MULTIPLE_UNDERSCORES = re.compile(r"_+")


def _ascii(value: str) -> str:
    text = unicodedata.normalize("NFKD", value)
    return text.encode("ascii", "ignore").decode("ascii")


def slugify(value: str, *, separator: str = "-") -> str:
    """Create a lowercase, filesystem friendly slug from ``value``."""

    text = _ascii(str(value))
    text = re.sub(r"[^\w\s\-]", "", text).strip().lower()
    if not text:
        return ""

    collapsed = _SEPARATORS.sub(separator, text)
    return collapsed.strip(separator)


def crate_name(value: str) -> str:
    """Return a valid Rust crate identifier derived from ``value``.

    Cargo accepts dashes in package names but the library target is always
    referenced with underscores, so the identifier form is what templates
    need inside source files.
    """

    candidate = _ascii(str(value)).lower().replace("-", "_")
    candidate = _INVALID_CRATE_CHARS.sub("_", candidate)
    candidate = _MULTIPLE_UNDERSCORES.sub("_", candidate).strip("_")

    if not candidate:
        return "project"

    if candidate[0].isdigit():
        candidate = f"_{candidate}"

    return candidate


def type_name(value: str) -> str:
    """Return a PascalCase type name derived from ``value``."""

    words = [word for word in _SEPARATORS.split(_ascii(str(value))) if word]
    words = [re.sub(r"[^0-9a-zA-Z]", "", word) for word in words]
    joined = "".join(word[:1].upper() + word[1:] for word in words if word)
    if not joined:
        return "Project"
    if joined[0].isdigit():
        joined = f"_{joined}"
    return joined


def validate_destination_name(name: str) -> str:
    """Return ``name`` if it names a single new directory, else raise ``ValueError``."""

    if not name or not name.strip():
        raise ValueError("destination name must not be empty")
    if name in {".", ".."}:
        raise ValueError(f"'{name}' is not a valid destination name")
    if "/" in name or "\\" in name or "\x00" in name:
        raise ValueError(f"destination name '{name}' must not contain path separators")
    return name

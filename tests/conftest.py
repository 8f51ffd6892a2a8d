from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from contemplate.registry import TemplateDescriptor, build_registry  # noqa: E402
from contemplate.sources import DirectoryTemplateSource  # noqa: E402


@pytest.fixture()
def template_dir(tmp_path: Path) -> Path:
    """A small template tree with placeholders, nesting and an executable script."""

    root = tmp_path / "template"
    (root / "src").mkdir(parents=True)
    (root / "docs" / "empty").mkdir(parents=True)
    (root / "Cargo.toml").write_text('[package]\nname = "{{ project_name }}"\n', encoding="utf-8")
    (root / "src" / "lib.rs").write_text(
        "mod {{ project_name|crate }} { fn keep() -> &'static str { \"{{ other }}\" } }\n",
        encoding="utf-8",
    )
    (root / "{{ project_name }}.txt").write_text("named after the project\n", encoding="utf-8")
    (root / "logo.bin").write_bytes(b"\x89PNG\r\n\x1a\n\xff{{ project_name }}")
    script = root / "run.sh"
    script.write_text("#!/bin/sh\necho {{ project_name }}\n", encoding="utf-8")
    script.chmod(0o755)
    return root


@pytest.fixture()
def descriptor(template_dir: Path) -> TemplateDescriptor:
    return TemplateDescriptor(
        class_name="demo",
        source=DirectoryTemplateSource(template_dir),
        description="Demo template",
    )


@pytest.fixture()
def registry(descriptor: TemplateDescriptor):
    return build_registry([descriptor])

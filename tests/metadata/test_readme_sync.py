from __future__ import annotations

from pathlib import Path
import tomllib

from contemplate.registry import REGISTRY


REPO_ROOT = Path(__file__).resolve().parents[2]
README_PATH = REPO_ROOT / "README.md"
PYPROJECT_PATH = REPO_ROOT / "pyproject.toml"


def load_pyproject() -> dict:
    with PYPROJECT_PATH.open("rb") as handle:
        return tomllib.load(handle)


def test_readme_and_pyproject_descriptions_are_in_sync() -> None:
    pyproject = load_pyproject()
    description = pyproject["project"]["description"]
    readme_text = README_PATH.read_text(encoding="utf-8")

    assert description in readme_text, "README must include the project description from pyproject.toml"


def test_readme_documents_every_template_class() -> None:
    readme_text = README_PATH.read_text(encoding="utf-8")

    for name, descriptor in REGISTRY.items():
        assert f"`{name}`" in readme_text
        assert descriptor.description in readme_text


def test_console_scripts_point_at_cli() -> None:
    scripts = load_pyproject()["project"]["scripts"]

    assert scripts == {
        "contemplate": "contemplate.cli:main",
        "cargo-contemplate": "contemplate.cli:main",
    }

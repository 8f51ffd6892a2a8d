from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from contemplate.template import TemplateRenderer, TemplateRenderingError


@pytest.fixture()
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def test_render_string_with_filters(renderer: TemplateRenderer):
    template = "mod {{ name|crate }}; struct {{ name|type }}; // {{ name|upper }}"
    rendered = renderer.render_string(template, {"name": "my-contract"})
    assert rendered == "mod my_contract; struct MyContract; // MY-CONTRACT"


def test_render_string_missing_policy_keep(renderer: TemplateRenderer):
    template = "Hello {{ missing }}"
    assert renderer.render_string(template, {}, missing="keep") == template


def test_render_string_missing_policy_empty(renderer: TemplateRenderer):
    template = "Hello {{ missing }}"
    assert renderer.render_string(template, {}, missing="empty") == "Hello "


def test_render_string_missing_policy_error(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("{{ missing }}", {}, missing="error")


def test_render_string_rejects_unknown_policy(renderer: TemplateRenderer):
    with pytest.raises(ValueError):
        renderer.render_string("", {}, missing="ignore")


def test_unknown_filter_raises(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("{{ name|unknown }}", {"name": "demo"})


def test_render_leaves_other_braces_alone(renderer: TemplateRenderer):
    template = 'fn main() { println!("{}", x); } {{ project_name }} {{ other }}'
    rendered = renderer.render_string(template, {"project_name": "demo"})
    assert rendered == 'fn main() { println!("{}", x); } demo {{ other }}'


def test_render_bytes_passes_binary_through(renderer: TemplateRenderer):
    payload = b"\xff\xfe{{ project_name }}"
    assert renderer.render_bytes(payload, {"project_name": "demo"}) is payload


def test_render_bytes_renders_text(renderer: TemplateRenderer):
    assert renderer.render_bytes(b"name = {{ project_name }}", {"project_name": "demo"}) == b"name = demo"


def test_render_path_renders_each_component(renderer: TemplateRenderer):
    path = PurePosixPath("{{ project_name }}/src/{{ project_name|crate }}.rs")
    rendered = renderer.render_path(path, {"project_name": "my-app"})
    assert rendered == PurePosixPath("my-app/src/my_app.rs")


def test_render_path_rejects_escaping_components(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_path(PurePosixPath("{{ name }}"), {"name": ".."})


def test_custom_filter_table_replaces_defaults():
    renderer = TemplateRenderer(filters={"shout": lambda value: value.upper() + "!"})
    assert renderer.render_string("{{ name|shout }}", {"name": "demo"}) == "DEMO!"
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("{{ name|crate }}", {"name": "demo"})

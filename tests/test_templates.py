import pytest
from jinja2 import TemplateNotFound, TemplateSyntaxError

from wiki_app import create_app


def write_templates(template_dir, view, edit="<p>{{ page.title }}</p>"):
    template_dir.mkdir()
    (template_dir / "view.html").write_text(view)
    (template_dir / "edit.html").write_text(edit)


def test_missing_template_stops_startup(wiki_config, tmp_path):
    template_dir = tmp_path / "empty"
    template_dir.mkdir()
    wiki_config["TEMPLATE_DIR"] = str(template_dir)
    with pytest.raises(TemplateNotFound):
        create_app(wiki_config)


def test_broken_template_stops_startup(wiki_config, tmp_path):
    template_dir = tmp_path / "broken"
    write_templates(template_dir, view="{% if page.title %}unclosed")
    wiki_config["TEMPLATE_DIR"] = str(template_dir)
    with pytest.raises(TemplateSyntaxError):
        create_app(wiki_config)


def test_render_failure_returns_500(wiki_config, tmp_path):
    template_dir = tmp_path / "failing"
    write_templates(template_dir, view="{{ page.missing.attribute }}")
    wiki_config["TEMPLATE_DIR"] = str(template_dir)
    client = create_app(wiki_config).test_client()

    client.post("/save/Failing", data={"body": "text"})
    response = client.get("/view/Failing")
    assert response.status_code == 500
    assert "missing" in response.get_data(as_text=True)


def test_registry_holds_both_templates(app):
    registry = app.extensions["flatwiki"].templates
    assert sorted(registry.templates) == ["edit", "view"]


def test_custom_templates_receive_page(wiki_config, tmp_path):
    template_dir = tmp_path / "custom"
    write_templates(template_dir, view="[{{ page.title }}|{{ page.body }}]")
    wiki_config["TEMPLATE_DIR"] = str(template_dir)
    client = create_app(wiki_config).test_client()

    client.post("/save/Custom", data={"body": "~old~"})
    assert client.get("/view/Custom").get_data(as_text=True) == "[Custom|<s>old</s>]"
    assert client.get("/edit/Custom").get_data(as_text=True) == "<p>Custom</p>"

"""Unit tests for the template engine."""

import pytest

from provcheck.documents.template_engine import TemplateEngine


def test_render_simple_template(tmp_path):
    """Create a temporary template and render it with context."""
    templates_dir = tmp_path / "templates"
    templates_dir.mkdir()
    template_file = templates_dir / "simple.md.j2"
    template_file.write_text("Hello {{ name }}\nValue: {{ value }}\n")

    engine = TemplateEngine(templates_dir=str(templates_dir))
    rendered = engine.render("simple.md.j2", {"name": "Alice", "value": 42})
    assert rendered == "Hello Alice\nValue: 42\n"


def test_list_templates(tmp_path):
    """Ensure listing returns created templates."""
    templates_dir = tmp_path / "templates"
    templates_dir.mkdir()
    (templates_dir / "a.j2").write_text("A")
    (templates_dir / "b.j2").write_text("B")

    engine = TemplateEngine(templates_dir=str(templates_dir))
    assert engine.list_templates() == ["a.j2", "b.j2"]


def test_packaged_templates_include_credits():
    assert "credits.md.j2" in TemplateEngine().list_templates()


def test_missing_directory_lists_nothing(tmp_path):
    assert TemplateEngine(templates_dir=tmp_path / "empty").list_templates() == []


def test_missing_template_raises(tmp_path):
    """Missing templates produce a FileNotFoundError from render."""
    engine = TemplateEngine(templates_dir=str(tmp_path / "empty"))
    with pytest.raises(FileNotFoundError):
        engine.render("does-not-exist.j2", {})

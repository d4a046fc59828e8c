"""Jinja2-based template rendering for provcheck documents.

Templates ship inside the package (``provcheck/documents/templates``) so the
credits layout is editable without touching the builder code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, select_autoescape

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class TemplateEngine:
    """Load and render Jinja2 templates.

    Args:
        templates_dir: Directory where templates live (default: packaged templates).
    """

    def __init__(self, templates_dir: Optional[str | Path] = None) -> None:
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        loader = FileSystemLoader(str(self.templates_dir))
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape(enabled_extensions=("html", "xml")),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def list_templates(self) -> List[str]:
        """Return the template names available in the templates directory."""
        if not self.templates_dir.is_dir():
            return []
        return sorted(self.env.list_templates())

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a named template with the provided context.

        Args:
            template_name: Template file name (e.g., "credits.md.j2").
            context: Mapping of template variables.

        Returns:
            Rendered string (typically Markdown).

        Raises:
            FileNotFoundError: If the template does not exist.
        """
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise FileNotFoundError(f"Template not found: {template_name}") from e
        return template.render(**context)


_DEFAULT_ENGINE: TemplateEngine | None = None


def get_template_engine() -> TemplateEngine:
    """Return the shared engine bound to the packaged templates."""

    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        _DEFAULT_ENGINE = TemplateEngine()
    return _DEFAULT_ENGINE

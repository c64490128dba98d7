"""Jinja2 template loader for page layouts."""

from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, select_autoescape
from markupsafe import Markup

from scriptorium.engine import filters


class TemplateLoader:
    """Loads and renders the HTML templates that make up a page.

    Supports:
    - Template inheritance (``base.html.jinja``)
    - Custom filters (twitter links, handles)
    - Configurable template directory
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            template_dir: Path to template directory. Defaults to src/scriptorium/engine/templates

        """
        if template_dir is None:
            package_templates = files("scriptorium.engine").joinpath("templates")
            template_dir = Path(str(package_templates))

        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "htm", "xml", "jinja"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._register_filters()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters."""
        self.env.filters["twitter_url"] = filters.twitter_url
        self.env.filters["display_handle"] = filters.display_handle

    def load_template(self, template_name: str) -> Template:
        """Load a template by name.

        Raises:
            TemplateNotFound: If template does not exist

        """
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> Markup:
        """Load and render a template with context.

        Args:
            template_name: Template path relative to template_dir
            **context: Template context variables

        Returns:
            Rendered HTML, marked safe for further embedding

        Raises:
            TemplateNotFound: If template does not exist

        """
        template = self.load_template(template_name)
        return Markup(template.render(**context))

"""HTML page rendering."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

MISSING_TEMPLATE_HTML = "<html><body><h1>Error: HTML file not found</h1></body></html>"


class PageRenderer:
    """Renders templates from a mapping of placeholder name to value."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, name: str, values: Mapping[str, Any]) -> str:
        """Return the rendered page, or a fixed error page if ``name`` is missing."""

        try:
            template = self._env.get_template(name)
        except TemplateNotFound:
            logger.error("Template %s not found", name)
            return MISSING_TEMPLATE_HTML
        return template.render(**values)

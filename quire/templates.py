"""Template rendering engine for Quire.

This module uses Jinja2 to wrap post and index content in the shared page
template shipped with the package.

Key class:
- TemplateEngine: Renders post pages and the index page.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .config import SiteConfig
from .content import Post

if TYPE_CHECKING:
    from .index import IndexEntry

TEMPLATES_DIR = Path(__file__).parent / "templates"


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        config: Site configuration exposed to templates as ``site``.
        env: Jinja2 environment.
    """

    def __init__(self, config: SiteConfig, templates_dir: Path = TEMPLATES_DIR):
        """Initialize the template engine.

        Args:
            config: Site configuration.
            templates_dir: Directory holding the page templates.
        """
        self.config = config
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html", "xml", "html.jinja"]),
            keep_trailing_newline=True,
        )
        self.env.globals["site"] = config
        self.env.globals["nav"] = self.nav_links()

    def nav_links(self) -> dict[str, str]:
        """Return header navigation URLs built from the base URL."""
        base = self.config.base_url
        return {
            "home": f"{base}/index.html",
            "newsletter": f"{base}/newsletter.html",
            "about": f"{base}/about.html",
        }

    def render_post(
        self,
        post: Post,
        body_html: str,
        cover_image: str | None = None,
        thumbnail_url: str | None = None,
    ) -> str:
        """Render a full post page.

        Args:
            post: Parsed post.
            body_html: Rendered markdown body.
            cover_image: Relative cover image URL, if any.
            thumbnail_url: Absolute Open Graph thumbnail URL, if any.

        Returns:
            Rendered HTML string.
        """
        return self._render(
            "post.html.jinja",
            container="container",
            post=post,
            body=Markup(body_html),
            cover_image=cover_image,
            thumbnail_url=thumbnail_url,
        )

    def render_index(self, entries: Iterable[IndexEntry]) -> str:
        """Render the landing page listing entries in the given order."""
        return self._render(
            "index.html.jinja",
            container="index-container",
            entries=list(entries),
            thumbnail_url=None,
        )

    def _render(self, name: str, **context: Any) -> str:
        template = self.env.get_template(name)
        return template.render(**context)

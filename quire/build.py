"""Site building functionality for Quire.

A rebuild always regenerates the whole site: stale HTML is removed, every
markdown post is rendered to its own page, and the index page is written
last. There is no partial-state recovery; an error aborts the rebuild.

Key functions:
- rebuild: Run the full clear, enumerate, render and index sequence.
- create_blog_posts: Render every post to ``<stem>.html``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import click

from .assets import clear_html_files, find_cover_image, publish_image, write_html
from .config import SiteConfig
from .content import Post, iter_markdown_files, load_post
from .errors import BuildError
from .index import IndexEntry, create_index_page
from .renderers import MarkdownRenderer
from .templates import TemplateEngine

__all__ = ["BuildError", "BuildResult", "create_blog_posts", "rebuild", "render_post_page"]


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        posts: Every post that was rendered.
        entries: Index entries in listing order.
        output_dir: Directory where the site was built.
    """

    posts: list[Post]
    entries: list[IndexEntry]
    output_dir: Path


def render_post_page(
    config: SiteConfig,
    post: Post,
    engine: TemplateEngine,
    renderer: MarkdownRenderer | None = None,
) -> str:
    """Render a post to a complete HTML page, publishing its cover image.

    Args:
        config: Site configuration.
        post: Parsed post.
        engine: Template engine.
        renderer: Markdown renderer, a default one when omitted.

    Returns:
        Rendered HTML string.
    """
    renderer = renderer or MarkdownRenderer()
    body_html = renderer.render(post.body)

    cover_image = None
    thumbnail_url = None
    source_image = find_cover_image(post.stem, config.images_dir)
    if source_image is not None:
        published = publish_image(source_image, config.output_images_dir)
        cover_image = f"images/{published.name}"
        thumbnail_url = f"{config.base_url}/images/{published.name}"

    return engine.render_post(
        post, body_html, cover_image=cover_image, thumbnail_url=thumbnail_url
    )


def create_blog_posts(
    config: SiteConfig, md_files: Iterable[Path], engine: TemplateEngine
) -> list[Post]:
    """Render every markdown file into ``<webpage_dir>/<stem>.html``.

    Returns:
        The posts that were written.
    """
    click.echo("Creating HTML files")
    renderer = MarkdownRenderer()
    posts: list[Post] = []
    for md_file in md_files:
        post = load_post(md_file)
        html = render_post_page(config, post, engine, renderer)
        write_html(config.webpage_dir / f"{post.stem}.html", html)
        posts.append(post)
    return posts


def rebuild(config: SiteConfig) -> BuildResult:
    """Rebuild the entire site.

    Args:
        config: Site configuration.

    Returns:
        BuildResult describing what was written.

    Raises:
        BuildError: If any source or output file cannot be read or written.
    """
    clear_html_files(config.webpage_dir)
    md_files = iter_markdown_files(config.data_dir)
    engine = TemplateEngine(config)
    posts = create_blog_posts(config, md_files, engine)
    entries = create_index_page(config, md_files, engine)
    return BuildResult(posts=posts, entries=entries, output_dir=config.webpage_dir)

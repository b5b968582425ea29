"""Index page generation for Quire.

The landing page lists every listed post, newest first. Posts whose date
line cannot be parsed sort as if published on 1970-01-01.

Key functions:
- build_index_entries: Collect and sort entries for the listed posts.
- create_index_page: Render and write ``index.html``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import NamedTuple

import click

from .assets import write_html
from .config import SiteConfig
from .content import load_post
from .templates import TemplateEngine


class IndexEntry(NamedTuple):
    """One line of the index page."""

    url: str
    title: str
    date: str
    published: date


def article_url(config: SiteConfig, stem: str) -> str:
    """Return the link to a post page.

    Production links are rooted at ``/``; development links hang off the
    local base URL so pages can be opened straight from disk.
    """
    if config.is_prod:
        return f"/{stem}.html"
    return f"{config.base_url}/{stem}.html"


def build_index_entries(config: SiteConfig, md_files: Iterable[Path]) -> list[IndexEntry]:
    """Build sorted index entries for the listed posts.

    Args:
        config: Site configuration.
        md_files: Markdown source paths.

    Returns:
        Entries sorted by publish date, newest first.
    """
    entries: list[IndexEntry] = []
    for md_file in md_files:
        post = load_post(md_file)
        if not post.is_listed(config.is_prod):
            continue
        entries.append(
            IndexEntry(
                url=article_url(config, post.stem),
                title=post.title,
                date=post.date,
                published=post.published,
            )
        )
    entries.sort(key=lambda entry: entry.published, reverse=True)
    return entries


def create_index_page(
    config: SiteConfig, md_files: Iterable[Path], engine: TemplateEngine
) -> list[IndexEntry]:
    """Render the index page into ``<webpage_dir>/index.html``.

    Returns:
        The entries that were listed.
    """
    click.echo("Creating index page")
    entries = build_index_entries(config, md_files)
    write_html(config.webpage_dir / "index.html", engine.render_index(entries))
    return entries

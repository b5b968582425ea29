"""Quire static site generator.

This package turns a folder of Markdown posts into a small static website.
Every post becomes one HTML page wrapped in a shared template, and a landing
page lists the posts newest first.

The main entry point is the CLI module, which builds the site once and then
watches the data directory, rebuilding everything on each change.

Modules:
- config: Environment-driven site settings.
- content: Post parsing and source enumeration.
- renderers: Markdown to HTML conversion.
- templates: Jinja2 page templates.
- assets: Output directory housekeeping and cover images.
- index: Landing page builder.
- build: The full rebuild pipeline.
- watcher: Filesystem watch loop.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

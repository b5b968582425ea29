"""Command-line interface for Quire.

A single command builds the site and then watches the data directory,
rebuilding on every change until interrupted.

Options:
- --prod: Build for production (absolute base URL, rooted article links,
  example post hidden from the index).
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import load_config, load_env_file, log_config, working_dir
from .errors import BuildError, QuireError


@click.command()
@click.version_option(version=__version__, prog_name="quire")
@click.option("--prod", is_flag=True, help="Build for production")
def cli(prod: bool):
    """Build the site and rebuild it whenever a post changes."""
    from .watcher import SiteWatcher

    try:
        project_root = working_dir()
        load_env_file(project_root)
        config = load_config(prod, cwd=project_root)
        log_config(config)
        SiteWatcher(config).start()
    except BuildError as exc:
        _report_build_error(exc)
        raise SystemExit(1) from None
    except QuireError as exc:
        raise click.ClickException(str(exc)) from None


def _report_build_error(exc: BuildError) -> None:
    """Display a build failure with the offending file."""
    try:
        rel_path = exc.source_path.relative_to(Path.cwd())
    except ValueError:
        rel_path = exc.source_path
    click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
    click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)


def main():
    """Entry point for the CLI application."""
    cli()

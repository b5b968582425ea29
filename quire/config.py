"""Site configuration for Quire.

Settings come from environment variables (optionally seeded from a local
``.env`` file) plus the ``--prod`` command-line switch. The resolved
configuration is immutable for the lifetime of the process.

Recognized variables:
- TITLE: Site name, defaults to "Title".
- BASE_URL: Absolute site root, honoured in production only.
- DATA_DIR: Folder holding the markdown posts.
- WEBPAGE_DIR: Folder the generated HTML is written to.
- IMAGES_DIR: Folder holding cover images named after post stems.
- FOOTER: Optional footer line shown on every page.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import click
from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_CONFIG = {
    "TITLE": "Title",
    "DATA_DIR": "data",
    "WEBPAGE_DIR": "webpage",
    "IMAGES_DIR": "images",
    "FOOTER": "",
}


@dataclass(frozen=True)
class SiteConfig:
    """Resolved site settings.

    Attributes:
        is_prod: Whether the site is built for production.
        title: Site name used in the page title and navigation.
        base_url: Root URL used for navigation and thumbnail links.
        data_dir: Directory containing markdown posts.
        webpage_dir: Directory receiving generated HTML.
        images_dir: Directory containing source cover images.
        footer: Optional footer text, empty when unset.
    """

    is_prod: bool
    title: str
    base_url: str
    data_dir: Path
    webpage_dir: Path
    images_dir: Path
    footer: str = ""

    @property
    def output_images_dir(self) -> Path:
        return self.webpage_dir / "images"

    @property
    def css_path(self) -> str:
        return "./main.css" if self.is_prod else f"../{self.webpage_dir.name}/main.css"

    @property
    def mobile_css_path(self) -> str:
        return "./mobile.css" if self.is_prod else f"../{self.webpage_dir.name}/mobile.css"


def working_dir() -> Path:
    """Return the process working directory.

    Raises:
        ConfigError: If the working directory cannot be determined.
    """
    try:
        return Path.cwd()
    except OSError as exc:
        raise ConfigError(f"Cannot determine working directory: {exc}") from exc


def load_env_file(project_root: Path) -> bool:
    """Load variables from ``project_root/.env`` without overriding the environment.

    Returns:
        True if a file was found and loaded.
    """
    return load_dotenv(project_root / ".env", override=False)


def load_config(
    prod: bool,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> SiteConfig:
    """Resolve the site configuration.

    Args:
        prod: Whether ``--prod`` was passed.
        environ: Variables to read, defaults to ``os.environ``.
        cwd: Working directory, defaults to the process working directory.

    Returns:
        The resolved SiteConfig.

    Raises:
        ConfigError: If the working directory cannot be determined.
    """
    env = os.environ if environ is None else environ
    if cwd is None:
        cwd = working_dir()

    settings = {key: env.get(key) or default for key, default in DEFAULT_CONFIG.items()}
    webpage_dir = _anchor(cwd, settings["WEBPAGE_DIR"])

    local_url = webpage_dir.as_posix()
    if prod:
        base_url = env.get("BASE_URL") or local_url
    else:
        base_url = local_url

    return SiteConfig(
        is_prod=prod,
        title=settings["TITLE"],
        base_url=base_url.rstrip("/"),
        data_dir=_anchor(cwd, settings["DATA_DIR"]),
        webpage_dir=webpage_dir,
        images_dir=_anchor(cwd, settings["IMAGES_DIR"]),
        footer=settings["FOOTER"],
    )


def log_config(config: SiteConfig) -> None:
    """Echo the resolved settings."""
    click.echo(f"Using base_url: {config.base_url}")
    click.echo(f"Using title: {config.title}")
    click.echo(f"Using data_dir: {config.data_dir}")
    click.echo(f"Using webpage_dir: {config.webpage_dir}")
    click.echo(f"Using images_dir: {config.images_dir}")


def _anchor(cwd: Path, value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else cwd / path

"""Output handling for Quire.

Everything that touches the generated webpage directory lives here:
clearing stale HTML before a rebuild, writing pages, and publishing cover
images next to them.

Any filesystem failure is reported as a BuildError naming the path involved.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import click

from .errors import BuildError

COVER_IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif")


def clear_html_files(webpage_dir: Path) -> list[Path]:
    """Delete every ``*.html`` file directly inside webpage_dir.

    Creates the directory when it does not exist yet.

    Args:
        webpage_dir: Generated site directory.

    Returns:
        Paths that were removed.
    """
    click.echo("Clearing old files")
    try:
        webpage_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildError(webpage_dir, f"Cannot create output directory: {exc}", exc) from exc
    removed: list[Path] = []
    for path in sorted(webpage_dir.glob("*.html")):
        if not path.is_file():
            continue
        try:
            path.unlink()
        except OSError as exc:
            raise BuildError(path, f"Error removing file: {exc}", exc) from exc
        removed.append(path)
    return removed


def find_cover_image(stem: str, images_dir: Path) -> Path | None:
    """Return the first ``<stem>.<ext>`` image found, trying extensions in order."""
    for ext in COVER_IMAGE_EXTENSIONS:
        candidate = images_dir / f"{stem}.{ext}"
        if candidate.is_file():
            return candidate
    return None


def publish_image(source: Path, output_images_dir: Path) -> Path:
    """Copy an image into the output images directory unless it is already there.

    An existing file with the same name is left alone, even if its
    contents differ from the source.

    Args:
        source: Source image path.
        output_images_dir: Destination directory.

    Returns:
        Path of the published image.
    """
    target = output_images_dir / source.name
    try:
        output_images_dir.mkdir(parents=True, exist_ok=True)
        if not target.exists():
            shutil.copy2(source, target)
    except OSError as exc:
        raise BuildError(source, f"Failed to copy image file: {exc}", exc) from exc
    return target


def write_html(path: Path, html: str) -> None:
    """Write a rendered page."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(html)
    except OSError as exc:
        raise BuildError(path, f"Error writing HTML file: {exc}", exc) from exc

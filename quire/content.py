"""Content loading for Quire.

A post is a markdown file laid out line by line:

1. the title, optionally written as a markdown heading;
2. the publish date as ``MM-DD-YYYY``;
3. optionally, a cross-post marker naming where else the post appeared;
4. the body, after any blank lines.

Key classes:
- Post: Dataclass holding everything derived from one source file.
- CrossPost: External link parsed from the optional third line.
- Visibility: Whether a post is listed on the index page.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path

from .errors import BuildError
from .utils import host_label, parse_post_date, reading_time, strip_heading_marker

CROSS_POST_MARKERS = (
    "cross-posted:",
    "crossposted:",
    "originally published:",
    "also on:",
)

_MD_LINK_RE = re.compile(r"^\[(?P<label>[^\]]*)\]\((?P<url>[^)\s]+)\)$")


class Visibility(Enum):
    """Publication status of a post.

    PUBLISHED posts are always listed, PAGE posts (about, newsletter, 404)
    are rendered but never listed, and EXAMPLE posts are listed only
    outside production.
    """

    PUBLISHED = "published"
    PAGE = "page"
    EXAMPLE = "example"


_VISIBILITY_BY_STEM = {
    "about": Visibility.PAGE,
    "newsletter": Visibility.PAGE,
    "404": Visibility.PAGE,
    "example": Visibility.EXAMPLE,
}


def classify(stem: str) -> Visibility:
    """Return the visibility for a post file stem."""
    return _VISIBILITY_BY_STEM.get(stem, Visibility.PUBLISHED)


@dataclass(frozen=True)
class CrossPost:
    """Link to a copy of the post published elsewhere."""

    url: str
    label: str


@dataclass
class Post:
    """A post derived from one markdown file.

    Attributes:
        path: Source file path; identifies the post.
        title: Line 1 with heading markers removed.
        date: Line 2, verbatim.
        body: Markdown body after the header lines.
        cross_post: Optional external link from line 3.
        visibility: Listing status derived from the file stem.
    """

    path: Path
    title: str
    date: str
    body: str
    cross_post: CrossPost | None = None
    visibility: Visibility = Visibility.PUBLISHED

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def published(self) -> date:
        """Parsed publish date, the epoch when the date line is malformed."""
        return parse_post_date(self.date)

    @property
    def reading_time(self) -> int:
        return reading_time(self.body)

    def is_listed(self, is_prod: bool) -> bool:
        """Whether the post belongs on the index page."""
        if self.visibility is Visibility.PAGE:
            return False
        if self.visibility is Visibility.EXAMPLE:
            return not is_prod
        return True


def parse_cross_post(line: str) -> CrossPost | None:
    """Parse a cross-post marker line.

    Both ``Cross-posted: https://example.com/post`` and
    ``Also on: [Medium](https://medium.com/p/1)`` are understood.

    Args:
        line: Candidate third line of a post.

    Returns:
        CrossPost if the line starts with a recognized marker, None otherwise.
    """
    stripped = line.strip()
    lowered = stripped.lower()
    for marker in CROSS_POST_MARKERS:
        if lowered.startswith(marker):
            target = stripped[len(marker):].strip()
            break
    else:
        return None
    if not target:
        return None
    match = _MD_LINK_RE.match(target)
    if match:
        url = match.group("url")
        return CrossPost(url=url, label=match.group("label").strip() or host_label(url))
    return CrossPost(url=target, label=host_label(target))


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n`` only, dropping one trailing ``\\r`` per line.

    Other line-break characters such as form feeds stay inside their line.
    A final newline does not produce an empty last line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_post(text: str, path: Path) -> Post:
    """Build a Post from markdown text.

    Args:
        text: Raw markdown source.
        path: Source file path.

    Returns:
        Parsed Post.
    """
    lines = split_lines(text)
    title = strip_heading_marker(lines[0]) if lines else ""
    date_line = lines[1] if len(lines) > 1 else ""
    rest = lines[2:]

    cross_post = parse_cross_post(rest[0]) if rest else None
    if cross_post is not None:
        rest = rest[1:]

    while rest and not rest[0].strip():
        rest = rest[1:]

    return Post(
        path=path,
        title=title,
        date=date_line,
        body="\n".join(rest),
        cross_post=cross_post,
        visibility=classify(path.stem),
    )


def load_post(path: Path) -> Post:
    """Read and parse a post from disk.

    Raises:
        BuildError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise BuildError(path, f"Cannot read post: {exc}", exc) from exc
    return parse_post(text, path)


def iter_markdown_files(data_dir: Path) -> list[Path]:
    """List markdown files directly inside data_dir, sorted by name.

    Returns an empty list when the directory does not exist.
    """
    if not data_dir.is_dir():
        return []
    return sorted(path for path in data_dir.glob("*.md") if path.is_file())

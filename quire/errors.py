"""Exceptions raised by Quire.

Every failure Quire reports derives from QuireError so the CLI can turn it
into a diagnostic and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class QuireError(Exception):
    """Base class for all Quire errors."""


class ConfigError(QuireError):
    """Site configuration could not be resolved at startup."""


class WatchError(QuireError):
    """The data directory could not be subscribed to for change events."""


class BuildError(QuireError):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")

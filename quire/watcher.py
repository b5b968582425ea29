"""Filesystem watch loop for Quire.

The site is rebuilt once at startup, then again after every change event
under the data directory. Events are not filtered or debounced: a burst of
events produces a burst of full rebuilds.

The watchdog observer thread only queues events. Rebuilds run on the thread
that called ``SiteWatcher.start``, one at a time, with the configuration
passed explicitly to ``rebuild``.

Key classes:
- SiteWatcher: Owns the observer and the rebuild loop.
- _ChangeHandler: File system event handler that queues events.
"""

from __future__ import annotations

import queue

import click
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .build import BuildResult, rebuild
from .config import SiteConfig
from .errors import WatchError


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, events: queue.Queue):
        super().__init__()
        self.events = events

    def dispatch(self, event: FileSystemEvent) -> None:
        try:
            super().dispatch(event)
        except Exception as exc:
            click.secho(f"watch error: {exc!r}", fg="yellow", err=True)

    def on_any_event(self, event: FileSystemEvent) -> None:
        self.events.put(event)


class SiteWatcher:
    """Rebuilds the site whenever the data directory changes.

    Attributes:
        config: Site configuration passed to every rebuild.
        events: Queue of pending filesystem events.
        rebuilding: True while a rebuild is running. Observable state for
            callers on other threads; the loop itself never overlaps rebuilds.
        _observer: File system observer, set once subscribed.
    """

    def __init__(self, config: SiteConfig):
        self.config = config
        self.events: queue.Queue = queue.Queue()
        self.rebuilding = False
        self._observer: Observer | None = None
        self._stopping = False

    def start(self, poll_interval: float = 0.5) -> None:
        """Build once, subscribe to changes, then rebuild until stopped.

        Args:
            poll_interval: Seconds between checks for a stop request.
        """
        self.rebuild()
        self.subscribe()
        click.echo(f"Watching {self.config.data_dir} for changes")
        try:
            while not self._stopping:
                self.run_once(timeout=poll_interval)
        except KeyboardInterrupt:
            click.echo("Stopping")
        finally:
            self.stop()

    def subscribe(self) -> None:
        """Start the observer on the data directory.

        Raises:
            WatchError: If the directory cannot be watched.
        """
        data_dir = self.config.data_dir
        if not data_dir.is_dir():
            raise WatchError(f"Cannot watch missing data directory: {data_dir}")
        observer = Observer()
        try:
            observer.schedule(_ChangeHandler(self.events), str(data_dir), recursive=True)
            observer.start()
        except OSError as exc:
            raise WatchError(f"Cannot watch {data_dir}: {exc}") from exc
        self._observer = observer

    def stop(self) -> None:
        """Stop the observer and end the loop started by ``start``."""
        self._stopping = True
        observer, self._observer = self._observer, None
        if observer:
            observer.stop()
            observer.join()

    def run_once(self, timeout: float | None = None) -> BuildResult | None:
        """Wait for one event and rebuild in response.

        Args:
            timeout: Seconds to wait, forever when None.

        Returns:
            The rebuild result, or None if no event arrived in time.
        """
        try:
            event = self.events.get(timeout=timeout)
        except queue.Empty:
            return None
        click.echo(f"{event.event_type}: {event.src_path}")
        return self.rebuild()

    def rebuild(self) -> BuildResult:
        self.rebuilding = True
        try:
            return rebuild(self.config)
        finally:
            self.rebuilding = False

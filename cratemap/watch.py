from __future__ import annotations

import logging
import queue
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

SOURCE_PATTERNS = ["*.rs"]


class RustChangeHandler(PatternMatchingEventHandler):
	"""Queues the path of every created, modified, deleted or moved `.rs` file.

	Open/close events are ignored: a pass reads every source file and would
	otherwise trigger itself.
	"""

	def __init__(self, events: "queue.Queue[str]") -> None:
		super().__init__(patterns=SOURCE_PATTERNS, ignore_directories=True)
		self.events = events

	def _queue(self, event: FileSystemEvent) -> None:
		logger.debug("%s: %s", event.event_type, event.src_path)
		self.events.put(str(event.src_path))

	def on_created(self, event: FileSystemEvent) -> None:
		self._queue(event)

	def on_modified(self, event: FileSystemEvent) -> None:
		self._queue(event)

	def on_deleted(self, event: FileSystemEvent) -> None:
		self._queue(event)

	def on_moved(self, event: FileSystemEvent) -> None:
		self._queue(event)


class ChangeWatcher:
	"""
	Watches the input tree and hands change events to the caller's thread.

	The observer thread only enqueues paths; passes run wherever
	wait_for_change() is called.
	"""

	def __init__(self, root: Path, recursive: bool = True) -> None:
		self.root = Path(root)
		self.recursive = recursive
		self.events: "queue.Queue[str]" = queue.Queue()
		self.handler = RustChangeHandler(self.events)
		self.observer = Observer()
		self._started = False

	@property
	def directory(self) -> Path:
		return self.root if self.root.is_dir() else self.root.parent

	def start(self) -> None:
		if self._started:
			return
		self.observer.schedule(self.handler, str(self.directory), recursive=self.recursive)
		self.observer.start()
		self._started = True
		logger.info("Watching for file changes in %s...", self.directory)

	def stop(self) -> None:
		if not self._started:
			return
		self.observer.stop()
		self.observer.join(timeout=5)
		self._started = False

	def wait_for_change(self, timeout: Optional[float] = None) -> Optional[str]:
		"""Block until a `.rs` file changes; None on timeout."""
		try:
			return self.events.get(timeout=timeout)
		except queue.Empty:
			return None

	def __enter__(self) -> "ChangeWatcher":
		self.start()
		return self

	def __exit__(self, exc_type, exc_val, exc_tb) -> None:
		self.stop()

from __future__ import annotations

import logging
from typing import List, Optional

from .config import Settings
from .errors import CrateMapError
from .render import render
from .resolver import parse
from .watch import ChangeWatcher

logger = logging.getLogger(__name__)


def run_pass(settings: Settings) -> List[str]:
	"""Parse the whole input from scratch and re-render every note."""
	tree = parse(settings.input_path, recursive=settings.recursive)
	return render(tree, settings.notes_dir, settings.render_options)


def watch(settings: Settings, watcher: Optional[ChangeWatcher] = None, max_passes: Optional[int] = None) -> int:
	"""Run a full pass after every source change.

	Passes run one after another on the calling thread; a burst of events
	means a burst of passes. A failed pass is logged and watching goes on.
	Runs until interrupted unless `max_passes` is set. Returns the number of
	passes attempted.
	"""
	passes = 0
	with watcher or ChangeWatcher(settings.input_path, settings.recursive) as active:
		while max_passes is None or passes < max_passes:
			changed = active.wait_for_change()
			if changed is None:
				continue
			logger.info("%s changed, regenerating notes", changed)
			passes += 1
			try:
				run_pass(settings)
			except (CrateMapError, OSError) as e:
				logger.error("Pass failed, keeping previous notes: %s", e)
	return passes

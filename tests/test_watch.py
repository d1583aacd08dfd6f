import queue

from watchdog.events import FileClosedEvent, FileCreatedEvent, FileDeletedEvent, FileModifiedEvent

from cratemap.watch import ChangeWatcher, RustChangeHandler


def _drain(events):
	items = []
	while True:
		try:
			items.append(events.get_nowait())
		except queue.Empty:
			return items


def test_handler_queues_rust_changes(tmp_path):
	events = queue.Queue()
	handler = RustChangeHandler(events)
	path = str(tmp_path / "lib.rs")

	handler.dispatch(FileModifiedEvent(path))
	handler.dispatch(FileCreatedEvent(path))
	handler.dispatch(FileDeletedEvent(path))
	assert _drain(events) == [path, path, path]


def test_handler_ignores_other_files_and_reads(tmp_path):
	events = queue.Queue()
	handler = RustChangeHandler(events)

	handler.dispatch(FileModifiedEvent(str(tmp_path / "notes.md")))
	handler.dispatch(FileClosedEvent(str(tmp_path / "lib.rs")))
	assert _drain(events) == []


def test_wait_for_change_times_out(tmp_path):
	watcher = ChangeWatcher(tmp_path)
	assert watcher.wait_for_change(timeout=0.01) is None

	watcher.events.put("x.rs")
	assert watcher.wait_for_change(timeout=0.01) == "x.rs"


def test_watch_directory_for_single_file(tmp_path):
	src = tmp_path / "main.rs"
	src.write_text("fn main() {}\n")
	assert ChangeWatcher(src).directory == tmp_path
	assert ChangeWatcher(tmp_path).directory == tmp_path

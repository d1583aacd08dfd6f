from pathlib import Path
from textwrap import dedent
from typing import Callable, Dict

import pytest


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
	"""Write {relative path: source} under tmp_path and return tmp_path."""

	def _write(files: Dict[str, str]) -> Path:
		for rel_path, text in files.items():
			path = tmp_path / rel_path
			path.parent.mkdir(parents=True, exist_ok=True)
			path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
		return tmp_path

	return _write

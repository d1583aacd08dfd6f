from __future__ import annotations

from pathlib import Path


class CrateMapError(Exception):
	"""Base class for every failure raised while mapping a crate."""


class ManifestError(CrateMapError):
	pass


class ModuleFileNotFound(CrateMapError):
	"""A `mod name;` declaration has no backing file under any candidate path."""

	def __init__(self, name: str, directory: Path) -> None:
		super().__init__(f"Module {name} not found (searched from {directory})")
		self.name = name
		self.directory = directory


class RustSyntaxError(CrateMapError):
	"""Raised when tree-sitter reports error nodes; callers skip the file."""

	def __init__(self, path: Path, line: int) -> None:
		super().__init__(f"Syntax error in {path} near line {line}")
		self.path = path
		self.line = line

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Collection, Iterator, List, Optional, Tuple

from pydantic import BaseModel

from .errors import ManifestError

MANIFEST = "Cargo.toml"
SOURCE_SUFFIX = ".rs"
INDEX_FILE = "mod.rs"
ENTRY_FILES = ("lib.rs", "main.rs")
IGNORED_DIRS = {".git", "target", "node_modules"}


class CrateManifest(BaseModel):
	name: str
	root: Path
	entry: Path


def read_manifest(root: Path) -> CrateManifest:
	manifest_path = root / MANIFEST
	try:
		data = tomllib.loads(manifest_path.read_text(encoding="utf-8"))
	except tomllib.TOMLDecodeError as e:
		raise ManifestError(f"Invalid {manifest_path}: {e}") from e

	package = data.get("package")
	if not isinstance(package, dict):
		raise ManifestError(f"Failed to find [package] in {manifest_path}")
	name = package.get("name")
	if not name:
		raise ManifestError(f"Failed to find name field in [package] from {manifest_path}")

	lib_path = data.get("lib", {}).get("path")
	if lib_path:
		candidates = [root / lib_path]
	else:
		candidates = [root / "src" / entry for entry in ENTRY_FILES]
	for entry in candidates:
		if entry.is_file():
			return CrateManifest(name=name, root=root, entry=entry)
	raise ManifestError(f"No entry file for crate {name} (tried {', '.join(str(c) for c in candidates)})")


def module_directory(path: Path) -> Path:
	"""Directory that `mod` declarations inside `path` are resolved from."""
	if path.name in ENTRY_FILES or path.name == INDEX_FILE:
		return path.parent
	return path.parent / path.stem


def module_candidates(directory: Path, name: str) -> Iterator[Path]:
	"""Possible backing files for `mod name;`, in precedence order.

	The last two cover layouts where a submodule sits beside its parent's
	directory rather than inside it.
	"""
	for base in (directory, directory.parent):
		yield base / f"{name}{SOURCE_SUFFIX}"
		yield base / name / INDEX_FILE


def find_module_file(directory: Path, name: str, skip: Collection[Path] = ()) -> Optional[Path]:
	"""First existing candidate for `mod name;` that is not in `skip` (resolved paths)."""
	for path in module_candidates(directory, name):
		if path.is_file() and path.resolve() not in skip:
			return path
	return None


def to_module_name(root: Path, file_path: Path) -> str:
	rel_path = file_path.relative_to(root).with_suffix("")
	return "::".join(rel_path.parts).replace("-", "_")


def _scan_order(root: Path, path: Path) -> Tuple[int, str, bool, str]:
	rel_path = path.relative_to(root)
	is_entry = path.name in ENTRY_FILES or path.name == INDEX_FILE
	return (len(rel_path.parts), str(rel_path.parent), not is_entry, path.name)


def _raise(error: OSError) -> None:
	raise error


def scan_sources(root: Path, recursive: bool = True) -> List[Path]:
	"""List `.rs` files under `root`, shallowest first, entry files first per directory.

	Unreadable directories abort the scan.
	"""
	files: List[Path] = []
	for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
		if recursive:
			dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
		else:
			dirnames[:] = []
		for filename in filenames:
			if filename.endswith(SOURCE_SUFFIX):
				files.append(Path(dirpath) / filename)
	return sorted(files, key=lambda path: _scan_order(root, path))

"""Module Resolver: builds the Module tree of a crate, a file, or a loose source tree.

`parse()` is the entry point. A fresh ModuleResolver and a fresh tree are
created on every call; nothing survives between passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Set

import tree_sitter

from .errors import ModuleFileNotFound, RustSyntaxError
from .extract import add_entity, unwrap_item
from .fs_scan import MANIFEST, find_module_file, module_directory, read_manifest, scan_sources, to_module_name
from .impls import bind_impl
from .imports import collect_imports
from .model import Module
from .syntax import node_text, parse_file

logger = logging.getLogger(__name__)


@dataclass
class Scope:
	"""The module being filled and the directory its `mod name;` files are looked up from.

	Each module gets its own Scope, so import aliases never cross module
	boundaries in either direction.
	"""

	module: Module
	directory: Path


class ModuleResolver:
	def __init__(self) -> None:
		self.claimed: Set[Path] = set()
		# files whose `mod` declarations are being followed right now
		self.loading: List[Path] = []

	def load(self, module: Module, path: Path) -> Module:
		"""Fill `module` from a source file; a file with syntax errors leaves it empty."""
		resolved = path.resolve()
		self.claimed.add(resolved)
		try:
			root = parse_file(path)
		except RustSyntaxError as e:
			logger.warning("Skipping %s: %s", path, e)
			return module
		self.loading.append(resolved)
		try:
			self.populate(Scope(module=module, directory=module_directory(path)), root.named_children)
		finally:
			self.loading.pop()
		return module

	def populate(self, scope: Scope, items: Iterable[tree_sitter.Node]) -> None:
		module = scope.module
		impl_blocks: List[tree_sitter.Node] = []
		for item in items:
			kind = unwrap_item(item).type
			if kind == "use_declaration":
				collect_imports(item, module.path, module.imports)
			elif kind == "mod_item":
				self.resolve_submodule(scope, item)
			elif kind == "impl_item":
				impl_blocks.append(item)
			else:
				add_entity(module, item)

		# Bound last so an impl above its struct in the same module still finds it
		for block in impl_blocks:
			bind_impl(module, block)

	def resolve_submodule(self, scope: Scope, node: tree_sitter.Node) -> Module:
		name = node_text(node.child_by_field_name("name"))
		child = Module(name=name, path=scope.module.child_path(name))
		body = node.child_by_field_name("body")
		if body is not None:
			self.populate(Scope(module=child, directory=scope.directory / name), body.named_children)
		else:
			path = find_module_file(scope.directory, name, skip=self.loading)
			if path is None:
				raise ModuleFileNotFound(name, scope.directory)
			self.load(child, path)
		scope.module.submodules[name] = child
		return child


def parse(root: Path, recursive: bool = True) -> Module:
	"""Build the Module tree for `root`.

	- a `.rs` file: that file is the root module;
	- a directory with a Cargo.toml: the crate's entry file is the root module
	  and submodules are followed through `mod` declarations;
	- any other directory: every source file not already reached through a
	  `mod` declaration becomes a top-level submodule.

	Raises ModuleFileNotFound, ManifestError or OSError; nothing is rendered
	from a pass that raised.
	"""
	root = Path(root)
	if not root.exists():
		raise FileNotFoundError(f"Input path does not exist: {root}")

	resolver = ModuleResolver()
	if root.is_file():
		return resolver.load(Module(name=root.stem), root)

	if (root / MANIFEST).is_file():
		manifest = read_manifest(root)
		logger.info("Parsing crate %s from %s", manifest.name, manifest.entry)
		return resolver.load(Module(name=manifest.name), manifest.entry)

	tree = Module(name=root.name)
	for path in scan_sources(root, recursive):
		if path.resolve() in resolver.claimed:
			continue
		name = to_module_name(root, path)
		tree.submodules[name] = resolver.load(Module(name=name), path)
	return tree
